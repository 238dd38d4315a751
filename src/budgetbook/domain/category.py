"""Category domain service."""

import logging
from typing import Optional

from budgetbook.database.base import Database
from budgetbook.domain.entities import Category, CategoryRule
from budgetbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_name_not_found,
    category_not_found,
    group_not_found,
)

logger = logging.getLogger(__name__)

# Default category set: (name, rule)
DEFAULT_CATEGORIES = [
    ("Eating Out", CategoryRule.SPENDING),
    ("Groceries", CategoryRule.SPENDING),
    ("Drinking", CategoryRule.SPENDING),
    ("Uber/Uber Eats", CategoryRule.SPENDING),
    ("Hobbies", CategoryRule.SPENDING),
    ("Transportation", CategoryRule.SPENDING),
    ("Clothes", CategoryRule.SPENDING),
    ("Home", CategoryRule.SPENDING),
    ("Other", CategoryRule.SPENDING),
    ("Gambling", CategoryRule.SPENDING),
    ("Subscriptions", CategoryRule.SPENDING),
    ("Rent", CategoryRule.SPENDING),
    ("Wages", CategoryRule.INCOME),
]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        rule: CategoryRule = CategoryRule.SPENDING,
        group_id: Optional[int] = None,
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            rule: Income or spending; fixed for the category's lifetime
            group_id: Optional group to place the category in

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the group doesn't exist
            ConflictError: If a category with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")

        if group_id is not None and self.db.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))

        return self.db.create_category(name=name, rule=CategoryRule(rule), group_id=group_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def resolve_category(self, ref: str) -> Category:
        """Resolve a category from an ID or a name.

        Raises:
            NotFoundError: If no category matches
        """
        ref = ref.strip()
        if ref.isdigit():
            return self.require_category(int(ref))
        category = self.db.get_category_by_name(ref)
        if category is None:
            raise NotFoundError(category_name_not_found(ref))
        return category

    def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        return self.db.list_categories()

    def assign_group(self, category_id: int, group_id: Optional[int]) -> None:
        """Move a category into a group, or to Unassigned with None.

        Raises:
            NotFoundError: If the category or group doesn't exist
        """
        self.require_category(category_id)
        if group_id is not None and self.db.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))
        self.db.update_category_group(category_id, group_id)

    def transaction_count(self, category_id: int) -> int:
        """Count transactions referencing a category."""
        return self.db.count_transactions_for_category(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category along with its monthly budgets.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If transactions still reference the category
        """
        category = self.require_category(category_id)
        count = self.transaction_count(category_id)
        if count > 0:
            raise DependencyError(category_delete_blocked(category.name, count))

        self.db.delete_category(category_id)
        logger.info(f"category_deleted: id={category_id} name={category.name!r}")

    def seed_default_categories(self) -> int:
        """Create any missing default categories.

        Returns:
            Number of categories created
        """
        created = 0
        for name, rule in DEFAULT_CATEGORIES:
            if self.db.get_category_by_name(name) is None:
                self.db.create_category(name=name, rule=rule)
                created += 1
        return created
