"""Generic SQLAlchemy database implementation."""

from typing import Optional, Sequence
from datetime import date
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from budgetbook.database.base import Database
from budgetbook.database.models import (
    AppSetting,
    Category,
    CategoryGroup,
    MonthlyBudget,
    Transaction,
    create_session_factory,
)
from budgetbook.database.mappers import (
    category_to_domain,
    group_to_domain,
    monthly_budget_to_domain,
    transaction_to_domain,
)
from budgetbook.domain.entities import (
    Category as DomainCategory,
    CategoryGroup as DomainCategoryGroup,
    CategoryRule,
    MonthlyBudget as DomainMonthlyBudget,
    Transaction as DomainTransaction,
    TransactionInput,
)
from budgetbook.domain.errors import (
    ConflictError,
    NotFoundError,
    category_exists,
    category_not_found,
    group_exists,
    group_not_found,
    transaction_not_found,
)
from budgetbook.utils.month import Month


def _is_unique_violation(error: IntegrityError) -> bool:
    return "UNIQUE" in str(error.orig).upper()


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def _commit_unique(self, conflict_message: str) -> None:
        """Commit, translating unique constraint violations to ConflictError."""
        session = self._get_session()
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            if _is_unique_violation(e):
                raise ConflictError(conflict_message) from e
            raise

    # Category group operations
    def create_group(self, name: str, sort_order: int, color: Optional[str] = None) -> int:
        """Create a category group. Returns group ID."""
        session = self._get_session()
        group = CategoryGroup(name=name, sort_order=sort_order, color=color)
        session.add(group)
        self._commit_unique(group_exists(name))
        return group.id

    def get_group(self, group_id: int) -> Optional[DomainCategoryGroup]:
        """Get group by ID."""
        session = self._get_session()
        group = session.query(CategoryGroup).filter(CategoryGroup.id == group_id).first()
        if group is None:
            return None
        return group_to_domain(group)

    def list_groups(self) -> list[DomainCategoryGroup]:
        """List groups ordered by sort order."""
        session = self._get_session()
        groups = session.query(CategoryGroup).order_by(CategoryGroup.sort_order, CategoryGroup.id).all()
        return [group_to_domain(g) for g in groups]

    def max_group_sort_order(self) -> Optional[int]:
        """Highest sort order in use, or None when there are no groups."""
        session = self._get_session()
        return session.query(func.max(CategoryGroup.sort_order)).scalar()

    def update_group_sort_orders(self, sort_orders: dict[int, int]) -> None:
        """Write sort orders for several groups in one transaction."""
        session = self._get_session()
        for group_id, sort_order in sort_orders.items():
            session.query(CategoryGroup).filter(CategoryGroup.id == group_id).update(
                {"sort_order": sort_order}, synchronize_session=False
            )
        session.commit()

    def update_group_color(self, group_id: int, color: Optional[str]) -> None:
        """Set or clear a group's color."""
        session = self._get_session()
        group = session.query(CategoryGroup).filter(CategoryGroup.id == group_id).first()
        if group is None:
            raise NotFoundError(group_not_found(group_id))
        group.color = color
        session.commit()

    def delete_group(self, group_id: int) -> int:
        """Delete a group, moving its categories to Unassigned."""
        session = self._get_session()
        group = session.query(CategoryGroup).filter(CategoryGroup.id == group_id).first()
        if group is None:
            raise NotFoundError(group_not_found(group_id))

        unassigned = (
            session.query(Category)
            .filter(Category.group_id == group_id)
            .update({"group_id": None}, synchronize_session="fetch")
        )
        session.delete(group)
        session.commit()
        return unassigned

    # Category operations
    def create_category(self, name: str, rule: CategoryRule, group_id: Optional[int] = None) -> int:
        """Create a category. Returns category ID."""
        session = self._get_session()
        category = Category(name=name, rule=CategoryRule(rule).value, group_id=group_id)
        session.add(category)
        self._commit_unique(category_exists(name))
        return category.id

    def get_category(self, category_id: int) -> Optional[DomainCategory]:
        """Get category by ID."""
        session = self._get_session()
        cat = (
            session.query(Category)
            .options(joinedload(Category.group))
            .filter(Category.id == category_id)
            .first()
        )
        if cat is None:
            return None
        return category_to_domain(cat)

    def get_category_by_name(self, name: str) -> Optional[DomainCategory]:
        """Get category by name."""
        session = self._get_session()
        cat = (
            session.query(Category)
            .options(joinedload(Category.group))
            .filter(Category.name == name)
            .first()
        )
        if cat is None:
            return None
        return category_to_domain(cat)

    def list_categories(self) -> list[DomainCategory]:
        """List all categories by name, with group name and color resolved."""
        session = self._get_session()
        categories = session.query(Category).options(joinedload(Category.group)).order_by(Category.name).all()
        return [category_to_domain(cat) for cat in categories]

    def update_category_group(self, category_id: int, group_id: Optional[int]) -> None:
        """Assign a category to a group, or to Unassigned with None."""
        session = self._get_session()
        category = session.query(Category).filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        category.group_id = group_id
        session.commit()

    def count_transactions_for_category(self, category_id: int) -> int:
        """Count transactions referencing a category."""
        session = self._get_session()
        return session.query(Transaction).filter(Transaction.category_id == category_id).count()

    def delete_category(self, category_id: int) -> None:
        """Delete a category and its monthly budgets."""
        session = self._get_session()
        category = session.query(Category).filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        # Budgets go with the category through the relationship cascade
        session.delete(category)
        session.commit()

    # Transaction operations
    def create_transaction(
        self,
        date: date,
        description: str,
        account: str,
        is_income: bool,
        amount: Decimal,
        category_id: int,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        session = self._get_session()
        transaction = Transaction(
            date=date,
            description=description,
            account=account,
            is_income=is_income,
            amount=amount,
            category_id=category_id,
            notes=notes,
        )
        session.add(transaction)
        session.commit()
        return transaction.id

    def create_transactions(self, inputs: Sequence[TransactionInput]) -> int:
        """Insert several transactions in one transaction. Returns count."""
        session = self._get_session()
        try:
            for item in inputs:
                session.add(
                    Transaction(
                        date=item.date,
                        description=item.description,
                        account=item.account,
                        is_income=item.is_income,
                        amount=item.amount,
                        category_id=item.category_id,
                        notes=item.notes,
                    )
                )
            session.commit()
        except Exception:
            session.rollback()
            raise
        return len(inputs)

    def get_transaction(self, transaction_id: int) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def update_transaction(self, transaction_id: int, values: TransactionInput) -> None:
        """Replace all editable fields of a transaction."""
        session = self._get_session()
        transaction = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        transaction.date = values.date
        transaction.description = values.description
        transaction.account = values.account
        transaction.is_income = values.is_income
        transaction.amount = values.amount
        transaction.category_id = values.category_id
        transaction.notes = values.notes
        session.commit()

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        session = self._get_session()
        transaction = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        session.delete(transaction)
        session.commit()

    def _month_filter(self, query, month: Month):
        return query.filter(
            Transaction.date >= month.first_day(),
            Transaction.date < month.next_first_day(),
        )

    def list_transactions_for_month(
        self,
        month: Month,
        category_id: Optional[int] = None,
        account: Optional[str] = None,
    ) -> list[DomainTransaction]:
        """List a month's transactions, newest first."""
        session = self._get_session()
        query = self._month_filter(session.query(Transaction), month)

        if category_id is not None:
            query = query.filter(Transaction.category_id == category_id)
        if account is not None:
            query = query.filter(Transaction.account == account)

        transactions = query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
        return [transaction_to_domain(txn) for txn in transactions]

    def list_accounts(self) -> list[str]:
        """List distinct account labels."""
        session = self._get_session()
        rows = (
            session.query(Transaction.account)
            .filter(Transaction.account != "")
            .distinct()
            .order_by(Transaction.account)
            .all()
        )
        return [row[0] for row in rows]

    def count_transactions_for_month(self, month: Month) -> int:
        """Count a month's transactions."""
        session = self._get_session()
        return self._month_filter(session.query(Transaction), month).count()

    def delete_transactions_for_month(self, month: Month) -> int:
        """Delete a month's transactions. Returns count deleted."""
        session = self._get_session()
        deleted = self._month_filter(session.query(Transaction), month).delete(synchronize_session=False)
        session.commit()
        return deleted

    # Monthly budget operations
    def list_monthly_budgets(self, month: Month) -> list[DomainMonthlyBudget]:
        """List budget rows for a month."""
        session = self._get_session()
        budgets = (
            session.query(MonthlyBudget)
            .filter(MonthlyBudget.month == month.key)
            .order_by(MonthlyBudget.category_id)
            .all()
        )
        return [monthly_budget_to_domain(b) for b in budgets]

    def month_has_budgets(self, month: Month) -> bool:
        """Check whether any budget rows exist for a month."""
        session = self._get_session()
        return session.query(MonthlyBudget).filter(MonthlyBudget.month == month.key).first() is not None

    def most_recent_month_with_budgets_before(self, month: Month) -> Optional[Month]:
        """Latest month strictly before `month` with at least one budget row."""
        session = self._get_session()
        # Zero-padded keys compare lexicographically in calendar order
        key = session.query(func.max(MonthlyBudget.month)).filter(MonthlyBudget.month < month.key).scalar()
        if key is None:
            return None
        return Month.parse(key)

    def copy_budgets(self, from_month: Month, to_month: Month) -> int:
        """Copy budget rows between months without overwriting existing rows."""
        session = self._get_session()
        try:
            existing = {
                row[0]
                for row in session.query(MonthlyBudget.category_id)
                .filter(MonthlyBudget.month == to_month.key)
                .all()
            }
            source_rows = session.query(MonthlyBudget).filter(MonthlyBudget.month == from_month.key).all()

            inserted = 0
            for row in source_rows:
                if row.category_id in existing:
                    continue
                session.add(
                    MonthlyBudget(
                        category_id=row.category_id,
                        month=to_month.key,
                        budget_amount=row.budget_amount,
                    )
                )
                inserted += 1
            session.commit()
        except Exception:
            session.rollback()
            raise
        return inserted

    def set_budget(self, category_id: int, month: Month, amount: Optional[Decimal]) -> None:
        """Set a category's budget for a month. None or <= 0 removes it."""
        session = self._get_session()
        budget = (
            session.query(MonthlyBudget)
            .filter(MonthlyBudget.category_id == category_id, MonthlyBudget.month == month.key)
            .first()
        )
        if amount is None or amount <= 0:
            if budget is not None:
                session.delete(budget)
        elif budget is None:
            session.add(MonthlyBudget(category_id=category_id, month=month.key, budget_amount=amount))
        else:
            budget.budget_amount = amount
        session.commit()

    def delete_budgets_for_month(self, month: Month) -> int:
        """Delete a month's budget rows. Returns count deleted."""
        session = self._get_session()
        deleted = (
            session.query(MonthlyBudget)
            .filter(MonthlyBudget.month == month.key)
            .delete(synchronize_session=False)
        )
        session.commit()
        return deleted

    # Settings
    def get_setting(self, key: str) -> Optional[str]:
        """Get an application setting."""
        session = self._get_session()
        setting = session.query(AppSetting).filter(AppSetting.key == key).first()
        return setting.value if setting is not None else None

    def set_setting(self, key: str, value: str) -> None:
        """Store an application setting."""
        session = self._get_session()
        setting = session.query(AppSetting).filter(AppSetting.key == key).first()
        if setting is None:
            session.add(AppSetting(key=key, value=value))
        else:
            setting.value = value
        session.commit()
