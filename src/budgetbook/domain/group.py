"""Category group domain service."""

import logging
from typing import Optional, Sequence

from budgetbook.database.base import Database
from budgetbook.domain.colors import PALETTE
from budgetbook.domain.entities import CategoryGroup
from budgetbook.domain.errors import NotFoundError, ValidationError, group_not_found

logger = logging.getLogger(__name__)


class CategoryGroupService:
    """Service for managing category groups."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_color(self, color: Optional[str]) -> Optional[str]:
        if color is None:
            return None
        normalized = color.strip().lower()
        if normalized not in PALETTE:
            raise ValidationError(
                f"Invalid color '{color}'. Choose one of: {', '.join(PALETTE)}"
            )
        return normalized

    def create_group(self, name: str, color: Optional[str] = None) -> int:
        """Create a group at the end of the display order.

        Raises:
            ValidationError: If the name is empty or the color is not in the palette
            ConflictError: If a group with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        color = self._validate_color(color)

        current_max = self.db.max_group_sort_order()
        sort_order = 0 if current_max is None else current_max + 1
        return self.db.create_group(name=name, sort_order=sort_order, color=color)

    def require_group(self, group_id: int) -> CategoryGroup:
        """Get group by ID or raise NotFoundError."""
        group = self.db.get_group(group_id)
        if group is None:
            raise NotFoundError(group_not_found(group_id))
        return group

    def list_groups(self) -> list[CategoryGroup]:
        """List groups in display order."""
        return self.db.list_groups()

    def reorder_groups(self, ordered_ids: Sequence[int]) -> None:
        """Rewrite sort orders so groups display in the given order."""
        self.db.update_group_sort_orders({group_id: index for index, group_id in enumerate(ordered_ids)})

    def move_group(self, group_id: int, direction: str) -> bool:
        """Swap a group with its neighbour.

        Args:
            group_id: Group to move
            direction: "up" or "down"

        Returns:
            True if the group moved, False if it was already at the edge

        Raises:
            ValidationError: If direction is invalid
            NotFoundError: If the group doesn't exist
        """
        if direction not in ("up", "down"):
            raise ValidationError(f"Invalid direction '{direction}': use 'up' or 'down'")

        ids = [group.id for group in self.list_groups()]
        if group_id not in ids:
            raise NotFoundError(group_not_found(group_id))

        index = ids.index(group_id)
        swap_index = index - 1 if direction == "up" else index + 1
        if swap_index < 0 or swap_index >= len(ids):
            return False

        ids[index], ids[swap_index] = ids[swap_index], ids[index]
        self.reorder_groups(ids)
        return True

    def set_color(self, group_id: int, color: Optional[str]) -> None:
        """Set a group's color, or clear it with None.

        Raises:
            ValidationError: If the color is not in the palette
            NotFoundError: If the group doesn't exist
        """
        self.db.update_group_color(group_id, self._validate_color(color))

    def delete_group(self, group_id: int) -> int:
        """Delete a group. Its categories move to Unassigned.

        Returns:
            Number of categories that were unassigned
        """
        unassigned = self.db.delete_group(group_id)
        logger.info(f"group_deleted: id={group_id} categories_unassigned={unassigned}")
        return unassigned
