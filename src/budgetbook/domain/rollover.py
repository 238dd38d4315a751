"""Budget rollover domain service."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from budgetbook.database.base import Database
from budgetbook.utils.month import Month

logger = logging.getLogger(__name__)


class _MonthLock:
    """A lock plus the number of callers holding or waiting for it."""

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


_registry_lock = threading.Lock()
_month_locks: dict[str, _MonthLock] = {}


@contextmanager
def _month_guard(month: Month) -> Iterator[None]:
    """Serialise rollover for one month across threads of this process.

    Registry entries are dropped once no caller holds or waits for them.
    """
    with _registry_lock:
        entry = _month_locks.get(month.key)
        if entry is None:
            entry = _MonthLock()
            _month_locks[month.key] = entry
        entry.users += 1
    try:
        with entry.lock:
            yield
    finally:
        with _registry_lock:
            entry.users -= 1
            if entry.users == 0:
                del _month_locks[month.key]


class BudgetRolloverService:
    """Service that carries budget allocations forward into empty months."""

    def __init__(self, db: Database):
        """Initialize rollover service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_budgets_for_month(self, month: Month) -> Optional[Month]:
        """Make sure a month has budget allocations before it is reported on.

        If the month has no budget rows, the rows of the most recent earlier
        month that has any are copied into it. Existing rows are never
        overwritten, so calling this repeatedly is a no-op after the first
        call.

        Args:
            month: Target month

        Returns:
            Source month the budgets were copied from, or None if nothing was
            copied (month already had budgets, or no earlier month has any)
        """
        with _month_guard(month):
            if self.db.month_has_budgets(month):
                return None

            source = self.db.most_recent_month_with_budgets_before(month)
            if source is None:
                logger.debug(f"budget_rollover: month={month} source=none")
                return None

            copied = self.db.copy_budgets(source, month)
            logger.info(f"budget_rollover: month={month} source={source} copied={copied}")
            return source
