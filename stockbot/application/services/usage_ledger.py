"""
Application service: per-user usage accounting against a fixed quota.

The whole table is loaded from the injected IUsageStore once, at construction.
Every charge increments in memory and flushes the full table back through the
store. Reads never touch the store.
"""

import threading

import structlog

from stockbot.domain.entities.usage import QuotaStatus, UsageRecord
from stockbot.domain.ports.usage_store_port import IUsageStore

logger = structlog.get_logger(__name__)


class UsageLedger:
    DEFAULT_QUOTA: int = 5

    def __init__(self, store: IUsageStore, quota: int = DEFAULT_QUOTA) -> None:
        if quota < 1:
            raise ValueError("quota must be at least 1")
        self._store = store
        self._quota = quota
        self._counts: dict[int, int] = dict(store.load())
        self._lock = threading.Lock()
        self._user_locks: dict[int, threading.Lock] = {}
        self._user_locks_guard = threading.Lock()
        logger.info("usage_ledger_loaded", users=len(self._counts), quota=quota)

    @property
    def quota(self) -> int:
        return self._quota

    def count(self, user_id: int) -> int:
        return self._counts.get(user_id, 0)

    def record(self, user_id: int) -> UsageRecord:
        return UsageRecord(user_id=user_id, count=self.count(user_id))

    def check(self, user_id: int) -> QuotaStatus:
        return QuotaStatus(user_id=user_id, used=self.record(user_id).count, limit=self._quota)

    def remaining_quota(self, user_id: int) -> int:
        return self.check(user_id).remaining

    def record_use(self, user_id: int) -> None:
        """Charge one unit to *user_id* and persist the full table.

        The in-memory count only changes once the store has accepted the new
        table; a failing save propagates and leaves the ledger as it was.
        """
        with self._lock:
            snapshot = {**self._counts, user_id: self._counts.get(user_id, 0) + 1}
            self._store.save(dict(snapshot))
            self._counts = snapshot
        logger.debug("usage_recorded", user_id=user_id, count=snapshot[user_id])

    def snapshot(self) -> dict[int, int]:
        with self._lock:
            return dict(self._counts)

    def user_lock(self, user_id: int) -> threading.Lock:
        """Return the lock serializing quota-check-then-charge for *user_id*."""
        with self._user_locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.Lock()
            return lock
