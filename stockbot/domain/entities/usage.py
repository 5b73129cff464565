"""
Domain entities for per-user usage accounting.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UsageRecord:
    user_id: int
    count: int = 0


@dataclass(frozen=True)
class QuotaStatus:
    """Result of a quota check: how much of *limit* the user has used."""

    user_id: int
    used: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0
