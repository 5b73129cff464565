"""
Port (interface) for durable per-user usage counts.
Infrastructure adapters (e.g. PropertiesFileUsageStore) must implement this interface.
"""

from abc import ABC, abstractmethod


class IUsageStore(ABC):
    @abstractmethod
    def load(self) -> dict[int, int]:
        """Return every persisted user id -> count pair."""
        ...

    @abstractmethod
    def save(self, counts: dict[int, int]) -> None:
        """Replace the persisted table with *counts* in full."""
        ...
