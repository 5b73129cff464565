"""
Port (interface) for remote company-name to ticker search.
Infrastructure adapters (e.g. MarketstackAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITickerSearch(ABC):
    @abstractmethod
    def search(self, query: str) -> list[str]:
        """Return candidate symbols for *query* in provider order (may be empty).

        Raises:
            ResolutionError(UPSTREAM): on transport failure, non-success status,
                or a malformed response.
        """
        ...
