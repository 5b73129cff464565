"""
Port (interface) for end-of-day market data providers.
Infrastructure adapters (e.g. MarketstackAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod

from stockbot.domain.entities.quote import EndOfDayRecord


class IMarketDataProvider(ABC):
    @abstractmethod
    def get_latest_eod(self, symbol: str) -> EndOfDayRecord:
        """Return the most recent end-of-day record for *symbol*.

        Raises:
            MarketDataError: NO_DATA when the provider has no records,
                UPSTREAM on transport/status failures, MALFORMED_RESPONSE when
                required fields are missing or not numeric.
        """
        ...
