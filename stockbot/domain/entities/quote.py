"""
Domain entities for end-of-day market data and the derived quote.
Zero external dependencies: pure Python dataclasses and decimal arithmetic only.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from stockbot.domain.errors import MarketDataError, MarketDataErrorKind


@dataclass(frozen=True)
class EndOfDayRecord:
    symbol: str
    close: Decimal
    open: Decimal
    date: Optional[str] = None


@dataclass(frozen=True)
class Quote:
    symbol: str
    last_close: Decimal
    previous_open: Decimal
    percent_change: Decimal

    @classmethod
    def from_end_of_day(cls, record: EndOfDayRecord) -> "Quote":
        return cls(
            symbol=record.symbol,
            last_close=record.close,
            previous_open=record.open,
            percent_change=percent_change(record.close, record.open),
        )


def percent_change(last_close: Decimal, previous_open: Decimal) -> Decimal:
    """Return ``(last_close - previous_open) / previous_open * 100``.

    Raises:
        MarketDataError(MALFORMED_RESPONSE): if *previous_open* is zero or
            either value is not finite.
    """
    if not (last_close.is_finite() and previous_open.is_finite()):
        raise MarketDataError(
            MarketDataErrorKind.MALFORMED_RESPONSE,
            "Price data contains non-finite values",
        )
    if previous_open == 0:
        raise MarketDataError(
            MarketDataErrorKind.MALFORMED_RESPONSE,
            "Opening price is zero; daily change is undefined",
        )
    return (last_close - previous_open) / previous_open * 100
