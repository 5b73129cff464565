"""
Use-case: fetch the latest end-of-day quote for a symbol and render it.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from decimal import ROUND_HALF_UP, Decimal

from stockbot.domain.entities.quote import Quote
from stockbot.domain.ports.market_data_port import IMarketDataProvider

# Telegram rejects messages longer than 4096 characters; stay well below.
MAX_MESSAGE_LENGTH = 4000
ELLIPSIS = "..."
CENT = Decimal("0.01")


class FetchQuoteUseCase:
    def __init__(self, provider: IMarketDataProvider) -> None:
        self._provider = provider

    def execute(self, symbol: str) -> Quote:
        """Fetch the most recent end-of-day quote for *symbol* (uppercased).

        Raises:
            ValueError: if *symbol* is blank.
            MarketDataError: propagated from the provider, or MALFORMED_RESPONSE
                when the opening price is zero.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        record = self._provider.get_latest_eod(symbol.upper().strip())
        return Quote.from_end_of_day(record)


def format_quote(quote: Quote) -> str:
    text = (
        f"Stock: {quote.symbol}\n"
        f"Last Price: {_two_places(quote.last_close):.2f}$\n"
        f"Daily Change: {_two_places(quote.percent_change):+.2f}%"
    )
    return truncate_message(text)


def _two_places(value: Decimal) -> Decimal:
    # printf-style "%.2f" rounds half up, not half even.
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def truncate_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    """Bound *text* to *limit* characters, ending with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS
