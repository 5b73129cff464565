"""
Use-case: resolve free text (a ticker or a company name) to a canonical symbol.
Depends only on Domain ports and entities; structlog is the one framework import.

Resolution order:
  1. Text already shaped like a symbol is accepted as-is, with no lookup.
  2. The local symbol index (free, no network).
  3. Remote search, preferring the shortest candidate symbol since shorter
     symbols are usually the primary listing rather than a share class or a
     foreign line.
"""

import re

import structlog

from stockbot.domain.entities.resolution import ResolutionSource, TickerResolution
from stockbot.domain.errors import ResolutionError, ResolutionErrorKind
from stockbot.domain.ports.symbol_index_port import ISymbolIndex
from stockbot.domain.ports.ticker_search_port import ITickerSearch

# Case-sensitive: "aapl" is looked up as a company name, "AAPL" is taken verbatim.
SYMBOL_PATTERN = re.compile(r"^[A-Z0-9.]{1,5}$")

logger = structlog.get_logger(__name__)


def is_symbol_shaped(text: str) -> bool:
    return SYMBOL_PATTERN.fullmatch(text) is not None


def pick_primary_listing(candidates: list[str]) -> str:
    """Return the shortest candidate; the first one wins on equal length."""
    return min(candidates, key=len)


class ResolveTickerUseCase:
    def __init__(self, symbol_index: ISymbolIndex, ticker_search: ITickerSearch) -> None:
        self._symbol_index = symbol_index
        self._ticker_search = ticker_search

    def execute(self, raw_text: str) -> TickerResolution:
        """Resolve *raw_text* to a ticker.

        Raises:
            ValueError: if *raw_text* is blank.
            ResolutionError: NOT_FOUND when remote search has no candidates,
                UPSTREAM when remote search fails.
        """
        if not raw_text or not raw_text.strip():
            raise ValueError("raw_text must be a non-empty string")
        text = raw_text.strip()

        if is_symbol_shaped(text):
            return TickerResolution(symbol=text, source=ResolutionSource.SYMBOL_SHAPE)

        local_symbol = self._symbol_index.lookup(text)
        if local_symbol:
            logger.info("ticker_resolved", query=text, symbol=local_symbol, source="local_index")
            return TickerResolution(symbol=local_symbol, source=ResolutionSource.LOCAL_INDEX)

        candidates = [c.strip().upper() for c in self._ticker_search.search(text) if c and c.strip()]
        if not candidates:
            raise ResolutionError(ResolutionErrorKind.NOT_FOUND, f"No ticker found for {text}")

        symbol = pick_primary_listing(candidates)
        logger.info(
            "ticker_resolved",
            query=text,
            symbol=symbol,
            source="remote_search",
            candidates=len(candidates),
        )
        return TickerResolution(symbol=symbol, source=ResolutionSource.REMOTE_SEARCH)
