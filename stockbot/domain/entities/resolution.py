"""
Domain entities describing the outcome of ticker resolution.
"""

from dataclasses import dataclass
from enum import Enum


class ResolutionSource(str, Enum):
    SYMBOL_SHAPE = "symbol_shape"
    LOCAL_INDEX = "local_index"
    REMOTE_SEARCH = "remote_search"


@dataclass(frozen=True)
class TickerResolution:
    symbol: str
    source: ResolutionSource

    @property
    def required_lookup(self) -> bool:
        """True when the input was a company name rather than a symbol."""
        return self.source is not ResolutionSource.SYMBOL_SHAPE
