"""
Domain error taxonomy.

Infrastructure adapters translate library exceptions (httpx, json, decimal)
into these types at the port boundary so the application layer can branch on
``kind`` without importing any SDK.
"""

from enum import Enum
from typing import Optional


class StockBotError(Exception):
    """Base class for every recoverable, request-level failure."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ResolutionErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream_error"


class ResolutionError(StockBotError):
    def __init__(
        self,
        kind: ResolutionErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.kind = kind


class MarketDataErrorKind(str, Enum):
    NO_DATA = "no_data"
    UPSTREAM = "upstream_error"
    MALFORMED_RESPONSE = "malformed_response"


class MarketDataError(StockBotError):
    def __init__(
        self,
        kind: MarketDataErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.kind = kind
