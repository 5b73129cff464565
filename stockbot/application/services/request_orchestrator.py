"""
Application service: the single entry point for "quote this company or ticker".

Business decisions owned here:
  - Quota gating: an exhausted user is rejected before any I/O.
  - Charging: exactly one unit per logical request. Input that needed a name
    lookup is charged as soon as resolution succeeds (and stays charged if the
    quote fetch then fails); symbol-shaped input is charged only after a
    successful fetch.
  - Failure mapping: typed domain errors become a QuoteOutcome; any other
    exception propagates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from stockbot.application.services.recent_searches import RecentSearches
from stockbot.application.services.usage_ledger import UsageLedger
from stockbot.application.use_cases.fetch_quote import FetchQuoteUseCase, format_quote
from stockbot.application.use_cases.resolve_ticker import ResolveTickerUseCase
from stockbot.domain.errors import MarketDataError, ResolutionError

logger = structlog.get_logger(__name__)


class OutcomeStatus(str, Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    QUOTA_EXCEEDED = "quota_exceeded"
    RESOLUTION_FAILED = "resolution_failed"
    MARKET_DATA_FAILED = "market_data_failed"


@dataclass(frozen=True)
class QuoteOutcome:
    status: OutcomeStatus
    message: str
    symbol: Optional[str] = None
    # ResolutionErrorKind / MarketDataErrorKind value for the two failure statuses.
    failure_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


class RequestOrchestrator:
    def __init__(
        self,
        ledger: UsageLedger,
        resolver: ResolveTickerUseCase,
        quotes: FetchQuoteUseCase,
        recent: Optional[RecentSearches] = None,
    ) -> None:
        self._ledger = ledger
        self._resolver = resolver
        self._quotes = quotes
        self._recent = recent

    def resolve_and_quote(self, user_id: int, raw_text: Optional[str]) -> QuoteOutcome:
        """Run validate -> quota check -> resolve -> fetch -> commit for one request."""
        text = (raw_text or "").strip()
        if not text:
            return QuoteOutcome(OutcomeStatus.INVALID_INPUT, "Please provide a valid input.")

        with self._ledger.user_lock(user_id):
            quota = self._ledger.check(user_id)
            if quota.exhausted:
                logger.info("quota_exceeded", user_id=user_id, used=quota.used, limit=quota.limit)
                return QuoteOutcome(OutcomeStatus.QUOTA_EXCEEDED, "Search limit reached.")

            try:
                resolution = self._resolver.execute(text)
            except ResolutionError as exc:
                logger.warning(
                    "resolution_failed",
                    user_id=user_id,
                    query=text,
                    kind=exc.kind.value,
                    error=exc.message,
                )
                return QuoteOutcome(
                    OutcomeStatus.RESOLUTION_FAILED,
                    exc.message,
                    failure_kind=exc.kind.value,
                )

            if resolution.required_lookup:
                self._ledger.record_use(user_id)

            try:
                quote = self._quotes.execute(resolution.symbol)
            except MarketDataError as exc:
                logger.warning(
                    "market_data_failed",
                    user_id=user_id,
                    symbol=resolution.symbol,
                    kind=exc.kind.value,
                    error=exc.message,
                )
                return QuoteOutcome(
                    OutcomeStatus.MARKET_DATA_FAILED,
                    exc.message,
                    symbol=resolution.symbol,
                    failure_kind=exc.kind.value,
                )

            if not resolution.required_lookup:
                self._ledger.record_use(user_id)

        if self._recent is not None:
            self._recent.add(user_id, quote.symbol)
        logger.info("quote_served", user_id=user_id, symbol=quote.symbol, source=resolution.source.value)
        return QuoteOutcome(OutcomeStatus.OK, format_quote(quote), symbol=quote.symbol)
