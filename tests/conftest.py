"""
Pytest configuration, in-memory port fakes and fixtures shared by the test suite.
"""

from decimal import Decimal
from typing import Optional

import pytest

from stockbot.application.services.command_router import CommandRouter
from stockbot.application.services.recent_searches import RecentSearches
from stockbot.application.services.request_orchestrator import RequestOrchestrator
from stockbot.application.services.usage_ledger import UsageLedger
from stockbot.application.use_cases.fetch_quote import FetchQuoteUseCase
from stockbot.application.use_cases.resolve_ticker import ResolveTickerUseCase
from stockbot.application.use_cases.submit_feedback import SubmitFeedbackUseCase
from stockbot.domain.entities.feedback import FeedbackEntry
from stockbot.domain.entities.quote import EndOfDayRecord
from stockbot.domain.errors import MarketDataError, MarketDataErrorKind
from stockbot.domain.ports.feedback_sink_port import IFeedbackSink
from stockbot.domain.ports.market_data_port import IMarketDataProvider
from stockbot.domain.ports.symbol_index_port import ISymbolIndex
from stockbot.domain.ports.ticker_search_port import ITickerSearch
from stockbot.domain.ports.usage_store_port import IUsageStore


class FakeSymbolIndex(ISymbolIndex):
    def __init__(self, names: Optional[dict[str, str]] = None) -> None:
        # company name -> symbol, scanned in insertion order
        self.names = names or {}
        self.calls: list[str] = []

    def lookup(self, company_fragment: str) -> Optional[str]:
        self.calls.append(company_fragment)
        needle = company_fragment.lower()
        for name, symbol in self.names.items():
            if needle in name.lower():
                return symbol
        return None


class FakeTickerSearch(ITickerSearch):
    def __init__(self, candidates: Optional[list[str]] = None, error: Optional[Exception] = None) -> None:
        self.candidates = candidates or []
        self.error = error
        self.calls: list[str] = []

    def search(self, query: str) -> list[str]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


class FakeMarketData(IMarketDataProvider):
    def __init__(self, prices: Optional[dict[str, tuple[str, str]]] = None, error: Optional[Exception] = None) -> None:
        # symbol -> (close, open)
        self.prices = prices or {}
        self.error = error
        self.calls: list[str] = []

    def get_latest_eod(self, symbol: str) -> EndOfDayRecord:
        self.calls.append(symbol)
        if self.error is not None:
            raise self.error
        if symbol not in self.prices:
            raise MarketDataError(MarketDataErrorKind.NO_DATA, f"No market data available for {symbol}")
        close, open_ = self.prices[symbol]
        return EndOfDayRecord(symbol=symbol, close=Decimal(close), open=Decimal(open_))


class InMemoryUsageStore(IUsageStore):
    def __init__(self, initial: Optional[dict[int, int]] = None) -> None:
        self.data = dict(initial or {})
        self.saves: list[dict[int, int]] = []

    def load(self) -> dict[int, int]:
        return dict(self.data)

    def save(self, counts: dict[int, int]) -> None:
        self.data = dict(counts)
        self.saves.append(dict(counts))


class ListFeedbackSink(IFeedbackSink):
    def __init__(self) -> None:
        self.entries: list[FeedbackEntry] = []

    def append(self, entry: FeedbackEntry) -> None:
        self.entries.append(entry)


@pytest.fixture
def symbol_index() -> FakeSymbolIndex:
    return FakeSymbolIndex({"Apple Inc.": "AAPL", "Microsoft Corporation": "MSFT"})


@pytest.fixture
def ticker_search() -> FakeTickerSearch:
    return FakeTickerSearch(["GOOGL", "GOOG"])


@pytest.fixture
def market_data() -> FakeMarketData:
    return FakeMarketData(
        {
            "AAPL": ("150.00", "100.00"),
            "MSFT": ("90.00", "100.00"),
            "GOOG": ("2800.50", "2750.25"),
            "TSLA": ("250.00", "0"),
        }
    )


@pytest.fixture
def usage_store() -> InMemoryUsageStore:
    return InMemoryUsageStore()


@pytest.fixture
def ledger(usage_store) -> UsageLedger:
    return UsageLedger(usage_store, quota=5)


@pytest.fixture
def recent() -> RecentSearches:
    return RecentSearches(size=3)


@pytest.fixture
def orchestrator(ledger, symbol_index, ticker_search, market_data, recent) -> RequestOrchestrator:
    return RequestOrchestrator(
        ledger=ledger,
        resolver=ResolveTickerUseCase(symbol_index, ticker_search),
        quotes=FetchQuoteUseCase(market_data),
        recent=recent,
    )


@pytest.fixture
def feedback_sink() -> ListFeedbackSink:
    return ListFeedbackSink()


@pytest.fixture
def router(orchestrator, feedback_sink, recent) -> CommandRouter:
    return CommandRouter(
        orchestrator=orchestrator,
        feedback=SubmitFeedbackUseCase(feedback_sink),
        recent=recent,
    )


@pytest.fixture
def symbols_csv(tmp_path):
    path = tmp_path / "symbols.csv"
    path.write_text(
        "Symbol,Name\n"
        "AAPL,Apple Inc.\n"
        "AMAT,Applied Materials Inc.\n"
        "GOOGL,Alphabet Inc. Class A\n"
        "GOOG,Alphabet Inc. Class C\n"
        "BROKEN\n"
        "msft,Microsoft Corporation\n",
        encoding="utf-8",
    )
    return path
