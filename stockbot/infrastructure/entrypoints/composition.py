"""
Composition Root shared by every entrypoint.

Builds each infrastructure adapter once from a Settings value and hands them
to the application layer. Nothing below this module reads the environment.
"""

from stockbot.application.services.command_router import CommandRouter
from stockbot.application.services.recent_searches import RecentSearches
from stockbot.application.services.request_orchestrator import RequestOrchestrator
from stockbot.application.services.usage_ledger import UsageLedger
from stockbot.application.use_cases.fetch_quote import FetchQuoteUseCase
from stockbot.application.use_cases.resolve_ticker import ResolveTickerUseCase
from stockbot.application.use_cases.submit_feedback import SubmitFeedbackUseCase
from stockbot.infrastructure.config.settings import Settings
from stockbot.infrastructure.feedback.text_file_feedback_sink import TextFileFeedbackSink
from stockbot.infrastructure.stock_data.marketstack_adapter import MarketstackAdapter
from stockbot.infrastructure.symbol_index.csv_symbol_index import CsvSymbolIndex
from stockbot.infrastructure.usage.properties_usage_store import PropertiesFileUsageStore


def build_command_router(settings: Settings) -> CommandRouter:
    """Wire adapters, use cases and services for one process.

    Raises:
        FileNotFoundError: if the symbol dataset is missing.
        ValueError: if the usage store file is corrupt.
    """
    symbol_index = CsvSymbolIndex(settings.symbols_csv_path)
    marketstack = MarketstackAdapter(
        access_key=settings.market_api_key.get_secret_value(),
        base_url=settings.marketstack_base_url,
        timeout=settings.http_timeout_seconds,
    )
    ledger = UsageLedger(
        PropertiesFileUsageStore(settings.usage_store_path),
        quota=settings.max_searches,
    )
    recent = RecentSearches(size=settings.recent_searches_size)

    orchestrator = RequestOrchestrator(
        ledger=ledger,
        resolver=ResolveTickerUseCase(symbol_index, marketstack),
        quotes=FetchQuoteUseCase(marketstack),
        recent=recent,
    )
    feedback = SubmitFeedbackUseCase(TextFileFeedbackSink(settings.feedback_path))
    return CommandRouter(orchestrator=orchestrator, feedback=feedback, recent=recent)
