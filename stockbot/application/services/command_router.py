"""
Application service: turn one incoming chat message into one reply.

Slash commands get fixed replies; `/feedback <text>` is stored; anything else
(or `/search <query>`) goes through the RequestOrchestrator. Transports
(Telegram, HTTP) call handle() and send back whatever it returns.
"""

import structlog

from stockbot.application.services.recent_searches import RecentSearches
from stockbot.application.services.request_orchestrator import (
    OutcomeStatus,
    QuoteOutcome,
    RequestOrchestrator,
)
from stockbot.application.use_cases.fetch_quote import truncate_message
from stockbot.application.use_cases.submit_feedback import SubmitFeedbackUseCase

logger = structlog.get_logger(__name__)

START_TEXT = (
    "Welcome to the Stock Info Bot! Use /search to get stock prices, "
    "/recent to view your recent searches, and /help for more commands."
)

HELP_TEXT = """Welcome to Stock Info Bot! Here's how you can interact with me:
- Simply type a company's name or ticker symbol (like 'Apple' or 'AAPL') to get its latest stock information.
- Use /search followed by a company's name or ticker to initiate a detailed search (e.g., '/search Apple').
- Use /recent to see your recent searches.
- Use /empty to clear your recent searches.
- Use /feedback followed by your message to tell us what you think.
For any assistance, type /help."""

SEARCH_TEXT = """To perform a detailed search, type /search followed by the company's name or ticker symbol (e.g., '/search Tesla' or '/search TSLA').
Alternatively, you can also simply type the name or ticker of the stock (like 'Nike' or 'NKE') for a quick search."""

FEEDBACK_PROMPT_TEXT = (
    "Please type your feedback after /feedback command. "
    "For example: /feedback I love this bot!"
)

FEEDBACK_THANKS_TEXT = "Thank you for your feedback!"

QUOTA_EXCEEDED_TEXT = """You have reached the limit of searches. Thank you for testing the bot!
If you liked the bot or want to help us improve, we invite you to leave feedback.
Click on the menu and select /feedback or simply type /feedback followed by your message."""

EMPTY_TEXT = "Your search history has been cleared."
NO_RECENT_TEXT = "You have no recent searches. Type a company name or ticker to start."


class CommandRouter:
    def __init__(
        self,
        orchestrator: RequestOrchestrator,
        feedback: SubmitFeedbackUseCase,
        recent: RecentSearches,
    ) -> None:
        self._orchestrator = orchestrator
        self._feedback = feedback
        self._recent = recent

    def handle(self, user_id: int, text: str | None) -> str:
        return truncate_message(self._dispatch(user_id, (text or "").strip()))

    def _dispatch(self, user_id: int, text: str) -> str:
        parts = text.split(maxsplit=1)
        command = parts[0] if parts else ""
        argument = parts[1].strip() if len(parts) > 1 else ""
        if command.startswith("/"):
            # Group chats address commands as /help@SomeBot.
            command = command.split("@", 1)[0]

        if command == "/start":
            return START_TEXT
        if command == "/help":
            return HELP_TEXT
        if command == "/recent":
            return self._recent_text(user_id)
        if command == "/empty":
            self._recent.clear(user_id)
            return EMPTY_TEXT
        if command == "/feedback":
            if not argument:
                return FEEDBACK_PROMPT_TEXT
            self._feedback.execute(user_id, argument)
            logger.info("feedback_received", user_id=user_id)
            return FEEDBACK_THANKS_TEXT
        if command == "/search":
            if not argument:
                return SEARCH_TEXT
            return self.render(self._orchestrator.resolve_and_quote(user_id, argument))

        return self.render(self._orchestrator.resolve_and_quote(user_id, text))

    def _recent_text(self, user_id: int) -> str:
        symbols = self._recent.symbols(user_id)
        if not symbols:
            return NO_RECENT_TEXT
        return "Your recent searches: " + ", ".join(symbols) + ". Use /search to find more stocks."

    @staticmethod
    def render(outcome: QuoteOutcome) -> str:
        """Map every OutcomeStatus to the user-facing reply."""
        status = outcome.status
        if outcome.ok or status is OutcomeStatus.INVALID_INPUT:
            return outcome.message
        if status is OutcomeStatus.QUOTA_EXCEEDED:
            return QUOTA_EXCEEDED_TEXT
        if status in (OutcomeStatus.RESOLUTION_FAILED, OutcomeStatus.MARKET_DATA_FAILED):
            return f"An error occurred: {outcome.message}"
        raise ValueError(f"Unhandled outcome status: {status!r}")
