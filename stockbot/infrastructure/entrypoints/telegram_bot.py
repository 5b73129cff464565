"""
Telegram long-polling entry point: the production message loop.

Run:
    export TELEGRAM_BOT_TOKEN=... MARKET_API_KEY=...   # or put them in .env
    python -m stockbot.infrastructure.entrypoints.telegram_bot
"""

import time
from typing import Callable, Optional

from dotenv import load_dotenv

from stockbot.application.services.command_router import CommandRouter
from stockbot.infrastructure.config.settings import load_settings
from stockbot.infrastructure.entrypoints.composition import build_command_router
from stockbot.infrastructure.messaging.telegram_client import TelegramBotClient, TelegramError
from stockbot.infrastructure.observability.logging import configure_logging, get_logger

logger = get_logger(__name__, transport="telegram")

INTERNAL_ERROR_TEXT = "An error occurred: please try again later."
POLL_RETRY_DELAY_SECONDS = 5.0


def handle_update(update: dict, router: CommandRouter, telegram: TelegramBotClient) -> None:
    """Answer one update; non-text updates are ignored."""
    message = update.get("message") or {}
    text = message.get("text")
    chat_id = (message.get("chat") or {}).get("id")
    if text is None or chat_id is None:
        return

    try:
        reply = router.handle(chat_id, text)
    except Exception:
        logger.exception("message_handling_failed", chat_id=chat_id)
        reply = INTERNAL_ERROR_TEXT

    try:
        telegram.send_message(chat_id, reply)
    except TelegramError as exc:
        logger.warning("reply_failed", chat_id=chat_id, error=str(exc))


def run_polling(
    router: CommandRouter,
    telegram: TelegramBotClient,
    poll_timeout: int = 30,
    should_stop: Callable[[], bool] = lambda: False,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[int]:
    """Poll until *should_stop* returns True; returns the next update offset."""
    offset: Optional[int] = None
    while not should_stop():
        try:
            updates = telegram.get_updates(offset=offset, poll_timeout=poll_timeout)
        except TelegramError as exc:
            logger.warning("poll_failed", error=str(exc), retry_in=POLL_RETRY_DELAY_SECONDS)
            sleep(POLL_RETRY_DELAY_SECONDS)
            continue
        for update in updates:
            offset = update["update_id"] + 1
            handle_update(update, router, telegram)
    return offset


def main() -> None:
    load_dotenv()

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format, service_name="stockbot-telegram")
    router = build_command_router(settings)
    telegram = TelegramBotClient(
        token=settings.telegram_bot_token.get_secret_value(),
        base_url=settings.telegram_api_base_url,
        timeout=settings.http_timeout_seconds,
    )
    logger.info("telegram_polling_started")
    try:
        run_polling(router, telegram, poll_timeout=settings.telegram_poll_timeout_seconds)
    except KeyboardInterrupt:
        logger.info("telegram_polling_stopped")
    finally:
        telegram.close()


if __name__ == "__main__":
    main()
