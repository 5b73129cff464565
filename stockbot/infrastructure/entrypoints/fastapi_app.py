"""
FastAPI entry point: local development server.

The same CommandRouter the Telegram loop uses, exposed over HTTP so the bot can
be exercised without a Telegram account. The user id is supplied by the caller.

Run locally:
    uvicorn stockbot.infrastructure.entrypoints.fastapi_app:build_app --factory --reload --port 8000
"""

from dotenv import load_dotenv
from fastapi import FastAPI
from pydantic import BaseModel

from stockbot.application.services.command_router import CommandRouter
from stockbot.infrastructure.config.settings import load_settings
from stockbot.infrastructure.entrypoints.composition import build_command_router
from stockbot.infrastructure.observability.logging import configure_logging


class MessageRequest(BaseModel):
    user_id: int
    text: str


class MessageResponse(BaseModel):
    reply: str


def create_app(router: CommandRouter) -> FastAPI:
    app = FastAPI(title="Stock Info Bot API")

    @app.post("/messages", response_model=MessageResponse)
    def post_message(body: MessageRequest) -> MessageResponse:
        """Handle one chat message exactly as the Telegram bot would."""
        return MessageResponse(reply=router.handle(body.user_id, body.text))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def build_app() -> FastAPI:
    """uvicorn factory: load configuration and wire the Composition Root."""
    load_dotenv()

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format, service_name="stockbot-api")
    return create_app(build_command_router(settings))
