"""
Process configuration, built once in the composition root and passed into
each adapter constructor. Values come from environment variables or a `.env`
file; the two credentials are required and their absence aborts startup.
"""

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYMBOLS_CSV = Path(__file__).resolve().parents[1] / "symbol_index" / "symbols.csv"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    telegram_bot_token: SecretStr = Field(..., description="Telegram Bot API token")
    market_api_key: SecretStr = Field(..., description="marketstack access key")

    # Upstream endpoints
    marketstack_base_url: str = "http://api.marketstack.com/v1"
    telegram_api_base_url: str = "https://api.telegram.org"
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    telegram_poll_timeout_seconds: int = Field(default=30, ge=0)

    # Usage accounting
    max_searches: int = Field(default=5, ge=1)
    recent_searches_size: int = Field(default=10, ge=1)

    # Local files
    symbols_csv_path: Path = DEFAULT_SYMBOLS_CSV
    usage_store_path: Path = Path("searchCounts.properties")
    feedback_path: Path = Path("feedback.txt")

    # Logging
    log_level: str = "INFO"
    log_format: str = Field(default="text", pattern="^(json|text)$")


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment, applying keyword *overrides*.

    Raises:
        pydantic.ValidationError: if a credential is missing or a value is invalid.
    """
    return Settings(**overrides)
