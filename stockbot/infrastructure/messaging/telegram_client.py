"""
Infrastructure adapter: Telegram Bot API over httpx.

Only the two calls the bot needs: getUpdates (long polling) and sendMessage.
The bot token is part of the URL path, so raised errors never include the URL.
"""

from typing import Any, Optional

import httpx


class TelegramError(Exception):
    """A Bot API call failed (transport, HTTP status, or ok=false)."""


class TelegramBotClient:
    DEFAULT_BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not token:
            raise ValueError("token must be a non-empty string")
        self._api_root = f"{base_url.rstrip('/')}/bot{token}"
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def get_updates(self, offset: Optional[int] = None, poll_timeout: int = 30) -> list[dict]:
        """Long-poll for new updates; *offset* acknowledges everything before it."""
        params: dict[str, Any] = {"timeout": poll_timeout, "allowed_updates": '["message"]'}
        if offset is not None:
            params["offset"] = offset
        # The HTTP read must outlast the server-side long poll.
        result = self._call("getUpdates", params=params, read_timeout=poll_timeout + self._timeout)
        return result if isinstance(result, list) else []

    def send_message(self, chat_id: int, text: str) -> dict:
        return self._call("sendMessage", json={"chat_id": chat_id, "text": text})

    def close(self) -> None:
        self._client.close()

    def _call(
        self,
        method: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        read_timeout: Optional[float] = None,
    ) -> Any:
        timeout = httpx.Timeout(self._timeout, read=read_timeout or self._timeout)
        try:
            if json is not None:
                response = self._client.post(f"{self._api_root}/{method}", json=json, timeout=timeout)
            else:
                response = self._client.get(f"{self._api_root}/{method}", params=params, timeout=timeout)
        except httpx.HTTPError as exc:
            raise TelegramError(f"Telegram {method} failed ({type(exc).__name__})") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TelegramError(f"Telegram {method} returned HTTP {response.status_code} with a non-JSON body") from exc

        if not response.is_success or not isinstance(body, dict) or not body.get("ok"):
            description = body.get("description") if isinstance(body, dict) else None
            raise TelegramError(
                f"Telegram {method} returned HTTP {response.status_code}"
                + (f": {description}" if description else "")
            )
        return body.get("result")
