"""
Infrastructure adapter: marketstack REST API → ITickerSearch + IMarketDataProvider.

All marketstack specifics (URLs, access_key parameter, JSON shapes) and every
httpx exception are confined here; callers only ever see ResolutionError or
MarketDataError. The access key is sent as a query parameter, so error
messages are built from status codes and exception types, never from the
request URL.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from stockbot.domain.entities.quote import EndOfDayRecord
from stockbot.domain.errors import (
    MarketDataError,
    MarketDataErrorKind,
    ResolutionError,
    ResolutionErrorKind,
)
from stockbot.domain.ports.market_data_port import IMarketDataProvider
from stockbot.domain.ports.ticker_search_port import ITickerSearch
from stockbot.infrastructure.observability.logging import get_logger

logger = get_logger(__name__, adapter="marketstack")


class MarketstackAdapter(ITickerSearch, IMarketDataProvider):
    """Ticker search and end-of-day quotes from marketstack."""

    DEFAULT_BASE_URL = "http://api.marketstack.com/v1"
    # Prices outside 1e-9 .. 1e10 are treated as corrupt.
    MAX_PRICE_EXPONENT = 9

    def __init__(
        self,
        access_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            access_key: marketstack API access key.
            base_url:   API root, without trailing slash.
            timeout:    Per-request timeout in seconds.
            client:     Optional pre-configured httpx.Client (tests pass one
                        with a MockTransport). Pass nothing for normal use.
        """
        if not access_key:
            raise ValueError("access_key must be a non-empty string")
        self._access_key = access_key
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    # ------------------------------------------------------------------
    # ITickerSearch interface
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[str]:
        try:
            payload = self._get("/tickers", {"search": query})
        except _UpstreamFailure as exc:
            raise ResolutionError(ResolutionErrorKind.UPSTREAM, str(exc), exc.__cause__) from exc

        data = payload.get("data")
        if not isinstance(data, list):
            raise ResolutionError(
                ResolutionErrorKind.UPSTREAM,
                "Malformed ticker search response: missing 'data' list",
            )

        symbols = [
            item["symbol"]
            for item in data
            if isinstance(item, dict) and isinstance(item.get("symbol"), str) and item["symbol"].strip()
        ]
        if data and not symbols:
            raise ResolutionError(
                ResolutionErrorKind.UPSTREAM,
                "Malformed ticker search response: results carry no symbol",
            )
        return symbols

    # ------------------------------------------------------------------
    # IMarketDataProvider interface
    # ------------------------------------------------------------------

    def get_latest_eod(self, symbol: str) -> EndOfDayRecord:
        try:
            payload = self._get("/eod", {"symbols": symbol, "limit": 1})
        except _MalformedBody as exc:
            raise MarketDataError(MarketDataErrorKind.MALFORMED_RESPONSE, str(exc), exc.__cause__) from exc
        except _UpstreamFailure as exc:
            raise MarketDataError(MarketDataErrorKind.UPSTREAM, str(exc), exc.__cause__) from exc

        data = payload.get("data")
        if not isinstance(data, list):
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                "Malformed market data response: missing 'data' list",
            )
        if not data:
            raise MarketDataError(MarketDataErrorKind.NO_DATA, f"No market data available for {symbol}")

        latest = data[0]
        if not isinstance(latest, dict):
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                "Malformed market data response: record is not an object",
            )
        return EndOfDayRecord(
            symbol=symbol,
            close=self._to_decimal(latest, "close"),
            open=self._to_decimal(latest, "open"),
            date=latest.get("date"),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _get(self, path: str, params: dict[str, Any]) -> dict:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.get(url, params={"access_key": self._access_key, **params})
        except httpx.TimeoutException as exc:
            raise _UpstreamFailure(f"marketstack {path} request timed out") from exc
        except httpx.HTTPError as exc:
            raise _UpstreamFailure(f"marketstack {path} request failed ({type(exc).__name__})") from exc

        if not response.is_success:
            raise _UpstreamFailure(
                f"Unexpected HTTP status {response.status_code} from marketstack {path}"
                + self._error_detail(response)
            )

        logger.debug("marketstack_response", path=path, body=response.text)
        try:
            payload = response.json()
        except ValueError as exc:
            raise _MalformedBody(f"marketstack {path} returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise _MalformedBody(f"marketstack {path} returned an unexpected JSON shape")
        return payload

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            error = response.json().get("error") or {}
            message = error.get("message")
        except (ValueError, AttributeError):
            return ""
        return f": {message}" if isinstance(message, str) and message else ""

    @staticmethod
    def _to_decimal(record: dict, field: str) -> Decimal:
        raw = record.get(field)
        if raw is None:
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                f"Market data record is missing '{field}'",
            )
        try:
            if isinstance(raw, bool):
                raise InvalidOperation(field)
            value = Decimal(str(raw).strip())
        except InvalidOperation as exc:
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                f"Market data field '{field}' is not numeric: {raw!r}",
                exc,
            ) from exc
        if not value.is_finite():
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                f"Market data field '{field}' is not finite: {raw!r}",
            )
        if value and abs(value.adjusted()) > MarketstackAdapter.MAX_PRICE_EXPONENT:
            raise MarketDataError(
                MarketDataErrorKind.MALFORMED_RESPONSE,
                f"Market data field '{field}' is out of range: {raw!r}",
            )
        return value


class _UpstreamFailure(Exception):
    """Transport, status, or body-decoding failure; mapped to a domain error by the caller."""


class _MalformedBody(_UpstreamFailure):
    """A 2xx response whose body is not a JSON object."""
