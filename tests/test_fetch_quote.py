"""
Tests for quote computation, formatting and the outgoing message bound.
"""

from decimal import Decimal

import pytest

from stockbot.application.use_cases.fetch_quote import (
    MAX_MESSAGE_LENGTH,
    FetchQuoteUseCase,
    format_quote,
    truncate_message,
)
from stockbot.domain.entities.quote import EndOfDayRecord, Quote, percent_change
from stockbot.domain.errors import MarketDataError, MarketDataErrorKind

from conftest import FakeMarketData


class TestPercentChange:
    def test_fifty_percent_gain(self):
        assert percent_change(Decimal("150.00"), Decimal("100.00")) == Decimal("50.00")

    def test_loss_is_negative(self):
        assert percent_change(Decimal("90"), Decimal("100")) == Decimal("-10")

    def test_zero_open_fails_instead_of_infinity(self):
        with pytest.raises(MarketDataError) as excinfo:
            percent_change(Decimal("150.00"), Decimal("0"))
        assert excinfo.value.kind is MarketDataErrorKind.MALFORMED_RESPONSE

    @pytest.mark.parametrize("close,open_", [("NaN", "100"), ("100", "Infinity"), ("-Infinity", "1")])
    def test_non_finite_values_fail(self, close, open_):
        with pytest.raises(MarketDataError) as excinfo:
            percent_change(Decimal(close), Decimal(open_))
        assert excinfo.value.kind is MarketDataErrorKind.MALFORMED_RESPONSE


class TestFetchQuote:
    def test_builds_quote_from_latest_record(self, market_data):
        quote = FetchQuoteUseCase(market_data).execute("aapl ")

        assert market_data.calls == ["AAPL"]
        assert quote == Quote(
            symbol="AAPL",
            last_close=Decimal("150.00"),
            previous_open=Decimal("100.00"),
            percent_change=Decimal("50"),
        )

    def test_zero_open_is_malformed(self, market_data):
        with pytest.raises(MarketDataError) as excinfo:
            FetchQuoteUseCase(market_data).execute("TSLA")
        assert excinfo.value.kind is MarketDataErrorKind.MALFORMED_RESPONSE

    def test_provider_errors_propagate(self):
        provider = FakeMarketData(error=MarketDataError(MarketDataErrorKind.UPSTREAM, "timed out"))
        with pytest.raises(MarketDataError) as excinfo:
            FetchQuoteUseCase(provider).execute("AAPL")
        assert excinfo.value.kind is MarketDataErrorKind.UPSTREAM

    def test_blank_symbol_is_rejected(self, market_data):
        with pytest.raises(ValueError):
            FetchQuoteUseCase(market_data).execute("  ")
        assert market_data.calls == []


class TestFormatting:
    def test_three_line_summary(self):
        quote = Quote.from_end_of_day(EndOfDayRecord("AAPL", Decimal("150.00"), Decimal("100.00")))
        assert format_quote(quote) == "Stock: AAPL\nLast Price: 150.00$\nDaily Change: +50.00%"

    def test_negative_change_and_rounding(self):
        quote = Quote.from_end_of_day(EndOfDayRecord("MSFT", Decimal("412.3456"), Decimal("420")))
        assert format_quote(quote) == "Stock: MSFT\nLast Price: 412.35$\nDaily Change: -1.82%"

    def test_half_cent_rounds_up(self):
        quote = Quote.from_end_of_day(EndOfDayRecord("X", Decimal("100.125"), Decimal("100")))
        assert format_quote(quote) == "Stock: X\nLast Price: 100.13$\nDaily Change: +0.13%"

    def test_negative_half_cent_rounds_away_from_zero(self):
        quote = Quote.from_end_of_day(EndOfDayRecord("X", Decimal("99.875"), Decimal("100")))
        assert format_quote(quote) == "Stock: X\nLast Price: 99.88$\nDaily Change: -0.13%"

    def test_unchanged_price_is_signed(self):
        quote = Quote.from_end_of_day(EndOfDayRecord("KO", Decimal("60"), Decimal("60")))
        assert format_quote(quote).endswith("Daily Change: +0.00%")

    def test_oversized_summary_is_bounded(self):
        quote = Quote("X" * 5000, Decimal("1"), Decimal("1"), Decimal("0"))
        text = format_quote(quote)
        assert len(text) == MAX_MESSAGE_LENGTH
        assert text.endswith("...")


class TestTruncateMessage:
    def test_short_text_is_untouched(self):
        assert truncate_message("hello") == "hello"

    def test_text_at_limit_is_untouched(self):
        text = "a" * MAX_MESSAGE_LENGTH
        assert truncate_message(text) == text

    def test_long_text_is_cut_with_ellipsis(self):
        text = truncate_message("b" * (MAX_MESSAGE_LENGTH + 1))
        assert len(text) == MAX_MESSAGE_LENGTH
        assert text == "b" * (MAX_MESSAGE_LENGTH - 3) + "..."

    def test_custom_limit(self):
        assert truncate_message("abcdefghij", limit=6) == "abc..."
