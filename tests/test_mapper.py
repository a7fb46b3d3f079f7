from datetime import date

import pytest

from src.core.domain_models import FALLBACK_ERROR_MESSAGE
from src.core.mapper import map_daily_series, map_global_quote, parse_percent
from tests.conftest import THROTTLE_NOTE, quote_payload, series_payload


@pytest.mark.parametrize(
    ("text", "expected"),
    [("1.23%", 1.23), ("-0.50%", -0.50), ("0.0000%", 0.0), (" 2.5% ", 2.5)],
)
def test_parse_percent(text: str, expected: float) -> None:
    assert parse_percent(text) == pytest.approx(expected)


def test_parse_percent_rejects_text() -> None:
    with pytest.raises(ValueError):
        parse_percent("n/a%")


def test_map_valid_quote() -> None:
    """All numeric fields are coerced from their text form."""
    quote = map_global_quote(
        quote_payload("AAPL", price="172.6200", change_percent="-0.5012%", volume="48000000"),
        "AAPL",
    )

    assert not quote.error
    assert quote.error_message is None
    assert quote.symbol == "AAPL"
    assert quote.price == pytest.approx(172.62)
    assert quote.previous_price == pytest.approx(148.5)
    assert quote.change == pytest.approx(1.5)
    assert quote.change_percent == pytest.approx(-0.5012)
    assert quote.volume == 48_000_000
    assert quote.last_updated == "2024-03-15"


def test_empty_quote_object_is_errored() -> None:
    quote = map_global_quote({"Global Quote": {}}, "MSFT")

    assert quote.error
    assert quote.symbol == "MSFT"
    assert quote.error_message == FALLBACK_ERROR_MESSAGE
    assert (quote.price, quote.previous_price, quote.change_percent, quote.volume) == (0, 0, 0, 0)


def test_absent_quote_object_is_errored() -> None:
    quote = map_global_quote({}, "MSFT")

    assert quote.error
    assert quote.error_message


def test_throttle_note_becomes_error_message() -> None:
    """Symbol comes from the request since the note payload has none."""
    quote = map_global_quote({"Note": THROTTLE_NOTE}, "GOOGL")

    assert quote.error
    assert quote.symbol == "GOOGL"
    assert quote.error_message == THROTTLE_NOTE


def test_information_message_used_without_note() -> None:
    quote = map_global_quote({"Information": "Premium endpoint"}, "META")

    assert quote.error_message == "Premium endpoint"


@pytest.mark.parametrize("payload", [None, [], "rate limited", {"Global Quote": "x"}])
def test_malformed_payload_is_errored(payload: object) -> None:
    quote = map_global_quote(payload, "AMZN")

    assert quote.error
    assert quote.symbol == "AMZN"
    assert quote.error_message == FALLBACK_ERROR_MESSAGE


def test_unparseable_number_is_errored() -> None:
    quote = map_global_quote(quote_payload("AMZN", price="n/a"), "AMZN")

    assert quote.error
    assert quote.symbol == "AMZN"


def test_series_keeps_most_recent_30_days_ascending() -> None:
    """45 days across a year boundary yield the last 30, oldest first."""
    series = map_daily_series(series_payload(date(2023, 12, 10), 45))

    assert len(series) == 30
    assert series[0].date == "2023-12-25"
    assert series[-1].date == "2024-01-23"
    assert [p.price for p in series] == [float(i) for i in range(15, 45)]
    assert [p.date for p in series] == sorted(p.date for p in series)


def test_series_shorter_than_window_is_returned_whole() -> None:
    series = map_daily_series(series_payload(date(2024, 2, 20), 12, shuffle=False))

    assert len(series) == 12
    assert series[0].date == "2024-02-20"
    assert series[-1].date == "2024-03-02"


def test_series_respects_custom_window() -> None:
    series = map_daily_series(series_payload(date(2024, 1, 1), 20), window=5)

    assert [p.date for p in series] == [
        "2024-01-16",
        "2024-01-17",
        "2024-01-18",
        "2024-01-19",
        "2024-01-20",
    ]


@pytest.mark.parametrize(
    "payload",
    [{}, {"Note": THROTTLE_NOTE}, {"Time Series (Daily)": []}, None, "oops"],
)
def test_missing_series_is_empty(payload: object) -> None:
    assert map_daily_series(payload) == []


def test_unparseable_rows_are_dropped() -> None:
    payload = {
        "Time Series (Daily)": {
            "2024-01-03": {"4. close": "101.5"},
            "not-a-date": {"4. close": "99.0"},
            "2024-01-02": {"4. close": "abc"},
            "2024-01-04": "broken",
            "2024-01-01": {"4. close": "100.0"},
        }
    }

    series = map_daily_series(payload)

    assert [(p.date, p.price) for p in series] == [("2024-01-01", 100.0), ("2024-01-03", 101.5)]


@pytest.mark.parametrize("close", ["NaN", "nan", "inf", "-inf", "-3.5"])
def test_non_finite_or_negative_closes_are_dropped(close: str) -> None:
    payload = {
        "Time Series (Daily)": {
            "2024-01-01": {"4. close": "100.0"},
            "2024-01-02": {"4. close": close},
        }
    }

    series = map_daily_series(payload)

    assert [(p.date, p.price) for p in series] == [("2024-01-01", 100.0)]


@pytest.mark.parametrize(
    "fields",
    [
        {"price": "NaN"},
        {"price": "inf"},
        {"price": "-1.0000"},
        {"previous_close": "nan"},
        {"change": "-inf"},
        {"change_percent": "NaN%"},
        {"volume": "-10"},
    ],
)
def test_non_finite_or_negative_quote_fields_are_errored(fields: dict[str, str]) -> None:
    quote = map_global_quote(quote_payload("AAPL", **fields), "AAPL")

    assert quote.error
    assert quote.symbol == "AAPL"
    assert quote.price == 0
    assert quote.error_message == FALLBACK_ERROR_MESSAGE
