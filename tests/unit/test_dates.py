# tests/unit/test_dates.py
from datetime import date, datetime, timedelta, timezone

import pytest
from validade.core.dates import (
    ParseError,
    days_until_expiry,
    is_expired,
    normalize_date,
    parse_canonical_date,
    signed_days_until_expiry,
)


@pytest.mark.parametrize("raw, expected", [
    ("01012030", "01/01/2030"),
    ("31/12/2029", "31/12/2029"),
    ("31-12-2029", "31/12/2029"),
    ("3 1 . 1 2 . 2 0 2 9", "31/12/2029"),
    ("00005555", "00/00/5555"),
])
def test_normalize_eight_digits(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1/1/2030", "0101203", "010120301", "2030-01-01T00"])
def test_normalize_other_digit_counts_is_identity(raw):
    assert normalize_date(raw) == raw


def test_normalize_ignores_non_ascii_digits():
    # Arabic-Indic digits are not 0-9
    raw = "٠١٠١٢٠٣٠"
    assert normalize_date(raw) == raw


def test_parse_canonical_date():
    assert parse_canonical_date("29/02/2028") == date(2028, 2, 29)


@pytest.mark.parametrize("text", ["01/01/" + "9" * 5000, "01/01/99999", "01/01/" + "9" * 30, "99/99/9999", "00/00/5555", "29/02/2029", "01-01-2030", "01/01", "aa/01/2030", "1/1/2030/1", ""])
def test_parse_canonical_date_rejects(text):
    with pytest.raises(ParseError):
        parse_canonical_date(text)


def test_days_until_expiry_exact_day_count():
    assert days_until_expiry("01/01/2030", datetime(2025, 1, 1)) == 1826


def test_days_until_expiry_accepts_plain_date():
    assert days_until_expiry("01/01/2030", date(2029, 12, 31)) == 1


def test_days_until_expiry_rounds_up_partial_days():
    assert days_until_expiry("01/01/2030", datetime(2029, 12, 30, 18, 0)) == 2


def test_days_until_expiry_is_absolute():
    now = datetime(2030, 1, 1)
    assert days_until_expiry("04/01/2030", now) == 3
    assert days_until_expiry("29/12/2029", now) == 3


def test_days_until_expiry_same_instant_is_zero():
    assert days_until_expiry("01/01/2030", datetime(2030, 1, 1)) == 0


def test_days_until_expiry_fails_on_invalid_date():
    with pytest.raises(ParseError):
        days_until_expiry("99/99/9999", datetime(2025, 1, 1))


def test_days_until_expiry_with_aware_now():
    tz = timezone(timedelta(hours=-3))
    assert days_until_expiry("02/01/2030", datetime(2030, 1, 1, tzinfo=tz)) == 1


def test_signed_days_and_expired():
    now = datetime(2030, 1, 1)
    assert signed_days_until_expiry("04/01/2030", now) == 3
    assert signed_days_until_expiry("29/12/2029", now) == -3
    assert is_expired("29/12/2029", now) is True
    assert is_expired("04/01/2030", now) is False
