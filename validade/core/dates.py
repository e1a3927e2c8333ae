# validade/core/dates.py
from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Union

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_DIGITS = re.compile(r"[0-9]+", re.ASCII)
_ONE_DAY = timedelta(days=1)

Instant = Union[datetime, date]


class ParseError(ValueError):
    """A canonical date string could not be turned into a calendar date."""


def normalize_date(raw: str) -> str:
    """
    Turn free-form date text into DD/MM/YYYY.

    Every non-digit is dropped; if exactly 8 digits are left they are read
    positionally as DDMMYYYY. Any other digit count returns `raw` unchanged.
    There is no calendar check: "00005555" becomes "00/00/5555".
    """
    digits = _NON_DIGITS.sub("", raw)
    if len(digits) != 8:
        return raw
    return f"{digits[0:2]}/{digits[2:4]}/{digits[4:8]}"


def parse_canonical_date(text: str) -> date:
    parts = text.split("/")
    if len(parts) != 3:
        raise ParseError(f"Expected DD/MM/YYYY, got {text!r}")
    if not all(_DIGITS.fullmatch(p) for p in parts):
        raise ParseError(f"Non-numeric date component in {text!r}")
    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid calendar date {text!r}: {e}") from e


def _as_datetime(now: Instant) -> datetime:
    if isinstance(now, datetime):
        return now
    return datetime(now.year, now.month, now.day)


def _expiry_delta(canonical: str, now: Instant) -> timedelta:
    now_dt = _as_datetime(now)
    d = parse_canonical_date(canonical)
    # Expiry is midnight at the start of the day, in the caller's timezone if any.
    expiry = datetime(d.year, d.month, d.day, tzinfo=now_dt.tzinfo)
    return expiry - now_dt


def _ceil_days(delta: timedelta) -> int:
    return math.ceil(delta / _ONE_DAY)


def days_until_expiry(canonical: str, now: Instant) -> int:
    """
    Whole days between `now` and the expiry date, rounded up.

    The magnitude is absolute: a date 3 days ago and one 3 days ahead both
    give 3. Use `signed_days_until_expiry` or `is_expired` when the direction
    matters. Raises ParseError for malformed input.
    """
    return _ceil_days(abs(_expiry_delta(canonical, now)))


def signed_days_until_expiry(canonical: str, now: Instant) -> int:
    """Like days_until_expiry but negative once the date has passed."""
    return _ceil_days(_expiry_delta(canonical, now))


def is_expired(canonical: str, now: Instant) -> bool:
    return _expiry_delta(canonical, now) < timedelta(0)
