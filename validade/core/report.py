# validade/core/report.py
from __future__ import annotations

from typing import Iterable, Union

from .dates import Instant, ParseError, days_until_expiry
from .models import Item

UNKNOWN_DAYS = "unknown"


def render_block(item: Item, now: Instant, placeholder: str = UNKNOWN_DAYS) -> str:
    try:
        days: Union[int, str] = days_until_expiry(item.expiry_date, now)
    except ParseError:
        # One malformed date must not take the whole report down
        days = placeholder
    return (
        f"Nome: {item.name}\n"
        f"Data de Validade: {item.expiry_date}\n"
        f"Quantidade: {item.quantity}\n"
        f"Dias p/ vencer: {days}\n"
    )


def generate_report(items: Iterable[Item], now: Instant, placeholder: str = UNKNOWN_DAYS) -> str:
    """
    Render the plain-text inventory report, one block per item in collection
    order, blocks separated by a blank line. An empty collection gives "".
    """
    return "\n".join(render_block(it, now, placeholder) for it in items)
