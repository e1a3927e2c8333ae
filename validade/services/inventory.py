from __future__ import annotations

import logging
import re
import time
from datetime import datetime
from typing import Callable, List, Optional, Union

from validade.core.dates import ParseError, days_until_expiry, is_expired, normalize_date
from validade.core.models import Inventory, InventoryEvent, Item, ItemView
from validade.core.report import UNKNOWN_DAYS, generate_report
from .exceptions import RepoError, ValidationError
from .metrics import MetricsLogger
from .repo.base import EventRepo, InventoryRepo
from .repo.json_repo import write_text_file

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)

Clock = Callable[[], datetime]


def _require_text(field: str, value: object) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(field, "Por favor, preencha todos os campos.")
    return text


def parse_quantity(value: Union[int, str, None]) -> int:
    """Base-10 integer, >= 0. Anything else is rejected rather than guessed."""
    if isinstance(value, bool):
        raise ValidationError("quantity", "must be a whole number")
    if isinstance(value, int):
        qty = value
    else:
        text = _require_text("quantity", value)
        if not _INTEGER.fullmatch(text):
            raise ValidationError("quantity", f"{text!r} is not a whole number")
        qty = int(text)
    if qty < 0:
        raise ValidationError("quantity", "cannot be negative")
    return qty


class InventoryService:
    """
    The operations a UI calls: add, delete, list, report.

    Holds no item state of its own; every call goes back to the repository,
    so whatever a caller keeps is a snapshot to be refreshed by listing again.
    """

    def __init__(
        self,
        repo: InventoryRepo,
        clock: Clock = datetime.now,
        events: Optional[EventRepo] = None,
        metrics: Optional[MetricsLogger] = None,
        placeholder: str = UNKNOWN_DAYS,
    ):
        self.repo = repo
        self.clock = clock
        self.events = events
        self.metrics = metrics
        self.placeholder = placeholder

    # ---- commands ----------------------------------------------------------

    def add_item(self, name: str, raw_date: str, quantity: Union[int, str]) -> Item:
        # Check every field before touching storage
        name = _require_text("name", name)
        raw_date = _require_text("expiryDate", raw_date)
        qty = parse_quantity(quantity)

        item = Item(name=name, expiry_date=normalize_date(raw_date), quantity=qty)
        self.repo.add(item)
        logger.info("Added item %s (%s, qty=%d)", item.id, item.expiry_date, item.quantity)
        self._audit("add", {"id": item.id, "name": item.name, "expiryDate": item.expiry_date, "quantity": item.quantity})
        return item

    def delete_item(self, item_id: str) -> bool:
        removed = self.repo.remove(item_id)
        if removed:
            logger.info("Deleted item %s", item_id)
            self._audit("delete", {"id": item_id})
        else:
            logger.info("Delete ignored, no item with id %s", item_id)
        return removed

    # ---- queries -----------------------------------------------------------

    def list_items(self) -> Inventory:
        return Inventory(items=self.repo.load())

    def list_views(self) -> List[ItemView]:
        now = self.clock()
        views = []
        for it in self.repo.load():
            try:
                views.append(ItemView(item=it, days_to_expiry=days_until_expiry(it.expiry_date, now),
                                      expired=is_expired(it.expiry_date, now)))
            except ParseError:
                views.append(ItemView(item=it))
        return views

    def build_report(self) -> str:
        t0 = time.perf_counter()
        items = self.repo.load()
        text = generate_report(items, self.clock(), self.placeholder)
        if self.metrics is not None:
            self.metrics.record("report", (time.perf_counter() - t0) * 1000.0, len(items))
        self._audit("report", {"count": len(items)})
        return text

    def export_report(self, path: str) -> str:
        """Build the report and write it to `path` for hand-off to a share target."""
        return write_text_file(path, self.build_report())

    # ---- helpers -----------------------------------------------------------

    def _audit(self, kind: str, payload: dict) -> None:
        if self.events is None:
            return
        # best-effort; the collection is already saved
        try:
            self.events.append(InventoryEvent(type=kind, payload=payload))
        except RepoError as e:
            logger.warning("Audit log write failed: %s", e)
