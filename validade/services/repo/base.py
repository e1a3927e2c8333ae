from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError as SchemaError

from validade.core.models import Item, InventoryEvent
from validade.services.exceptions import RepoError

logger = logging.getLogger(__name__)

# The whole collection is stored as one JSON array of Item objects.
_COLLECTION = TypeAdapter(List[Item])


def encode_items(items: Sequence[Item]) -> bytes:
    try:
        return _COLLECTION.dump_json(list(items), by_alias=True)
    except (TypeError, ValueError) as e:
        raise RepoError(f"Could not serialize inventory: {e}") from e


def decode_items(raw: bytes, source: str) -> List[Item]:
    """Parse a stored collection. Anything unparseable counts as empty."""
    if not raw.strip():
        return []
    try:
        return _COLLECTION.validate_json(raw)
    except SchemaError as e:
        logger.warning("Discarding unreadable inventory at %s: %s", source, e)
        return []


class InventoryRepo(ABC):
    """
    Owner of the persisted collection. `load` and `save` always move the
    whole collection; `add` and `remove` are read-modify-write on top of them
    with no guard against a concurrent writer (last save wins).
    """

    @abstractmethod
    def load(self) -> List[Item]: ...

    @abstractmethod
    def save(self, items: Sequence[Item]) -> None: ...

    def add(self, item: Item) -> List[Item]:
        items = self.load()
        items.append(item)
        self.save(items)
        return items

    def remove(self, item_id: str) -> bool:
        items = self.load()
        kept = [it for it in items if it.id != item_id]
        if len(kept) == len(items):
            return False
        self.save(kept)
        return True


class EventRepo(ABC):
    @abstractmethod
    def append(self, event: InventoryEvent) -> None: ...


class InMemoryInventoryRepo(InventoryRepo):
    """Keeps the serialized collection in memory, same codec as the file repo."""

    def __init__(self, items: Optional[Sequence[Item]] = None):
        self._raw: bytes = encode_items(items) if items else b""

    def load(self) -> List[Item]:
        return decode_items(self._raw, "memory")

    def save(self, items: Sequence[Item]) -> None:
        self._raw = encode_items(items)
