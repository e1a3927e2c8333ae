from __future__ import annotations

import io
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from validade.config import Settings
from validade.core.models import Item, InventoryEvent
from validade.services.exceptions import RepoError
from .base import EventRepo, InventoryRepo, decode_items, encode_items

logger = logging.getLogger(__name__)

try:
    import fcntl  # type: ignore
except ImportError:  # Windows
    fcntl = None
    import msvcrt  # type: ignore


# Cross-platform file lock (fcntl for *nix; msvcrt for Windows)
@contextmanager
def _locked(path: str) -> Iterator[io.BufferedRandom]:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    f = open(path, "a+b")  # create if missing
    try:
        if fcntl is not None:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        else:
            msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
        try:
            yield f
        finally:
            if fcntl is not None:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            else:
                f.seek(0)
                msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
    finally:
        f.close()


def _atomic_write(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    try:
        os.makedirs(d, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=d)
    except OSError as e:
        raise RepoError(f"Cannot create {path}: {e}") from e
    try:
        with os.fdopen(fd, "wb") as w:
            w.write(data)
            w.flush()
            os.fsync(w.fileno())
        os.replace(tmp, path)
    except OSError as e:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise RepoError(f"Atomic write failed for {path}: {e}") from e


class JSONInventoryRepo(InventoryRepo):
    """The inventory as a single JSON array in one file."""

    def __init__(self, settings: Settings):
        self.path = settings.inventory_file

    def load(self) -> List[Item]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except OSError as e:
            logger.warning("Could not read inventory from %s: %s", self.path, e)
            return []
        return decode_items(raw, self.path)

    def save(self, items: Sequence[Item]) -> None:
        _atomic_write(self.path, encode_items(items))
        logger.debug("Saved %d items to %s", len(items), self.path)


class JSONEventRepo(EventRepo):
    def __init__(self, settings: Settings):
        self.path = settings.events_file

    def append(self, event: InventoryEvent) -> None:
        try:
            line = (json.dumps(event.model_dump(), ensure_ascii=False, separators=(",", ":"), default=str) + "\n").encode("utf-8")
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, TypeError) as e:
            raise RepoError(f"Failed to append event to {self.path}: {e}") from e


def write_text_file(path: str, text: str) -> str:
    """Replace `path` with UTF-8 `text` in one step."""
    _atomic_write(path, text.encode("utf-8"))
    return path
