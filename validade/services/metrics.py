from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Optional

from validade.config import Settings
from validade.services.repo.json_repo import _locked

logger = logging.getLogger(__name__)


class MetricsLogger:
    """Timing log for inventory operations, one JSON object per line.

    Each line: {"ts", "op", "duration_ms", "items"} where `items` is the
    collection size the operation worked on.
    """

    def __init__(self, settings: Optional[Settings] = None, filename: str = "inventory_metrics.jsonl") -> None:
        self.settings = settings or Settings()
        self.path = os.path.join(self.settings.data_dir, filename)

    def record(self, op: str, duration_ms: float, items: int) -> None:
        entry = {
            "ts": datetime.utcnow().isoformat(),
            "op": op,
            "duration_ms": round(float(duration_ms), 3),
            "items": int(items),
        }
        line = (json.dumps(entry, separators=(",", ":")) + "\n").encode("utf-8")
        try:
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
        except OSError as e:
            # Metrics never impact user flows
            logger.debug("Dropped %s metric: %s", op, e)
