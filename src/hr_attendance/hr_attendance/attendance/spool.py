from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from .model import MarkResult, PendingEvent

logger = logging.getLogger(__name__)


class PendingSpool:
    """JSON file holding kiosk events the API has not accepted yet."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[PendingEvent]:
        if not self._path.exists():
            return []
        items = json.loads(self._path.read_text(encoding="utf-8"))
        return [PendingEvent.from_dict(item) for item in items]

    def save(self, events: Iterable[PendingEvent]) -> int:
        """Replace the spool with ``events``; an empty queue removes the file."""
        items = [e.to_dict() for e in events]
        if not items:
            self._path.unlink(missing_ok=True)
            return 0

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, indent=2), encoding="utf-8")
        tmp.replace(self._path)
        logger.info("Kept %d unsynced event(s) in %s", len(items), self._path)
        return len(items)


def mark_with_spool(engine, spool: PendingSpool, employee_id: str, event_type, timestamp=None) -> MarkResult:
    """One kiosk run: replay the spool, mark the event, spool whatever is still unsynced."""
    engine.restore_pending(spool.load())
    try:
        engine.sync_pending()
        return engine.mark_attendance(employee_id, event_type, timestamp)
    finally:
        engine.sync_pending()
        spool.save(engine.export_pending())
        for event in engine.rejected_events():
            logger.warning("API refused %s", json.dumps(event.to_dict()))
