from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import time
from typing import Any, Dict, Optional


@dataclass
class ExtractionStatus:
    state: str = "idle"
    step: str = "idle"
    detail: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    summary: Optional[Dict[str, Any]] = None
    updated_at: float = field(default_factory=time)


class ExtractionStatusStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._status = ExtractionStatus()

    def update(self, **fields: Any) -> None:
        # Lock ensures UI polling sees consistent snapshots across threads.
        with self._lock:
            for key, value in fields.items():
                if hasattr(self._status, key):
                    setattr(self._status, key, value)
            self._status.updated_at = time()

    def try_start(self, detail: str) -> bool:
        """Mark a scan as running unless one already is."""
        with self._lock:
            if self._status.state == "running":
                return False
            self._status.state = "running"
            self._status.step = "starting"
            self._status.detail = detail
            self._status.metrics = {}
            self._status.updated_at = time()
            return True

    def snapshot(self) -> Dict[str, Any]:
        # Return a copy to avoid mutation by callers.
        with self._lock:
            return {
                "state": self._status.state,
                "step": self._status.step,
                "detail": self._status.detail,
                "metrics": dict(self._status.metrics),
                "summary": self._status.summary,
                "updated_at": self._status.updated_at,
            }


extraction_status_store = ExtractionStatusStore()
