"""Result sinks for finished verification runs.

Sinks are a plain key-value write; nothing here reads results back into the
harness.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Final, Protocol

__all__ = ["JsonFileSink", "MemorySink", "RESULTS_KEY", "ResultSink"]

logger = logging.getLogger(__name__)

RESULTS_KEY: Final = "ai_verification_results"


class ResultSink(Protocol):
    def write(self, key: str, payload: list[dict[str, Any]]) -> None: ...


class MemorySink:
    def __init__(self) -> None:
        self._data: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def write(self, key: str, payload: list[dict[str, Any]]) -> None:
        with self._lock:
            self._data[key] = [dict(item) for item in payload]

    def get(self, key: str) -> list[dict[str, Any]] | None:
        with self._lock:
            stored = self._data.get(key)
            return None if stored is None else [dict(item) for item in stored]


class JsonFileSink:
    """Store each key as a member of one JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def write(self, key: str, payload: list[dict[str, Any]]) -> None:
        with self._lock:
            data: dict[str, Any] = {}
            if self.path.exists():
                with self.path.open("r", encoding="utf-8") as fh:
                    loaded = json.load(fh)
                if isinstance(loaded, dict):
                    data = loaded
                else:
                    logger.warning("Discarding non-object payload in %s", self.path)
            data[key] = payload
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
