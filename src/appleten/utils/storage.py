"""Small key/value stores backing the persistent life counter."""
from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, value: str, ttl_days: int) -> None:
        ...


class MemoryStore:
    """In-process store; entries expire after ``ttl_days`` on the injected clock."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or wall_clock_ms
        self._entries: Dict[str, Tuple[str, int]] = {}

    def load(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def save(self, key: str, value: str, ttl_days: int) -> None:
        self._entries[key] = (str(value), self._clock() + ttl_days * DAY_MS)


class JsonFileStore:
    """Persists entries as ``{key: {"value": str, "expires_at": ms}}`` in one JSON file."""

    def __init__(self, path: Path | str, clock: Callable[[], int] | None = None) -> None:
        self._path = Path(path)
        self._clock = clock or wall_clock_ms

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, dict]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring store %s: expected an object", self._path)
            return {}
        return payload

    def _write(self, payload: Dict[str, dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)

    def load(self, key: str) -> Optional[str]:
        entry = self._read().get(key)
        if not isinstance(entry, dict):
            return None
        try:
            expires_at = int(entry.get("expires_at", 0))
        except (TypeError, ValueError):
            return None
        if self._clock() >= expires_at:
            return None
        value = entry.get("value")
        return None if value is None else str(value)

    def save(self, key: str, value: str, ttl_days: int) -> None:
        payload = self._read()
        payload[key] = {"value": str(value), "expires_at": self._clock() + ttl_days * DAY_MS}
        self._write(payload)
