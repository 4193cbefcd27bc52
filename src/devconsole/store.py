"""Opaque key/value store available to commands."""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from devconsole.errors import StoreError

REOPEN_FLAG_KEY = "devconsole.reopen_after_reload"


class KeyValueStore(ABC):
    """String keys to string values; commands decide what they mean."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> bool: ...

    @abstractmethod
    def items(self) -> list[tuple[str, str]]: ...

    @abstractmethod
    def clear(self) -> None: ...

    def pop(self, key: str) -> str | None:
        value = self.get(key)
        if value is not None:
            self.remove(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def items(self) -> list[tuple[str, str]]:
        return list(self._data.items())

    def clear(self) -> None:
        self._data.clear()


class JsonFileKeyValueStore(KeyValueStore):
    """Store persisted as one JSON object, rewritten on every change."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("store.load.failed path={}", self.path)
            return {}
        if not isinstance(payload, dict):
            logger.warning("store.load.invalid path={}", self.path)
            return {}
        return {str(key): str(value) for key, value in payload.items()}

    def _flush_locked(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StoreError(f"cannot write {self.path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._flush_locked()

    def remove(self, key: str) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            self._flush_locked()
            return True

    def items(self) -> list[tuple[str, str]]:
        with self._lock:
            return list(self._data.items())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._flush_locked()
