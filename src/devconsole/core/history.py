"""Recall buffer and rendered history log."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from loguru import logger

RECALL_CAPACITY = 50
NOT_BROWSING = -1


class EntryKind(str, Enum):
    COMMAND = "command"
    ERROR = "error"
    INFO = "info"


class Outcome(str, Enum):
    """How a dispatched line ended."""

    OK = "ok"
    SUGGESTED = "suggested"
    UNKNOWN = "unknown"
    FAILED = "failed"
    INFO = "info"


@dataclass(frozen=True)
class HistoryEntry:
    """One rendered console entry."""

    output_text: str
    kind: EntryKind = EntryKind.COMMAND
    input_text: str | None = None
    outcome: Outcome = Outcome.OK
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


HistoryListener = Callable[[HistoryEntry], None]


class HistoryStore:
    """Append-only log of rendered entries."""

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._listeners: list[HistoryListener] = []

    def append(self, entry: HistoryEntry) -> HistoryEntry:
        self._entries.append(entry)
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:
                logger.exception("history.listener.error kind={}", entry.kind.value)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def last(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a listener; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def __len__(self) -> int:
        return len(self._entries)


class RecallBuffer:
    """Bounded list of submitted lines with an ArrowUp/ArrowDown cursor."""

    def __init__(self, capacity: int = RECALL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._lines: list[str] = []
        self._cursor = NOT_BROWSING

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def browsing(self) -> bool:
        return self._cursor != NOT_BROWSING

    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def push(self, line: str) -> None:
        self._cursor = NOT_BROWSING
        if self._lines and self._lines[-1] == line:
            return
        self._lines.append(line)
        if len(self._lines) > self.capacity:
            del self._lines[: len(self._lines) - self.capacity]

    def older(self) -> str | None:
        """Step toward older lines; returns the line to show, or None if empty."""
        if not self._lines:
            return None
        if self._cursor == NOT_BROWSING:
            self._cursor = len(self._lines) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        return self._lines[self._cursor]

    def newer(self) -> str | None:
        """Step toward newer lines; "" once past the newest, None if not browsing."""
        if self._cursor == NOT_BROWSING:
            return None
        if self._cursor < len(self._lines) - 1:
            self._cursor += 1
            return self._lines[self._cursor]
        self._cursor = NOT_BROWSING
        return ""

    def reset_cursor(self) -> None:
        self._cursor = NOT_BROWSING

    def __len__(self) -> int:
        return len(self._lines)
