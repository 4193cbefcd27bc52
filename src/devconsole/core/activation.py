"""Hidden key sequence that opens the console."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger


@dataclass(frozen=True)
class KeyEvent:
    """Keyboard event; ``code`` is the physical key, ``key`` the produced value."""

    code: str
    key: str = ""


class ActivationDetector:
    """Two-state machine: closed (watching keys) and open.

    While closed, every key code is pushed into a window as long as the
    sequence. The console opens when the window equals the sequence. With
    ``strict`` the window is dropped on the first key that breaks the match
    in progress instead of sliding.
    """

    def __init__(self, sequence: Sequence[str], *, strict: bool = False) -> None:
        if not sequence:
            raise ValueError("activation sequence must not be empty")
        self.sequence: tuple[str, ...] = tuple(sequence)
        self.strict = strict
        self._window: deque[str] = deque(maxlen=len(self.sequence))
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def window(self) -> tuple[str, ...]:
        return tuple(self._window)

    def feed(self, event: KeyEvent) -> bool:
        """Record one key while closed; True when it completed the sequence."""
        if self._open:
            return False

        if self.strict:
            self._feed_strict(event.code)
        else:
            self._window.append(event.code)

        if len(self._window) == len(self.sequence) and tuple(self._window) == self.sequence:
            self._window.clear()
            self._open = True
            logger.info("activation.open sequence_length={}", len(self.sequence))
            return True
        return False

    def _feed_strict(self, code: str) -> None:
        position = len(self._window)
        if position < len(self.sequence) and self.sequence[position] == code:
            self._window.append(code)
            return
        self._window.clear()
        if self.sequence[0] == code:
            self._window.append(code)

    def open(self) -> None:
        self._window.clear()
        self._open = True

    def close(self) -> bool:
        """Close the console; returns False if it was already closed."""
        if not self._open:
            return False
        self._open = False
        self._window.clear()
        logger.info("activation.close")
        return True
