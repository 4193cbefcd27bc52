"""Public console object wiring the engine together."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence

from loguru import logger

from devconsole.config import KONAMI_CODE, Settings
from devconsole.core.activation import ActivationDetector, KeyEvent
from devconsole.core.dispatcher import DispatchOutcome, Dispatcher, Interceptor
from devconsole.core.fuzzy import SUGGEST_THRESHOLD, FuzzyMatcher
from devconsole.core.history import RECALL_CAPACITY, HistoryEntry, HistoryStore, RecallBuffer
from devconsole.core.registry import CommandRegistry, ConsoleRequest
from devconsole.core.session import DEFAULT_ALPHABET, SessionState
from devconsole.store import REOPEN_FLAG_KEY, KeyValueStore, MemoryKeyValueStore

ACTIVATION_MESSAGE = "Konami Code activated! Welcome to the developer console."
REOPEN_MESSAGE = "Console reopened after reload."


class DevConsole:
    """Hidden developer console.

    Closed, it only watches keys for the activation sequence. Open, it
    handles Escape (close) and ArrowUp/ArrowDown (recall) and treats other
    keys as text. Submitted lines go through the dispatcher one at a time.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        sequence: Sequence[str] = KONAMI_CODE,
        strict_activation: bool = False,
        recall_capacity: int = RECALL_CAPACITY,
        suggest_threshold: float = SUGGEST_THRESHOLD,
        alphabet: str = DEFAULT_ALPHABET,
        session: SessionState | None = None,
        store: KeyValueStore | None = None,
        matcher: FuzzyMatcher | None = None,
        interceptors: Iterable[Interceptor] = (),
    ) -> None:
        self.detector = ActivationDetector(sequence, strict=strict_activation)
        self.recall = RecallBuffer(recall_capacity)
        self.session = session if session is not None else SessionState(alphabet)
        self.store = store if store is not None else MemoryKeyValueStore()
        self.dispatcher = Dispatcher(
            registry,
            history=HistoryStore(),
            session=self.session,
            store=self.store,
            recall=self.recall,
            matcher=matcher,
            interceptors=interceptors,
            suggest_threshold=suggest_threshold,
        )
        self.reload_requested = False
        self._input = ""
        self._submit_lock = asyncio.Lock()

        if self.store.pop(REOPEN_FLAG_KEY) == "true":
            self.detector.open()
            self.dispatcher.announce(REOPEN_MESSAGE)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: CommandRegistry,
        *,
        store: KeyValueStore | None = None,
        session: SessionState | None = None,
        interceptors: Iterable[Interceptor] = (),
    ) -> DevConsole:
        return cls(
            registry,
            sequence=settings.activation_sequence,
            strict_activation=settings.strict_activation,
            recall_capacity=settings.recall_capacity,
            suggest_threshold=settings.suggest_threshold,
            alphabet=settings.answer_alphabet,
            session=session,
            store=store,
            interceptors=interceptors,
        )

    @property
    def registry(self) -> CommandRegistry:
        return self.dispatcher.registry

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return self.dispatcher.history.entries()

    @property
    def is_open(self) -> bool:
        return self.detector.is_open

    @property
    def input_text(self) -> str:
        return self._input

    @input_text.setter
    def input_text(self, value: str) -> None:
        self._input = value

    def open(self) -> None:
        if self.detector.is_open:
            return
        self.detector.open()
        self._input = ""

    def close(self) -> None:
        """Close the console; Escape, ``exit`` and hosts all end up here."""
        self.detector.close()
        self._input = ""
        self.recall.reset_cursor()

    def handle_key(self, event: KeyEvent) -> bool:
        """Route one key event; True means the host should suppress its default action."""
        if not self.detector.is_open:
            if self.detector.feed(event):
                self._input = ""
                self.dispatcher.announce(ACTIVATION_MESSAGE)
                return True
            return False

        if event.key == "Escape":
            self.close()
            return True
        if event.key == "ArrowUp":
            line = self.recall.older()
            if line is not None:
                self._input = line
            return True
        if event.key == "ArrowDown":
            line = self.recall.newer()
            if line is not None:
                self._input = line
            return True
        if event.key == "Backspace":
            self._input = self._input[:-1]
        elif len(event.key) == 1:
            self._input += event.key
        return False

    async def submit(self, line: str | None = None) -> DispatchOutcome | None:
        """Dispatch ``line`` (or the live input) and record it for recall."""
        text = self._input if line is None else line
        async with self._submit_lock:
            outcome = await self.dispatcher.dispatch(text)
            if outcome is None:
                return None
            self.recall.push(text.strip())
            self._input = ""
            self._apply(outcome.requests)
        return outcome

    def _apply(self, requests: frozenset[ConsoleRequest]) -> None:
        if ConsoleRequest.RELOAD in requests:
            logger.info("console.reload.requested")
            self.reload_requested = True
        if ConsoleRequest.CLOSE in requests:
            self.close()
