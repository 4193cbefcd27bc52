"""Line dispatch: interceptors, name resolution and handler execution."""

from __future__ import annotations

import inspect
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from loguru import logger

from devconsole.core.fuzzy import SUGGEST_THRESHOLD, FuzzyMatcher
from devconsole.core.history import EntryKind, HistoryEntry, HistoryStore, Outcome, RecallBuffer
from devconsole.core.parser import ParsedLine, flatten_args, parse_line
from devconsole.core.registry import Command, CommandContext, CommandRegistry, ConsoleRequest
from devconsole.core.session import SessionState
from devconsole.store import KeyValueStore, MemoryKeyValueStore


def _shorten_text(text: str, width: int = 40, placeholder: str = "...") -> str:
    if len(text) <= width:
        return text
    available = width - len(placeholder)
    if available <= 0:
        return placeholder
    return text[:available] + placeholder


@dataclass(frozen=True)
class Reroute:
    """Interceptor verdict: run ``name`` with ``args`` instead of resolving the line."""

    name: str
    args: list[str] = field(default_factory=list)


# Interceptors see the trimmed line, its parse and the command context.
Interceptor = Callable[[str, ParsedLine, CommandContext], "Reroute | None"]


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of dispatching one non-empty line."""

    entry: HistoryEntry
    command: str | None
    requests: frozenset[ConsoleRequest] = frozenset()
    elapsed_ms: int = 0


class Dispatcher:
    """Resolves lines to commands and is the only writer of the history log."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        history: HistoryStore | None = None,
        session: SessionState | None = None,
        store: KeyValueStore | None = None,
        recall: RecallBuffer | None = None,
        matcher: FuzzyMatcher | None = None,
        interceptors: Iterable[Interceptor] = (),
        suggest_threshold: float = SUGGEST_THRESHOLD,
        started_at: datetime | None = None,
    ) -> None:
        self.registry = registry
        self.history = history if history is not None else HistoryStore()
        self.session = session if session is not None else SessionState()
        self.store = store if store is not None else MemoryKeyValueStore()
        self.recall = recall if recall is not None else RecallBuffer()
        self.matcher = matcher if matcher is not None else FuzzyMatcher()
        self.suggest_threshold = suggest_threshold
        self.started_at = started_at or datetime.now(UTC)
        self._interceptors: list[Interceptor] = list(interceptors)

    def install(self, interceptor: Interceptor) -> None:
        """Append an interceptor; interceptors run in installation order."""
        self._interceptors.append(interceptor)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._interceptors)

    def announce(self, text: str, *, kind: EntryKind = EntryKind.INFO) -> HistoryEntry:
        """Append a notice that did not come from a submitted line."""
        return self.history.append(HistoryEntry(output_text=text, kind=kind, outcome=Outcome.INFO))

    async def dispatch(self, raw: str) -> DispatchOutcome | None:
        stripped = raw.strip()
        if not stripped:
            return None

        parsed = parse_line(stripped)
        if not parsed.positional and not parsed.flags:
            return None

        start = time.monotonic()
        context = self._context(stripped)
        reroute = self._intercept(stripped, parsed, context)
        command: Command | None = None
        args: list[str] = []
        if reroute is not None:
            command = self.registry.get(reroute.name)
            args = list(reroute.args)
            if command is None:
                logger.warning("dispatch.reroute.missing target={}", reroute.name)

        if command is None:
            if not parsed.positional:
                entry = self._record(
                    stripped,
                    'No command given. Type "help" for available commands.',
                    EntryKind.ERROR,
                    Outcome.UNKNOWN,
                )
                return DispatchOutcome(entry=entry, command=None, elapsed_ms=_elapsed_ms(start))
            command = self.registry.get(parsed.name)
            args = flatten_args(parsed)

        if command is None:
            entry = self._unknown(stripped, parsed.name)
            return DispatchOutcome(entry=entry, command=None, elapsed_ms=_elapsed_ms(start))

        return await self._run(command, args, stripped, start, context)

    def _intercept(self, stripped: str, parsed: ParsedLine, context: CommandContext) -> Reroute | None:
        for interceptor in self._interceptors:
            try:
                reroute = interceptor(stripped, parsed, context)
            except Exception:
                logger.exception("dispatch.interceptor.error interceptor={!r}", interceptor)
                continue
            if reroute is not None:
                logger.debug("dispatch.reroute line={!r} target={}", stripped, reroute.name)
                return reroute
        return None

    def _context(self, line: str) -> CommandContext:
        return CommandContext(
            session=self.session,
            store=self.store,
            registry=self.registry,
            matcher=self.matcher,
            recall=self.recall,
            history=self.history,
            started_at=self.started_at,
            line=line,
        )

    async def _run(
        self,
        command: Command,
        args: list[str],
        stripped: str,
        start: float,
        context: CommandContext,
    ) -> DispatchOutcome:
        logger.info("dispatch.start name={} args={}", command.name, _shorten_text(" ".join(args)))
        try:
            result = command.invoke(args, context)
            if inspect.isawaitable(result):
                result = await result
            text = "" if result is None else str(result)
            kind, outcome = EntryKind.COMMAND, Outcome.OK
        except Exception as exc:
            logger.exception("dispatch.error name={}", command.name)
            text = f"Error: {exc!s}" if str(exc) else f"Error: {type(exc).__name__}"
            kind, outcome = EntryKind.ERROR, Outcome.FAILED

        elapsed_ms = _elapsed_ms(start)
        logger.info("dispatch.end name={} outcome={} duration={}ms", command.name, outcome.value, elapsed_ms)

        if ConsoleRequest.CLEAR in context.requests:
            self.history.clear()
        entry = self._record(stripped, text, kind, outcome)
        return DispatchOutcome(
            entry=entry,
            command=command.name,
            requests=frozenset(context.requests),
            elapsed_ms=elapsed_ms,
        )

    def _unknown(self, stripped: str, name: str) -> HistoryEntry:
        suggestion = self.matcher.best(name, self.registry.names(), threshold=self.suggest_threshold)
        if suggestion is not None:
            return self._record(
                stripped,
                f'Unknown command: {name}. Did you mean "{suggestion.candidate}"?',
                EntryKind.INFO,
                Outcome.SUGGESTED,
            )
        return self._record(
            stripped,
            f'Unknown command: {name}. Type "help" for available commands.',
            EntryKind.ERROR,
            Outcome.UNKNOWN,
        )

    def _record(self, stripped: str, text: str, kind: EntryKind, outcome: Outcome) -> HistoryEntry:
        return self.history.append(HistoryEntry(output_text=text, kind=kind, input_text=stripped, outcome=outcome))


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
