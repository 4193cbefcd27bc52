"""Command registry."""

from __future__ import annotations

import builtins
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from devconsole.errors import DuplicateCommandError

if TYPE_CHECKING:
    from devconsole.core.fuzzy import FuzzyMatcher
    from devconsole.core.history import HistoryStore, RecallBuffer
    from devconsole.core.session import SessionState
    from devconsole.store import KeyValueStore

HandlerResult = Union[str, Awaitable[str]]
Handler = Callable[..., HandlerResult]

DEFAULT_CATEGORY = "General"


class ConsoleRequest(str, Enum):
    """Side effects a handler asks the console to perform."""

    CLEAR = "clear"
    CLOSE = "close"
    RELOAD = "reload"


@dataclass
class CommandContext:
    """Collaborators handed to context-aware commands."""

    session: SessionState
    store: KeyValueStore
    registry: CommandRegistry
    matcher: FuzzyMatcher
    recall: RecallBuffer
    history: HistoryStore
    started_at: datetime
    line: str = ""
    requests: set[ConsoleRequest] = field(default_factory=set)

    @property
    def raw_arguments(self) -> str:
        """Submitted text after the command word, quotes intact."""
        parts = self.line.split(None, 1)
        return parts[1] if len(parts) > 1 else ""

    def request(self, action: ConsoleRequest) -> None:
        self.requests.add(action)


@dataclass(frozen=True)
class Command:
    """Named handler invoked by the first word of a line."""

    name: str
    description: str
    handler: Handler
    category: str = DEFAULT_CATEGORY
    context: bool = False

    @property
    def key(self) -> str:
        return self.name.casefold()

    def invoke(self, args: list[str], context: CommandContext) -> Any:
        if self.context:
            return self.handler(args, context=context)
        return self.handler(args)


class CommandRegistry:
    """Fixed, ordered collection of commands with case-insensitive lookup."""

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        ordered: builtins.list[Command] = []
        by_key: dict[str, Command] = {}
        for command in commands:
            if not command.name.strip() or any(ch.isspace() for ch in command.name):
                raise ValueError(f"invalid command name: {command.name!r}")
            if command.key in by_key:
                raise DuplicateCommandError(command.name)
            by_key[command.key] = command
            ordered.append(command)
        self._commands: tuple[Command, ...] = tuple(ordered)
        self._by_key = by_key

    def get(self, name: str) -> Command | None:
        return self._by_key.get(name.casefold())

    def has(self, name: str) -> bool:
        return name.casefold() in self._by_key

    def commands(self) -> tuple[Command, ...]:
        return self._commands

    def names(self) -> builtins.list[str]:
        return [command.name for command in self._commands]

    def categories(self) -> dict[str, builtins.list[Command]]:
        grouped: dict[str, builtins.list[Command]] = {}
        for command in self._commands:
            grouped.setdefault(command.category, []).append(command)
        return grouped

    def extended(self, commands: Iterable[Command]) -> CommandRegistry:
        """Return a new registry with extra commands appended."""
        return CommandRegistry([*self._commands, *commands])

    def compact_rows(self) -> builtins.list[str]:
        width = max((len(command.name) for command in self._commands), default=0)
        return [f"{command.name.ljust(width)}  {command.description}" for command in self._commands]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


def command(
    name: str,
    description: str,
    *,
    category: str = DEFAULT_CATEGORY,
    context: bool = False,
) -> Callable[[Handler], Command]:
    """Decorator that turns a handler function into a Command."""

    def decorator(handler: Handler) -> Command:
        return Command(name=name, description=description, handler=handler, category=category, context=context)

    return decorator
