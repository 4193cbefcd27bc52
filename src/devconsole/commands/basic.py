"""Console housekeeping commands."""

from __future__ import annotations

import re

from devconsole.core.fuzzy import SEARCH_LIMIT, SEARCH_THRESHOLD
from devconsole.core.registry import Command, CommandContext, ConsoleRequest, command
from devconsole.errors import CommandUsageError
from devconsole.store import REOPEN_FLAG_KEY

CATEGORY = "Basic Commands"
WORD_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9-]*")
HELP_NAME_WIDTH = 14

HELP_TIPS = (
    "Tips & Usage:",
    "  Use Up/Down arrows to navigate command history",
    '  Press ESC or type "exit" to close the console',
    "  Commands are case-insensitive",
    "  Use quotes for multi-word arguments",
    "  Unsure of a name? Try: search <words>",
)


def basic_commands(
    *,
    search_threshold: float = SEARCH_THRESHOLD,
    search_limit: int = SEARCH_LIMIT,
) -> list[Command]:
    """Build help, clear, exit, reload, history, search and echo."""

    @command("help", "Show all available commands", category=CATEGORY, context=True)
    def show_help(args: list[str], *, context: CommandContext) -> str:
        if args:
            target = context.registry.get(args[0])
            if target is None:
                raise CommandUsageError(f'no command named "{args[0]}"')
            return f"{target.name} - {target.description}"

        lines = ["Developer Console - Available Commands:", ""]
        for category, commands in context.registry.categories().items():
            lines.append(f"{category}:")
            for item in commands:
                lines.append(f"  {item.name.ljust(HELP_NAME_WIDTH)} - {item.description}")
            lines.append("")
        lines.extend(HELP_TIPS)
        return "\n".join(lines)

    @command("clear", "Clear console history", category=CATEGORY, context=True)
    def clear(_args: list[str], *, context: CommandContext) -> str:
        context.request(ConsoleRequest.CLEAR)
        return "Console cleared"

    @command("exit", "Close the developer console", category=CATEGORY, context=True)
    def exit_console(_args: list[str], *, context: CommandContext) -> str:
        context.request(ConsoleRequest.CLOSE)
        return "Console closed"

    @command("reload", "Restart the console and reopen it", category=CATEGORY, context=True)
    def reload(_args: list[str], *, context: CommandContext) -> str:
        context.store.set(REOPEN_FLAG_KEY, "true")
        context.request(ConsoleRequest.RELOAD)
        return "Reloading console..."

    @command("history", "Show previously entered commands", category=CATEGORY, context=True)
    def history(_args: list[str], *, context: CommandContext) -> str:
        lines = context.recall.lines()
        if not lines:
            return "No commands in history"
        width = len(str(len(lines)))
        return "\n".join(f"{str(idx).rjust(width)}  {line}" for idx, line in enumerate(lines, start=1))

    @command("search", "Fuzzy-search commands by name or description (search <query>)", category=CATEGORY, context=True)
    def search(args: list[str], *, context: CommandContext) -> str:
        query = " ".join(args).strip()
        if not query:
            return "Usage: search <query>"

        scored: list[tuple[float, int, Command]] = []
        for position, item in enumerate(context.registry):
            corpus = [item.name, *WORD_RE.findall(item.description)]
            matches = context.matcher.match(query, corpus, threshold=search_threshold, limit=1)
            if matches:
                scored.append((matches[0].distance, position, item))

        if not scored:
            return f'No commands match "{query}"'
        scored.sort(key=lambda row: (row[0], row[1]))
        width = max(len(item.name) for _, _, item in scored[:search_limit])
        lines = [f'Commands matching "{query}":']
        lines.extend(f"  {item.name.ljust(width)}  {item.description}" for _, _, item in scored[:search_limit])
        return "\n".join(lines)

    @command("echo", "Print the given text", category=CATEGORY)
    def echo(args: list[str]) -> str:
        return " ".join(args)

    return [show_help, clear, exit_console, reload, history, search, echo]
