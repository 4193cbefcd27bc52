"""Clock, uptime and key/value storage commands."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from devconsole.core.registry import Command, CommandContext, command

CATEGORY = "System"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_duration(seconds: float) -> str:
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def system_commands(*, clock: Clock = _utc_now) -> list[Command]:
    @command("time", "Show current time", category=CATEGORY)
    def show_time(_args: list[str]) -> str:
        return clock().astimezone().strftime("%d/%m/%Y, %H:%M:%S")

    @command("uptime", "Show how long the console has been running", category=CATEGORY, context=True)
    def uptime(_args: list[str], *, context: CommandContext) -> str:
        elapsed = (clock() - context.started_at).total_seconds()
        return f"Console uptime: {format_duration(elapsed)}"

    @command(
        "storage",
        "Manage stored values (list, get <key>, set <key> <value>, remove <key>, clear)",
        category=CATEGORY,
        context=True,
    )
    def storage(args: list[str], *, context: CommandContext) -> str:
        action = args[0] if args else ""
        store = context.store
        if action == "list":
            items = store.items()
            return "\n".join(f"{key}: {value}" for key, value in items) if items else "No items in storage"
        if action == "get":
            if len(args) < 2:
                return "Usage: storage get <key>"
            value = store.get(args[1])
            return f"{args[1]}: {value}" if value is not None else f'Key "{args[1]}" not found'
        if action == "set":
            value = " ".join(args[2:])
            if len(args) < 2 or not value:
                return "Usage: storage set <key> <value>"
            store.set(args[1], value)
            return f"Set {args[1]} = {value}"
        if action == "remove":
            if len(args) < 2:
                return "Usage: storage remove <key>"
            removed = store.remove(args[1])
            return f"Removed {args[1]}" if removed else f'Key "{args[1]}" not found'
        if action == "clear":
            store.clear()
            return "Storage cleared"
        return "Usage: storage <list|get|set|remove|clear> [args]"

    return [show_time, uptime, storage]
