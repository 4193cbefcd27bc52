"""CLI main module for devconsole."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from devconsole.commands import build_default_registry, default_interceptors
from devconsole.config import Settings, get_settings
from devconsole.console import DevConsole
from devconsole.core.history import EntryKind
from devconsole.logging_utils import configure_logging
from devconsole.store import JsonFileKeyValueStore, KeyValueStore

from .render import Renderer
from .shell import OPEN_HINT, ShellExit, run_shell

app = typer.Typer(
    name="devconsole",
    help="Hidden developer console for the terminal.",
    add_completion=False,
)


def build_console(settings: Settings, store: KeyValueStore | None = None) -> DevConsole:
    """Create a console wired with the built-in catalog."""
    return DevConsole.from_settings(
        settings,
        build_default_registry(settings),
        store=store if store is not None else JsonFileKeyValueStore(settings.resolve_store_path()),
        interceptors=default_interceptors(),
    )


async def _shell_main(settings: Settings, renderer: Renderer, *, start_open: bool) -> None:
    store = JsonFileKeyValueStore(settings.resolve_store_path())
    console = build_console(settings, store)
    if start_open:
        console.open()
        renderer.welcome(OPEN_HINT)
    while await run_shell(console, renderer) is ShellExit.RELOAD:
        renderer.info("Reloading console...")
        console = build_console(settings, store)
    renderer.info("Goodbye!")


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        # Default to the interactive shell
        shell(start_open=False)


@app.command()
def shell(
    start_open: bool = typer.Option(False, "--open", help="Start with the console already open"),
) -> None:
    """Start the interactive console (opens on the activation sequence)."""
    settings = get_settings()
    configure_logging(profile="console", level=settings.log_level)
    asyncio.run(_shell_main(settings, Renderer(), start_open=start_open))


@app.command()
def run(
    line: str = typer.Argument(..., help="Console line to execute"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
) -> None:
    """Execute one console line and print its entry."""
    settings = get_settings(log_level=log_level) if log_level else get_settings()
    console = build_console(settings)
    console.open()
    outcome = asyncio.run(console.submit(line))
    if outcome is None:
        return
    Renderer().entry(outcome.entry)
    if outcome.entry.kind is EntryKind.ERROR:
        raise typer.Exit(1)


@app.command("commands")
def list_commands() -> None:
    """List the built-in commands."""
    settings = get_settings()
    for row in build_default_registry(settings).compact_rows():
        typer.echo(row)
