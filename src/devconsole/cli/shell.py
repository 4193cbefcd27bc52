"""Interactive terminal host for the console."""

from __future__ import annotations

import asyncio
from enum import Enum

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.patch_stdout import patch_stdout

from devconsole.console import DevConsole
from devconsole.core.activation import KeyEvent

from .keys import to_key_event
from .render import Renderer

PROMPT = "> "
CLOSED_HINT = "Console closed. Type the activation sequence to open it, Ctrl-C to quit."
OPEN_HINT = "ESC to close, Up/Down for command history, \"help\" for commands."


class ShellExit(str, Enum):
    QUIT = "quit"
    RELOAD = "reload"


def build_key_bindings(console: DevConsole) -> KeyBindings:
    """Escape closes the console, Up/Down walk the recall buffer."""
    bindings = KeyBindings()

    def _recall(event: KeyPressEvent, key: str) -> None:
        buffer = event.app.current_buffer
        console.input_text = buffer.text
        console.handle_key(KeyEvent(key, key))
        buffer.text = console.input_text
        buffer.cursor_position = len(buffer.text)

    @bindings.add(Keys.Escape, eager=True)
    def _close(event: KeyPressEvent) -> None:
        console.handle_key(KeyEvent("Escape", "Escape"))
        event.app.exit(result=None)

    @bindings.add(Keys.Up)
    def _older(event: KeyPressEvent) -> None:
        _recall(event, "ArrowUp")

    @bindings.add(Keys.Down)
    def _newer(event: KeyPressEvent) -> None:
        _recall(event, "ArrowDown")

    return bindings


async def wait_for_activation(console: DevConsole, key_input: Input | None = None) -> bool:
    """Feed raw key presses to the console until it opens; False on Ctrl-C/Ctrl-D."""
    raw_input = key_input or create_input()
    done = asyncio.Event()
    quit_requested = False

    def _keys_ready() -> None:
        nonlocal quit_requested
        for key_press in raw_input.read_keys():
            if key_press.key in (Keys.ControlC, Keys.ControlD):
                quit_requested = True
                done.set()
                return
            event = to_key_event(key_press)
            if event is not None and console.handle_key(event):
                done.set()
                return

    with raw_input.raw_mode(), raw_input.attach(_keys_ready):
        await done.wait()
    return not quit_requested and console.is_open


async def run_shell(console: DevConsole, renderer: Renderer) -> ShellExit:
    """Run the console until the user quits or a command asks for a reload."""
    for entry in console.history:
        renderer.entry(entry)
    unsubscribe = console.dispatcher.history.subscribe(renderer.entry)
    prompt_session: PromptSession[str | None] = PromptSession(key_bindings=build_key_bindings(console))

    try:
        while True:
            if not console.is_open:
                renderer.info(CLOSED_HINT)
                if not await wait_for_activation(console):
                    return ShellExit.QUIT
                renderer.info(OPEN_HINT)

            try:
                with patch_stdout(raw=True):
                    line = await prompt_session.prompt_async(PROMPT)
            except (KeyboardInterrupt, EOFError):
                return ShellExit.QUIT

            if line is None:
                continue
            await console.submit(line)
            if console.reload_requested:
                logger.info("shell.reload")
                return ShellExit.RELOAD
    finally:
        unsubscribe()
