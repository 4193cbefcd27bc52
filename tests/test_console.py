import asyncio

import pytest

from devconsole.config import KONAMI_CODE
from devconsole.console import ACTIVATION_MESSAGE, REOPEN_MESSAGE, DevConsole
from devconsole.core.activation import KeyEvent
from devconsole.core.history import EntryKind
from devconsole.core.registry import Command, CommandRegistry
from devconsole.commands import build_default_registry
from devconsole.store import REOPEN_FLAG_KEY, MemoryKeyValueStore


async def _pause(_args: list[str]) -> str:
    await asyncio.sleep(0.01)
    return "slow"


def _quick(_args: list[str]) -> str:
    return "fast"


def _build_console(**kwargs: object) -> DevConsole:
    return DevConsole(build_default_registry(), **kwargs)  # type: ignore[arg-type]


def _activate(console: DevConsole) -> list[bool]:
    return [console.handle_key(KeyEvent(code, code)) for code in KONAMI_CODE]


def test_activation_sequence_opens_and_announces() -> None:
    console = _build_console()
    results = _activate(console)
    assert results[-1] is True
    assert not any(results[:-1])
    assert console.is_open
    assert [entry.output_text for entry in console.history] == [ACTIVATION_MESSAGE]
    assert console.history[0].kind is EntryKind.INFO


def test_closed_console_ignores_plain_typing() -> None:
    console = _build_console()
    assert console.handle_key(KeyEvent("KeyH", "h")) is False
    assert console.input_text == ""
    assert not console.is_open


def test_escape_closes_and_is_suppressed() -> None:
    console = _build_console()
    console.open()
    console.handle_key(KeyEvent("KeyH", "h"))
    assert console.handle_key(KeyEvent("Escape", "Escape")) is True
    assert not console.is_open
    assert console.input_text == ""


def test_typing_edits_input() -> None:
    console = _build_console()
    console.open()
    for key in "helpx":
        assert console.handle_key(KeyEvent(f"Key{key.upper()}", key)) is False
    console.handle_key(KeyEvent("Backspace", "Backspace"))
    assert console.input_text == "help"


@pytest.mark.asyncio
async def test_arrow_keys_walk_recall() -> None:
    console = _build_console()
    console.open()
    await console.submit("echo one")
    await console.submit("echo two")

    assert console.handle_key(KeyEvent("ArrowUp", "ArrowUp")) is True
    assert console.input_text == "echo two"
    console.handle_key(KeyEvent("ArrowUp", "ArrowUp"))
    console.handle_key(KeyEvent("ArrowUp", "ArrowUp"))
    assert console.input_text == "echo one"
    console.handle_key(KeyEvent("ArrowDown", "ArrowDown"))
    console.handle_key(KeyEvent("ArrowDown", "ArrowDown"))
    assert console.input_text == ""


@pytest.mark.asyncio
async def test_same_line_twice_recalls_once_but_logs_twice() -> None:
    console = _build_console()
    console.open()
    await console.submit("echo hi")
    await console.submit("echo hi")
    assert console.recall.lines() == ("echo hi",)
    assert len(console.history) == 2


@pytest.mark.asyncio
async def test_submit_uses_live_input_and_clears_it() -> None:
    console = _build_console()
    console.open()
    console.input_text = "echo typed"
    outcome = await console.submit()
    assert outcome is not None
    assert outcome.entry.output_text == "typed"
    assert console.input_text == ""


@pytest.mark.asyncio
async def test_blank_submit_is_ignored() -> None:
    console = _build_console()
    console.open()
    assert await console.submit("   ") is None
    assert console.recall.lines() == ()
    assert console.history == ()


@pytest.mark.asyncio
async def test_exit_command_closes_console() -> None:
    console = _build_console()
    console.open()
    outcome = await console.submit("exit")
    assert outcome is not None
    assert outcome.entry.output_text == "Console closed"
    assert not console.is_open


@pytest.mark.asyncio
async def test_clear_command_leaves_only_its_entry() -> None:
    console = _build_console()
    console.open()
    await console.submit("echo a")
    await console.submit("clear")
    assert [entry.output_text for entry in console.history] == ["Console cleared"]
    assert console.recall.lines() == ("echo a", "clear")


@pytest.mark.asyncio
async def test_reload_reopens_with_shared_store() -> None:
    store = MemoryKeyValueStore()
    console = _build_console(store=store)
    console.open()
    await console.submit("reload")
    assert console.reload_requested
    assert store.get(REOPEN_FLAG_KEY) == "true"

    reloaded = _build_console(store=store)
    assert reloaded.is_open
    assert [entry.output_text for entry in reloaded.history] == [REOPEN_MESSAGE]
    assert REOPEN_FLAG_KEY not in store

    fresh = _build_console(store=store)
    assert not fresh.is_open


@pytest.mark.asyncio
async def test_concurrent_submissions_keep_order() -> None:
    registry = CommandRegistry([Command("pause", "Sleeps", _pause), Command("quick", "Returns", _quick)])
    console = DevConsole(registry)
    console.open()
    await asyncio.gather(console.submit("pause"), console.submit("quick"))
    assert [entry.output_text for entry in console.history] == ["slow", "fast"]
    assert console.recall.lines() == ("pause", "quick")


@pytest.mark.asyncio
async def test_history_command_sees_console_recall() -> None:
    store = MemoryKeyValueStore()
    console = _build_console(recall_capacity=3, store=store)
    assert console.dispatcher.recall is console.recall
    assert console.dispatcher.store is store
    console.open()
    for line in ["echo one", "echo two", "echo three", "echo four"]:
        await console.submit(line)
    outcome = await console.submit("history")
    assert outcome is not None
    assert outcome.entry.output_text == "1  echo two\n2  echo three\n3  echo four"
