"""CLI renderer for devconsole."""

import re
import threading

from rich.console import Console
from rich.text import Text

from devconsole.core.history import EntryKind, HistoryEntry

IMG_TAG_RE = re.compile(r"""<img\b[^>]*?\bsrc\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE)
TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")

_KIND_STYLES: dict[EntryKind, str] = {
    EntryKind.COMMAND: "",
    EntryKind.ERROR: "red",
    EntryKind.INFO: "cyan",
}


def sanitize_markup(text: str) -> str:
    """Reduce the inline markup handlers may emit to plain text."""
    text = IMG_TAG_RE.sub(lambda match: f"[image: {match.group(1)}]", text)
    return TAG_RE.sub("", text)


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._print_lock = threading.Lock()

    def entry(self, entry: HistoryEntry) -> None:
        """Render one history entry."""
        if entry.input_text:
            self._print(Text.assemble(("> ", "bold green"), (entry.input_text, "bold")))
        output = sanitize_markup(entry.output_text)
        if output:
            self._print(Text(output, style=_KIND_STYLES[entry.kind]))

    def info(self, message: str) -> None:
        """Render an info message."""
        self._print(Text(message, style="dim"))

    def welcome(self, hint: str) -> None:
        self._print(Text.assemble(("Developer Console", "bold blue"), " - ", (hint, "dim")))

    def _print(self, message: Text) -> None:
        with self._print_lock:
            self.console.print(message)