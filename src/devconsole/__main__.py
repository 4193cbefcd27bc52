"""devconsole CLI bootstrap."""

from __future__ import annotations

from devconsole.cli import app

if __name__ == "__main__":
    app()
