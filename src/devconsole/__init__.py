"""devconsole - a hidden developer console engine."""

from .console import DevConsole
from .core import Command, CommandContext, CommandRegistry, KeyEvent, SessionState

__version__ = "0.1.0"

__all__ = ["Command", "CommandContext", "CommandRegistry", "DevConsole", "KeyEvent", "SessionState"]
