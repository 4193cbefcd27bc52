"""Console engine: parsing, matching, registry, state machines and dispatch."""

from .activation import ActivationDetector, KeyEvent
from .dispatcher import DispatchOutcome, Dispatcher, Interceptor, Reroute
from .fuzzy import FuzzyMatch, FuzzyMatcher
from .history import EntryKind, HistoryEntry, HistoryStore, Outcome, RecallBuffer
from .parser import ParsedLine, flatten_args, parse_line, tokenize
from .registry import Command, CommandContext, CommandRegistry, ConsoleRequest, command
from .session import AnswerResult, AnswerStatus, PendingQuestion, SessionState

__all__ = [
    "ActivationDetector",
    "AnswerResult",
    "AnswerStatus",
    "Command",
    "CommandContext",
    "CommandRegistry",
    "ConsoleRequest",
    "DispatchOutcome",
    "Dispatcher",
    "EntryKind",
    "FuzzyMatch",
    "FuzzyMatcher",
    "HistoryEntry",
    "HistoryStore",
    "Interceptor",
    "KeyEvent",
    "Outcome",
    "ParsedLine",
    "PendingQuestion",
    "RecallBuffer",
    "Reroute",
    "SessionState",
    "command",
    "flatten_args",
    "parse_line",
    "tokenize",
]
