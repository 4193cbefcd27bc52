"""Built-in command catalog."""

from __future__ import annotations

import random

from devconsole.config import Settings
from devconsole.core.dispatcher import Interceptor
from devconsole.core.fuzzy import SEARCH_LIMIT, SEARCH_THRESHOLD
from devconsole.core.registry import Command, CommandRegistry

from .basic import basic_commands
from .games import game_commands
from .system import system_commands
from .tools import evaluate_expression, tool_commands
from .trivia import QuestionSource, TriviaQuestion, answer_letter_interceptor, bank_source, trivia_commands


def builtin_commands(
    *,
    search_threshold: float = SEARCH_THRESHOLD,
    search_limit: int = SEARCH_LIMIT,
    rng: random.Random | None = None,
    question_source: QuestionSource = bank_source,
) -> list[Command]:
    """All built-in commands, in help order."""
    chooser = rng or random.Random()
    return [
        *basic_commands(search_threshold=search_threshold, search_limit=search_limit),
        *system_commands(),
        *tool_commands(),
        *game_commands(rng=chooser),
        *trivia_commands(source=question_source, rng=chooser),
    ]


def build_default_registry(
    settings: Settings | None = None,
    *,
    rng: random.Random | None = None,
    question_source: QuestionSource = bank_source,
) -> CommandRegistry:
    if settings is None:
        return CommandRegistry(builtin_commands(rng=rng, question_source=question_source))
    return CommandRegistry(
        builtin_commands(
            search_threshold=settings.search_threshold,
            search_limit=settings.search_limit,
            rng=rng,
            question_source=question_source,
        )
    )


def default_interceptors() -> list[Interceptor]:
    return [answer_letter_interceptor()]


__all__ = [
    "QuestionSource",
    "TriviaQuestion",
    "answer_letter_interceptor",
    "build_default_registry",
    "builtin_commands",
    "default_interceptors",
    "evaluate_expression",
]
