"""Multiple-choice trivia built on the session's pending-question slot.

``trivia`` stores a question in :class:`~devconsole.core.session.SessionState`
and ``trivia-answer <letter>`` consumes it. The interceptor returned by
:func:`answer_letter_interceptor` lets a bare answer letter stand in for the
full ``trivia-answer`` form once a question has been asked.
"""

from __future__ import annotations

import inspect
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Union

from devconsole.core.dispatcher import Interceptor, Reroute
from devconsole.core.parser import ParsedLine
from devconsole.core.registry import Command, CommandContext, command
from devconsole.core.session import AnswerStatus, PendingQuestion

CATEGORY = "Games & Entertainment"
ANSWER_COMMAND = "trivia-answer"


@dataclass(frozen=True)
class TriviaQuestion:
    question: str
    correct: str
    incorrect: tuple[str, ...]
    category: str = "General Knowledge"
    difficulty: str = "easy"


QuestionSource = Callable[[random.Random], Union[TriviaQuestion, Awaitable[TriviaQuestion]]]

QUESTION_BANK: tuple[TriviaQuestion, ...] = (
    TriviaQuestion("What is the capital of Australia?", "Canberra", ("Sydney", "Melbourne", "Perth"), "Geography"),
    TriviaQuestion("Which planet is known as the Red Planet?", "Mars", ("Venus", "Jupiter", "Mercury"), "Science"),
    TriviaQuestion(
        "What does HTTP stand for?",
        "HyperText Transfer Protocol",
        ("High Transfer Text Protocol", "Hyperlink Transmission Process", "Host Text Transfer Program"),
        "Computers",
    ),
    TriviaQuestion("How many bits are in a byte?", "8", ("4", "16", "32"), "Computers"),
    TriviaQuestion(
        "Which language was created by Guido van Rossum?",
        "Python",
        ("Ruby", "Perl", "Java"),
        "Computers",
        "medium",
    ),
    TriviaQuestion("What is the chemical symbol for gold?", "Au", ("Ag", "Gd", "Go"), "Science"),
    TriviaQuestion(
        "In which year did the first moon landing take place?",
        "1969",
        ("1965", "1972", "1959"),
        "History",
        "medium",
    ),
    TriviaQuestion("What is the largest ocean on Earth?", "Pacific", ("Atlantic", "Indian", "Arctic"), "Geography"),
    TriviaQuestion(
        "Which video game company created the Konami Code?",
        "Konami",
        ("Nintendo", "Sega", "Capcom"),
        "Entertainment: Video Games",
    ),
    TriviaQuestion("What is 2 to the power of 10?", "1024", ("512", "2048", "1000"), "Mathematics"),
)


def bank_source(rng: random.Random) -> TriviaQuestion:
    return rng.choice(QUESTION_BANK)


def to_pending_question(item: TriviaQuestion, rng: random.Random) -> PendingQuestion:
    choices = [item.correct, *item.incorrect]
    rng.shuffle(choices)
    return PendingQuestion(
        prompt=item.question,
        choices=tuple(choices),
        correct_index=choices.index(item.correct),
        metadata={"category": item.category, "difficulty": item.difficulty},
    )


def render_question(question: PendingQuestion, alphabet: str) -> str:
    header = question.metadata.get("category", "Trivia")
    difficulty = question.metadata.get("difficulty")
    if difficulty:
        header = f"{header} ({difficulty})"
    lines = [f"Trivia - {header}", "", question.prompt, ""]
    lines.extend(f"  {alphabet[idx]}) {choice}" for idx, choice in enumerate(question.choices))
    letters = alphabet[: len(question.choices)]
    lines.append("")
    lines.append(f"Answer with {', '.join(letters)} (or: {ANSWER_COMMAND} <letter>)")
    return "\n".join(lines)


def answer_letter_interceptor(target: str = ANSWER_COMMAND) -> Interceptor:
    """Route a bare answer letter to ``target`` once a question has been asked.

    After the question is answered the letter still reaches ``target``, which
    then reports that nothing is pending.
    """

    def intercept(stripped: str, _parsed: ParsedLine, context: CommandContext) -> Reroute | None:
        session = context.session
        if session.asked and session.is_answer_letter(stripped):
            return Reroute(name=target, args=[stripped.upper()])
        return None

    return intercept


def trivia_commands(*, source: QuestionSource = bank_source, rng: random.Random | None = None) -> list[Command]:
    chooser = rng or random.Random()

    @command("trivia", "Answer a multiple-choice trivia question", category=CATEGORY, context=True)
    async def trivia(_args: list[str], *, context: CommandContext) -> str:
        fetched = source(chooser)
        item = await fetched if inspect.isawaitable(fetched) else fetched
        question = to_pending_question(item, chooser)
        context.session.set(question)
        return render_question(question, context.session.alphabet)

    @command(ANSWER_COMMAND, "Answer the pending trivia question (trivia-answer <letter>)", category=CATEGORY, context=True)
    def trivia_answer(args: list[str], *, context: CommandContext) -> str:
        session = context.session
        if not args:
            return f"Usage: {ANSWER_COMMAND} <letter>"

        result = session.consume(args[0])
        if result.status is AnswerStatus.INVALID:
            letters = ", ".join(session.alphabet)
            return f'Invalid answer "{args[0]}". Please answer with one of: {letters}'
        if result.status is AnswerStatus.NOTHING_PENDING:
            return 'No trivia question pending. Type "trivia" to get one.'
        if result.correct:
            return f"Correct! The answer was {result.correct_letter}) {result.correct_choice}"
        return f"Wrong! The correct answer was {result.correct_letter}) {result.correct_choice}"

    return [trivia, trivia_answer]
