import random

import pytest

from devconsole.commands import TriviaQuestion, build_default_registry, default_interceptors
from devconsole.commands.trivia import ANSWER_COMMAND, QUESTION_BANK, bank_source
from devconsole.console import DevConsole
from devconsole.core.history import Outcome


def _trivia_console(question: TriviaQuestion, rng: random.Random, *, async_source: bool = False) -> DevConsole:
    def source(_rng: random.Random) -> TriviaQuestion:
        return question

    async def async_fetch(_rng: random.Random) -> TriviaQuestion:
        return question

    registry = build_default_registry(rng=rng, question_source=async_fetch if async_source else source)
    console = DevConsole(registry, interceptors=default_interceptors())
    console.open()
    return console


def _correct_letter(console: DevConsole) -> str:
    pending = console.session.pending
    assert pending is not None
    return console.session.letter_for(pending.correct_index)


@pytest.mark.asyncio
async def test_bare_letter_answers_pending_question(capital_question: TriviaQuestion, rng: random.Random) -> None:
    console = _trivia_console(capital_question, rng)
    text = (await console.submit("trivia")).entry.output_text  # type: ignore[union-attr]
    assert "What is the capital of France?" in text
    assert "Trivia - Geography (easy)" in text
    letter = _correct_letter(console)
    assert f"  {letter}) Paris" in text

    outcome = await console.submit(letter.lower())
    assert outcome is not None
    assert outcome.command == ANSWER_COMMAND
    assert outcome.entry.output_text == f"Correct! The answer was {letter}) Paris"
    assert console.session.pending is None

    again = await console.submit(letter)
    assert again is not None
    assert again.entry.output_text.startswith("No trivia question pending")


@pytest.mark.asyncio
async def test_wrong_letter_reveals_answer(capital_question: TriviaQuestion, rng: random.Random) -> None:
    console = _trivia_console(capital_question, rng)
    await console.submit("trivia")
    letter = _correct_letter(console)
    wrong = next(candidate for candidate in "ABCD" if candidate != letter)
    outcome = await console.submit(wrong)
    assert outcome is not None
    assert outcome.entry.output_text == f"Wrong! The correct answer was {letter}) Paris"


@pytest.mark.asyncio
async def test_invalid_letter_keeps_question(capital_question: TriviaQuestion, rng: random.Random) -> None:
    console = _trivia_console(capital_question, rng)
    await console.submit("trivia")
    outcome = await console.submit(f"{ANSWER_COMMAND} E")
    assert outcome is not None
    assert outcome.entry.output_text == 'Invalid answer "E". Please answer with one of: A, B, C, D'
    assert console.session.has_pending()

    outcome = await console.submit(f"{ANSWER_COMMAND} {_correct_letter(console)}")
    assert outcome is not None
    assert outcome.entry.output_text.startswith("Correct!")


@pytest.mark.asyncio
async def test_bare_letter_before_any_question_is_unknown(capital_question: TriviaQuestion, rng: random.Random) -> None:
    console = _trivia_console(capital_question, rng)
    outcome = await console.submit("q")
    assert outcome is not None
    assert outcome.command is None
    assert outcome.entry.outcome in {Outcome.UNKNOWN, Outcome.SUGGESTED}
    assert not console.session.asked


@pytest.mark.asyncio
async def test_async_question_source(capital_question: TriviaQuestion, rng: random.Random) -> None:
    console = _trivia_console(capital_question, rng, async_source=True)
    await console.submit("trivia")
    pending = console.session.pending
    assert pending is not None
    assert sorted(pending.choices) == ["Lyon", "Marseille", "Nice", "Paris"]


def test_bank_questions_fit_four_letter_alphabet() -> None:
    assert all(len(item.incorrect) == 3 for item in QUESTION_BANK)
    assert bank_source(random.Random(1)) in QUESTION_BANK
