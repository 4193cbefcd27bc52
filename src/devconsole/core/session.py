"""Cross-command session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_ALPHABET = "ABCD"


@dataclass(frozen=True)
class PendingQuestion:
    """A multiple-choice question waiting for an answer letter."""

    prompt: str
    choices: tuple[str, ...]
    correct_index: int
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))
        if not self.choices:
            raise ValueError("a question needs at least one choice")
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(f"correct_index {self.correct_index} out of range for {len(self.choices)} choices")


class AnswerStatus(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    INVALID = "invalid"
    NOTHING_PENDING = "nothing_pending"


@dataclass(frozen=True)
class AnswerResult:
    status: AnswerStatus
    letter: str = ""
    correct_letter: str = ""
    correct_choice: str = ""
    question: PendingQuestion | None = None

    @property
    def correct(self) -> bool:
        return self.status is AnswerStatus.CORRECT


class SessionState:
    """Single pending-question slot shared by one command family.

    ``set`` overwrites (last write wins). ``consume`` clears the slot on any
    valid answer letter, right or wrong, and leaves it alone otherwise.
    """

    def __init__(self, alphabet: str = DEFAULT_ALPHABET) -> None:
        letters = alphabet.upper()
        if not letters:
            raise ValueError("alphabet must not be empty")
        self.alphabet = letters
        self._pending: PendingQuestion | None = None
        self._asked = False

    @property
    def pending(self) -> PendingQuestion | None:
        return self._pending

    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def asked(self) -> bool:
        """True once any question has been set in this session."""
        return self._asked

    def is_answer_letter(self, text: str) -> bool:
        return len(text) == 1 and text.upper() in self.alphabet

    def letter_for(self, index: int) -> str:
        return self.alphabet[index]

    def set(self, question: PendingQuestion) -> None:
        if len(question.choices) > len(self.alphabet):
            raise ValueError(f"{len(question.choices)} choices do not fit the answer alphabet {self.alphabet!r}")
        self._pending = question
        self._asked = True

    def clear(self) -> None:
        self._pending = None

    def consume(self, letter: str) -> AnswerResult:
        candidate = letter.strip().upper()
        if not self.is_answer_letter(candidate):
            return AnswerResult(status=AnswerStatus.INVALID, letter=candidate, question=self._pending)

        question = self._pending
        if question is None:
            return AnswerResult(status=AnswerStatus.NOTHING_PENDING, letter=candidate)

        self._pending = None
        index = self.alphabet.index(candidate)
        correct_letter = self.letter_for(question.correct_index)
        return AnswerResult(
            status=AnswerStatus.CORRECT if index == question.correct_index else AnswerStatus.INCORRECT,
            letter=candidate,
            correct_letter=correct_letter,
            correct_choice=question.choices[question.correct_index],
            question=question,
        )
