from __future__ import annotations

import random
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from devconsole import logging_utils
from devconsole.commands import TriviaQuestion


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    logging_utils._CONFIGURED = None
    yield
    logger.remove()
    logging_utils._CONFIGURED = None


@pytest.fixture
def store_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "store.json"
    monkeypatch.setenv("DEVCONSOLE_STORE_PATH", str(path))
    return path


@pytest.fixture
def capital_question() -> TriviaQuestion:
    return TriviaQuestion(
        question="What is the capital of France?",
        correct="Paris",
        incorrect=("Lyon", "Marseille", "Nice"),
        category="Geography",
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)
