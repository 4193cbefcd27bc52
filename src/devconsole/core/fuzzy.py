"""Approximate matching over command names and descriptions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

SUGGEST_THRESHOLD = 0.6
SEARCH_THRESHOLD = 0.4
SEARCH_LIMIT = 10


@dataclass(frozen=True)
class FuzzyMatch:
    """One ranked candidate; distance 0 means identical, 1 means disjoint."""

    candidate: str
    distance: float
    index: int


def _normalize(text: str) -> str:
    return text.strip().casefold()


class FuzzyMatcher:
    """Normalized Levenshtein ranking, case-insensitive."""

    def distance(self, query: str, candidate: str) -> float:
        return float(Levenshtein.normalized_distance(_normalize(query), _normalize(candidate)))

    def match(
        self,
        query: str,
        corpus: Sequence[str],
        *,
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[FuzzyMatch]:
        if not corpus:
            return []

        rows = process.extract(
            query,
            list(corpus),
            scorer=Levenshtein.normalized_distance,
            processor=_normalize,
            score_cutoff=threshold,
            limit=None,
        )
        ranked = sorted(
            (FuzzyMatch(candidate=choice, distance=float(score), index=index) for choice, score, index in rows),
            key=lambda item: (item.distance, item.index),
        )
        if limit is not None:
            ranked = ranked[:limit]
        return ranked

    def best(self, query: str, corpus: Sequence[str], threshold: float = SUGGEST_THRESHOLD) -> FuzzyMatch | None:
        ranked = self.match(query, corpus, threshold=threshold, limit=1)
        return ranked[0] if ranked else None
