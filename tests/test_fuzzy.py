import pytest

from devconsole.core.fuzzy import SEARCH_THRESHOLD, SUGGEST_THRESHOLD, FuzzyMatcher

NAMES = ["help", "clear", "calc", "trivia", "storage"]


def test_distance_bounds() -> None:
    matcher = FuzzyMatcher()
    assert matcher.distance("calc", "calc") == 0.0
    assert matcher.distance("HELP", "help") == 0.0
    assert matcher.distance("abc", "xyz") == 1.0


def test_one_edit_is_small_distance() -> None:
    assert FuzzyMatcher().distance("calcx", "calc") == pytest.approx(0.2)


def test_distance_grows_with_more_edits() -> None:
    matcher = FuzzyMatcher()
    assert matcher.distance("calc", "calcx") < matcher.distance("calc", "calcxyz")


def test_match_ranks_closest_first() -> None:
    ranked = FuzzyMatcher().match("calcx", NAMES)
    assert ranked[0].candidate == "calc"
    assert ranked[0].index == 2
    distances = [item.distance for item in ranked]
    assert distances == sorted(distances)
    assert len(ranked) == len(NAMES)


def test_threshold_filters_candidates() -> None:
    matcher = FuzzyMatcher()
    assert matcher.match("zzzzz", NAMES, threshold=SUGGEST_THRESHOLD) == []
    assert all(item.distance <= SEARCH_THRESHOLD for item in matcher.match("stora", NAMES, threshold=SEARCH_THRESHOLD))


def test_limit_truncates() -> None:
    assert len(FuzzyMatcher().match("c", NAMES, limit=2)) == 2


def test_best_returns_none_without_candidate() -> None:
    matcher = FuzzyMatcher()
    assert matcher.best("zzzzz", NAMES) is None
    best = matcher.best("triva", NAMES)
    assert best is not None
    assert best.candidate == "trivia"


def test_empty_corpus() -> None:
    assert FuzzyMatcher().match("help", []) == []
