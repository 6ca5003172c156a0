import pytest

from services.mbti_engine.normalizer import normalize_pair, normalize_scores, round_half_up
from services.mbti_engine.scorer import empty_scores


def test_shift_by_min_then_ratio():
    # E=2.88, I=-2.88 shifts by -2.88 to (5.76, 0)
    assert normalize_pair(2.88, -2.88) == (100, 0)

def test_zero_total_is_fifty_fifty():
    assert normalize_pair(0.0, 0.0) == (50, 50)

@pytest.mark.parametrize("a", [10.0, -3.5, 1e-9])
def test_equal_scores_are_fifty_fifty(a):
    assert normalize_pair(a, a) == (50, 50)

def test_loser_always_gets_zero_after_shift():
    # After the min-shift only the larger score is positive
    assert normalize_pair(-1.0, 3.0) == (0, 100)

def test_half_rounds_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(0.5) == 1
    assert round_half_up(99.49) == 99

@pytest.mark.parametrize("a, b", [
    (0.1, 0.2), (1.0, 2.0), (-5.0, 7.3), (3.3333, -3.3333), (1e6, -1e-6), (0.0, 42.0), (-0.72, 0.72),
])
def test_percentages_always_sum_to_100(a, b):
    pct_a, pct_b = normalize_pair(a, b)
    assert pct_a + pct_b == 100
    assert 0 <= pct_a <= 100
    assert isinstance(pct_a, int) and isinstance(pct_b, int)

def test_normalize_scores_covers_every_dichotomy():
    scores = empty_scores()
    scores.update({"E": 1.44, "I": -1.44, "P": 1.3, "J": -1.3})
    percentages = normalize_scores(scores)
    assert percentages == {"E": 100, "I": 0, "S": 50, "N": 50, "T": 50, "F": 50, "J": 0, "P": 100}

def test_normalize_scores_does_not_mutate_input():
    scores = empty_scores()
    scores["E"] = 2.0
    normalize_scores(scores)
    assert scores["E"] == 2.0
