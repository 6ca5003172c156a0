import math
from typing import Dict, Tuple

from .definitions import DICHOTOMY_LETTERS, DICHOTOMY_ORDER
from .models import ScoreAccumulator


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; percentages round .5 upwards
    return int(math.floor(value + 0.5))


def normalize_pair(a: float, b: float) -> Tuple[int, int]:
    """
    Converts two raw scores into complementary percentages summing to 100.

    Both scores are shifted so the smaller becomes 0, which removes the
    shared negative offset left by zero-sum scoring. Only the first
    percentage is rounded; the second is derived from it.
    """
    m = min(a, b)
    shifted_a = a - m
    shifted_b = b - m
    total = shifted_a + shifted_b
    if total == 0:
        return 50, 50
    pct_a = round_half_up(shifted_a / total * 100)
    return pct_a, 100 - pct_a


def normalize_scores(scores: ScoreAccumulator) -> Dict[str, int]:
    """Applies normalize_pair to each dichotomy and returns a percentage per letter."""
    percentages: Dict[str, int] = {}
    for dichotomy in DICHOTOMY_ORDER:
        left, right = DICHOTOMY_LETTERS[dichotomy]
        percentages[left], percentages[right] = normalize_pair(scores[left], scores[right])
    return percentages
