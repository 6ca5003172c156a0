import math
from typing import Mapping

from .definitions import (
    DEFAULT_PREFERENCE_STRENGTH,
    DICHOTOMY_LETTERS,
    DICHOTOMY_ORDER,
    PREFERENCE_STRENGTH_BANDS,
)


def resolve_letter(dichotomy: str, scores: Mapping[str, float]) -> str:
    """
    Picks the winning letter of one dichotomy.

    The left letter wins when its score is greater than or equal to its
    complement's, so ties resolve to E, S, T and J.
    """
    left, right = DICHOTOMY_LETTERS[dichotomy]
    left_score, right_score = scores[left], scores[right]
    if math.isnan(left_score) or math.isnan(right_score):
        raise ValueError(f"NaN score for dichotomy {dichotomy}: {left}={left_score}, {right}={right_score}")
    return left if left_score >= right_score else right


def resolve_type(scores: Mapping[str, float]) -> str:
    """Builds the four-letter type code in EI, SN, TF, JP order."""
    return "".join(resolve_letter(dichotomy, scores) for dichotomy in DICHOTOMY_ORDER)


def preference_strength(left_percent: int, right_percent: int) -> str:
    """Classifies how decisive a dichotomy is from its percentage gap."""
    gap = abs(left_percent - right_percent)
    for threshold, label in PREFERENCE_STRENGTH_BANDS:
        if gap >= threshold:
            return label
    return DEFAULT_PREFERENCE_STRENGTH
