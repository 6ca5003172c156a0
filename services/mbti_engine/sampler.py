"""
Question sampling: picks K questions per dichotomy and interleaves them.
"""
import random
from datetime import datetime, timezone
from typing import List, Optional

from .definitions import DICHOTOMY_LETTERS, DICHOTOMY_ORDER
from .loader import QuestionCatalog
from .models import InsufficientQuestionsError, PresentedQuestion, Question


def sample_questions(catalog: QuestionCatalog, per_dichotomy: int, rng: random.Random) -> List[Question]:
    """
    Draws `per_dichotomy` questions without replacement from each dichotomy
    and returns them in a uniformly random overall order.

    Args:
        catalog: The loaded question catalog.
        per_dichotomy: Number of questions (K) required from every dichotomy.
        rng: Randomness source. Callers own it; pass a seeded instance for reproducible output.

    Raises:
        InsufficientQuestionsError: If a dichotomy has fewer than K questions.
    """
    if per_dichotomy < 1:
        raise ValueError(f"per_dichotomy must be at least 1, got {per_dichotomy}")

    selected: List[Question] = []
    for dichotomy in DICHOTOMY_ORDER:
        pool = list(catalog.questions_for(dichotomy))
        if len(pool) < per_dichotomy:
            raise InsufficientQuestionsError(
                f"Not enough questions for dichotomy {dichotomy}. "
                f"Expected at least {per_dichotomy}, found {len(pool)}."
            )
        rng.shuffle(pool)
        selected.extend(pool[:per_dichotomy])

    rng.shuffle(selected)
    return selected


def present_question(question: Question) -> PresentedQuestion:
    left_letter, right_letter = DICHOTOMY_LETTERS[question.dichotomy]
    return PresentedQuestion(
        id=question.id,
        prompt=question.prompt,
        left=question.left,
        right=question.right,
        dichotomy=question.dichotomy,
        left_letter=left_letter,
        right_letter=right_letter,
    )


def rotation_seed(now: Optional[datetime] = None) -> int:
    """Minutes since the epoch; the question set rotates once per minute when used as a seed."""
    now = now or datetime.now(timezone.utc)
    return int(now.timestamp() // 60)
