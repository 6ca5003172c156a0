# services/mbti_engine/scorer.py
# Weighted multi-dichotomy accumulation of Likert answers.

import logging
from typing import Iterable, Literal

from .definitions import LETTER_COMPLEMENT, LETTER_ORDER, VALID_ANSWER_VALUES
from .loader import QuestionCatalog
from .models import (
    Answer,
    InvalidAnswerValueError,
    ScoreAccumulator,
    ScoringSummary,
    UnknownQuestionError,
)

logger = logging.getLogger(__name__)

UnknownQuestionPolicy = Literal["reject", "skip"]


def empty_scores() -> ScoreAccumulator:
    return {letter: 0.0 for letter in LETTER_ORDER}


def _validate_value(answer: Answer) -> int:
    value = answer.value
    if value not in VALID_ANSWER_VALUES:
        raise InvalidAnswerValueError(
            f"Invalid answer value {value!r} for question {answer.question_id}. Expected an integer from -2 to 2."
        )
    return value


def score_answers_detailed(
    catalog: QuestionCatalog,
    answers: Iterable[Answer],
    unknown_policy: UnknownQuestionPolicy = "reject",
) -> ScoringSummary:
    """
    Accumulates raw letter scores for a list of answers.

    Every non-zero weight of the answered question is applied, not only the
    letters of its own dichotomy: `value * weight` is added to the letter and
    subtracted from its complement. Answers are processed in input order and
    weights in canonical letter order so results are bit-for-bit reproducible.

    Raises:
        UnknownQuestionError: An answer references an id absent from the catalog
            and `unknown_policy` is "reject".
        InvalidAnswerValueError: An answer value is not an integer in [-2, 2].
    """
    if unknown_policy not in ("reject", "skip"):
        raise ValueError(f"Unknown question policy must be 'reject' or 'skip', got {unknown_policy!r}")

    scores = empty_scores()
    processed_ids = set()
    neutral_count = 0

    for answer in answers:
        value = _validate_value(answer)

        question = catalog.get(answer.question_id)
        if question is None:
            if unknown_policy == "reject":
                raise UnknownQuestionError(f"Answer references unknown question id {answer.question_id}")
            logger.warning(f"Skipping answer for unknown question id {answer.question_id}")
            continue

        if answer.question_id in processed_ids:
            logger.info(f"Ignoring duplicate answer for question {answer.question_id}")
            continue
        processed_ids.add(answer.question_id)

        if value == 0:
            neutral_count += 1
            continue

        for letter in LETTER_ORDER:
            weight = question.weights.get(letter, 0.0)
            if weight == 0:
                continue
            contribution = value * weight
            scores[letter] += contribution
            scores[LETTER_COMPLEMENT[letter]] -= contribution

    return ScoringSummary(
        scores=scores,
        answered_count=len(processed_ids),
        neutral_count=neutral_count,
    )


def score_answers(
    catalog: QuestionCatalog,
    answers: Iterable[Answer],
    unknown_policy: UnknownQuestionPolicy = "reject",
) -> ScoreAccumulator:
    """Returns only the eight-letter accumulator for the given answers."""
    return score_answers_detailed(catalog, answers, unknown_policy).scores
