import logging
import random
from typing import Iterable, List, Optional

from .definitions import DICHOTOMY_LETTERS, DICHOTOMY_ORDER, QUESTIONS_PER_DICHOTOMY
from .loader import QuestionCatalog, load_catalog_from_file
from .models import Answer, DichotomyScore, MbtiResult, PresentedQuestion
from .normalizer import normalize_scores
from .resolver import preference_strength, resolve_letter, resolve_type
from .sampler import present_question, sample_questions
from .scorer import UnknownQuestionPolicy, score_answers_detailed

logger = logging.getLogger(__name__)


class MbtiEngine:
    """
    Wires the sampler, scorer, normalizer and resolver around a loaded catalog.
    """
    def __init__(
        self,
        catalog: QuestionCatalog,
        questions_per_dichotomy: int = QUESTIONS_PER_DICHOTOMY,
        unknown_policy: UnknownQuestionPolicy = "reject",
    ):
        """
        Args:
            catalog: Validated, read-only question catalog.
            questions_per_dichotomy: Number of questions served per dichotomy (K).
            unknown_policy: "reject" fails scoring on an unknown question id,
                            "skip" ignores such answers.
        """
        self.catalog = catalog
        self.questions_per_dichotomy = questions_per_dichotomy
        self.unknown_policy = unknown_policy

    @classmethod
    def from_file(cls, catalog_path: str, **kwargs) -> "MbtiEngine":
        return cls(load_catalog_from_file(catalog_path), **kwargs)

    @property
    def expected_answer_count(self) -> int:
        return self.questions_per_dichotomy * len(DICHOTOMY_ORDER)

    def get_questions(self, rng: Optional[random.Random] = None) -> List[PresentedQuestion]:
        """
        Samples a question set for one test session, stripped of weight vectors.

        A fresh unseeded generator is used when `rng` is not given.
        """
        rng = rng if rng is not None else random.Random()
        sampled = sample_questions(self.catalog, self.questions_per_dichotomy, rng)
        return [present_question(q) for q in sampled]

    def calculate_result(self, answers: Iterable[Answer]) -> MbtiResult:
        """
        Scores a list of answers and resolves the four-letter type.

        Args:
            answers: Answers in the order the client submitted them.

        Returns:
            An MbtiResult with the type code, per-dichotomy percentages and raw scores.

        Raises:
            UnknownQuestionError: An answer references an unknown question (reject policy).
            InvalidAnswerValueError: An answer value is outside -2..2.
        """
        summary = score_answers_detailed(self.catalog, answers, self.unknown_policy)
        scores = summary.scores
        percentages = normalize_scores(scores)

        dichotomies = []
        for dichotomy in DICHOTOMY_ORDER:
            left, right = DICHOTOMY_LETTERS[dichotomy]
            dichotomies.append(DichotomyScore(
                dichotomy=dichotomy,
                left_letter=left,
                right_letter=right,
                left_score=scores[left],
                right_score=scores[right],
                left_percent=percentages[left],
                right_percent=percentages[right],
                winner=resolve_letter(dichotomy, scores),
                strength=preference_strength(percentages[left], percentages[right]),
            ))

        result = MbtiResult(
            type=resolve_type(scores),
            dichotomies=dichotomies,
            scores=scores,
            percentages=percentages,
            answered_count=summary.answered_count,
            neutral_count=summary.neutral_count,
            warning=self._build_warning(summary.answered_count, summary.neutral_count),
        )
        logger.info(
            f"Scored {summary.answered_count} answers ({summary.neutral_count} neutral) as {result.type}"
        )
        return result

    def _build_warning(self, answered_count: int, neutral_count: int) -> Optional[str]:
        if answered_count == 0:
            return "No valid answers provided"
        if answered_count == neutral_count:
            return "All answers were neutral"
        if answered_count < self.expected_answer_count:
            return f"Only {answered_count} out of {self.expected_answer_count} questions answered"
        return None
