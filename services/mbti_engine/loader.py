import logging
import math
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from .definitions import DICHOTOMY_LETTERS, DICHOTOMY_ORDER, LETTER_ORDER
from .models import CatalogValidationError, MalformedWeightError, Question

logger = logging.getLogger(__name__)


class QuestionCatalog:
    """
    Read-only table of questions grouped by dichotomy, with an id index.

    Built once by the loader and shared between requests; nothing in the
    engine mutates it after construction.
    """
    def __init__(self, questions_by_dichotomy: Dict[str, List[Question]]):
        self._by_dichotomy: Dict[str, Tuple[Question, ...]] = {
            key: tuple(questions_by_dichotomy.get(key, ())) for key in DICHOTOMY_ORDER
        }
        self._index: Dict[int, Question] = {
            q.id: q for key in DICHOTOMY_ORDER for q in self._by_dichotomy[key]
        }

    def questions_for(self, dichotomy: str) -> Tuple[Question, ...]:
        return self._by_dichotomy.get(dichotomy, ())

    def get(self, question_id: int) -> Optional[Question]:
        return self._index.get(question_id)

    def all_questions(self) -> List[Question]:
        return [q for key in DICHOTOMY_ORDER for q in self._by_dichotomy[key]]

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.all_questions())


def _validate_weights(question_ref: str, weights: Any) -> None:
    """Checks a raw weight vector before it reaches the pydantic model."""
    if weights is None:
        return
    if not isinstance(weights, dict):
        raise MalformedWeightError(f"Weights for question {question_ref} must be a mapping of letter to weight")
    for letter, weight in weights.items():
        if letter not in LETTER_ORDER:
            raise MalformedWeightError(f"Unknown letter '{letter}' in weights of question {question_ref}")
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise MalformedWeightError(f"Weight for letter '{letter}' in question {question_ref} is not a number: {weight!r}")
        if math.isnan(weight) or not 0.0 <= weight <= 1.0:
            raise MalformedWeightError(f"Weight {weight} for letter '{letter}' in question {question_ref} is outside [0, 1]")


def load_catalog_data(data: Dict[str, Any]) -> QuestionCatalog:
    """
    Validates raw catalog data of the form {dichotomy_key: [question, ...]}
    and returns an immutable QuestionCatalog.
    """
    if not isinstance(data, dict):
        raise CatalogValidationError("Question catalog must be a mapping of dichotomy key to question list")

    questions_by_dichotomy: Dict[str, List[Question]] = {}
    seen_ids = set()

    for dichotomy_key, raw_questions in data.items():
        if dichotomy_key not in DICHOTOMY_LETTERS:
            raise CatalogValidationError(f"Unknown dichotomy key: {dichotomy_key}")
        if raw_questions is None:
            raw_questions = []
        if not isinstance(raw_questions, list):
            raise CatalogValidationError(f"Questions for dichotomy '{dichotomy_key}' must be a list")

        parsed: List[Question] = []
        for position, raw in enumerate(raw_questions):
            if not isinstance(raw, dict):
                raise CatalogValidationError(f"Question #{position} in dichotomy '{dichotomy_key}' is not a mapping")
            question_ref = f"{raw.get('id', '#' + str(position))} ({dichotomy_key})"
            declared = raw.get("dichotomy")
            if declared is not None and declared != dichotomy_key:
                raise CatalogValidationError(
                    f"Question {question_ref} declares dichotomy '{declared}' but is listed under '{dichotomy_key}'"
                )
            _validate_weights(question_ref, raw.get("weights"))

            try:
                question = Question.model_validate({**raw, "dichotomy": dichotomy_key, "weights": raw.get("weights") or {}})
            except ValidationError as e:
                raise CatalogValidationError(f"Invalid question {question_ref}: {e}") from e

            if question.id in seen_ids:
                raise CatalogValidationError(f"Duplicate question ID found: {question.id}")
            seen_ids.add(question.id)
            parsed.append(question)

        questions_by_dichotomy[dichotomy_key] = parsed

    catalog = QuestionCatalog(questions_by_dichotomy)
    logger.info(
        "Loaded question catalog with %d questions (%s)",
        len(catalog),
        ", ".join(f"{key}={len(catalog.questions_for(key))}" for key in DICHOTOMY_ORDER),
    )
    return catalog


def load_catalog_from_file(file_path: str) -> QuestionCatalog:
    """
    Loads a question catalog from a YAML file, validates it,
    and returns a QuestionCatalog.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise CatalogValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise CatalogValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_catalog_data(data)
