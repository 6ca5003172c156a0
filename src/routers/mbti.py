from functools import lru_cache
import logging
import random

from fastapi import APIRouter, Depends, HTTPException, Response

from config.settings import MbtiSettings, get_settings
from src.schemas.mbti import QuestionSetResponse, ScoreRequest
from services.mbti_engine.engine import MbtiEngine
from services.mbti_engine.models import (
    Answer,
    CatalogValidationError,
    InsufficientQuestionsError,
    InvalidAnswerValueError,
    MbtiResult,
    UnknownQuestionError,
)
from services.mbti_engine.sampler import rotation_seed

router = APIRouter()
logger = logging.getLogger(__name__)

QUESTION_SET_CACHE_CONTROL = "public, max-age=60, s-maxage=60"


@lru_cache()
def _load_engine(catalog_path: str, questions_per_dichotomy: int, unknown_policy: str) -> MbtiEngine:
    return MbtiEngine.from_file(
        catalog_path,
        questions_per_dichotomy=questions_per_dichotomy,
        unknown_policy=unknown_policy,
    )


def get_mbti_engine(settings: MbtiSettings = Depends(get_settings)) -> MbtiEngine:
    # The catalog is parsed once per process and shared read-only afterwards
    try:
        return _load_engine(
            settings.catalog_path,
            settings.questions_per_dichotomy,
            settings.unknown_question_policy,
        )
    except CatalogValidationError as e:
        logger.exception(f"Failed to load question catalog from {settings.catalog_path}: {e}")
        raise HTTPException(status_code=500, detail="Question catalog is unavailable.")


@router.get("/mbti/questions", response_model=QuestionSetResponse)
async def get_questions(
    response: Response,
    engine: MbtiEngine = Depends(get_mbti_engine),
    settings: MbtiSettings = Depends(get_settings),
):
    """
    Returns a freshly sampled, shuffled question set without weight vectors.
    """
    cacheable = False
    if settings.sample_seed is not None:
        rng = random.Random(settings.sample_seed)
    elif settings.rotate_questions_by_minute:
        rng = random.Random(rotation_seed())
        cacheable = True
    else:
        rng = random.Random()

    try:
        questions = engine.get_questions(rng)
    except InsufficientQuestionsError as e:
        logger.error(f"Cannot build question set: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if cacheable:
        response.headers["Cache-Control"] = QUESTION_SET_CACHE_CONTROL
    return QuestionSetResponse(count=len(questions), questions=questions)


@router.post("/mbti/score", response_model=MbtiResult)
async def score_answers(
    request: ScoreRequest,
    engine: MbtiEngine = Depends(get_mbti_engine),
):
    """
    Scores submitted answers and returns the four-letter type with per-dichotomy percentages.
    """
    answers = [Answer(question_id=a.question_id, value=a.value) for a in request.answers]
    try:
        result = engine.calculate_result(answers)
    except (UnknownQuestionError, InvalidAnswerValueError) as e:
        logger.error(f"Invalid submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during MBTI scoring: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    if result.warning:
        logger.warning(f"Scored with warning: {result.warning}")
    return result
