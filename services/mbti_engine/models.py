from types import MappingProxyType
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_serializer, field_validator
from typing import List, Dict, Mapping, Optional

from .definitions import DichotomyKey, Letter

# Accumulated raw score per letter, owned by a single scoring call
ScoreAccumulator = Dict[str, float]


class Question(BaseModel):
    """A catalog question. Immutable once loaded, weight vector included."""
    model_config = ConfigDict(frozen=True)

    id: int
    dichotomy: DichotomyKey
    prompt: str
    left: str
    right: str
    weights: Mapping[Letter, float] = Field(default_factory=dict)

    @field_validator("weights", mode="after")
    @classmethod
    def _freeze_weights(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        # Read-only view over a private copy; the catalog is shared between requests
        return MappingProxyType(dict(value))

    @field_serializer("weights")
    def _serialize_weights(self, value: Mapping[str, float]) -> Dict[str, float]:
        return dict(value)


class PresentedQuestion(BaseModel):
    """Client-facing view of a question. Weight vectors are deliberately absent."""
    id: int
    prompt: str
    left: str
    right: str
    dichotomy: DichotomyKey
    left_letter: Letter
    right_letter: Letter


class Answer(BaseModel):
    question_id: int
    value: StrictInt


class ScoringSummary(BaseModel):
    scores: Dict[str, float]
    answered_count: int
    neutral_count: int


class DichotomyScore(BaseModel):
    dichotomy: DichotomyKey
    left_letter: Letter
    right_letter: Letter
    left_score: float
    right_score: float
    left_percent: int
    right_percent: int
    winner: Letter
    strength: str


class MbtiResult(BaseModel):
    type: str
    dichotomies: List[DichotomyScore]
    scores: Dict[str, float]
    percentages: Dict[str, int]
    answered_count: int
    neutral_count: int
    warning: Optional[str] = None


# Custom Error Classes
class MbtiEngineError(ValueError):
    """Base class for errors raised by the MBTI engine."""
    pass

class InsufficientQuestionsError(MbtiEngineError):
    """The catalog cannot supply the requested number of questions for a dichotomy."""
    pass

class UnknownQuestionError(MbtiEngineError):
    """An answer references a question id that is not in the catalog."""
    pass

class InvalidAnswerValueError(MbtiEngineError):
    """An answer value lies outside the -2..2 Likert range."""
    pass

class CatalogValidationError(MbtiEngineError):
    """The question catalog could not be loaded or failed validation."""
    pass

class MalformedWeightError(CatalogValidationError):
    """A question weight is not a number in [0, 1] or names an unknown letter."""
    pass
