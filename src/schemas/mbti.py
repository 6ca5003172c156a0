from typing import List
from pydantic import BaseModel, Field, StrictInt

from services.mbti_engine.models import PresentedQuestion

class AnswerPayload(BaseModel):
    question_id: int
    # -2 strongly left, -1 slightly left, 0 neutral, 1 slightly right, 2 strongly right
    value: StrictInt = Field(..., ge=-2, le=2)

class ScoreRequest(BaseModel):
    answers: List[AnswerPayload]

class QuestionSetResponse(BaseModel):
    count: int
    questions: List[PresentedQuestion]
