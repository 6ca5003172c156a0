import random
from collections import Counter

import pytest
from pytest import approx

from services.mbti_engine.engine import MbtiEngine
from services.mbti_engine.loader import load_catalog_data
from services.mbti_engine.models import (
    Answer,
    InsufficientQuestionsError,
    MbtiResult,
    UnknownQuestionError,
)

CATALOG_PATH = "assets/mbti_questions.yml"


@pytest.fixture
def small_engine(small_catalog):
    return MbtiEngine(small_catalog, questions_per_dichotomy=3)


def test_from_file():
    engine = MbtiEngine.from_file(CATALOG_PATH, questions_per_dichotomy=11)
    assert len(engine.catalog) == 48
    assert engine.expected_answer_count == 44

def test_get_questions_shape(engine):
    questions = engine.get_questions(random.Random(1))
    assert len(questions) == 44
    assert Counter(q.dichotomy for q in questions) == {"EI": 11, "SN": 11, "TF": 11, "JP": 11}
    assert all("weights" not in q.model_dump() for q in questions)

def test_get_questions_without_rng(engine):
    assert len(engine.get_questions()) == 44

def test_get_questions_insufficient(small_catalog):
    engine = MbtiEngine(small_catalog, questions_per_dichotomy=5)
    with pytest.raises(InsufficientQuestionsError):
        engine.get_questions(random.Random(1))

def test_example_from_q11():
    catalog = load_catalog_data({
        "EI": [{"id": 11, "prompt": "p", "left": "l", "right": "r", "weights": {"E": 0.72, "P": 0.65}}],
    })
    engine = MbtiEngine(catalog, questions_per_dichotomy=1)
    result = engine.calculate_result([Answer(question_id=11, value=2)])

    assert isinstance(result, MbtiResult)
    assert result.scores["E"] == approx(1.44)
    assert result.scores["J"] == approx(-1.30)
    assert result.percentages["E"] == 100
    assert result.percentages["I"] == 0
    assert result.percentages["J"] == 0
    assert result.percentages["P"] == 100
    # S/N and T/F untouched: 50/50 and ties go to S and T
    assert result.type == "ESTP"

def test_dichotomy_breakdown(small_engine):
    # Small catalog: every question loads 0.5 on the left letter of its dichotomy
    answers = [Answer(question_id=q_id, value=2) for q_id in (1, 2, 3)]       # EI -> E
    answers += [Answer(question_id=q_id, value=-2) for q_id in (4, 5, 6)]     # SN -> N
    answers += [Answer(question_id=q_id, value=1) for q_id in (7, 8)]         # TF -> T
    answers += [Answer(question_id=9, value=-1)]
    answers += [Answer(question_id=q_id, value=0) for q_id in (10, 11, 12)]   # JP neutral

    result = small_engine.calculate_result(answers)

    assert result.type == "ENTJ"
    assert [d.dichotomy for d in result.dichotomies] == ["EI", "SN", "TF", "JP"]
    ei, sn, tf, jp = result.dichotomies
    assert (ei.left_percent, ei.right_percent, ei.winner, ei.strength) == (100, 0, "E", "very-strong")
    assert (sn.left_percent, sn.right_percent, sn.winner) == (0, 100, "N")
    assert tf.left_score == approx(0.5)
    assert tf.right_score == approx(-0.5)
    assert (jp.left_percent, jp.right_percent, jp.winner, jp.strength) == (50, 50, "J", "balanced")
    for d in result.dichotomies:
        assert d.left_percent + d.right_percent == 100
    assert result.answered_count == 12
    assert result.neutral_count == 3
    assert result.warning is None

def test_warning_when_no_answers(small_engine):
    result = small_engine.calculate_result([])
    assert result.warning == "No valid answers provided"
    assert result.type == "ESTJ"
    assert set(result.percentages.values()) == {50}

def test_warning_when_all_neutral(small_engine):
    result = small_engine.calculate_result([Answer(question_id=i, value=0) for i in range(1, 13)])
    assert result.warning == "All answers were neutral"
    assert result.type == "ESTJ"

def test_warning_when_incomplete(small_engine):
    result = small_engine.calculate_result([Answer(question_id=1, value=2)])
    assert result.warning == "Only 1 out of 12 questions answered"

def test_unknown_question_fails_whole_scoring(small_engine):
    with pytest.raises(UnknownQuestionError):
        small_engine.calculate_result([Answer(question_id=1, value=2), Answer(question_id=500, value=2)])

def test_unknown_question_skip_policy(small_catalog):
    engine = MbtiEngine(small_catalog, questions_per_dichotomy=3, unknown_policy="skip")
    result = engine.calculate_result([Answer(question_id=500, value=2), Answer(question_id=1, value=-2)])
    assert result.answered_count == 1
    assert result.type == "ISTJ"

def test_result_is_deterministic(engine):
    answers = [Answer(question_id=q.id, value=((q.id * 3) % 5) - 2) for q in engine.catalog.all_questions()]
    assert engine.calculate_result(answers) == engine.calculate_result(answers)

def test_result_serialises_to_json(small_engine):
    payload = small_engine.calculate_result([Answer(question_id=1, value=1)]).model_dump(mode="json")
    assert set(payload) == {
        "type", "dichotomies", "scores", "percentages", "answered_count", "neutral_count", "warning",
    }

def test_type_code_comes_from_resolver(small_engine, monkeypatch):
    calls = []

    def fake_resolve_type(scores):
        calls.append(dict(scores))
        return "INFP"

    monkeypatch.setattr("services.mbti_engine.engine.resolve_type", fake_resolve_type)
    result = small_engine.calculate_result([Answer(question_id=1, value=2)])
    assert result.type == "INFP"
    assert calls == [result.scores]
