"""
Validation report for a question catalog: checks that every one of the 16
types can be produced and estimates per-dichotomy internal consistency on
simulated respondents.
"""
import json
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .definitions import ALL_TYPES, DICHOTOMY_LETTERS, DICHOTOMY_ORDER, LETTER_ORDER
from .engine import MbtiEngine
from .models import Answer, Question


def calculate_cronbach_alpha(data: pd.DataFrame) -> float:
    """
    Calculates Cronbach's alpha for a set of items.
    Assumes data is a DataFrame where rows are subjects and columns are items.
    """
    if data.shape[1] < 2: # Need at least 2 items
        return np.nan

    item_variances = data.var(axis=0, ddof=1).sum()
    total_variance = data.sum(axis=1).var(ddof=1)

    N = data.shape[1]

    if total_variance == 0:
        return 1.0 if item_variances == 0 else 0.0

    return float((N / (N - 1)) * (1 - (item_variances / total_variance)))


def intended_answer_value(question: Question, target_type: str) -> int:
    """
    Strongest answer (+2/-2) toward the target type's letters, or 0 when the
    question's loadings cancel out.
    """
    net = 0.0
    for letter in LETTER_ORDER:
        weight = question.weights.get(letter, 0.0)
        net += weight if letter in target_type else -weight
    if net > 0:
        return 2
    if net < 0:
        return -2
    return 0


def intended_answers(engine: MbtiEngine, target_type: str) -> List[Answer]:
    return [
        Answer(question_id=q.id, value=intended_answer_value(q, target_type))
        for q in engine.catalog.all_questions()
    ]


def type_coverage(engine: MbtiEngine) -> pd.DataFrame:
    """Scores the intended answers for each of the 16 types and records the resolved type."""
    rows = []
    for target in ALL_TYPES:
        result = engine.calculate_result(intended_answers(engine, target))
        rows.append({
            "target_type": target,
            "resolved_type": result.type,
            "match": result.type == target,
            **{f"{d.dichotomy}_left_percent": d.left_percent for d in result.dichotomies},
        })
    return pd.DataFrame(rows)


def _item_key(question: Question) -> float:
    """+1 if a positive answer moves the question's dichotomy toward its right letter, -1 if left."""
    left, right = DICHOTOMY_LETTERS[question.dichotomy]
    return float(np.sign(question.weights.get(right, 0.0) - question.weights.get(left, 0.0)))


def simulate_responses(engine: MbtiEngine, num_respondents: int = 150, seed: Optional[int] = None) -> pd.DataFrame:
    """
    Generates synthetic Likert responses (rows: respondents, columns: question ids),
    driven by one latent tendency per dichotomy per respondent.
    """
    rng = np.random.default_rng(seed)
    columns: Dict[int, np.ndarray] = {}
    for dichotomy in DICHOTOMY_ORDER:
        tendencies = rng.uniform(-2.0, 2.0, num_respondents)
        for question in engine.catalog.questions_for(dichotomy):
            noise = rng.normal(0.0, 0.75, num_respondents)
            raw = tendencies * _item_key(question) + noise
            columns[question.id] = np.clip(np.rint(raw), -2, 2).astype(int)
    return pd.DataFrame(columns)


def generate_validation_report(engine: MbtiEngine, num_respondents: int = 150, seed: Optional[int] = 0) -> dict:
    """
    Builds a JSON-serialisable report with type coverage and Cronbach's alpha
    per dichotomy (items are reverse-keyed so all point toward the right letter).
    """
    coverage = type_coverage(engine)
    responses = simulate_responses(engine, num_respondents, seed)

    report = {
        "type_coverage": {
            row.target_type: {"resolved_type": row.resolved_type, "match": bool(row.match)}
            for row in coverage.itertuples()
        },
        "all_types_reachable": bool(coverage["match"].all()),
        "dichotomies": {},
    }

    for dichotomy in DICHOTOMY_ORDER:
        questions = [q for q in engine.catalog.questions_for(dichotomy) if _item_key(q) != 0]
        keyed = pd.DataFrame({q.id: responses[q.id] * _item_key(q) for q in questions})
        alpha = calculate_cronbach_alpha(keyed) if not keyed.empty else np.nan
        report["dichotomies"][dichotomy] = {
            "item_count": len(questions),
            "cronbach_alpha": None if np.isnan(alpha) else round(float(alpha), 4),
        }

    return report


if __name__ == "__main__":
    from config.settings import get_settings

    settings = get_settings()
    engine = MbtiEngine.from_file(settings.catalog_path, questions_per_dichotomy=settings.questions_per_dichotomy)
    print(json.dumps(generate_validation_report(engine), indent=2))
