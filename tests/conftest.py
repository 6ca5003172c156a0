import pytest

from services.mbti_engine.engine import MbtiEngine
from services.mbti_engine.loader import load_catalog_data, load_catalog_from_file

# Tests are run from the project root directory
CATALOG_PATH = "assets/mbti_questions.yml"

LEFT_LETTER = {"EI": "E", "SN": "S", "TF": "T", "JP": "J"}


def build_catalog_data(per_dichotomy: int = 3) -> dict:
    """
    Builds raw catalog data where every question loads only on the left
    letter of its own dichotomy. Ids are numbered from 1 across dichotomies.
    """
    data = {}
    next_id = 1
    for key, letter in LEFT_LETTER.items():
        questions = []
        for i in range(per_dichotomy):
            questions.append({
                "id": next_id,
                "prompt": f"{key} prompt {i}",
                "left": f"{key} left {i}",
                "right": f"{key} right {i}",
                "weights": {letter: 0.5},
            })
            next_id += 1
        data[key] = questions
    return data


@pytest.fixture
def small_catalog_data():
    return build_catalog_data(per_dichotomy=3)


@pytest.fixture
def small_catalog(small_catalog_data):
    return load_catalog_data(small_catalog_data)


@pytest.fixture(scope="session")
def catalog():
    """The shipped question catalog."""
    return load_catalog_from_file(CATALOG_PATH)


@pytest.fixture(scope="session")
def engine(catalog):
    return MbtiEngine(catalog, questions_per_dichotomy=11)


@pytest.fixture
def make_catalog_data():
    return build_catalog_data
