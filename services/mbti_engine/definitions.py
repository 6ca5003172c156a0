# services/mbti_engine/definitions.py
# Static definitions for the four MBTI dichotomies and their letters.

from typing import Dict, List, Literal, Tuple

DichotomyKey = Literal["EI", "SN", "TF", "JP"]
Letter = Literal["E", "I", "S", "N", "T", "F", "J", "P"]

# Fixed order used when building the type code (EI, SN, TF, JP)
DICHOTOMY_ORDER: List[str] = ["EI", "SN", "TF", "JP"]

DICHOTOMY_LETTERS: Dict[str, Tuple[str, str]] = {
    "EI": ("E", "I"),
    "SN": ("S", "N"),
    "TF": ("T", "F"),
    "JP": ("J", "P"),
}

# Canonical iteration order for letters; keeps float accumulation reproducible
LETTER_ORDER: List[str] = ["E", "I", "S", "N", "T", "F", "J", "P"]

LETTER_COMPLEMENT: Dict[str, str] = {
    "E": "I", "I": "E",
    "S": "N", "N": "S",
    "T": "F", "F": "T",
    "J": "P", "P": "J",
}

LETTER_DICHOTOMY: Dict[str, str] = {
    letter: key
    for key, pair in DICHOTOMY_LETTERS.items()
    for letter in pair
}

VALID_ANSWER_VALUES = (-2, -1, 0, 1, 2)

QUESTIONS_PER_DICHOTOMY = 11

# Lower bounds on |left% - right%| for each preference strength band, strongest first
PREFERENCE_STRENGTH_BANDS: List[Tuple[int, str]] = [
    (80, "very-strong"),
    (60, "strong"),
    (40, "moderate"),
    (20, "slight"),
]
DEFAULT_PREFERENCE_STRENGTH = "balanced"

ALL_TYPES: List[str] = [
    "INTJ", "INTP", "ENTJ", "ENTP",
    "INFJ", "INFP", "ENFJ", "ENFP",
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",
    "ISTP", "ISFP", "ESTP", "ESFP",
]
