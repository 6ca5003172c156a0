from functools import lru_cache
from typing import Literal, Optional
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class MbtiSettings(BaseSettings):
    catalog_path: str = "assets/mbti_questions.yml"
    questions_per_dichotomy: int = 11
    unknown_question_policy: Literal["reject", "skip"] = "reject"
    rotate_questions_by_minute: bool = False
    sample_seed: Optional[int] = None  # Fixed seed for reproducible question sets (tests, demos)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='MBTI_')


@lru_cache()
def get_settings() -> MbtiSettings:
    return MbtiSettings()


if __name__ == "__main__":
    settings = get_settings()
    print("MBTI Engine Configuration:")
    print(f"  Catalog path: {settings.catalog_path}")
    print(f"  Questions per dichotomy: {settings.questions_per_dichotomy}")
    print(f"  Unknown question policy: {settings.unknown_question_policy}")
    print(f"  Rotate questions by minute: {settings.rotate_questions_by_minute}")
    print(f"  Sample seed: {settings.sample_seed}")
    print("\nTo override, set environment variables like MBTI_CATALOG_PATH, MBTI_QUESTIONS_PER_DICHOTOMY, MBTI_UNKNOWN_QUESTION_POLICY.")
