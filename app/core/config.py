"""
Application configuration: loaded from environment / .env file.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache

from app.schemas.survey_request import HousingCondition


class Settings(BaseSettings):
    # ── App ──
    app_name: str = "kmwf-assessment-engine"
    app_env: str = "development"
    log_level: str = "INFO"
    scoring_model_version: str = "1.0"

    # ── Category banding (total score 0-20) ──
    category_1_min_score: float = 12.0
    category_2_min_score: float = 6.0

    # ── Survey defaults ──
    # used for missing or unrecognised housing labels
    default_housing_condition: HousingCondition = HousingCondition.FAIR

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
