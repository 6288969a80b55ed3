"""
Beneficiary Assessment Engine

Orchestrates:
  1. Input normalization (missing / invalid values → 0, family size ≥ 1)
  2. The 4 factor scores (financial, dependents, social status, officer)
  3. Total score (plain sum, 0-20)
  4. Category + colour banding

Pure: no I/O, no hidden state. The only time-dependent field, calculated_at,
comes from the injected clock.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional

from app.schemas.assessment_response import (
    AssessmentScores,
    Category,
    CategoryColor,
    FactorScore,
)
from app.schemas.survey_request import HousingCondition
from app.scoring import factors
from app.scoring.normalization import SurveyInput, build_survey_input

MODEL_VERSION = "1.0"
MAX_TOTAL_SCORE = 20.0


# ═══════════════════════════════════════════════════════════════
# Category thresholds over total score
#   total >= 12  → CATEGORY_1 (green)
#   total >= 6   → CATEGORY_2 (yellow)
#   total <  6   → CATEGORY_3 (white)
# ═══════════════════════════════════════════════════════════════
CATEGORY_1_MIN_SCORE = 12.0
CATEGORY_2_MIN_SCORE = 6.0

CATEGORY_TO_COLOR = {
    Category.CATEGORY_1: CategoryColor.GREEN,
    Category.CATEGORY_2: CategoryColor.YELLOW,
    Category.CATEGORY_3: CategoryColor.WHITE,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AssessmentConfig:
    category_1_min_score: float = CATEGORY_1_MIN_SCORE
    category_2_min_score: float = CATEGORY_2_MIN_SCORE
    default_housing_condition: HousingCondition = HousingCondition.FAIR
    dependent_weights: factors.DependentWeights = field(default_factory=factors.DependentWeights)
    social_status_weights: factors.SocialStatusWeights = field(default_factory=factors.SocialStatusWeights)

    def __post_init__(self):
        if not 0 < self.category_2_min_score < self.category_1_min_score <= MAX_TOTAL_SCORE:
            raise ValueError(
                "Category thresholds must satisfy 0 < category_2 < category_1 <= 20, "
                f"got category_1={self.category_1_min_score}, category_2={self.category_2_min_score}"
            )


DEFAULT_CONFIG = AssessmentConfig()


class AssessmentEngine:
    def __init__(
        self,
        config: AssessmentConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = utc_now,
        model_version: str = MODEL_VERSION,
    ):
        self.config = config
        self.clock = clock
        self.model_version = model_version

    def with_config(self, **overrides: Any) -> AssessmentEngine:
        """New engine with some config fields replaced; this one is left untouched."""
        return AssessmentEngine(replace(self.config, **overrides), self.clock, self.model_version)

    def calculate_assessment(
        self,
        total_earnings: Any,
        total_expenses: Any,
        family_size: Any,
        family_members: Any,
        housing_condition: Any,
        officer_report: Any,
        is_widow_headed: Any = False,
        calculated_at: Optional[datetime] = None,
    ) -> AssessmentScores:
        """
        Main scoring entry point. Never raises for malformed survey values.
        """
        survey = build_survey_input(
            total_earnings,
            total_expenses,
            family_size,
            family_members,
            housing_condition,
            officer_report,
            is_widow_headed,
            self.config.default_housing_condition,
        )
        return self.score(survey, calculated_at)

    def score(self, survey: SurveyInput, calculated_at: Optional[datetime] = None) -> AssessmentScores:
        per_capita_income = survey.per_capita_income

        results = [
            factors.score_financial(per_capita_income),
            factors.score_dependents(survey.family_members, self.config.dependent_weights),
            factors.score_social_status(
                survey.family_members,
                survey.housing_condition,
                survey.is_widow_headed,
                self.config.social_status_weights,
            ),
            factors.score_officer(survey.officer_score),
        ]
        financial, dependents, social_status, officer = (r.score for r in results)

        total_score = financial + dependents + social_status + officer
        category, category_color = self.determine_category(total_score)

        return AssessmentScores(
            financial_score=financial,
            dependents_score=dependents,
            social_status_score=social_status,
            officer_score=officer,
            total_score=total_score,
            per_capita_income=round(per_capita_income, 2),
            category=category,
            category_color=category_color,
            calculated_at=calculated_at or self.clock(),
            factor_scores=[
                FactorScore(
                    factor_name=r.factor_name,
                    raw_value=r.raw_value,
                    bin_label=r.bin_label,
                    weight=r.weight,
                    score=r.score,
                )
                for r in results
            ],
            model_version=self.model_version,
        )

    def determine_category(self, total_score: float) -> tuple[Category, CategoryColor]:
        if total_score >= self.config.category_1_min_score:
            category = Category.CATEGORY_1
        elif total_score >= self.config.category_2_min_score:
            category = Category.CATEGORY_2
        else:
            category = Category.CATEGORY_3
        return category, CATEGORY_TO_COLOR[category]


DEFAULT_ENGINE = AssessmentEngine()


def calculate_assessment(*args: Any, **kwargs: Any) -> AssessmentScores:
    return DEFAULT_ENGINE.calculate_assessment(*args, **kwargs)
