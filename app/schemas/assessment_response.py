"""
Response payloads returned to the sponsorship application.

The application stores AssessmentScores verbatim on the survey record and
copies category / colour / sub-scores onto the beneficiary card on approval.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    CATEGORY_1 = "category_1"   # highest need, full support
    CATEGORY_2 = "category_2"
    CATEGORY_3 = "category_3"   # near-stable


class CategoryColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    WHITE = "white"


class FacilityType(str, Enum):
    SPONSORSHIP = "sponsorship"
    MEDICAL_AID = "medical_aid"
    EDUCATION_AID = "education_aid"
    RATION = "ration"
    PENSION = "pension"
    EMERGENCY_RELIEF = "emergency_relief"


class FactorScore(BaseModel):
    """Individual factor contribution to the total score."""
    model_config = ConfigDict(frozen=True)

    factor_name: str
    raw_value: Optional[str] = None
    bin_label: str
    weight: float = Field(0.0, description="Accumulated indicator weight before banding")
    score: float


class AssessmentScores(BaseModel):
    """
    Immutable once calculated.
    total_score is always the exact sum of the four sub-scores.
    """
    model_config = ConfigDict(frozen=True)

    financial_score: float = Field(ge=0, le=5)
    dependents_score: float = Field(ge=0, le=5)
    social_status_score: float = Field(ge=0, le=5)
    officer_score: float = Field(ge=0, le=5)
    total_score: float = Field(ge=0, le=20)
    per_capita_income: float = Field(description="(earnings - expenses) / family size, may be negative")
    category: Category
    category_color: CategoryColor
    calculated_at: datetime

    factor_scores: list[FactorScore] = []
    model_version: str = "1.0"


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = []


class EligibleFacility(BaseModel):
    facility_type: FacilityType
    description: str
    is_active: bool = True


class HouseholdSummary(BaseModel):
    """Aggregated figures the engine was fed with."""
    total_earnings: float
    total_expenses: float
    net_amount: float
    family_size: int
    dependents_count: int
    has_disabled_members: bool
    has_elderly_dependents: bool
    is_widow_headed: bool
    housing_condition: str


class SurveyAssessmentResponse(BaseModel):
    survey_id: str
    household: HouseholdSummary
    scores: AssessmentScores
    validation: ValidationResult
    eligible_facilities: list[EligibleFacility]


class BeneficiaryCard(BaseModel):
    """Derived entity created when a surveyed household is approved."""
    beneficiary_id: str
    survey_id: str
    request_id: Optional[str] = None
    full_name: str
    father_name: Optional[str] = None
    district: Optional[str] = None

    category: Category
    category_color: CategoryColor
    category_description: str
    category_display_name: str
    assessment_scores: AssessmentScores

    family_size: int
    dependents_count: int
    has_disabled_members: bool
    has_elderly_dependents: bool
    is_widow_headed: bool

    eligible_facilities: list[EligibleFacility]
    monthly_eligible_amount: float

    sponsorship_status: str = "available"
    approved_by: str
    approved_at: datetime
    next_review_date: datetime


class WorkflowValidation(BaseModel):
    is_valid: bool
    errors: list[str] = []
    warnings: list[str] = []
    current_step: str
    current_step_name: str
    completed_steps: list[str] = []
    next_possible_steps: list[str] = []
    progress_percentage: float
