"""
Beneficiary card derivation.

When an admin approves a submitted survey, the stored assessment is copied
onto a beneficiary card together with the facilities and monthly amount the
category entitles the household to. Scores are read, never recalculated.
"""
from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from app.schemas.assessment_response import (
    AssessmentScores,
    BeneficiaryCard,
    Category,
    EligibleFacility,
    FacilityType,
)
from app.schemas.survey_request import SurveyDocument, SurveyStatus
from app.scoring.engine import utc_now
from app.services.household import household_profile
from app.services.workflow import WorkflowError

logger = structlog.get_logger()

REVIEW_INTERVAL = timedelta(days=365)

CATEGORY_DESCRIPTIONS = {
    Category.CATEGORY_1: "Below Poverty - Eligible for full sponsorship and monthly stipends",
    Category.CATEGORY_2: "Medium Poverty - Eligible for targeted support and partial stipends",
    Category.CATEGORY_3: "Near-Stable - Eligible for skill development and emergency aid",
}

CATEGORY_DISPLAY_NAMES = {
    Category.CATEGORY_1: "Category 1 - Below Poverty (Green)",
    Category.CATEGORY_2: "Category 2 - Medium Poverty (Yellow)",
    Category.CATEGORY_3: "Category 3 - Near-Stable (White)",
}

MONTHLY_ELIGIBLE_AMOUNT = {
    Category.CATEGORY_1: 3000.0,
    Category.CATEGORY_2: 1500.0,
    Category.CATEGORY_3: 0.0,
}

_FACILITIES: dict[Category, list[tuple[FacilityType, str]]] = {
    Category.CATEGORY_1: [
        (FacilityType.SPONSORSHIP, "Full sponsorship and monthly stipends"),
        (FacilityType.MEDICAL_AID, "Priority medical aid and free medicines"),
        (FacilityType.EDUCATION_AID, "Education support and school fees"),
        (FacilityType.RATION, "Monthly ration support"),
        (FacilityType.PENSION, "Widow/disability pension assistance"),
        (FacilityType.EMERGENCY_RELIEF, "Emergency financial assistance"),
    ],
    Category.CATEGORY_2: [
        (FacilityType.SPONSORSHIP, "Partial sponsorship and targeted support"),
        (FacilityType.MEDICAL_AID, "Subsidized medical treatment"),
        (FacilityType.EDUCATION_AID, "Partial education support"),
        (FacilityType.EMERGENCY_RELIEF, "Crisis-based emergency aid"),
    ],
    Category.CATEGORY_3: [
        (FacilityType.EMERGENCY_RELIEF, "Emergency aid in verified crises"),
    ],
}


def eligible_facilities(category: Category) -> list[EligibleFacility]:
    return [
        EligibleFacility(facility_type=facility_type, description=description)
        for facility_type, description in _FACILITIES[category]
    ]


def build_beneficiary_card(
    survey: SurveyDocument,
    scores: AssessmentScores,
    approved_by: str,
    clock: Callable[[], datetime] = utc_now,
) -> BeneficiaryCard:
    if survey.status != SurveyStatus.SUBMITTED:
        raise WorkflowError("Survey response is not ready for approval")
    if survey.personal_details is None:
        raise WorkflowError("Survey has no personal details to put on the card")

    profile = household_profile(survey.family_members)
    approved_at = clock()
    category = scores.category

    card = BeneficiaryCard(
        beneficiary_id=f"BEN-{uuid.uuid4().hex[:12].upper()}",
        survey_id=survey.survey_id,
        request_id=survey.request_id,
        full_name=survey.personal_details.full_name,
        father_name=survey.personal_details.father_name,
        district=survey.personal_details.district,
        category=category,
        category_color=scores.category_color,
        category_description=CATEGORY_DESCRIPTIONS[category],
        category_display_name=CATEGORY_DISPLAY_NAMES[category],
        assessment_scores=scores,
        family_size=profile.family_size,
        dependents_count=profile.dependents_count,
        has_disabled_members=profile.has_disabled_members,
        has_elderly_dependents=profile.has_elderly_dependents,
        is_widow_headed=profile.is_widow_headed,
        eligible_facilities=eligible_facilities(category),
        monthly_eligible_amount=MONTHLY_ELIGIBLE_AMOUNT[category],
        approved_by=approved_by,
        approved_at=approved_at,
        next_review_date=approved_at + REVIEW_INTERVAL,
    )

    logger.info(
        "beneficiary_card_created",
        beneficiary_id=card.beneficiary_id,
        survey_id=survey.survey_id,
        category=category.value,
        total_score=scores.total_score,
    )
    return card
