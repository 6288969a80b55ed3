"""
/v1/assessment: scoring endpoints.

POST /calculate          flattened engine input → scores
POST /survey             full survey document → aggregated inputs + scores
POST /validate           advisory validation of a flattened input
GET  /facilities/{cat}   facilities a category is eligible for

The service is stateless: the caller persists the returned scores.
"""
from __future__ import annotations

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import Counter

from app.core.config import get_settings
from app.schemas.assessment_response import (
    AssessmentScores,
    Category,
    EligibleFacility,
    HouseholdSummary,
    SurveyAssessmentResponse,
    ValidationResult,
)
from app.schemas.survey_request import AssessmentRequest, SurveyDocument
from app.scoring.engine import AssessmentConfig, AssessmentEngine
from app.scoring.validation import validate_assessment_data
from app.services.beneficiary_card import eligible_facilities
from app.services.household import (
    household_profile,
    infer_widow_headed,
    reported_monthly_earnings,
    reported_monthly_expenses,
    survey_to_input,
)
from app.services.workflow import WorkflowError, ensure_scores_mutable

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/assessment", tags=["assessment"])

ASSESSMENTS_TOTAL = Counter(
    "beneficiary_assessments_total",
    "Assessments calculated, by resulting category",
    ["category"],
)


@lru_cache
def get_engine() -> AssessmentEngine:
    settings = get_settings()
    config = AssessmentConfig(
        category_1_min_score=settings.category_1_min_score,
        category_2_min_score=settings.category_2_min_score,
        default_housing_condition=settings.default_housing_condition,
    )
    return AssessmentEngine(config, model_version=settings.scoring_model_version)


@router.post(
    "/calculate",
    response_model=AssessmentScores,
    summary="Score an already aggregated household",
)
async def calculate(
    request: AssessmentRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> AssessmentScores:
    is_widow_headed = request.is_widow_headed
    if is_widow_headed is None:
        is_widow_headed = infer_widow_headed(request.family_members)

    scores = engine.calculate_assessment(
        request.total_earnings,
        request.total_expenses,
        request.family_size,
        request.family_members,
        request.housing_condition,
        request.officer_report,
        is_widow_headed,
    )
    ASSESSMENTS_TOTAL.labels(category=scores.category.value).inc()

    logger.info(
        "assessment_calculated",
        total_score=scores.total_score,
        category=scores.category.value,
        per_capita_income=scores.per_capita_income,
    )
    return scores


@router.post(
    "/survey",
    response_model=SurveyAssessmentResponse,
    summary="Aggregate and score a field survey",
    description="Rejects surveys whose scores are frozen (approved / verified).",
)
async def assess_survey(
    survey: SurveyDocument,
    engine: AssessmentEngine = Depends(get_engine),
) -> SurveyAssessmentResponse:

    logger.info(
        "survey_assessment_started",
        survey_id=survey.survey_id,
        request_id=survey.request_id,
        status=survey.status.value,
        members=len(survey.family_members),
    )

    try:
        ensure_scores_mutable(survey.status)
    except WorkflowError as e:
        logger.warning("survey_scores_frozen", survey_id=survey.survey_id, status=survey.status.value)
        raise HTTPException(status_code=409, detail=str(e))

    survey_input = survey_to_input(survey)
    scores = engine.score(survey_input)
    ASSESSMENTS_TOTAL.labels(category=scores.category.value).inc()

    validation = validate_assessment_data(
        reported_monthly_earnings(survey),
        reported_monthly_expenses(survey),
        len(survey.family_members),
        survey.family_members,
        survey.officer_report,
    )
    if not validation.is_valid:
        logger.info("survey_scored_provisionally", survey_id=survey.survey_id, errors=len(validation.errors))

    profile = household_profile(survey.family_members)

    logger.info(
        "assessment_calculated",
        survey_id=survey.survey_id,
        total_score=scores.total_score,
        category=scores.category.value,
    )

    return SurveyAssessmentResponse(
        survey_id=survey.survey_id,
        household=HouseholdSummary(
            total_earnings=survey_input.total_earnings,
            total_expenses=survey_input.total_expenses,
            net_amount=round(survey_input.total_earnings - survey_input.total_expenses, 2),
            family_size=survey_input.family_size,
            dependents_count=profile.dependents_count,
            has_disabled_members=profile.has_disabled_members,
            has_elderly_dependents=profile.has_elderly_dependents,
            is_widow_headed=survey_input.is_widow_headed,
            housing_condition=survey_input.housing_condition.value,
        ),
        scores=scores,
        validation=validation,
        eligible_facilities=eligible_facilities(scores.category),
    )


@router.post("/validate", response_model=ValidationResult)
async def validate(request: AssessmentRequest) -> ValidationResult:
    return validate_assessment_data(
        request.total_earnings,
        request.total_expenses,
        request.family_size,
        request.family_members,
        request.officer_report,
    )


@router.get("/facilities/{category}", response_model=list[EligibleFacility])
async def facilities(category: Category) -> list[EligibleFacility]:
    return eligible_facilities(category)


@router.get("/health", tags=["health"])
async def health():
    return {
        "status": "ok",
        "service": get_settings().app_name,
        "model_version": get_settings().scoring_model_version,
    }
