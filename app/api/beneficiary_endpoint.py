"""
/v1/beneficiary: approval and workflow status.

POST /card       submitted survey + stored scores → beneficiary card
POST /workflow   where a sponsorship request currently stands
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from app.api.assessment_endpoint import get_engine
from app.schemas.assessment_response import BeneficiaryCard, WorkflowValidation
from app.schemas.survey_request import BeneficiaryCardRequest, WorkflowRequest
from app.scoring.engine import AssessmentEngine
from app.services.beneficiary_card import build_beneficiary_card
from app.services.household import survey_to_input
from app.services.workflow import WorkflowError, validate_workflow

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/beneficiary", tags=["beneficiary"])


@router.post(
    "/card",
    response_model=BeneficiaryCard,
    summary="Approve a submitted survey and derive the beneficiary card",
)
async def create_card(
    request: BeneficiaryCardRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> BeneficiaryCard:
    survey = request.survey

    # Surveys saved before scoring existed carry no scores yet
    scores = survey.calculated_scores
    if scores is None:
        logger.info("card_scores_missing_recalculating", survey_id=survey.survey_id)
        scores = engine.score(survey_to_input(survey))

    try:
        return build_beneficiary_card(survey, scores, request.approved_by)
    except WorkflowError as e:
        logger.warning("card_rejected", survey_id=survey.survey_id, reason=str(e))
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/workflow", response_model=WorkflowValidation)
async def workflow_status(request: WorkflowRequest) -> WorkflowValidation:
    return validate_workflow(
        request.request,
        request.survey,
        request.beneficiary_id,
        request.user_role,
    )
