"""
Sponsorship workflow guards.

Request → officer assignment → field survey → verification → approval →
sponsorship matching. Scores may be recalculated while the survey is still
editable; once it is approved or verified they are frozen.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog

from app.schemas.assessment_response import WorkflowValidation
from app.schemas.survey_request import SponsorshipRequest, SurveyDocument, SurveyStatus

logger = structlog.get_logger()


class WorkflowError(Exception):
    """An action is not allowed in the survey's current state."""


FROZEN_STATUSES = frozenset({SurveyStatus.APPROVED, SurveyStatus.VERIFIED})
REVIEWABLE_STATUSES = frozenset({SurveyStatus.SUBMITTED, SurveyStatus.UNDER_REVIEW})

SURVEY_ACTIONS = {
    "approve": SurveyStatus.VERIFIED,
    "reject": SurveyStatus.REJECTED,
    "request_revision": SurveyStatus.REVISION_REQUIRED,
}


@dataclass(frozen=True)
class WorkflowStep:
    step_id: str
    name: str
    display_name: str
    next_steps: tuple[str, ...]


WORKFLOW_STEPS: dict[str, WorkflowStep] = {
    step.step_id: step
    for step in (
        WorkflowStep("request_submission", "Request Submission", "Request Submitted", ("admin_assignment",)),
        WorkflowStep("admin_assignment", "Admin Assignment", "Officer Assigned", ("field_survey",)),
        WorkflowStep("field_survey", "Field Survey", "Survey Completed", ("verification_review",)),
        WorkflowStep("verification_review", "Verification & Review", "Verified", ("beneficiary_approval",)),
        WorkflowStep("beneficiary_approval", "Beneficiary Approval", "Approved", ("sponsorship_matching",)),
        WorkflowStep("sponsorship_matching", "Sponsorship Matching", "Available for Sponsorship", ()),
    )
}

KNOWN_ROLES = frozenset({"user", "surveyor", "inquiry_officer", "moderator", "admin"})


def ensure_scores_mutable(status: SurveyStatus) -> None:
    if status in FROZEN_STATUSES:
        raise WorkflowError(f"Scores are frozen for a survey in status '{status.value}'")


def apply_survey_action(status: SurveyStatus, action: str) -> SurveyStatus:
    """Admin review of a submitted survey. Returns the new status."""
    if action not in SURVEY_ACTIONS:
        raise WorkflowError(f"Invalid action '{action}'")
    if status not in REVIEWABLE_STATUSES:
        raise WorkflowError(f"Cannot {action} a survey in status '{status.value}'")

    new_status = SURVEY_ACTIONS[action]
    logger.info("survey_action_applied", action=action, from_status=status.value, to_status=new_status.value)
    return new_status


def _missing_request_fields(request: SponsorshipRequest) -> list[str]:
    required = {
        "applicant_name": request.applicant_name,
        "father_name": request.father_name,
        "phone": request.phone,
        "full_address": request.full_address,
        "reason_for_request": request.reason_for_request,
    }
    return [name for name, value in required.items() if not value]


def _missing_survey_fields(survey: SurveyDocument) -> list[str]:
    required = {
        "personal_details": survey.personal_details,
        "family_members": survey.family_members,
        "housing_details": survey.housing_details,
        "income_expenses": survey.income_expenses,
        "officer_report": survey.officer_report,
        "photos": survey.photos,
    }
    return [name for name, value in required.items() if not value]


def validate_workflow(
    request: Optional[SponsorshipRequest],
    survey: Optional[SurveyDocument] = None,
    beneficiary_id: Optional[str] = None,
    user_role: Optional[str] = None,
) -> WorkflowValidation:
    errors: list[str] = []
    warnings: list[str] = []
    completed: list[str] = []
    current = "request_submission"

    if request is None:
        return _validation(current, completed, ["No request found"], warnings, with_next=False)

    missing = _missing_request_fields(request)
    if missing:
        errors.append(f"Request submission incomplete. Missing: {', '.join(missing)}")
    else:
        completed.append("request_submission")
        current = "admin_assignment"

    if request.assigned_officer and request.assigned_date:
        completed.append("admin_assignment")
        current = "field_survey"
    elif request.status == "assigned":
        warnings.append("Request marked as assigned but missing officer or date")

    if survey is not None:
        missing = _missing_survey_fields(survey)
        if not missing:
            completed.append("field_survey")
            current = "verification_review"
        elif survey.status == SurveyStatus.DRAFT:
            warnings.append(f"Survey in progress. Missing: {', '.join(missing)}")

        if survey.calculated_scores is not None and survey.status != SurveyStatus.DRAFT:
            completed.append("verification_review")
            current = "beneficiary_approval"

    if beneficiary_id:
        completed.append("beneficiary_approval")
        current = "sponsorship_matching"

    if user_role is not None and user_role not in KNOWN_ROLES:
        errors.append(f"Invalid user role: {user_role}")

    return _validation(current, completed, errors, warnings)


def _validation(
    current: str,
    completed: list[str],
    errors: list[str],
    warnings: list[str],
    with_next: bool = True,
) -> WorkflowValidation:
    step = WORKFLOW_STEPS[current]
    return WorkflowValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        current_step=current,
        current_step_name=step.display_name,
        completed_steps=completed,
        next_possible_steps=list(step.next_steps) if with_next else [],
        progress_percentage=round(len(completed) / len(WORKFLOW_STEPS) * 100, 2),
    )
