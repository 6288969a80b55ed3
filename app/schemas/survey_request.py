"""
Inbound payloads from the sponsorship application.

Two shapes are accepted:
  - AssessmentRequest: the flattened seven-field input the engine scores.
  - SurveyDocument: the field officer's full survey, aggregated here into
    the flattened form before scoring.

Fields are deliberately lenient (mostly Optional, no range limits) so that a
partially filled survey can still be scored provisionally. Range problems are
reported by app.scoring.validation instead of being rejected with a 422.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.assessment_response import AssessmentScores


# ── Enums matching the welfare domain ──

class HousingCondition(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    PARTIALLY_VERIFIED = "partially_verified"
    UNVERIFIED = "unverified"


class SurveyStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    REVISION_REQUIRED = "revision_required"
    APPROVED = "approved"
    VERIFIED = "verified"
    REJECTED = "rejected"


# ── Sub-models ──

class FamilyMember(BaseModel):
    """One household member as recorded by the field officer."""
    name: Optional[str] = None
    age: Optional[float] = None
    relationship: str = Field("", description="Free text, e.g. 'Self', 'Wife', 'Son'")
    is_dependent: bool = False
    has_disability: bool = False
    marital_status: Optional[str] = Field(None, description="single | married | divorced | widowed")
    monthly_income: Optional[float] = None
    income_from_other_sources: Optional[float] = None
    social_status: list[str] = Field(
        default_factory=list,
        description="Tags such as widow, orphan, disabled_head, old_generation",
    )


class OfficerReport(BaseModel):
    """Inquiry officer's independent qualitative assessment."""
    officer_score: Optional[float] = Field(None, description="0-5 scale, clamped by the engine")
    verification_status: Optional[VerificationStatus] = None
    officer_recommendation: Optional[str] = None
    housing_condition_notes: Optional[str] = None
    employment_verification: Optional[str] = None
    neighbor_references: Optional[str] = None
    additional_notes: Optional[str] = None


class MonthlyEarnings(BaseModel):
    primary_income: Optional[float] = None
    secondary_income: Optional[float] = None
    other_earnings: Optional[float] = None


class MonthlyExpenses(BaseModel):
    rent: Optional[float] = None
    electricity_bill: Optional[float] = None
    education_expenses: Optional[float] = None
    medical_expenses: Optional[float] = None
    food_expenses: Optional[float] = None
    other_expenses: Optional[float] = None


class IncomeExpenses(BaseModel):
    monthly_earnings: MonthlyEarnings = Field(default_factory=MonthlyEarnings)
    monthly_expenses: MonthlyExpenses = Field(default_factory=MonthlyExpenses)
    other_earnings_source: Optional[str] = None


class UtilityBills(BaseModel):
    electricity_bill_amount: Optional[float] = None
    gas_bill_amount: Optional[float] = None
    water_bill_amount: Optional[float] = None


class HousingDetails(BaseModel):
    house_type: Optional[str] = Field(None, description="owned | rented | shared | hut | temporary")
    toilet_facility: Optional[str] = None
    water_connection: Optional[bool] = None
    electricity_connection: Optional[bool] = None
    rent_amount: Optional[float] = None
    housing_condition: Optional[str] = Field(None, description="good | fair | poor | very_poor")
    utility_bills: UtilityBills = Field(default_factory=UtilityBills)


class PersonalDetails(BaseModel):
    full_name: str
    father_name: Optional[str] = None
    aadhaar: Optional[str] = None
    contact_number: Optional[str] = None
    full_address: Optional[str] = None
    district: Optional[str] = None


# ── Top-level requests ──

class AssessmentRequest(BaseModel):
    """
    POST /v1/assessment/calculate

    The flattened engine input. The caller has already aggregated the survey.
    When is_widow_headed is omitted it is inferred from family_members.
    """
    total_earnings: Optional[float] = None
    total_expenses: Optional[float] = None
    family_size: Optional[float] = None
    family_members: list[FamilyMember] = Field(default_factory=list)
    housing_condition: Optional[str] = None
    officer_report: Optional[OfficerReport] = None
    is_widow_headed: Optional[bool] = None


class SurveyDocument(BaseModel):
    """
    POST /v1/assessment/survey

    A field survey as stored by the sponsorship application.
    """
    survey_id: str
    request_id: Optional[str] = None
    status: SurveyStatus = SurveyStatus.DRAFT
    personal_details: Optional[PersonalDetails] = None
    family_members: list[FamilyMember] = Field(default_factory=list)
    housing_details: Optional[HousingDetails] = None
    income_expenses: Optional[IncomeExpenses] = None
    officer_report: Optional[OfficerReport] = None
    photos: list[str] = Field(default_factory=list, description="Uploaded photo URLs")
    calculated_scores: Optional[AssessmentScores] = None


class SponsorshipRequest(BaseModel):
    """The applicant's initial request, before any survey."""
    request_id: str
    applicant_name: Optional[str] = None
    father_name: Optional[str] = None
    phone: Optional[str] = None
    full_address: Optional[str] = None
    reason_for_request: Optional[str] = None
    status: str = "pending"
    assigned_officer: Optional[str] = None
    assigned_date: Optional[datetime] = None


class BeneficiaryCardRequest(BaseModel):
    """POST /v1/beneficiary/card"""
    survey: SurveyDocument
    approved_by: str = Field(description="Id of the approving admin / moderator")


class WorkflowRequest(BaseModel):
    """POST /v1/beneficiary/workflow"""
    request: Optional[SponsorshipRequest] = None
    survey: Optional[SurveyDocument] = None
    beneficiary_id: Optional[str] = Field(None, description="Set once a beneficiary card exists")
    user_role: Optional[str] = None
