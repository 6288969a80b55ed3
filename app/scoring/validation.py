"""
Advisory checks on raw assessment input.

The engine scores whatever it is given; these checks only tell the caller
which parts of a survey were zeroed or clamped along the way.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from app.schemas.assessment_response import ValidationResult
from app.schemas.survey_request import FamilyMember, OfficerReport


def _is_negative(value: Optional[float]) -> bool:
    return value is not None and value < 0


def validate_assessment_data(
    total_earnings: Optional[float],
    total_expenses: Optional[float],
    family_size: Optional[float],
    family_members: Sequence[FamilyMember],
    officer_report: Optional[OfficerReport],
) -> ValidationResult:
    errors: list[str] = []

    if _is_negative(total_earnings):
        errors.append("Total income cannot be negative")
    if _is_negative(total_expenses):
        errors.append("Total expenses cannot be negative")
    if family_size is None or family_size <= 0:
        errors.append("Family size must be greater than 0")
    if not family_members:
        errors.append("At least one family member is required")

    officer_score = officer_report.officer_score if officer_report else None
    if officer_score is None:
        errors.append("Officer score is missing")
    elif not 0 <= officer_score <= 5:
        errors.append("Officer score must be between 0 and 5")

    for index, member in enumerate(family_members, start=1):
        if not (member.name or "").strip():
            errors.append(f"Family member {index}: Name is required")
        if member.age is None:
            errors.append(f"Family member {index}: Age is required")
        elif not 0 <= member.age <= 120:
            errors.append(f"Family member {index}: Age must be between 0 and 120")
        if _is_negative(member.monthly_income):
            errors.append(f"Family member {index}: Monthly income cannot be negative")

    return ValidationResult(is_valid=not errors, errors=errors)
