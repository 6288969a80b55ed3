"""
Household Aggregation

Flattens a field survey into the figures the assessment engine scores:

Earnings:
    Primary + Secondary + Other earnings
    + every member's monthly income and income from other sources

Expenses:
    Rent + Electricity + Education + Medical + Food + Other
    + Gas and Water bills from the housing block
    Rent and electricity fall back to the housing block when the expense
    block leaves them empty. Each item is counted once.

The reported_* totals keep negative entries so validation can flag them;
the engine only ever sees the clamped totals.

Widow-headed:
    Some member's relationship contains "wife" and none contains "husband".
"""
from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from app.core.config import get_settings
from app.schemas.survey_request import FamilyMember, HousingCondition, SurveyDocument
from app.scoring.factors import ELDERLY_AGE
from app.scoring.normalization import (
    SurveyInput,
    build_survey_input,
    clamp_family_size,
    normalize_housing_condition,
    to_amount,
)


@dataclass(frozen=True)
class HouseholdProfile:
    family_size: int
    dependents_count: int
    has_disabled_members: bool
    has_elderly_dependents: bool
    is_widow_headed: bool


def infer_widow_headed(members: Sequence[FamilyMember]) -> bool:
    """Case-insensitive substring match: a "wife" entry and no "husband" entry."""
    relations = [(m.relationship or "").lower() for m in members]
    return any("wife" in r for r in relations) and not any("husband" in r for r in relations)


def _signed_amount(value: Any) -> float:
    """Like to_amount, but keeps the sign so validation can see negative entries."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def _earning_values(survey: SurveyDocument) -> list[Any]:
    values: list[Any] = []
    if survey.income_expenses is not None:
        earnings = survey.income_expenses.monthly_earnings
        values += [earnings.primary_income, earnings.secondary_income, earnings.other_earnings]
    for m in survey.family_members:
        values += [m.monthly_income, m.income_from_other_sources]
    return values


def _expense_amounts(survey: SurveyDocument, amount: Callable[[Any], float]) -> list[float]:
    expenses = survey.income_expenses.monthly_expenses if survey.income_expenses else None
    housing = survey.housing_details
    bills = housing.utility_bills if housing else None

    return [
        amount(expenses and expenses.rent) or amount(housing and housing.rent_amount),
        amount(expenses and expenses.electricity_bill) or amount(bills and bills.electricity_bill_amount),
        amount(expenses and expenses.education_expenses),
        amount(expenses and expenses.medical_expenses),
        amount(expenses and expenses.food_expenses),
        amount(expenses and expenses.other_expenses),
        amount(bills and bills.gas_bill_amount),
        amount(bills and bills.water_bill_amount),
    ]


def total_monthly_earnings(survey: SurveyDocument) -> float:
    return round(sum(to_amount(v) for v in _earning_values(survey)), 2)


def total_monthly_expenses(survey: SurveyDocument) -> float:
    return round(sum(_expense_amounts(survey, to_amount)), 2)


def reported_monthly_earnings(survey: SurveyDocument) -> float:
    """Earnings as entered, negatives included. Only for validation."""
    return round(sum(_signed_amount(v) for v in _earning_values(survey)), 2)


def reported_monthly_expenses(survey: SurveyDocument) -> float:
    return round(sum(_expense_amounts(survey, _signed_amount)), 2)


def net_amount(survey: SurveyDocument) -> float:
    return round(total_monthly_earnings(survey) - total_monthly_expenses(survey), 2)


def household_family_size(survey: SurveyDocument) -> int:
    return clamp_family_size(len(survey.family_members))


def household_housing_condition(survey: SurveyDocument) -> HousingCondition:
    housing = survey.housing_details
    return normalize_housing_condition(
        housing and housing.housing_condition,
        get_settings().default_housing_condition,
    )


def household_profile(members: Sequence[FamilyMember]) -> HouseholdProfile:
    return HouseholdProfile(
        family_size=clamp_family_size(len(members)),
        dependents_count=sum(1 for m in members if m.is_dependent),
        has_disabled_members=any(m.has_disability for m in members),
        has_elderly_dependents=any(
            m.is_dependent and m.age is not None and m.age >= ELDERLY_AGE for m in members
        ),
        is_widow_headed=infer_widow_headed(members),
    )


def survey_to_input(survey: SurveyDocument) -> SurveyInput:
    """Main entry point: survey document → normalized engine input."""
    return build_survey_input(
        total_earnings=total_monthly_earnings(survey),
        total_expenses=total_monthly_expenses(survey),
        family_size=household_family_size(survey),
        family_members=survey.family_members,
        housing_condition=household_housing_condition(survey),
        officer_report=survey.officer_report,
        is_widow_headed=infer_widow_headed(survey.family_members),
    )
