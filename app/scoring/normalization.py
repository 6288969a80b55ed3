"""
Input normalization for the assessment engine.

Every defaulting rule lives here, so the scoring code can assume clean input:
  - amounts: None / NaN / inf / negative / uncoercible  → 0.0
  - family size: anything below 1                       → 1
  - ages: clamped to 0-120, missing or unparseable stays None (unknown)
  - housing condition: unknown labels                   → fair (overridable)
  - officer score: clamped to 0-5, missing              → 0.0

Nothing in this module raises for bad survey data.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from app.schemas.survey_request import HousingCondition

MAX_AGE = 120.0
MAX_SUB_SCORE = 5.0
DEFAULT_HOUSING_CONDITION = HousingCondition.FAIR

# Social-status tags that mark a member as disabled even when has_disability is unset
DISABILITY_TAGS = frozenset({"disabled", "disabled_head", "disabled_head_child", "handicapped_individual"})

_TRUTHY = frozenset({"true", "yes", "y", "1"})


@dataclass(frozen=True)
class Member:
    name: str = ""
    age: Optional[float] = None
    relationship: str = ""
    is_dependent: bool = False
    has_disability: bool = False
    marital_status: str = ""
    monthly_income: float = 0.0
    social_status: tuple[str, ...] = ()

    def relates_to(self, *terms: str) -> bool:
        """Case-insensitive substring match on the relationship text."""
        relation = self.relationship.lower()
        return any(term in relation for term in terms)

    @property
    def is_disabled(self) -> bool:
        return self.has_disability or any(tag in DISABILITY_TAGS for tag in self.social_status)


@dataclass(frozen=True)
class SurveyInput:
    total_earnings: float
    total_expenses: float
    family_size: int
    family_members: tuple[Member, ...]
    housing_condition: HousingCondition
    officer_score: float
    is_widow_headed: bool

    @property
    def per_capita_income(self) -> float:
        return (self.total_earnings - self.total_expenses) / max(1, self.family_size)


# ── Scalars ──

def to_amount(value: Any) -> float:
    """Non-negative finite float, 0.0 for anything else."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return 0.0
    return amount


def to_score(value: Any, upper: float = MAX_SUB_SCORE) -> float:
    return min(to_amount(value), upper)


def to_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return False


def to_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def clamp_family_size(value: Any) -> int:
    return max(1, int(to_amount(value)))


def normalize_age(value: Any) -> Optional[float]:
    """Garbled ages are unknown, not zero: 0 would read as a newborn."""
    if value is None or isinstance(value, bool):
        return None
    try:
        age = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(age) or age < 0:
        return None
    return min(age, MAX_AGE)


def normalize_housing_condition(
    value: Any,
    default: HousingCondition = DEFAULT_HOUSING_CONDITION,
) -> HousingCondition:
    if isinstance(value, HousingCondition):
        return value
    label = to_text(value).lower().replace(" ", "_").replace("-", "_")
    try:
        return HousingCondition(label)
    except ValueError:
        return default


# ── Composite inputs ──

def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def normalize_member(raw: Any) -> Member:
    """Accepts a Member, a mapping with snake_case keys, or any object with those attributes."""
    if isinstance(raw, Member):
        return raw
    if raw is None:
        return Member()

    tags = _field(raw, "social_status") or ()
    if isinstance(tags, str):
        tags = (tags,)

    return Member(
        name=to_text(_field(raw, "name")),
        age=normalize_age(_field(raw, "age")),
        relationship=to_text(_field(raw, "relationship")),
        is_dependent=to_flag(_field(raw, "is_dependent")),
        has_disability=to_flag(_field(raw, "has_disability")),
        marital_status=to_text(_field(raw, "marital_status")).lower(),
        monthly_income=to_amount(_field(raw, "monthly_income")),
        social_status=tuple(to_text(t).lower() for t in tags if to_text(t)),
    )


def normalize_members(raw: Optional[Iterable[Any]]) -> tuple[Member, ...]:
    if raw is None or isinstance(raw, (str, bytes, Mapping)):
        return ()
    try:
        return tuple(normalize_member(m) for m in raw)
    except TypeError:
        return ()


def officer_score_of(report: Any) -> float:
    """Officer report may arrive as a model, a mapping, a bare number or nothing."""
    if report is None:
        return 0.0
    if isinstance(report, (int, float, str)) and not isinstance(report, bool):
        return to_score(report)
    return to_score(_field(report, "officer_score"))


def build_survey_input(
    total_earnings: Any,
    total_expenses: Any,
    family_size: Any,
    family_members: Any,
    housing_condition: Any,
    officer_report: Any,
    is_widow_headed: Any = False,
    default_housing_condition: HousingCondition = DEFAULT_HOUSING_CONDITION,
) -> SurveyInput:
    return SurveyInput(
        total_earnings=to_amount(total_earnings),
        total_expenses=to_amount(total_expenses),
        family_size=clamp_family_size(family_size),
        family_members=normalize_members(family_members),
        housing_condition=normalize_housing_condition(housing_condition, default_housing_condition),
        officer_score=officer_score_of(officer_report),
        is_widow_headed=to_flag(is_widow_headed),
    )
