"""
Assessment Model: 4 Factor Definitions

Each factor:
  1. Takes normalized input (see normalization.py)
  2. Maps it to a bin
  3. Returns a sub-score in [0, 5] for that bin

Convention: HIGHER score = HIGHER need (priority for support).

Dependents and social status first accumulate an indicator weight, then band
the weight with WEIGHT_BANDS. Banding is what caps stacked indicators at 5.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.schemas.survey_request import HousingCondition
from app.scoring.normalization import MAX_SUB_SCORE, Member

ADULT_AGE = 18
ELDERLY_AGE = 60

UNMARRIED_STATUSES = frozenset({"single", "unmarried", "divorced", "widowed"})


@dataclass(frozen=True)
class FactorResult:
    factor_name: str
    raw_value: str
    bin_label: str
    score: float
    weight: float = 0.0


@dataclass(frozen=True)
class DependentWeights:
    disabled_member: float = 2.0
    elderly: float = 1.5
    elderly_parent: float = 1.5
    child: float = 0.8
    spouse: float = 1.0
    unmarried_daughter: float = 1.2
    other_adult: float = 0.5


@dataclass(frozen=True)
class SocialStatusWeights:
    widow: float = 2.0
    orphan: float = 2.5
    disabled: float = 2.0
    female_headed: float = 1.5
    housing_good: float = 0.0
    housing_fair: float = 0.5
    housing_poor: float = 1.5
    housing_very_poor: float = 2.5

    def housing(self, condition: HousingCondition) -> float:
        return {
            HousingCondition.GOOD: self.housing_good,
            HousingCondition.FAIR: self.housing_fair,
            HousingCondition.POOR: self.housing_poor,
            HousingCondition.VERY_POOR: self.housing_very_poor,
        }[condition]


# ═══════════════════════════════════════════════════════════════
# Weight → score bands, shared by dependents and social status
# ═══════════════════════════════════════════════════════════════
WEIGHT_BANDS = [
    (8.0, 5.0, "≥8 (Severe)"),
    (6.0, 4.0, "6-8 (High)"),
    (4.0, 3.0, "4-6 (Elevated)"),
    (2.0, 2.0, "2-4 (Moderate)"),
    (1.0, 1.0, "1-2 (Low)"),
]


def _band_weight(factor_name: str, raw_value: str, weight: float) -> FactorResult:
    for threshold, score, label in WEIGHT_BANDS:
        if weight >= threshold:
            return FactorResult(factor_name, raw_value, label, score, weight)
    return FactorResult(factor_name, raw_value, "<1 (Minimal)", 0.0, weight)


# ═══════════════════════════════════════════════════════════════
# 1. FINANCIAL
#    Per-capita income = (earnings - expenses) / family size, ₹/month
# ═══════════════════════════════════════════════════════════════
FINANCIAL_BANDS = [
    (500.0, 5.0, "0-500"),
    (750.0, 4.0, "500-750"),
    (1000.0, 3.0, "750-1000"),
    (1500.0, 2.0, "1000-1500"),
    (2000.0, 1.0, "1500-2000"),
]


def score_financial(per_capita_income: float) -> FactorResult:
    raw = f"{per_capita_income:.2f}"

    if per_capita_income < 0:
        return FactorResult("Financial", raw, "<0 (Deficit)", 5.0)

    for upper, score, label in FINANCIAL_BANDS:
        if per_capita_income <= upper:
            return FactorResult("Financial", raw, label, score)
    return FactorResult("Financial", raw, ">2000", 0.0)


# ═══════════════════════════════════════════════════════════════
# 2. DEPENDENTS
#    Disability counts for every member; the rest only for dependents.
#    Household size on its own earns nothing.
# ═══════════════════════════════════════════════════════════════
def member_dependency_weight(member: Member, weights: DependentWeights = DependentWeights()) -> float:
    weight = weights.disabled_member if member.is_disabled else 0.0
    if not member.is_dependent:
        return weight

    age = member.age
    if age is not None and age >= ELDERLY_AGE:
        weight += weights.elderly
    elif (age is not None and age < ADULT_AGE) or (age is None and member.relates_to("son", "daughter")):
        weight += weights.child
    elif member.relates_to("father", "mother"):
        weight += weights.elderly_parent
    elif member.relates_to("spouse", "wife", "husband"):
        weight += weights.spouse
    elif member.relates_to("daughter") and member.marital_status in UNMARRIED_STATUSES:
        weight += weights.unmarried_daughter
    else:
        weight += weights.other_adult
    return weight


def score_dependents(
    members: Sequence[Member],
    weights: DependentWeights = DependentWeights(),
) -> FactorResult:
    dependents = sum(1 for m in members if m.is_dependent)
    total = sum(member_dependency_weight(m, weights) for m in members)
    return _band_weight("Dependents", f"{dependents} dependents", round(total, 2))


# ═══════════════════════════════════════════════════════════════
# 3. SOCIAL STATUS
#    Widow-headed, orphans, disabled members, female-headed, housing
# ═══════════════════════════════════════════════════════════════
def has_orphans(members: Sequence[Member]) -> bool:
    """A tagged orphan, or a minor son/daughter in a household with no father/mother entry."""
    if any("orphan" in m.social_status for m in members):
        return True
    if any(m.relates_to("father", "mother") for m in members):
        return False
    return any(
        m.relates_to("son", "daughter") and m.age is not None and m.age < ADULT_AGE
        for m in members
    )


def is_female_headed(members: Sequence[Member]) -> bool:
    """No adult earner outside wife/daughter relationships. Unknown for an empty household."""
    if not members:
        return False
    adult_male_earners = [
        m for m in members
        if (m.age is None or m.age >= ADULT_AGE)
        and m.monthly_income > 0
        and not m.relates_to("wife", "daughter")
    ]
    return not adult_male_earners


def score_social_status(
    members: Sequence[Member],
    housing_condition: HousingCondition,
    is_widow_headed: bool,
    weights: SocialStatusWeights = SocialStatusWeights(),
) -> FactorResult:
    weight = 0.0
    indicators: list[str] = []

    if is_widow_headed:
        weight += weights.widow
        indicators.append("widow")
    if has_orphans(members):
        weight += weights.orphan
        indicators.append("orphan")

    disabled = sum(1 for m in members if m.is_disabled)
    if disabled:
        weight += disabled * weights.disabled
        indicators.append(f"disabled x{disabled}")

    if is_female_headed(members):
        weight += weights.female_headed
        indicators.append("female_headed")

    weight += weights.housing(housing_condition)
    indicators.append(f"housing={housing_condition.value}")

    return _band_weight("SocialStatus", ", ".join(indicators), round(weight, 2))


# ═══════════════════════════════════════════════════════════════
# 4. OFFICER
#    Inquiry officer's own 0-5 score, already clamped by normalization
# ═══════════════════════════════════════════════════════════════
def score_officer(officer_score: float) -> FactorResult:
    score = max(0.0, min(MAX_SUB_SCORE, officer_score))
    return FactorResult("Officer", f"{score:g}", "officer report", score)
