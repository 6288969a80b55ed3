"""
Unit tests for survey → engine input aggregation.
"""
from app.core.config import Settings
from app.schemas.survey_request import FamilyMember, HousingCondition, SurveyDocument
from app.services.household import (
    household_profile, infer_widow_headed, net_amount, reported_monthly_earnings,
    reported_monthly_expenses, survey_to_input, total_monthly_earnings, total_monthly_expenses,
)


def _make_survey(**kwargs) -> SurveyDocument:
    defaults = {
        "survey_id": "SUR-T01",
        "request_id": "REQ-T01",
        "status": "submitted",
        "personal_details": {"full_name": "Ayesha Begum", "father_name": "Abdul Karim", "district": "Hyderabad"},
        "family_members": [
            {"name": "Ayesha Begum", "age": 42, "relationship": "Wife", "monthly_income": 2_000.0},
            {"name": "Imran", "age": 12, "relationship": "Son", "is_dependent": True},
            {"name": "Sana", "age": 9, "relationship": "Daughter", "is_dependent": True, "has_disability": True},
            {"name": "Fatima Bi", "age": 68, "relationship": "Mother-in-law", "is_dependent": True},
        ],
        "housing_details": {
            "rent_amount": 1_500.0,
            "housing_condition": "poor",
            "utility_bills": {
                "electricity_bill_amount": 300.0,
                "gas_bill_amount": 200.0,
                "water_bill_amount": 100.0,
            },
        },
        "income_expenses": {
            "monthly_earnings": {"primary_income": 3_000.0, "secondary_income": 0.0, "other_earnings": 500.0},
            "monthly_expenses": {
                "rent": 0.0,
                "electricity_bill": 0.0,
                "education_expenses": 400.0,
                "medical_expenses": 600.0,
                "food_expenses": 2_500.0,
                "other_expenses": 200.0,
            },
        },
        "officer_report": {"officer_score": 4, "verification_status": "verified"},
        "photos": ["https://cdn.example.org/surveys/SUR-T01/house.jpg"],
    }
    defaults.update(kwargs)
    return SurveyDocument(**defaults)


class TestEarningsAndExpenses:
    def test_earnings_include_member_income(self):
        # 3000 + 500 own + 2000 from the wife
        assert total_monthly_earnings(_make_survey()) == 5_500.0

    def test_member_other_sources_counted(self):
        survey = _make_survey(family_members=[
            {"name": "A", "age": 40, "relationship": "Self", "monthly_income": 1_000.0, "income_from_other_sources": 250.0},
        ])
        assert total_monthly_earnings(survey) == 4_750.0

    def test_expenses_fall_back_to_housing_block(self):
        # rent 1500 (housing) + electricity 300 (housing) + 3700 block + gas 200 + water 100
        assert total_monthly_expenses(_make_survey()) == 5_800.0

    def test_rent_counted_once(self):
        survey = _make_survey()
        survey.income_expenses.monthly_expenses.rent = 1_000.0
        assert total_monthly_expenses(survey) == 5_300.0

    def test_net_amount_can_be_negative(self):
        assert net_amount(_make_survey()) == -300.0

    def test_missing_blocks_default_to_zero(self):
        survey = SurveyDocument(survey_id="SUR-EMPTY")
        assert total_monthly_earnings(survey) == 0.0
        assert total_monthly_expenses(survey) == 0.0

    def test_negative_amounts_ignored(self):
        survey = _make_survey(family_members=[{"name": "A", "relationship": "Self", "monthly_income": -900.0}])
        assert total_monthly_earnings(survey) == 3_500.0

    def test_reported_totals_keep_negative_entries(self):
        survey = _make_survey()
        survey.income_expenses.monthly_earnings.primary_income = -5_000.0
        survey.income_expenses.monthly_expenses.food_expenses = -100.0

        assert total_monthly_earnings(survey) == 2_500.0
        assert reported_monthly_earnings(survey) == -2_500.0
        assert total_monthly_expenses(survey) == 3_300.0
        assert reported_monthly_expenses(survey) == 3_200.0

    def test_negative_rent_is_reported_not_replaced(self):
        survey = _make_survey()
        survey.income_expenses.monthly_expenses.rent = -200.0

        # the engine total still falls back to the housing rent
        assert total_monthly_expenses(survey) == 5_800.0
        assert reported_monthly_expenses(survey) == 4_100.0

    def test_reported_equals_total_for_clean_survey(self):
        survey = _make_survey()
        assert reported_monthly_earnings(survey) == total_monthly_earnings(survey)
        assert reported_monthly_expenses(survey) == total_monthly_expenses(survey)


class TestWidowInference:
    def test_wife_without_husband(self):
        assert infer_widow_headed([FamilyMember(relationship="Wife")])

    def test_case_insensitive(self):
        assert infer_widow_headed([FamilyMember(relationship="WIFE"), FamilyMember(relationship="son")])

    def test_husband_flips_to_false(self):
        members = [FamilyMember(relationship="Wife"), FamilyMember(relationship="Husband")]
        assert not infer_widow_headed(members)

    def test_no_wife(self):
        assert not infer_widow_headed([FamilyMember(relationship="Self")])

    def test_empty_household(self):
        assert not infer_widow_headed([])


class TestSurveyToInput:
    def test_full_survey(self):
        survey_input = survey_to_input(_make_survey())

        assert survey_input.total_earnings == 5_500.0
        assert survey_input.total_expenses == 5_800.0
        assert survey_input.family_size == 4
        assert survey_input.housing_condition == HousingCondition.POOR
        assert survey_input.officer_score == 4.0
        assert survey_input.is_widow_headed is True
        assert survey_input.per_capita_income == -75.0

    def test_empty_survey_is_scorable(self):
        survey_input = survey_to_input(SurveyDocument(survey_id="SUR-EMPTY"))

        assert survey_input.family_size == 1
        assert survey_input.family_members == ()
        assert survey_input.housing_condition == HousingCondition.FAIR
        assert survey_input.officer_score == 0.0
        assert survey_input.is_widow_headed is False

    def test_housing_default_comes_from_settings(self, monkeypatch):
        monkeypatch.setattr(
            "app.services.household.get_settings",
            lambda: Settings(default_housing_condition="poor"),
        )

        assert survey_to_input(SurveyDocument(survey_id="SUR-EMPTY")).housing_condition == HousingCondition.POOR
        garbled = _make_survey(housing_details={"housing_condition": "palace"})
        assert survey_to_input(garbled).housing_condition == HousingCondition.POOR
        assert survey_to_input(_make_survey()).housing_condition == HousingCondition.POOR
        very_poor = _make_survey(housing_details={"housing_condition": "Very Poor"})
        assert survey_to_input(very_poor).housing_condition == HousingCondition.VERY_POOR

    def test_profile(self):
        profile = household_profile(_make_survey().family_members)

        assert profile.family_size == 4
        assert profile.dependents_count == 3
        assert profile.has_disabled_members
        assert profile.has_elderly_dependents
        assert profile.is_widow_headed
