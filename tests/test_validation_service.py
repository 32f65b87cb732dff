"""Tests for macro verdicts and plan structure checks."""

from datetime import datetime

from keto_planner.domain.nutrition import NutritionValues
from keto_planner.domain.plans import FoodItem, KetoProfile
from keto_planner.domain.targets import MacroTargets
from keto_planner.services.catalog import InMemoryCatalog
from keto_planner.services.plans import create_empty_plan
from keto_planner.services.validation import (
    analyze_plan_macros,
    tolerances_for,
    validate_macro_targets,
    validate_meal_plan,
)
from tests.conftest import make_meal, make_plan


def _on_target(**overrides) -> NutritionValues:
    values = {
        "calories": 2000,
        "protein": 100,
        "fat": 167,
        "carbs": 25,
        "net_carbs": 25,
    }
    values.update(overrides)
    return NutritionValues(**values)


def test_totals_on_target_are_valid(targets: MacroTargets) -> None:
    verdict = validate_macro_targets(_on_target(), targets)
    assert verdict.valid
    assert verdict.deviations == {
        "calories": 0,
        "protein": 0,
        "fat": 0,
        "carbs": 0,
    }


def test_protein_tolerance_depends_on_profile(targets: MacroTargets) -> None:
    totals = _on_target(protein=112)

    standard = validate_macro_targets(totals, targets, KetoProfile.STANDARD)
    high_protein = validate_macro_targets(totals, targets, "hyperproteine")

    assert standard.protein_ok
    assert not high_protein.protein_ok
    assert not high_protein.valid
    assert high_protein.failed_axes == ["protein"]
    assert high_protein.deviations["protein"] == 12.0


def test_carbs_axis_compares_net_carbs(targets: MacroTargets) -> None:
    verdict = validate_macro_targets(_on_target(carbs=60, net_carbs=25), targets)
    assert verdict.carbs_ok


def test_zero_target_does_not_divide_by_zero() -> None:
    targets = MacroTargets(calories=2000, protein=100, fat=167, carbs=0, net_carbs=0)

    exact = validate_macro_targets(_on_target(net_carbs=0), targets)
    over = validate_macro_targets(_on_target(net_carbs=5), targets)

    assert exact.deviations["carbs"] == 0
    assert over.deviations["carbs"] == 100
    assert not over.carbs_ok


def test_deviations_are_rounded(targets: MacroTargets) -> None:
    verdict = validate_macro_targets(_on_target(fat=180), targets)
    assert verdict.deviations["fat"] == 7.8
    assert verdict.fat_ok


def test_tolerances_for_profiles() -> None:
    assert tolerances_for(KetoProfile.MASS_GAIN).protein == 10
    assert tolerances_for("standard").protein == 15
    assert tolerances_for(None).carbs == 25


def test_validate_meal_plan_accepts_created_plan() -> None:
    plan = create_empty_plan(None, "2024-03-04", "2024-03-10")
    assert validate_meal_plan(plan).valid


def test_validate_meal_plan_reports_structure_errors() -> None:
    raw = {
        "id": "plan-1",
        "startDate": "2024-03-04",
        "endDate": "2024-03-10",
        "days": [],
        "ketoProfile": "standard",
    }

    assert validate_meal_plan(raw).valid
    assert not validate_meal_plan({**raw, "id": ""}).valid
    assert validate_meal_plan({**raw, "endDate": None}).error == (
        "Missing start or end date"
    )
    assert validate_meal_plan({**raw, "startDate": "nope"}).error == "Invalid dates"
    assert not validate_meal_plan({**raw, "startDate": "2024-03-11"}).valid
    assert not validate_meal_plan({**raw, "days": "monday"}).valid
    assert not validate_meal_plan({**raw, "ketoProfile": "paleo"}).valid
    assert not validate_meal_plan({**raw, "ketoProfile": ["standard"]}).valid
    assert not validate_meal_plan({**raw, "ketoProfile": {"name": "standard"}}).valid


def test_validate_meal_plan_accepts_datetimes() -> None:
    raw = {
        "id": "plan-1",
        "startDate": datetime(2024, 3, 4, 8, 30),
        "endDate": datetime(2024, 3, 4, 7, 0),
        "days": [],
    }
    assert validate_meal_plan(raw).valid


def test_analyze_plan_macros_skips_empty_days(
    catalog: InMemoryCatalog, targets: MacroTargets
) -> None:
    plan = make_plan(
        [
            [make_meal("m1", FoodItem(id="egg", quantity=100))],
            [],
        ]
    )

    analysis = analyze_plan_macros(plan, targets, catalog, catalog)

    assert analysis.total_days == 2
    assert analysis.days_with_meals == 1
    assert analysis.days[0].day_index == 0
    assert analysis.days[0].totals.calories == 155
    assert not analysis.overall_valid
    assert analysis.days_meeting("calories") == 0
