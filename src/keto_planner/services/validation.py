"""Macro target validation and plan structure checks."""

from collections.abc import Mapping, Sequence
from datetime import date, datetime

from keto_planner.config import parse_keto_profile
from keto_planner.domain.nutrition import NutritionValues
from keto_planner.domain.plans import KetoProfile, MealPlan, PlanValidation
from keto_planner.domain.targets import (
    DayMacroReport,
    MacroTargets,
    MacroTolerances,
    MacroVerdict,
    PlanMacroAnalysis,
)
from keto_planner.services.catalog import FoodLookup, RecipeLookup
from keto_planner.services.nutrition import aggregate_day_nutrition

DEFAULT_TOLERANCES = MacroTolerances(calories=15, protein=15, fat=20, carbs=25)
PROTEIN_PRECISE_TOLERANCES = MacroTolerances(calories=15, protein=10, fat=20, carbs=25)
_PROTEIN_PRECISE_PROFILES = {KetoProfile.MASS_GAIN, KetoProfile.HIGH_PROTEIN}


def tolerances_for(keto_profile: KetoProfile | str | None) -> MacroTolerances:
    """Return the tolerance bands of a keto profile."""
    if not isinstance(keto_profile, KetoProfile):
        keto_profile = parse_keto_profile(keto_profile)
    if keto_profile in _PROTEIN_PRECISE_PROFILES:
        return PROTEIN_PRECISE_TOLERANCES
    return DEFAULT_TOLERANCES


def validate_macro_targets(
    totals: NutritionValues,
    targets: MacroTargets,
    keto_profile: KetoProfile | str | None = KetoProfile.STANDARD,
) -> MacroVerdict:
    """Compare totals against targets; carbs are checked as net carbs."""
    tolerances = tolerances_for(keto_profile)
    deviations = {
        "calories": _deviation(totals.calories, targets.calories),
        "protein": _deviation(totals.protein, targets.protein),
        "fat": _deviation(totals.fat, targets.fat),
        "carbs": _deviation(totals.net_carbs, targets.carbs),
    }
    return MacroVerdict(
        calories_ok=deviations["calories"] <= tolerances.calories,
        protein_ok=deviations["protein"] <= tolerances.protein,
        fat_ok=deviations["fat"] <= tolerances.fat,
        carbs_ok=deviations["carbs"] <= tolerances.carbs,
        deviations={axis: round(value, 1) for axis, value in deviations.items()},
        tolerances=tolerances,
    )


def validate_meal_plan(plan: MealPlan | Mapping[str, object]) -> PlanValidation:
    """Check the structure of a plan or of a raw plan payload."""
    if isinstance(plan, MealPlan):
        raw: Mapping[str, object] = {
            "id": plan.id,
            "startDate": plan.start_date,
            "endDate": plan.end_date,
            "days": plan.days,
            "ketoProfile": plan.keto_profile.value,
        }
    else:
        raw = plan

    if not raw.get("id"):
        return PlanValidation(False, "Missing plan id")
    if not raw.get("startDate") or not raw.get("endDate"):
        return PlanValidation(False, "Missing start or end date")

    start = _as_date(raw["startDate"])
    end = _as_date(raw["endDate"])
    if start is None or end is None:
        return PlanValidation(False, "Invalid dates")
    if start > end:
        return PlanValidation(False, "Start date must not be after end date")

    days = raw.get("days")
    if not isinstance(days, Sequence) or isinstance(days, str | bytes):
        return PlanValidation(False, "Days are missing or not a sequence")

    profile = raw.get("ketoProfile")
    if profile is not None and not isinstance(profile, str):
        return PlanValidation(False, f"Invalid keto profile: {profile!r}")
    if profile and profile not in {item.value for item in KetoProfile}:
        return PlanValidation(False, f"Unknown keto profile: {profile}")

    return PlanValidation(True)


def analyze_plan_macros(
    plan: MealPlan,
    targets: MacroTargets,
    foods: FoodLookup,
    recipes: RecipeLookup,
) -> PlanMacroAnalysis:
    """Validate every day that has meals against the targets."""
    reports: list[DayMacroReport] = []
    for index, day in enumerate(plan.days):
        if not day.meals:
            continue
        totals = aggregate_day_nutrition(day, foods, recipes)
        reports.append(
            DayMacroReport(
                day_index=index,
                date=day.date,
                totals=totals,
                verdict=validate_macro_targets(totals, targets, plan.keto_profile),
            )
        )
    return PlanMacroAnalysis(
        total_days=len(plan.days),
        days_with_meals=len(reports),
        days=reports,
    )


def _deviation(actual: float, target: float) -> float:
    if target == 0:
        return 0.0 if actual == 0 else 100.0
    return abs(actual - target) / target * 100


def _as_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None
