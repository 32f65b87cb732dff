"""Nutritional needs: calorie targets and keto macro splits."""

from keto_planner.config import parse_keto_profile
from keto_planner.domain.plans import KetoProfile
from keto_planner.domain.profile import ActivityLevel, Sex, UserProfile, WeightGoal
from keto_planner.domain.targets import MacroSplit, MacroTargets

DEFAULT_CALORIE_TARGET = 2000
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

MACRO_SPLITS: dict[KetoProfile, MacroSplit] = {
    KetoProfile.STANDARD: MacroSplit(75, 20, 5, 100),
    KetoProfile.WEIGHT_LOSS: MacroSplit(75, 20, 5, 100),
    KetoProfile.MASS_GAIN: MacroSplit(65, 30, 5, 150),
    KetoProfile.CYCLICAL: MacroSplit(70, 20, 10, 100),
    KetoProfile.HIGH_PROTEIN: MacroSplit(40, 50, 10, 200),
}

ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

LOSS_CALORIE_FACTOR = 0.8
GAIN_CALORIE_FACTOR = 1.1


def compute_nutritional_targets(
    calorie_target: float | None = None,
    keto_profile: KetoProfile | str | None = KetoProfile.STANDARD,
) -> MacroTargets:
    """Derive gram targets from a calorie target and a keto profile.

    The protein floor of the profile is applied first; the calories left after
    protein are split between fat and carbs in the ratio of their percentages.
    """
    calories = calorie_target or DEFAULT_CALORIE_TARGET
    split = MACRO_SPLITS[_resolve_profile(keto_profile)]

    protein = max(
        round(calories * split.protein_pct / 100 / KCAL_PER_G_PROTEIN),
        split.protein_floor_g,
    )
    remaining = max(0.0, calories - protein * KCAL_PER_G_PROTEIN)
    fat_carb_pct = split.fat_pct + split.carbs_pct
    fat = round(remaining * split.fat_pct / fat_carb_pct / KCAL_PER_G_FAT)
    carbs = round(remaining * split.carbs_pct / fat_carb_pct / KCAL_PER_G_CARBS)

    return MacroTargets(
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        net_carbs=carbs,
    )


def calculate_bmr(profile: UserProfile) -> float:
    """Return the basal metabolic rate (Mifflin-St Jeor)."""
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.sex == Sex.MALE:
        return base + 5
    return base - 161


def activity_factor(level: ActivityLevel) -> float:
    return ACTIVITY_FACTORS[level]


def calculate_calorie_needs(profile: UserProfile) -> int:
    """Return daily calories adjusted for the weight goal."""
    needs = calculate_bmr(profile) * activity_factor(profile.activity_level)
    goal = profile.weight_goal or _infer_goal(profile)
    if goal == WeightGoal.LOSE:
        needs *= LOSS_CALORIE_FACTOR
    elif goal == WeightGoal.GAIN:
        needs *= GAIN_CALORIE_FACTOR
    return round(needs)


def compute_profile_targets(profile: UserProfile) -> MacroTargets:
    """Return macro targets for a profile, deriving calories when not set."""
    calories = profile.calorie_target or calculate_calorie_needs(profile)
    return compute_nutritional_targets(calories, profile.keto_profile)


def _infer_goal(profile: UserProfile) -> WeightGoal:
    if profile.weight > profile.target_weight:
        return WeightGoal.LOSE
    if profile.weight < profile.target_weight:
        return WeightGoal.GAIN
    return WeightGoal.MAINTAIN


def _resolve_profile(keto_profile: KetoProfile | str | None) -> KetoProfile:
    if isinstance(keto_profile, KetoProfile):
        return keto_profile
    return parse_keto_profile(keto_profile)
