"""Dependency container wiring for the planner."""

from collections.abc import Iterable
from dataclasses import dataclass

from keto_planner.app_logging import configure_logging
from keto_planner.config import PlannerSettings, parse_keto_profile
from keto_planner.domain.catalog import Food, Recipe
from keto_planner.domain.plans import KetoProfile
from keto_planner.domain.targets import MacroTargets
from keto_planner.services.catalog import InMemoryCatalog
from keto_planner.services.nutrition import NutritionAggregator
from keto_planner.services.plans import MealPlanEditor
from keto_planner.services.shopping import ShoppingListGenerator
from keto_planner.services.targets import compute_nutritional_targets
from keto_planner.services.weight import WeightTracker


@dataclass
class PlannerContainer:
    """Holds planner-wide dependencies."""

    settings: PlannerSettings
    catalog: InMemoryCatalog
    keto_profile: KetoProfile
    targets: MacroTargets
    nutrition: NutritionAggregator
    editor: MealPlanEditor
    shopping_generator: ShoppingListGenerator
    weight_tracker: WeightTracker


def build_container(
    settings: PlannerSettings | None = None,
    foods: Iterable[Food] = (),
    recipes: Iterable[Recipe] = (),
    keto_profile: KetoProfile | str | None = KetoProfile.STANDARD,
) -> PlannerContainer:
    """Create the default dependency container."""
    resolved_settings = settings or PlannerSettings()
    configure_logging(resolved_settings.log_level)

    catalog = InMemoryCatalog(foods=foods, recipes=recipes)
    profile = (
        keto_profile
        if isinstance(keto_profile, KetoProfile)
        else parse_keto_profile(keto_profile)
    )
    targets = compute_nutritional_targets(
        resolved_settings.default_calorie_target, profile
    )
    return PlannerContainer(
        settings=resolved_settings,
        catalog=catalog,
        keto_profile=profile,
        targets=targets,
        nutrition=NutritionAggregator(
            foods=catalog,
            recipes=catalog,
            recipe_serving_mass_g=resolved_settings.recipe_serving_mass_g,
        ),
        editor=MealPlanEditor(foods=catalog, recipes=catalog, targets=targets),
        shopping_generator=ShoppingListGenerator(
            foods=catalog,
            recipes=catalog,
            rounding_step_g=resolved_settings.shopping_rounding_step_g,
            natural_unit_threshold=resolved_settings.natural_unit_threshold,
        ),
        weight_tracker=WeightTracker(
            window_days=resolved_settings.weight_change_window_days,
            max_prediction_weeks=resolved_settings.goal_prediction_max_weeks,
        ),
    )
