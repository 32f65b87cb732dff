"""Nutrition aggregation for meals, days and plans.

Meal totals are rounded to one decimal and day totals to whole numbers. Day
totals are summed from the already-rounded meal totals, so a day read on its
own can differ slightly from the sum of its meals read independently.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from keto_planner.domain.nutrition import (
    DayNutrition,
    Included,
    ItemOutcome,
    MealNutrition,
    NutritionValues,
    SkippedMissingReference,
)
from keto_planner.domain.plans import (
    Day,
    FoodItem,
    Meal,
    MealItem,
    MealPlan,
    RecipeItem,
)
from keto_planner.services.catalog import FoodLookup, RecipeLookup

NEUTRAL_PH = 7.0
# Recipes carry no total mass; this per-serving estimate only weights pH.
DEFAULT_RECIPE_SERVING_MASS_G = 250.0

_logger = logging.getLogger(__name__)


def item_nutrition(
    item: MealItem, foods: FoodLookup, recipes: RecipeLookup
) -> tuple[NutritionValues, ItemOutcome]:
    """Return the nutrition contributed by one meal item and how it was resolved."""
    if item.cached is not None:
        return item.cached, Included(item.id)

    if isinstance(item, FoodItem):
        food = foods.get_food(item.id)
        if food is None:
            return NutritionValues.zero(), SkippedMissingReference(item.id, "food")
        factor = (item.quantity or 0) / 100
        values = NutritionValues.from_facts(food.nutrition_per_100g, factor)
        return values, Included(item.id)

    recipe = recipes.get_recipe(item.id)
    if recipe is None:
        return NutritionValues.zero(), SkippedMissingReference(item.id, "recipe")
    servings = item.servings or 1
    values = NutritionValues.from_facts(recipe.nutrition_per_serving, servings)
    return values, Included(item.id)


def aggregate_meal_items(
    items: Iterable[MealItem] | None, foods: FoodLookup, recipes: RecipeLookup
) -> MealNutrition:
    """Sum item nutrition for a meal, keeping per-item outcomes."""
    total = NutritionValues.zero()
    outcomes: list[ItemOutcome] = []
    for item in items or ():
        values, outcome = item_nutrition(item, foods, recipes)
        if isinstance(outcome, SkippedMissingReference):
            _logger.warning(
                "Skipping meal item with missing %s reference: id=%s",
                outcome.kind,
                outcome.item_id,
            )
        total = total + values
        outcomes.append(outcome)
    return MealNutrition(totals=total.rounded(1), outcomes=tuple(outcomes))


def aggregate_meal_nutrition(
    items: Iterable[MealItem] | None, foods: FoodLookup, recipes: RecipeLookup
) -> NutritionValues:
    """Return meal totals rounded to one decimal."""
    return aggregate_meal_items(items, foods, recipes).totals


def meal_totals(
    meal: Meal, foods: FoodLookup, recipes: RecipeLookup
) -> NutritionValues:
    """Return a meal's cached totals, or compute them from its items."""
    if meal.cached is not None:
        return meal.cached
    return aggregate_meal_nutrition(meal.items, foods, recipes)


def aggregate_day_nutrition(
    day: Day | None, foods: FoodLookup, recipes: RecipeLookup
) -> NutritionValues:
    """Return day totals rounded to whole numbers."""
    if day is None:
        return NutritionValues.zero()
    total = NutritionValues.zero()
    for meal in day.meals:
        total = total + meal_totals(meal, foods, recipes)
    return total.rounded()


def aggregate_day_with_ph(
    day: Day | None,
    foods: FoodLookup,
    recipes: RecipeLookup,
    *,
    recipe_serving_mass_g: float = DEFAULT_RECIPE_SERVING_MASS_G,
) -> DayNutrition:
    """Return day totals with the mass-weighted pH of its items."""
    totals = aggregate_day_nutrition(day, foods, recipes)
    weighted_sum = 0.0
    total_weight = 0.0
    for meal in day.meals if day else ():
        for item in meal.items:
            ph_value, weight = _item_ph_weight(
                item, foods, recipes, recipe_serving_mass_g
            )
            if ph_value is None or weight <= 0:
                continue
            weighted_sum += ph_value * weight
            total_weight += weight

    ph = weighted_sum / total_weight if total_weight > 0 else NEUTRAL_PH
    return DayNutrition(totals=totals, ph_value=round(ph, 1))


def update_meal_nutrition(
    meal: Meal, foods: FoodLookup, recipes: RecipeLookup
) -> Meal:
    """Return the meal with its cached totals recomputed from its items."""
    totals = aggregate_meal_nutrition(meal.items, foods, recipes)
    return replace(meal, cached=totals)


def recalculate_plan_nutrition(
    plan: MealPlan, foods: FoodLookup, recipes: RecipeLookup
) -> MealPlan:
    """Refresh the cached totals of every meal in the plan."""
    days = tuple(
        replace(
            day,
            meals=tuple(
                update_meal_nutrition(meal, foods, recipes) for meal in day.meals
            ),
        )
        for day in plan.days
    )
    return replace(plan, days=days)


@dataclass
class NutritionAggregator:
    """Aggregates plan nutrition against a fixed pair of catalogs."""

    foods: FoodLookup
    recipes: RecipeLookup
    recipe_serving_mass_g: float = DEFAULT_RECIPE_SERVING_MASS_G

    def meal(self, items: Iterable[MealItem] | None) -> MealNutrition:
        return aggregate_meal_items(items, self.foods, self.recipes)

    def day(self, day: Day | None) -> NutritionValues:
        return aggregate_day_nutrition(day, self.foods, self.recipes)

    def day_with_ph(self, day: Day | None) -> DayNutrition:
        return aggregate_day_with_ph(
            day,
            self.foods,
            self.recipes,
            recipe_serving_mass_g=self.recipe_serving_mass_g,
        )

    def refresh_plan(self, plan: MealPlan) -> MealPlan:
        return recalculate_plan_nutrition(plan, self.foods, self.recipes)


def _item_ph_weight(
    item: MealItem,
    foods: FoodLookup,
    recipes: RecipeLookup,
    recipe_serving_mass_g: float,
) -> tuple[float | None, float]:
    if isinstance(item, FoodItem):
        food = foods.get_food(item.id)
        if food is None:
            return None, 0.0
        return food.ph_value, item.quantity or 0.0
    if isinstance(item, RecipeItem):
        recipe = recipes.get_recipe(item.id)
        if recipe is None:
            return None, 0.0
        return recipe.average_ph_value, recipe_serving_mass_g * (item.servings or 1)
    return None, 0.0
