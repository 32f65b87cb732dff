"""Shared test fixtures."""

import logging
from collections.abc import Iterator, Sequence
from datetime import date, timedelta

import pytest

from keto_planner.config import PlannerSettings
from keto_planner.domain.catalog import Food, Recipe, RecipeIngredient
from keto_planner.domain.nutrition import NutritionFacts
from keto_planner.domain.plans import Day, Meal, MealItem, MealPlan
from keto_planner.domain.targets import MacroTargets
from keto_planner.services.catalog import InMemoryCatalog

EGG = Food(
    id="egg",
    name="Œuf",
    nutrition_per_100g=NutritionFacts(calories=155, protein=13, fat=11, carbs=1.1),
    category="œufs",
    ph_value=6.5,
    common_unit_weight=50,
    unit_name="œuf",
)
AVOCADO = Food(
    id="avocado",
    name="Avocat",
    nutrition_per_100g=NutritionFacts(
        calories=160, protein=2, fat=15, carbs=8.5, fiber=6.7
    ),
    category="fruits",
    ph_value=8.0,
    common_unit_weight=200,
    unit_name="avocat",
)
SPINACH = Food(
    id="spinach",
    name="Épinards",
    nutrition_per_100g=NutritionFacts(
        calories=23, protein=2.9, fat=0.4, carbs=3.6, fiber=2.2
    ),
    category="légumes",
    ph_value=8.5,
)
SALMON = Food(
    id="salmon",
    name="Saumon",
    nutrition_per_100g=NutritionFacts(calories=208, protein=20, fat=13, carbs=0),
    category="poisson",
)
OMELETTE = Recipe(
    id="omelette",
    name="Omelette aux épinards",
    nutrition_per_serving=NutritionFacts(
        calories=180, protein=15, fat=12, carbs=2, fiber=0.5
    ),
    ingredients=(
        RecipeIngredient(food_id="egg", quantity=100),
        RecipeIngredient(food_id="spinach", quantity=30),
    ),
    average_ph_value=7.0,
)


def make_meal(meal_id: str, *items: MealItem, slot: str = "dejeuner") -> Meal:
    return Meal(id=meal_id, slot=slot, items=tuple(items))


def make_plan(
    days: Sequence[Sequence[Meal]],
    start: date = date(2024, 3, 4),
    plan_id: str = "plan-1",
) -> MealPlan:
    """Build a plan with one day per entry of ``days``."""
    plan_days = tuple(
        Day(date=start + timedelta(days=offset), meals=tuple(meals))
        for offset, meals in enumerate(days)
    )
    return MealPlan(
        id=plan_id,
        name="Semaine test",
        start_date=start,
        end_date=start + timedelta(days=len(plan_days) - 1),
        days=plan_days,
    )


@pytest.fixture(autouse=True)
def reset_planner_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("keto_planner")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog(
        foods=[EGG, AVOCADO, SPINACH, SALMON],
        recipes=[OMELETTE],
    )


@pytest.fixture
def targets() -> MacroTargets:
    return MacroTargets(calories=2000, protein=100, fat=167, carbs=25, net_carbs=25)


@pytest.fixture
def settings() -> PlannerSettings:
    return PlannerSettings(environment="test", log_level="WARNING")
