"""Conversion between camelCase payload dicts and domain models.

Parsers raise ``ValueError`` for malformed records; pydantic's
``ValidationError`` is a ``ValueError`` subclass and propagates as is.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime

from keto_planner.adapters.payload_models import (
    DayPayload,
    FoodPayload,
    MacrosPayload,
    MealItemPayload,
    MealPayload,
    MealPlanPayload,
    NutritionPayload,
    RecipePayload,
    ShoppingItemPayload,
    ShoppingListPayload,
    WeightEntryPayload,
)
from keto_planner.config import parse_keto_profile
from keto_planner.domain.catalog import Food, Recipe, RecipeIngredient
from keto_planner.domain.nutrition import NutritionFacts, NutritionValues
from keto_planner.domain.plans import (
    Day,
    DietType,
    FoodItem,
    Meal,
    MealItem,
    MealPlan,
    RecipeItem,
)
from keto_planner.domain.shopping import ShoppingList
from keto_planner.domain.weight import WeightEntry
from keto_planner.meal_slots import UNKNOWN_SLOT_ORDER, slot_order
from keto_planner.services.validation import validate_meal_plan


def parse_food(raw: Mapping[str, object]) -> Food:
    """Parse a catalog food record."""
    payload = FoodPayload.model_validate(raw)
    return Food(
        id=payload.id,
        name=payload.name,
        nutrition_per_100g=_parse_facts(payload.nutrition_per_100g),
        category=payload.category,
        ph_value=payload.ph_value,
        common_unit_weight=payload.common_unit_weight,
        unit_name=payload.unit_name,
    )


def parse_recipe(raw: Mapping[str, object]) -> Recipe:
    """Parse a catalog recipe record."""
    payload = RecipePayload.model_validate(raw)
    return Recipe(
        id=payload.id,
        name=payload.name,
        nutrition_per_serving=_parse_facts(payload.nutrition_per_serving),
        ingredients=tuple(
            RecipeIngredient(food_id=item.food_id, quantity=item.quantity)
            for item in payload.ingredients
        ),
        average_ph_value=payload.average_ph_value,
    )


def parse_meal_plan(raw: Mapping[str, object]) -> MealPlan:
    """Parse a plan payload, rejecting structurally invalid plans."""
    validation = validate_meal_plan(raw)
    if not validation.valid:
        raise ValueError(f"Invalid meal plan: {validation.error}")

    payload = MealPlanPayload.model_validate(raw)
    start = _parse_date(payload.start_date)
    end = _parse_date(payload.end_date)
    days = tuple(_parse_day(day) for day in payload.days)
    expected = (end - start).days + 1
    if len(days) != expected:
        raise ValueError(
            f"Invalid meal plan: expected {expected} days, got {len(days)}"
        )

    return MealPlan(
        id=payload.id,
        name=payload.name,
        start_date=start,
        end_date=end,
        days=days,
        diet_type=_parse_diet_type(payload.diet_type),
        keto_profile=parse_keto_profile(payload.keto_profile),
        created_at=_parse_datetime(payload.created_at),
        updated_at=_parse_datetime(payload.updated_at),
    )


def parse_weight_history(raw: Iterable[Mapping[str, object]]) -> list[WeightEntry]:
    """Parse weight entries, sorted oldest first."""
    entries = []
    for row in raw:
        payload = WeightEntryPayload.model_validate(row)
        entries.append(
            WeightEntry(date=_parse_date(payload.date), weight=payload.weight)
        )
    return sorted(entries, key=lambda entry: entry.date)


def nutrition_to_payload(values: NutritionValues) -> dict[str, float]:
    return {
        "calories": values.calories,
        "protein": values.protein,
        "fat": values.fat,
        "carbs": values.carbs,
        "fiber": values.fiber,
        "netCarbs": values.net_carbs,
    }


def meal_plan_to_payload(plan: MealPlan) -> dict[str, object]:
    payload = MealPlanPayload(
        id=plan.id,
        name=plan.name,
        start_date=plan.start_date.isoformat(),
        end_date=plan.end_date.isoformat(),
        diet_type=plan.diet_type.value,
        keto_profile=plan.keto_profile.value,
        created_at=plan.created_at.isoformat() if plan.created_at else None,
        updated_at=plan.updated_at.isoformat() if plan.updated_at else None,
        days=[
            DayPayload(
                date=day.date.isoformat(),
                meals=[_meal_payload(meal) for meal in day.meals],
            )
            for day in plan.days
        ],
    )
    return payload.model_dump(by_alias=True, exclude_none=True)


def shopping_list_to_payload(shopping_list: ShoppingList) -> dict[str, object]:
    payload = ShoppingListPayload(
        plan_id=shopping_list.plan_id,
        plan_name=shopping_list.plan_name,
        start_date=shopping_list.start_date.isoformat(),
        end_date=shopping_list.end_date.isoformat(),
        generated_at=shopping_list.generated_at.isoformat(),
        categories={
            category: [
                ShoppingItemPayload(
                    id=item.id,
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    checked=item.checked,
                )
                for item in items
            ]
            for category, items in shopping_list.categories.items()
        },
    )
    return payload.model_dump(by_alias=True)


def _parse_facts(payload: NutritionPayload) -> NutritionFacts:
    return NutritionFacts(
        calories=payload.calories,
        protein=payload.protein,
        fat=payload.fat,
        carbs=payload.carbs,
        fiber=payload.fiber,
        net_carbs=payload.net_carbs,
    )


def _parse_day(payload: DayPayload) -> Day:
    return Day(
        date=_parse_date(payload.date),
        meals=tuple(_parse_meal(meal) for meal in payload.meals),
    )


def _parse_meal(payload: MealPayload) -> Meal:
    order = payload.order
    if order is None:
        order = slot_order(payload.type) if payload.type else UNKNOWN_SLOT_ORDER
    return Meal(
        id=payload.id,
        slot=payload.type,
        name=payload.name,
        display_type=payload.display_type,
        order=order,
        items=tuple(_parse_item(item) for item in payload.items),
        cached=_parse_cache(payload.calories, payload.macros),
    )


def _parse_item(payload: MealItemPayload) -> MealItem:
    cached = _parse_cache(payload.calories, payload.macros)
    if payload.type == "recipe":
        return RecipeItem(id=payload.id, servings=payload.servings or 1, cached=cached)
    return FoodItem(id=payload.id, quantity=payload.quantity or 0, cached=cached)


def _parse_cache(
    calories: float | None, macros: MacrosPayload | None
) -> NutritionValues | None:
    if macros is None:
        return None
    return NutritionValues(
        calories=calories or 0.0,
        protein=macros.protein,
        fat=macros.fat,
        carbs=macros.carbs,
        fiber=macros.fiber,
        net_carbs=macros.net_carbs,
    )


def _meal_payload(meal: Meal) -> MealPayload:
    return MealPayload(
        id=meal.id,
        type=meal.slot,
        name=meal.name,
        display_type=meal.display_type,
        order=meal.order,
        items=[_item_payload(item) for item in meal.items],
        calories=meal.cached.calories if meal.cached else None,
        macros=_macros_payload(meal.cached),
    )


def _item_payload(item: MealItem) -> MealItemPayload:
    if isinstance(item, RecipeItem):
        return MealItemPayload(
            type="recipe",
            id=item.id,
            servings=item.servings,
            calories=item.cached.calories if item.cached else None,
            macros=_macros_payload(item.cached),
        )
    return MealItemPayload(
        type="food",
        id=item.id,
        quantity=item.quantity,
        calories=item.cached.calories if item.cached else None,
        macros=_macros_payload(item.cached),
    )


def _macros_payload(values: NutritionValues | None) -> MacrosPayload | None:
    if values is None:
        return None
    return MacrosPayload(
        protein=values.protein,
        fat=values.fat,
        carbs=values.carbs,
        fiber=values.fiber,
        net_carbs=values.net_carbs,
    )


def _parse_diet_type(raw: str) -> DietType:
    try:
        return DietType(raw.strip().lower())
    except ValueError:
        return DietType.STANDARD


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid date: {raw!r}") from exc


def _parse_datetime(raw: str | None) -> datetime | None:
    if not raw:
        return None
    return datetime.fromisoformat(raw)
