"""Shopping list generation from meal plans."""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, date, datetime

from keto_planner.domain.catalog import Food
from keto_planner.domain.plans import FoodItem, MealPlan, RecipeItem
from keto_planner.domain.shopping import ShoppingItem, ShoppingList
from keto_planner.services.catalog import FoodLookup, RecipeLookup

DEFAULT_CATEGORY = "autres"
GRAMS_UNIT = "g"
ROUNDING_STEP_G = 5
NATURAL_UNIT_THRESHOLD = 0.75

_CATEGORY_LABELS = {
    "viande": "Viandes",
    "poisson": "Poissons et fruits de mer",
    "œufs": "Œufs",
    "produits_laitiers": "Produits laitiers",
    "légumes": "Légumes",
    "fruits": "Fruits",
    "noix_graines": "Noix et graines",
    "matières_grasses": "Matières grasses",
    "autres": "Autres",
}

_logger = logging.getLogger(__name__)


@dataclass
class ShoppingListGenerator:
    """Builds shopping lists from plans using the food and recipe catalogs."""

    foods: FoodLookup
    recipes: RecipeLookup
    rounding_step_g: int = ROUNDING_STEP_G
    natural_unit_threshold: float = NATURAL_UNIT_THRESHOLD

    def generate(self, plan: MealPlan, now: datetime | None = None) -> ShoppingList:
        """Return a categorized shopping list covering every day of the plan."""
        required = self._required_grams(plan)
        categories: dict[str, list[ShoppingItem]] = defaultdict(list)
        for food_id, grams in required.items():
            food = self.foods.get_food(food_id)
            if food is None or grams <= 0:
                continue
            step = self.rounding_step_g
            # Float sums such as 50 * 1.1 overshoot exact multiples of the step.
            rounded = math.ceil(round(grams, 6) / step) * step
            quantity, unit = self._natural_quantity(food, rounded)
            categories[food.category or DEFAULT_CATEGORY].append(
                ShoppingItem(id=food.id, name=food.name, quantity=quantity, unit=unit)
            )

        for items in categories.values():
            items.sort(key=lambda item: item.name.casefold())

        shopping_list = ShoppingList(
            plan_id=plan.id,
            plan_name=plan.name,
            start_date=plan.start_date,
            end_date=plan.end_date,
            generated_at=now or datetime.now(tz=UTC),
            categories=dict(categories),
        )
        _logger.info(
            "Shopping list generated: plan=%s categories=%s items=%s",
            plan.id,
            len(shopping_list.categories),
            len(shopping_list.items()),
        )
        return shopping_list

    def _required_grams(self, plan: MealPlan) -> dict[str, float]:
        required: dict[str, float] = defaultdict(float)
        for day in plan.days:
            for meal in day.meals:
                for item in meal.items:
                    if isinstance(item, FoodItem):
                        self._add(required, item.id, item.quantity or 0)
                    elif isinstance(item, RecipeItem):
                        self._add_recipe(required, item)
        return required

    def _add_recipe(self, required: dict[str, float], item: RecipeItem) -> None:
        recipe = self.recipes.get_recipe(item.id)
        if recipe is None:
            _logger.warning("Skipping missing recipe in shopping list: id=%s", item.id)
            return
        servings = item.servings or 1
        for ingredient in recipe.ingredients:
            self._add(required, ingredient.food_id, ingredient.quantity * servings)

    def _add(self, required: dict[str, float], food_id: str, grams: float) -> None:
        if self.foods.get_food(food_id) is None:
            _logger.warning("Skipping missing food in shopping list: id=%s", food_id)
            return
        required[food_id] += grams

    def _natural_quantity(self, food: Food, grams: float) -> tuple[float, str]:
        if food.common_unit_weight and food.common_unit_weight > 0 and food.unit_name:
            units = grams / food.common_unit_weight
            if units >= self.natural_unit_threshold:
                return round(units, 1), food.unit_name
        return grams, GRAMS_UNIT


def generate_shopping_list(
    plan: MealPlan,
    foods: FoodLookup,
    recipes: RecipeLookup,
    *,
    now: datetime | None = None,
) -> ShoppingList:
    """Return the shopping list of a plan with default rounding rules."""
    return ShoppingListGenerator(foods=foods, recipes=recipes).generate(plan, now=now)


def shopping_list_progress(shopping_list: ShoppingList | None) -> int:
    """Return the percentage of checked items (0 for empty lists)."""
    if shopping_list is None:
        return 0
    items = shopping_list.items()
    if not items:
        return 0
    checked = sum(1 for item in items if item.checked)
    return round(checked / len(items) * 100)


def set_item_checked(
    shopping_list: ShoppingList, category: str, item_id: str, checked: bool
) -> bool:
    """Toggle an item in place; return False when it does not exist."""
    for item in shopping_list.categories.get(category, []):
        if item.id == item_id:
            item.checked = checked
            return True
    return False


def format_category_name(category: str) -> str:
    """Return a display name for a category tag."""
    label = _CATEGORY_LABELS.get(category)
    if label:
        return label
    spaced = category.replace("_", " ")
    return spaced[:1].upper() + spaced[1:]


def shopping_list_to_printable_text(shopping_list: ShoppingList | None) -> str:
    """Render the list as plain text grouped by category, one checkbox per item."""
    if shopping_list is None:
        return ""
    lines = [
        f"LISTE DE COURSES - {shopping_list.plan_name}",
        f"Du {_format_date(shopping_list.start_date)}"
        f" au {_format_date(shopping_list.end_date)}",
        "",
    ]
    for category in sorted(shopping_list.categories):
        items = shopping_list.categories[category]
        if not items:
            continue
        lines.append(f"=== {format_category_name(category).upper()} ===")
        for item in items:
            box = "☑" if item.checked else "□"
            quantity = _format_quantity(item.quantity)
            lines.append(f"{box} {item.name} ({quantity} {item.unit})")
        lines.append("")
    return "\n".join(lines)


def _format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"
