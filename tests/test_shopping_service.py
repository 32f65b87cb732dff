"""Tests for shopping list generation."""

from datetime import UTC, date, datetime

from keto_planner.domain.catalog import Food, Recipe, RecipeIngredient
from keto_planner.domain.nutrition import NutritionFacts
from keto_planner.domain.plans import FoodItem, RecipeItem
from keto_planner.domain.shopping import ShoppingItem, ShoppingList
from keto_planner.services.catalog import InMemoryCatalog
from keto_planner.services.shopping import (
    ShoppingListGenerator,
    format_category_name,
    generate_shopping_list,
    set_item_checked,
    shopping_list_progress,
    shopping_list_to_printable_text,
)
from tests.conftest import make_meal, make_plan

GENERATED_AT = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _food(food_id: str, name: str) -> Food:
    return Food(
        id=food_id,
        name=name,
        nutrition_per_100g=NutritionFacts(calories=50, protein=1, fat=1, carbs=5),
    )


def test_same_food_in_two_meals_is_merged(catalog: InMemoryCatalog) -> None:
    plan = make_plan(
        [
            [make_meal("m1", FoodItem(id="spinach", quantity=150))],
            [make_meal("m2", FoodItem(id="spinach", quantity=80))],
        ]
    )

    shopping_list = generate_shopping_list(plan, catalog, catalog, now=GENERATED_AT)

    assert shopping_list.categories == {
        "légumes": [
            ShoppingItem(id="spinach", name="Épinards", quantity=230, unit="g")
        ]
    }


def test_quantities_round_up_to_five_grams(catalog: InMemoryCatalog) -> None:
    plan = make_plan([[make_meal("m1", FoodItem(id="salmon", quantity=123))]])
    shopping_list = generate_shopping_list(plan, catalog, catalog)
    assert shopping_list.categories["poisson"][0].quantity == 125


def test_fractional_servings_do_not_overshoot_rounding(
    catalog: InMemoryCatalog,
) -> None:
    tartare = Recipe(
        id="tartare",
        name="Tartare de saumon",
        nutrition_per_serving=NutritionFacts(calories=104, protein=10, fat=6.5),
        ingredients=(RecipeIngredient(food_id="salmon", quantity=50),),
    )
    lookup = InMemoryCatalog(foods=[catalog.get_food("salmon")], recipes=[tartare])
    plan = make_plan([[make_meal("m1", RecipeItem(id="tartare", servings=1.1))]])

    shopping_list = generate_shopping_list(plan, lookup, lookup)

    assert shopping_list.categories["poisson"][0].quantity == 55


def test_natural_units_apply_above_threshold(catalog: InMemoryCatalog) -> None:
    plan = make_plan(
        [
            [make_meal("m1", FoodItem(id="egg", quantity=150))],
            [make_meal("m2", FoodItem(id="egg", quantity=80))],
        ]
    )
    item = generate_shopping_list(plan, catalog, catalog).categories["œufs"][0]
    assert (item.quantity, item.unit) == (4.6, "œuf")

    small = make_plan([[make_meal("m1", FoodItem(id="egg", quantity=30))]])
    item = generate_shopping_list(small, catalog, catalog).categories["œufs"][0]
    assert (item.quantity, item.unit) == (30, "g")


def test_recipes_expand_to_ingredients(catalog: InMemoryCatalog) -> None:
    plan = make_plan([[make_meal("m1", RecipeItem(id="omelette", servings=2))]])

    shopping_list = generate_shopping_list(plan, catalog, catalog)

    eggs = shopping_list.categories["œufs"][0]
    spinach = shopping_list.categories["légumes"][0]
    assert (eggs.quantity, eggs.unit) == (4.0, "œuf")
    assert (spinach.quantity, spinach.unit) == (60, "g")


def test_missing_references_and_empty_quantities_are_omitted(
    catalog: InMemoryCatalog,
) -> None:
    plan = make_plan(
        [
            [
                make_meal(
                    "m1",
                    FoodItem(id="ghost", quantity=100),
                    RecipeItem(id="deleted-recipe"),
                    FoodItem(id="salmon", quantity=0),
                    FoodItem(id="avocado", quantity=100),
                )
            ]
        ]
    )

    shopping_list = generate_shopping_list(plan, catalog, catalog)

    assert [item.id for item in shopping_list.items()] == ["avocado"]
    avocado = shopping_list.categories["fruits"][0]
    assert (avocado.quantity, avocado.unit) == (100, "g")


def test_groups_default_category_and_sort_by_name() -> None:
    catalog = InMemoryCatalog(
        foods=[
            _food("celery", "céleri"),
            _food("banana", "banane"),
            _food("lettuce", "Laitue"),
        ]
    )
    plan = make_plan(
        [
            [
                make_meal(
                    "m1",
                    FoodItem(id="celery", quantity=100),
                    FoodItem(id="lettuce", quantity=100),
                    FoodItem(id="banana", quantity=100),
                )
            ]
        ]
    )

    shopping_list = generate_shopping_list(plan, catalog, catalog)

    assert list(shopping_list.categories) == ["autres"]
    names = [item.name for item in shopping_list.categories["autres"]]
    assert names == ["banane", "céleri", "Laitue"]


def test_regeneration_is_stable(catalog: InMemoryCatalog) -> None:
    plan = make_plan(
        [
            [
                make_meal(
                    "m1",
                    RecipeItem(id="omelette", servings=1),
                    FoodItem(id="egg", quantity=50),
                    FoodItem(id="avocado", quantity=150),
                )
            ]
        ]
    )
    generator = ShoppingListGenerator(foods=catalog, recipes=catalog)

    first = generator.generate(plan, now=GENERATED_AT)
    first.items()[0].checked = True
    second = generator.generate(plan, now=GENERATED_AT)

    assert list(first.categories) == list(second.categories)
    assert [(i.id, i.quantity, i.unit) for i in first.items()] == [
        (i.id, i.quantity, i.unit) for i in second.items()
    ]
    assert not any(item.checked for item in second.items())


def _printable_list() -> ShoppingList:
    return ShoppingList(
        plan_id="plan-1",
        plan_name="Semaine 1",
        start_date=date(2024, 3, 4),
        end_date=date(2024, 3, 10),
        generated_at=GENERATED_AT,
        categories={
            "œufs": [ShoppingItem(id="egg", name="Œuf", quantity=4.6, unit="œuf")],
            "légumes": [
                ShoppingItem(
                    id="spinach", name="Épinards", quantity=230, unit="g", checked=True
                ),
                ShoppingItem(id="kale", name="Kale", quantity=100, unit="g"),
            ],
        },
    )


def test_progress_counts_checked_items() -> None:
    shopping_list = _printable_list()
    assert shopping_list_progress(shopping_list) == 33
    assert shopping_list_progress(None) == 0
    shopping_list.categories = {}
    assert shopping_list_progress(shopping_list) == 0


def test_set_item_checked_toggles_in_place() -> None:
    shopping_list = _printable_list()

    assert set_item_checked(shopping_list, "œufs", "egg", True)
    assert shopping_list.categories["œufs"][0].checked
    assert set_item_checked(shopping_list, "légumes", "spinach", False)
    assert shopping_list_progress(shopping_list) == 33
    assert not set_item_checked(shopping_list, "légumes", "egg", True)
    assert not set_item_checked(shopping_list, "viande", "egg", True)


def test_printable_text_layout() -> None:
    text = shopping_list_to_printable_text(_printable_list())

    assert text == (
        "LISTE DE COURSES - Semaine 1\n"
        "Du 04/03/2024 au 10/03/2024\n"
        "\n"
        "=== LÉGUMES ===\n"
        "☑ Épinards (230 g)\n"
        "□ Kale (100 g)\n"
        "\n"
        "=== ŒUFS ===\n"
        "□ Œuf (4.6 œuf)\n"
    )
    assert shopping_list_to_printable_text(None) == ""


def test_format_category_name() -> None:
    assert format_category_name("produits_laitiers") == "Produits laitiers"
    assert format_category_name("fruits_secs") == "Fruits secs"
