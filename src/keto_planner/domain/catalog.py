"""Domain models for the food and recipe catalogs."""

from dataclasses import dataclass, field

from keto_planner.domain.nutrition import NutritionFacts


@dataclass(frozen=True)
class Food:
    """Catalog food with nutrition per 100 g."""

    id: str
    name: str
    nutrition_per_100g: NutritionFacts
    category: str | None = None
    ph_value: float | None = None
    common_unit_weight: float | None = None
    unit_name: str | None = None


@dataclass(frozen=True)
class RecipeIngredient:
    """Food quantity in grams for one serving of a recipe."""

    food_id: str
    quantity: float


@dataclass(frozen=True)
class Recipe:
    """Catalog recipe with nutrition per serving."""

    id: str
    name: str
    nutrition_per_serving: NutritionFacts
    ingredients: tuple[RecipeIngredient, ...] = field(default_factory=tuple)
    average_ph_value: float | None = None
