"""Catalog lookup abstractions."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from keto_planner.domain.catalog import Food, Recipe


class FoodLookup(Protocol):
    """Read-only access to the food catalog."""

    def get_food(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""


class RecipeLookup(Protocol):
    """Read-only access to the recipe catalog."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""


@dataclass
class InMemoryCatalog(FoodLookup, RecipeLookup):
    """Catalog backed by already-loaded foods and recipes."""

    _foods: dict[str, Food]
    _recipes: dict[str, Recipe]

    def __init__(
        self, foods: Iterable[Food] = (), recipes: Iterable[Recipe] = ()
    ) -> None:
        self._foods = {food.id: food for food in foods}
        self._recipes = {recipe.id: recipe for recipe in recipes}

    def get_food(self, food_id: str) -> Food | None:
        return self._foods.get(food_id)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self._recipes.get(recipe_id)
