"""Domain models for meal plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from keto_planner.domain.nutrition import NutritionValues


class DietType(str, Enum):
    """Diet variant of a plan."""

    STANDARD = "keto_standard"
    ALKALINE = "keto_alcalin"


class KetoProfile(str, Enum):
    """Macro-split strategy governing targets and tolerances."""

    STANDARD = "standard"
    WEIGHT_LOSS = "perte_poids"
    MASS_GAIN = "prise_masse"
    CYCLICAL = "cyclique"
    HIGH_PROTEIN = "hyperproteine"


@dataclass(frozen=True)
class FoodItem:
    """Meal item referencing a catalog food by grams."""

    id: str
    quantity: float
    cached: NutritionValues | None = None


@dataclass(frozen=True)
class RecipeItem:
    """Meal item referencing a catalog recipe by servings."""

    id: str
    servings: float = 1.0
    cached: NutritionValues | None = None


MealItem = FoodItem | RecipeItem


@dataclass(frozen=True)
class Meal:
    """A meal placed in a day slot."""

    id: str
    slot: str
    name: str = ""
    display_type: str = ""
    order: int = 999
    items: tuple[MealItem, ...] = field(default_factory=tuple)
    cached: NutritionValues | None = None


@dataclass(frozen=True)
class Day:
    """A calendar day of a plan."""

    date: date
    meals: tuple[Meal, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MealPlan:
    """Multi-day meal plan over an inclusive date range."""

    id: str
    name: str
    start_date: date
    end_date: date
    days: tuple[Day, ...]
    diet_type: DietType = DietType.STANDARD
    keto_profile: KetoProfile = KetoProfile.STANDARD
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class PlanValidation:
    """Result of a structural plan check."""

    valid: bool
    error: str | None = None
