"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionFacts:
    """Catalog nutrition record, per 100 g for foods or per serving for recipes."""

    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float = 0.0
    net_carbs: float | None = None

    def resolved_net_carbs(self) -> float:
        """Return the explicit net carbs, or carbs minus fiber floored at zero."""
        if self.net_carbs is not None:
            return max(0.0, self.net_carbs)
        return max(0.0, self.carbs - self.fiber)


@dataclass(frozen=True)
class NutritionValues:
    """Aggregated nutrition totals."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    net_carbs: float = 0.0

    @classmethod
    def zero(cls) -> "NutritionValues":
        return cls()

    @classmethod
    def from_facts(cls, facts: NutritionFacts, factor: float) -> "NutritionValues":
        """Scale a catalog record by a quantity factor."""
        return cls(
            calories=facts.calories * factor,
            protein=facts.protein * factor,
            fat=facts.fat * factor,
            carbs=facts.carbs * factor,
            fiber=facts.fiber * factor,
            net_carbs=facts.resolved_net_carbs() * factor,
        )

    def __add__(self, other: "NutritionValues") -> "NutritionValues":
        if not isinstance(other, NutritionValues):
            return NotImplemented
        return NutritionValues(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbs=self.carbs + other.carbs,
            fiber=self.fiber + other.fiber,
            net_carbs=self.net_carbs + other.net_carbs,
        )

    def rounded(self, digits: int | None = None) -> "NutritionValues":
        """Round every field; ``digits=None`` rounds to integers."""
        return NutritionValues(
            calories=_round(self.calories, digits),
            protein=_round(self.protein, digits),
            fat=_round(self.fat, digits),
            carbs=_round(self.carbs, digits),
            fiber=_round(self.fiber, digits),
            net_carbs=_round(self.net_carbs, digits),
        )


@dataclass(frozen=True)
class DayNutrition:
    """Day totals with the mass-weighted pH used by alkaline plans."""

    totals: NutritionValues
    ph_value: float


def _round(value: float, digits: int | None) -> float:
    if digits is None:
        return float(round(value))
    return round(value, digits)


@dataclass(frozen=True)
class Included:
    """Meal item whose nutrition was counted."""

    item_id: str


@dataclass(frozen=True)
class SkippedMissingReference:
    """Meal item skipped because its catalog entry no longer exists."""

    item_id: str
    kind: str


ItemOutcome = Included | SkippedMissingReference


@dataclass(frozen=True)
class MealNutrition:
    """Meal totals with the outcome of every item."""

    totals: NutritionValues
    outcomes: tuple[ItemOutcome, ...] = ()

    @property
    def skipped(self) -> list[SkippedMissingReference]:
        return [
            outcome
            for outcome in self.outcomes
            if isinstance(outcome, SkippedMissingReference)
        ]
