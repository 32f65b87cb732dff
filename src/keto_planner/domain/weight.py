"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeightEntry:
    """A body-weight measurement in kilograms."""

    date: date
    weight: float


@dataclass(frozen=True)
class WeightChange:
    """Weight variation over a window, rounded to 1 decimal."""

    change: float = 0.0
    percentage: float = 0.0
    rate: float = 0.0


@dataclass(frozen=True)
class BmiCategory:
    """BMI band with a display colour."""

    category: str
    description: str
    color: str


@dataclass(frozen=True)
class WeightSummary:
    """Weight analytics for a user's history."""

    current_weight: float | None
    bmi: float
    bmi_category: BmiCategory | None
    progress: int
    change: WeightChange
    predicted_goal_date: date | None
