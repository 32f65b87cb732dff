"""Domain models for macro targets and their validation."""

from dataclasses import dataclass, field
from datetime import date

from keto_planner.domain.nutrition import NutritionValues


@dataclass(frozen=True)
class MacroSplit:
    """Calorie split of a keto profile, in whole percentages."""

    fat_pct: int
    protein_pct: int
    carbs_pct: int
    protein_floor_g: int


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macro targets."""

    calories: float
    protein: float
    fat: float
    carbs: float
    net_carbs: float


@dataclass(frozen=True)
class MacroTolerances:
    """Maximum allowed deviation per axis, in percent."""

    calories: float
    protein: float
    fat: float
    carbs: float


@dataclass(frozen=True)
class MacroVerdict:
    """Per-axis comparison of actual totals against targets."""

    calories_ok: bool
    protein_ok: bool
    fat_ok: bool
    carbs_ok: bool
    deviations: dict[str, float]
    tolerances: MacroTolerances

    @property
    def valid(self) -> bool:
        return self.calories_ok and self.protein_ok and self.fat_ok and self.carbs_ok

    @property
    def failed_axes(self) -> list[str]:
        flags = {
            "calories": self.calories_ok,
            "protein": self.protein_ok,
            "fat": self.fat_ok,
            "carbs": self.carbs_ok,
        }
        return [axis for axis, ok in flags.items() if not ok]


@dataclass(frozen=True)
class DayMacroReport:
    """Verdict for one plan day that has meals."""

    day_index: int
    date: date
    totals: NutritionValues
    verdict: MacroVerdict


@dataclass(frozen=True)
class PlanMacroAnalysis:
    """Macro achievement across all days of a plan."""

    total_days: int
    days_with_meals: int
    days: list[DayMacroReport] = field(default_factory=list)

    def days_meeting(self, axis: str) -> int:
        """Count days whose verdict passes the given axis."""
        return sum(1 for report in self.days if axis not in report.verdict.failed_axes)

    @property
    def overall_valid(self) -> bool:
        return all(report.verdict.valid for report in self.days)
