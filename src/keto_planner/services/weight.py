"""Weight-trend analytics: BMI, goal progress, rate of change and projection."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from keto_planner.domain.weight import (
    BmiCategory,
    WeightChange,
    WeightEntry,
    WeightSummary,
)

DEFAULT_WINDOW_DAYS = 30
MAX_PREDICTION_WEEKS = 52

_BMI_BANDS: tuple[tuple[float, BmiCategory], ...] = (
    (16.5, BmiCategory("dénutrition", "Dénutrition sévère", "#ef4444")),
    (18.5, BmiCategory("maigreur", "Maigreur", "#fb923c")),
    (25, BmiCategory("normal", "Corpulence normale", "#22c55e")),
    (30, BmiCategory("surpoids", "Surpoids", "#fb923c")),
    (
        35,
        BmiCategory("obésité_modérée", "Obésité modérée (Classe 1)", "#ef4444"),
    ),
    (40, BmiCategory("obésité_sévère", "Obésité sévère (Classe 2)", "#dc2626")),
)
_MORBID_OBESITY = BmiCategory(
    "obésité_morbide", "Obésité morbide (Classe 3)", "#b91c1c"
)

_logger = logging.getLogger(__name__)


def compute_bmi(height_cm: float | None, weight_kg: float | None) -> float:
    """Return the BMI rounded to one decimal, or 0 for missing measurements."""
    if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
        return 0
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float) -> BmiCategory:
    for upper_bound, category in _BMI_BANDS:
        if bmi < upper_bound:
            return category
    return _MORBID_OBESITY


def weight_progress(
    start: float | None, current: float | None, target: float | None
) -> int:
    """Return progress toward the target weight as a 0-100 percentage."""
    if not start or not current or not target:
        return 0
    if start == target:
        return 100
    moving_away = (start > target and current > start) or (
        start < target and current < start
    )
    if moving_away:
        return 0
    progress = abs(current - start) / abs(target - start) * 100
    return min(round(progress), 100)


def weight_change(
    history: Iterable[WeightEntry] | None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    *,
    today: date | None = None,
) -> WeightChange:
    """Compare the latest entry with the latest one at least ``window_days`` old.

    Falls back to the oldest entry when none is that old. The weekly rate uses
    the real number of days between both entries (at least one).
    """
    entries = sorted(history or (), key=lambda entry: entry.date, reverse=True)
    if len(entries) < 2:
        return WeightChange()

    latest = entries[0]
    cutoff = (today or date.today()) - timedelta(days=window_days)
    previous = next(
        (entry for entry in entries[1:] if entry.date <= cutoff), entries[-1]
    )

    change = latest.weight - previous.weight
    percentage = change / previous.weight * 100 if previous.weight else 0.0
    days_between = max(1, (latest.date - previous.date).days)
    rate = change / days_between * 7
    return WeightChange(
        change=round(change, 1),
        percentage=round(percentage, 1),
        rate=round(rate, 1),
    )


def predict_goal_date(
    current: float | None,
    target: float | None,
    weekly_rate: float,
    *,
    today: date | None = None,
    max_weeks: float = MAX_PREDICTION_WEEKS,
) -> date | None:
    """Project when the target weight is reached at the current weekly rate.

    Returns None when the rate is zero, points away from the target, or the
    projection is further out than ``max_weeks``.
    """
    if not current or not target or weekly_rate == 0:
        return None
    if (current > target and weekly_rate > 0) or (current < target and weekly_rate < 0):
        return None
    weeks_required = abs(target - current) / abs(weekly_rate)
    if weeks_required > max_weeks:
        return None
    return (today or date.today()) + timedelta(days=round(weeks_required * 7))


@dataclass
class WeightTracker:
    """Combines weight analytics for a user's history."""

    window_days: int = DEFAULT_WINDOW_DAYS
    max_prediction_weeks: float = MAX_PREDICTION_WEEKS

    def summarize(
        self,
        history: Iterable[WeightEntry] | None,
        height_cm: float | None,
        target_weight: float | None,
        *,
        today: date | None = None,
    ) -> WeightSummary:
        entries = sorted(history or (), key=lambda entry: entry.date)
        if not entries:
            return WeightSummary(
                current_weight=None,
                bmi=0,
                bmi_category=None,
                progress=0,
                change=WeightChange(),
                predicted_goal_date=None,
            )

        start_weight = entries[0].weight
        current_weight = entries[-1].weight
        bmi = compute_bmi(height_cm, current_weight)
        change = weight_change(entries, self.window_days, today=today)
        predicted = predict_goal_date(
            current_weight,
            target_weight,
            change.rate,
            today=today,
            max_weeks=self.max_prediction_weeks,
        )
        _logger.debug(
            "Weight summary: entries=%s current=%s rate=%s",
            len(entries),
            current_weight,
            change.rate,
        )
        return WeightSummary(
            current_weight=current_weight,
            bmi=bmi,
            bmi_category=bmi_category(bmi) if bmi > 0 else None,
            progress=weight_progress(start_weight, current_weight, target_weight),
            change=change,
            predicted_goal_date=predicted,
        )
