"""Meal plan construction and meal editing."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

from keto_planner.domain.plans import Day, DietType, KetoProfile, Meal, MealPlan
from keto_planner.domain.targets import MacroTargets, MacroVerdict
from keto_planner.meal_slots import UNKNOWN_SLOT_ORDER, slot_label, slot_order
from keto_planner.services.catalog import FoodLookup, RecipeLookup
from keto_planner.services.nutrition import aggregate_day_nutrition
from keto_planner.services.validation import validate_macro_targets

GENERIC_DISPLAY_TYPE = "repas"

_logger = logging.getLogger(__name__)


class MealPlanError(ValueError):
    """Raised when an edit references a day or meal that does not exist."""


def generate_plan_name(start: date, end: date) -> str:
    return f"Plan du {start.day}/{start.month} au {end.day}/{end.month}"


def create_empty_plan(
    name: str | None,
    start_date: date | str,
    end_date: date | str,
    diet_type: DietType = DietType.STANDARD,
    keto_profile: KetoProfile = KetoProfile.STANDARD,
    *,
    plan_id: str | None = None,
    now: datetime | None = None,
) -> MealPlan:
    """Create a plan with one empty day per date in the inclusive range."""
    start = _parse_date(start_date)
    end = _parse_date(end_date)
    if start > end:
        raise MealPlanError(f"Start date {start} is after end date {end}")

    day_count = (end - start).days + 1
    created_at = now or datetime.now(tz=UTC)
    return MealPlan(
        id=plan_id or f"plan-{uuid4().hex}",
        name=name or generate_plan_name(start, end),
        start_date=start,
        end_date=end,
        days=tuple(
            Day(date=start + timedelta(days=offset)) for offset in range(day_count)
        ),
        diet_type=diet_type,
        keto_profile=keto_profile,
        created_at=created_at,
        updated_at=created_at,
    )


def meal_for_slot(meal: Meal, slot_id: str, day_date: date) -> Meal:
    """Normalise a meal's slot id, display label, order and default name."""
    slot = slot_id.strip().lower()
    display_type = meal.display_type
    if not display_type or display_type == GENERIC_DISPLAY_TYPE:
        display_type = slot_label(slot)
    order = meal.order if meal.order != UNKNOWN_SLOT_ORDER else slot_order(slot)
    name = meal.name or f"{display_type} du {day_date.strftime('%d/%m/%Y')}"
    return replace(meal, slot=slot, display_type=display_type, order=order, name=name)


@dataclass
class MealPlanEditor:
    """Edits plan meals, warning when a day drifts off its macro targets.

    Edits are never blocked by a failed verdict; the verdict is logged and
    returned alongside the new plan by the ``*_checked`` variants.
    """

    foods: FoodLookup
    recipes: RecipeLookup
    targets: MacroTargets

    def add_meal(self, plan: MealPlan, day_index: int, meal: Meal) -> MealPlan:
        return self.add_meal_checked(plan, day_index, meal)[0]

    def add_meal_checked(
        self, plan: MealPlan, day_index: int, meal: Meal
    ) -> tuple[MealPlan, MacroVerdict]:
        day = self._day(plan, day_index)
        if not meal.id:
            meal = replace(meal, id=f"meal-{uuid4().hex}")
        return self._apply(plan, day_index, replace(day, meals=(*day.meals, meal)))

    def add_meal_to_slot(
        self, plan: MealPlan, day_index: int, meal: Meal, slot_id: str
    ) -> MealPlan:
        day = self._day(plan, day_index)
        return self.add_meal(plan, day_index, meal_for_slot(meal, slot_id, day.date))

    def update_meal(
        self, plan: MealPlan, day_index: int, meal_id: str, meal: Meal
    ) -> MealPlan:
        return self.update_meal_checked(plan, day_index, meal_id, meal)[0]

    def update_meal_checked(
        self, plan: MealPlan, day_index: int, meal_id: str, meal: Meal
    ) -> tuple[MealPlan, MacroVerdict]:
        day = self._day(plan, day_index)
        self._ensure_meal(day, meal_id)
        updated = replace(meal, id=meal_id)
        meals = tuple(updated if item.id == meal_id else item for item in day.meals)
        return self._apply(plan, day_index, replace(day, meals=meals))

    def delete_meal(self, plan: MealPlan, day_index: int, meal_id: str) -> MealPlan:
        day = self._day(plan, day_index)
        self._ensure_meal(day, meal_id)
        meals = tuple(item for item in day.meals if item.id != meal_id)
        return _replace_day(plan, day_index, replace(day, meals=meals))

    def _apply(
        self, plan: MealPlan, day_index: int, day: Day
    ) -> tuple[MealPlan, MacroVerdict]:
        totals = aggregate_day_nutrition(day, self.foods, self.recipes)
        verdict = validate_macro_targets(totals, self.targets, plan.keto_profile)
        if not verdict.valid:
            _logger.warning(
                "Day off macro targets: plan=%s day=%s axes=%s deviations=%s",
                plan.id,
                day_index,
                ",".join(verdict.failed_axes),
                verdict.deviations,
            )
        return _replace_day(plan, day_index, day), verdict

    def _day(self, plan: MealPlan, day_index: int) -> Day:
        if day_index < 0 or day_index >= len(plan.days):
            raise MealPlanError(
                f"Day index {day_index} does not exist in plan {plan.id}"
            )
        return plan.days[day_index]

    def _ensure_meal(self, day: Day, meal_id: str) -> None:
        if not any(meal.id == meal_id for meal in day.meals):
            raise MealPlanError(f"Meal {meal_id} does not exist on {day.date}")


def _replace_day(plan: MealPlan, day_index: int, day: Day) -> MealPlan:
    days = plan.days[:day_index] + (day,) + plan.days[day_index + 1 :]
    return replace(plan, days=days, updated_at=datetime.now(tz=UTC))


def _parse_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise MealPlanError(f"Invalid plan date: {value!r}") from exc
