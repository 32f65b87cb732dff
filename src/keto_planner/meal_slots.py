"""Meal-slot configuration."""

from dataclasses import dataclass
from enum import Enum

UNKNOWN_SLOT_ORDER = 999


@dataclass(frozen=True)
class MealSlotInfo:
    """Declarative meal-slot definition."""

    id: str
    label: str
    order: int


class MealSlot(Enum):
    """Enum of meal slots (single source of truth), in display order."""

    BREAKFAST = MealSlotInfo("petit_dejeuner", "Petit déjeuner", 1)
    MORNING_SNACK = MealSlotInfo("collation_matin", "Collation du matin", 2)
    LUNCH = MealSlotInfo("dejeuner", "Déjeuner", 3)
    AFTERNOON_SNACK = MealSlotInfo("collation_aprem", "Collation après-midi", 4)
    DINNER = MealSlotInfo("souper", "Souper", 5)


_BY_ID = {slot.value.id: slot.value for slot in MealSlot}

_FREQUENCIES: dict[int, tuple[MealSlot, ...]] = {
    1: (MealSlot.DINNER,),
    2: (MealSlot.LUNCH, MealSlot.DINNER),
    3: (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER),
    4: (
        MealSlot.BREAKFAST,
        MealSlot.LUNCH,
        MealSlot.AFTERNOON_SNACK,
        MealSlot.DINNER,
    ),
    5: tuple(MealSlot),
}


def slot_info(slot_id: str) -> MealSlotInfo | None:
    return _BY_ID.get(slot_id.strip().lower())


def slot_label(slot_id: str) -> str:
    """Return the display label, or the id itself for unknown slots."""
    info = slot_info(slot_id)
    return info.label if info else slot_id


def slot_order(slot_id: str) -> int:
    """Return the sort key of a slot; unknown slots sort last."""
    info = slot_info(slot_id)
    return info.order if info else UNKNOWN_SLOT_ORDER


def slots_for_frequency(meals_per_day: int) -> list[str]:
    """Return slot ids for a number of meals per day (defaults to two)."""
    slots = _FREQUENCIES.get(meals_per_day, _FREQUENCIES[2])
    return [slot.value.id for slot in slots]
