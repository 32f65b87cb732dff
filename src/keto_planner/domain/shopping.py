"""Domain models for shopping lists."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class ShoppingItem:
    """Shopping line for one food; ``checked`` is toggled by the user."""

    id: str
    name: str
    quantity: float
    unit: str
    checked: bool = False


@dataclass
class ShoppingList:
    """Shopping list derived from a plan, grouped by food category."""

    plan_id: str
    plan_name: str
    start_date: date
    end_date: date
    generated_at: datetime
    categories: dict[str, list[ShoppingItem]] = field(default_factory=dict)

    def items(self) -> list[ShoppingItem]:
        """Return every item across categories."""
        return [item for group in self.categories.values() for item in group]
