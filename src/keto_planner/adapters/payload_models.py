"""Pydantic models for plain-data payloads exchanged with the UI layer."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NutritionPayload(_Payload):
    """Nutrition record, per 100 g or per serving."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    net_carbs: float | None = Field(default=None, alias="netCarbs")


class MacrosPayload(_Payload):
    """Cached macros stored on meal items and meals."""

    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    net_carbs: float = Field(default=0.0, alias="netCarbs")


class FoodPayload(_Payload):
    id: str
    name: str
    category: str | None = None
    nutrition_per_100g: NutritionPayload = Field(alias="nutritionPer100g")
    ph_value: float | None = Field(default=None, alias="pHValue", ge=0, le=14)
    common_unit_weight: float | None = Field(
        default=None, alias="commonUnitWeight", gt=0
    )
    unit_name: str | None = Field(default=None, alias="unitName")


class IngredientPayload(_Payload):
    food_id: str = Field(alias="foodId")
    quantity: float = Field(ge=0)


class RecipePayload(_Payload):
    id: str
    name: str
    nutrition_per_serving: NutritionPayload = Field(alias="nutritionPerServing")
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    average_ph_value: float | None = Field(
        default=None, alias="averagePHValue", ge=0, le=14
    )


class MealItemPayload(_Payload):
    """Meal item discriminated by ``type``."""

    type: Literal["food", "recipe"] = "food"
    id: str
    quantity: float | None = None
    servings: float | None = None
    calories: float | None = None
    macros: MacrosPayload | None = None


class MealPayload(_Payload):
    id: str = ""
    type: str = ""
    name: str = ""
    display_type: str = Field(default="", alias="displayType")
    order: int | None = None
    items: list[MealItemPayload] = Field(default_factory=list)
    calories: float | None = None
    macros: MacrosPayload | None = None


class DayPayload(_Payload):
    date: str
    meals: list[MealPayload] = Field(default_factory=list)


class MealPlanPayload(_Payload):
    id: str
    name: str = ""
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    diet_type: str = Field(default="keto_standard", alias="dietType")
    keto_profile: str = Field(default="standard", alias="ketoProfile")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    days: list[DayPayload] = Field(default_factory=list)


class WeightEntryPayload(_Payload):
    date: str
    weight: float = Field(gt=0)


class ShoppingItemPayload(_Payload):
    id: str
    name: str
    quantity: float
    unit: str
    checked: bool = False


class ShoppingListPayload(_Payload):
    plan_id: str = Field(alias="planId")
    plan_name: str = Field(alias="planName")
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    generated_at: str = Field(alias="generatedAt")
    categories: dict[str, list[ShoppingItemPayload]] = Field(default_factory=dict)
