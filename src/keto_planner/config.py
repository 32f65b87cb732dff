"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from keto_planner.domain.plans import KetoProfile

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class PlannerSettings(BaseSettings):
    """Planner settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    default_calorie_target: float = 2000
    recipe_serving_mass_g: float = 250
    shopping_rounding_step_g: int = 5
    natural_unit_threshold: float = 0.75
    weight_change_window_days: int = 30
    goal_prediction_max_weeks: float = 52

    model_config = SettingsConfigDict(
        env_prefix="KETO_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_keto_profile(raw: str | None) -> KetoProfile:
    """Parse a keto profile tag, falling back to the standard profile."""
    if raw is None:
        return KetoProfile.STANDARD
    cleaned = raw.strip().lower()
    try:
        return KetoProfile(cleaned)
    except ValueError:
        return KetoProfile.STANDARD
