"""Tests for planner settings."""

import pytest

from keto_planner.config import PlannerSettings, parse_keto_profile
from keto_planner.domain.plans import KetoProfile


def test_settings_defaults(settings: PlannerSettings) -> None:
    assert settings.default_calorie_target == 2000
    assert settings.recipe_serving_mass_g == 250
    assert settings.shopping_rounding_step_g == 5
    assert settings.natural_unit_threshold == 0.75
    assert settings.weight_change_window_days == 30


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KETO_DEFAULT_CALORIE_TARGET", "1800")
    monkeypatch.setenv("KETO_RECIPE_SERVING_MASS_G", "300")

    settings = PlannerSettings()

    assert settings.default_calorie_target == 1800
    assert settings.recipe_serving_mass_g == 300


def test_parse_keto_profile() -> None:
    assert parse_keto_profile(" PRISE_MASSE ") == KetoProfile.MASS_GAIN
    assert parse_keto_profile("cyclique") == KetoProfile.CYCLICAL
    assert parse_keto_profile("paleo") == KetoProfile.STANDARD
    assert parse_keto_profile(None) == KetoProfile.STANDARD
