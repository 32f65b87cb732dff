"""Domain models for user profiles."""

from dataclasses import dataclass
from enum import Enum

from keto_planner.domain.plans import KetoProfile


class Sex(str, Enum):
    MALE = "homme"
    FEMALE = "femme"
    OTHER = "autre"


class ActivityLevel(str, Enum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "sédentaire"
    LIGHTLY_ACTIVE = "légèrement_actif"
    MODERATELY_ACTIVE = "modérément_actif"
    VERY_ACTIVE = "très_actif"
    EXTREMELY_ACTIVE = "extrêmement_actif"


class WeightGoal(str, Enum):
    LOSE = "perte_poids"
    MAINTAIN = "maintien_poids"
    GAIN = "prise_poids"


@dataclass(frozen=True)
class UserProfile:
    """Body data and preferences used to derive nutrition targets."""

    sex: Sex
    age: int
    weight: float
    height: float
    activity_level: ActivityLevel
    target_weight: float
    weight_goal: WeightGoal | None = None
    calorie_target: float | None = None
    keto_profile: KetoProfile = KetoProfile.STANDARD
