"""
Energy expenditure estimation: BMR -> TDEE -> goal-adjusted calorie target.

BMR uses the revised Harris-Benedict equation (Roza & Shizgal). Inputs are
trusted as-is; no clamping of implausible results.
"""
import math

from ai_trainer.models.profile import EnergyEstimate, UserProfile

DEFAULT_ACTIVITY_MULTIPLIER = 1.55

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "veryActive": 1.9,
}

# Calorie adjustment from TDEE per goal; unlisted goals keep TDEE
GOAL_ADJUSTMENTS = {
    "lose": -500,
    "gain": 300,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """
    Basal metabolic rate in kcal/day.

    "female" and "other" both use the female coefficients.
    """
    if gender == "male":
        return 88.362 + (13.397 * weight_kg) + (4.799 * height_cm) - (5.677 * age)
    return 447.593 + (9.247 * weight_kg) + (3.098 * height_cm) - (4.330 * age)


def activity_multiplier(activity_level: str) -> float:
    """Look up the TDEE multiplier; unrecognized levels count as moderate."""
    return ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)


def calculate_tdee(bmr: float, activity_level: str) -> int:
    return _round_half_up(bmr * activity_multiplier(activity_level))


def calculate_target_calories(tdee: float, goal: str) -> int:
    return _round_half_up(tdee + GOAL_ADJUSTMENTS.get(goal, 0))


def estimate_energy(profile: UserProfile) -> EnergyEstimate:
    """
    Run the full estimation pipeline for a profile.

    Args:
        profile: Validated user profile (any units)

    Returns:
        Fresh EnergyEstimate; nothing is cached
    """
    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, profile.age, profile.gender)
    tdee = calculate_tdee(bmr, profile.activityLevel)
    return EnergyEstimate(
        bmr=bmr,
        tdee=tdee,
        targetCalories=calculate_target_calories(tdee, profile.goal),
    )
