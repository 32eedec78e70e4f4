"""
Pydantic models for the user profile and derived energy estimate.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

LBS_TO_KG = 0.453592
FT_TO_CM = 30.48

WeightUnit = Literal["kg", "lbs"]
HeightUnit = Literal["cm", "ft"]
Gender = Literal["male", "female", "other"]
Goal = Literal["lose", "gain", "maintain", "build"]
FitnessLevel = Literal["beginner", "intermediate", "advanced"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "veryActive"]

EXAMPLE_PROFILE = {
    "name": "Alex",
    "weight": 70,
    "weightUnit": "kg",
    "height": 175,
    "heightUnit": "cm",
    "age": 30,
    "gender": "male",
    "goal": "lose",
    "fitnessLevel": "intermediate",
    "activityLevel": "moderate",
    "equipment": "dumbbells, pull-up bar",
}


class UserProfile(BaseModel):
    """Profile collected during onboarding. Immutable per request."""

    name: str = Field(default="", max_length=100)
    weight: float = Field(..., gt=0)
    weightUnit: WeightUnit = "kg"
    height: float = Field(..., gt=0)
    heightUnit: HeightUnit = "cm"
    age: int = Field(..., gt=0)
    gender: Gender
    goal: Goal
    fitnessLevel: FitnessLevel
    activityLevel: ActivityLevel = "moderate"
    equipment: Optional[str] = Field(None, max_length=500)
    dietaryPreferences: Optional[str] = Field(None, max_length=500)
    allergies: Optional[str] = Field(None, max_length=500)

    class Config:
        frozen = True
        json_schema_extra = {"example": EXAMPLE_PROFILE}

    @property
    def weight_kg(self) -> float:
        if self.weightUnit == "lbs":
            return self.weight * LBS_TO_KG
        return self.weight

    @property
    def height_cm(self) -> float:
        if self.heightUnit == "ft":
            return self.height * FT_TO_CM
        return self.height


class EnergyEstimate(BaseModel):
    """BMR, TDEE and goal-adjusted calories. Recomputed per request, never stored."""

    bmr: float
    tdee: int
    targetCalories: int
