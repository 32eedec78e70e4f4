"""
Pydantic models for plan requests and the three response shapes.
"""
from typing import Literal, Optional, Union
from pydantic import BaseModel, Field

from ai_trainer.models.profile import EXAMPLE_PROFILE, UserProfile

RequestType = Literal["workout", "diet", "chat"]
Number = Union[int, float]


class ChatMessage(BaseModel):
    """Single conversational turn."""

    role: Literal["user", "assistant"]
    content: str


class PlanRequest(BaseModel):
    """Request body accepted by the AI trainer endpoint."""

    type: RequestType
    userProfile: UserProfile
    messages: Optional[list[ChatMessage]] = None
    customApiKey: Optional[str] = Field(None, description="Caller credential override")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "chat",
                "userProfile": EXAMPLE_PROFILE,
                "messages": [{"role": "user", "content": "How do I fix my squat depth?"}],
            }
        }


# --- Workout Models ---

class Exercise(BaseModel):
    """Single exercise in a workout day."""

    name: str
    sets: int = Field(..., gt=0)
    reps: str
    rest: str
    notes: Optional[str] = None


class WorkoutDay(BaseModel):
    """One day of the weekly plan."""

    day: str
    focus: str
    duration: str
    exercises: list[Exercise]


class WorkoutPlan(BaseModel):
    """Weekly workout plan."""

    weeklyPlan: list[WorkoutDay]
    tips: list[str] = []
    generatedAt: Optional[str] = None


# --- Diet Models ---

class Meal(BaseModel):
    """Single meal with its macro breakdown."""

    meal: str
    time: str
    name: str
    ingredients: list[str]
    calories: Number
    protein: Number
    carbs: Number
    fat: Number


class Macros(BaseModel):
    """Aggregate daily macros."""

    calories: Number
    protein: Number
    carbs: Number
    fat: Number


class DailyPlan(BaseModel):
    targetCalories: int
    meals: list[Meal]
    totalMacros: Macros


class DietPlan(BaseModel):
    """Daily diet plan."""

    dailyPlan: DailyPlan
    tips: list[str] = []
    generatedAt: Optional[str] = None


# --- Chat Models ---

class ChatReply(BaseModel):
    """Free-text coach reply."""

    response: str
    generatedAt: Optional[str] = None


PlanResponse = Union[WorkoutPlan, DietPlan, ChatReply]

PLAN_MODELS = {
    "workout": WorkoutPlan,
    "diet": DietPlan,
    "chat": ChatReply,
}
