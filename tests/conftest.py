"""
Pytest fixtures for the AI Trainer service tests.
"""
import json
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Mock environment variables before importing app
os.environ.setdefault("AI_GATEWAY_API_KEY", "test-api-key")
os.environ.setdefault("RATE_LIMIT", "1000/minute")

from fastapi.testclient import TestClient

from ai_trainer.main import app


def completion(content):
    """Chat-completion response carrying the given text."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def make_completion():
    """Factory for fake chat-completion responses."""
    return completion


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def mock_gateway():
    """
    Mock the upstream AI gateway client.

    Yields the completions.create mock; its build_client attribute is the
    patched client factory (to check which key was used).
    """
    upstream = MagicMock()
    create = AsyncMock(return_value=completion('{"test": "response"}'))
    upstream.chat.completions.create = create
    upstream.close = AsyncMock()
    with patch("ai_trainer.services.gateway._build_client", return_value=upstream) as build:
        create.build_client = build
        yield create


@pytest.fixture
def sample_profile():
    """Sample onboarding profile."""
    return {
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


@pytest.fixture
def sample_workout_plan():
    """Sample weekly workout plan."""
    return {
        "weeklyPlan": [
            {
                "day": "Monday",
                "focus": "Chest & Triceps",
                "duration": "45 mins",
                "exercises": [
                    {"name": "Push-ups", "sets": 3, "reps": "10-12", "rest": "60 sec", "notes": "Keep core tight"},
                    {"name": "Dumbbell Press", "sets": 4, "reps": "8-10", "rest": "90 sec"},
                ],
            },
            {
                "day": "Tuesday",
                "focus": "Rest & Mobility",
                "duration": "20 mins",
                "exercises": [
                    {"name": "Hip Flexor Stretch", "sets": 2, "reps": "30 sec each side", "rest": "15 sec"},
                ],
            },
        ],
        "tips": ["Warm up before every session", "Sleep at least 7 hours"],
    }


@pytest.fixture
def sample_diet_plan():
    """Sample daily diet plan."""
    return {
        "dailyPlan": {
            "targetCalories": 2128,
            "meals": [
                {
                    "meal": "Breakfast",
                    "time": "7:00 AM",
                    "name": "Greek Yogurt Bowl",
                    "ingredients": ["greek yogurt", "berries", "oats"],
                    "calories": 420,
                    "protein": 32,
                    "carbs": 48,
                    "fat": 11,
                },
                {
                    "meal": "Snack",
                    "time": "10:30 AM",
                    "name": "Apple and Almonds",
                    "ingredients": ["apple", "almonds"],
                    "calories": 210,
                    "protein": 6,
                    "carbs": 24,
                    "fat": 11.5,
                },
            ],
            "totalMacros": {"calories": 630, "protein": 38, "carbs": 72, "fat": 22.5},
        },
        "tips": ["Drink water with every meal"],
    }


@pytest.fixture
def workout_reply(sample_workout_plan):
    """Model output wrapping the workout plan in prose."""
    return "Here is your plan:\n```json\n" + json.dumps(sample_workout_plan) + "\n```\nStay consistent!"
