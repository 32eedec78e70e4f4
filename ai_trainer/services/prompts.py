"""
System prompts for the three trainer request types.
"""
from ai_trainer.models.profile import UserProfile
from ai_trainer.services.metabolic import estimate_energy

SYNTHETIC_TURN = {"role": "user", "content": "Generate the plan"}


WORKOUT_JSON_SHAPE = """{
  "weeklyPlan": [
    {
      "day": "Monday",
      "focus": "Chest & Triceps",
      "duration": "45 mins",
      "exercises": [
        {
          "name": "Exercise Name",
          "sets": 3,
          "reps": "10-12",
          "rest": "60 sec",
          "notes": "Optional tips"
        }
      ]
    }
  ],
  "tips": ["General tip 1", "General tip 2"]
}"""


DIET_JSON_SHAPE = """{{
  "dailyPlan": {{
    "targetCalories": {target_calories},
    "meals": [
      {{
        "meal": "Breakfast",
        "time": "7:00 AM",
        "name": "Meal Name",
        "ingredients": ["ingredient 1", "ingredient 2"],
        "calories": 400,
        "protein": 30,
        "carbs": 40,
        "fat": 15
      }}
    ],
    "totalMacros": {{
      "calories": 2000,
      "protein": 150,
      "carbs": 200,
      "fat": 70
    }}
  }},
  "tips": ["Nutrition tip 1", "Nutrition tip 2"]
}}"""


def _profile_lines(profile: UserProfile, goal_label: str = "Goal") -> str:
    return (
        f"- Weight: {profile.weight:g} {profile.weightUnit}\n"
        f"- Height: {profile.height:g} {profile.heightUnit}\n"
        f"- Age: {profile.age}\n"
        f"- Gender: {profile.gender}\n"
        f"- {goal_label}: {profile.goal}\n"
    )


def build_workout_prompt(profile: UserProfile) -> str:
    """Weekly workout planner instructions."""
    return f"""You are an expert fitness trainer and workout planner. Create a personalized weekly workout plan based on the user's profile.

User Profile:
{_profile_lines(profile, "Fitness Goal")}- Fitness Level: {profile.fitnessLevel}
- Available Equipment: {profile.equipment or 'None specified'}

Create a detailed 7-day workout plan. For each day, include:
1. Workout name and focus area
2. Warm-up exercises (5-10 mins)
3. Main exercises with sets, reps, and rest periods
4. Cool-down stretches

Format the response as valid JSON with this structure:
{WORKOUT_JSON_SHAPE}"""


def build_diet_prompt(profile: UserProfile) -> str:
    """
    Daily meal planner instructions.

    Target calories come from a fresh energy estimate of the profile.
    """
    target_calories = estimate_energy(profile).targetCalories

    return f"""You are an expert nutritionist and meal planner. Create a personalized daily meal plan based on the user's profile.

User Profile:
{_profile_lines(profile)}- Estimated Daily Calories: {target_calories}
- Dietary Preferences: {profile.dietaryPreferences or 'None'}
- Allergies: {profile.allergies or 'None'}

Create a detailed daily meal plan. Include:
1. Breakfast, Lunch, Dinner, and 2 Snacks
2. Specific portions and ingredients
3. Macronutrient breakdown for each meal
4. Total daily macros

Format the response as valid JSON with this structure:
{DIET_JSON_SHAPE.format(target_calories=target_calories)}"""


def build_chat_prompt(profile: UserProfile) -> str:
    """Coach persona with the profile as standing context."""
    return f"""You are an expert AI fitness coach and nutritionist. You help users with:
- Workout advice and exercise form tips
- Nutrition guidance and meal suggestions
- Motivation and accountability
- Answering fitness-related questions
- Adjusting their workout or diet plans

User Profile:
{_profile_lines(profile)}- Fitness Level: {profile.fitnessLevel}

Be encouraging, supportive, and provide actionable advice. Keep responses concise but helpful."""


PROMPT_BUILDERS = {
    "workout": build_workout_prompt,
    "diet": build_diet_prompt,
    "chat": build_chat_prompt,
}


def build_system_prompt(request_type: str, profile: UserProfile) -> str:
    return PROMPT_BUILDERS[request_type](profile)


def build_messages(request_type: str, profile: UserProfile, history: list[dict] = None) -> list[dict]:
    """
    Assemble the chat-completion message list.

    Args:
        request_type: "workout", "diet" or "chat"
        profile: User profile
        history: Prior turns for chat; ignored for plan requests

    Returns:
        System turn followed by the conversation, or the synthetic
        "Generate the plan" turn when there is no conversation
    """
    turns = history if request_type == "chat" and history else [dict(SYNTHETIC_TURN)]
    return [
        {"role": "system", "content": build_system_prompt(request_type, profile)},
        *turns,
    ]
