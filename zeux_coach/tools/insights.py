import math
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional

from zeux_coach.domain.models import (
    REST_FOCUS,
    ProgressRecord,
    WorkoutPlan,
    as_trainings,
    round_half_up,
)
from zeux_coach.tools.metrics import analyze_user_data, calorie_balance, determine_goal_from_data
from zeux_coach.utils import clock

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def generate_insights(
    foods: Iterable[Any],
    trainings: Iterable[Any],
    calorie_goal: int,
    today: Optional[date] = None,
) -> List[str]:
    """Threshold rules over the last 7 days, always emitted in the same order."""
    metrics = analyze_user_data(foods, trainings, calorie_goal, today=today)
    insights = []

    # --- CALORIE BALANCE ---
    balance = calorie_balance(metrics)
    if balance < -500:
        insights.append("⚠️ You're eating significantly below your calorie goal. "
                        "This may affect your energy levels and recovery.")
    elif balance > 500:
        insights.append("📊 You're consistently above your calorie goal. "
                        "Consider adjusting portions or increasing activity.")
    elif abs(balance) < 100:
        insights.append("✅ Great job maintaining your calorie balance!")

    # --- PROTEIN ---
    if metrics.average_protein < 80:
        insights.append("💪 Consider increasing protein intake to support muscle recovery and growth.")
    elif metrics.average_protein >= 100:
        insights.append("💪 Excellent protein intake! This supports muscle building and recovery.")

    # --- TRAINING FREQUENCY ---
    if metrics.training_frequency == 0:
        insights.append("🏃 Start with 2-3 training sessions per week to build a consistent habit.")
    elif metrics.training_frequency == 1:
        insights.append("🏃 Try adding 1-2 more training sessions per week for better results.")
    elif metrics.training_frequency >= 5:
        insights.append("🔥 Impressive training frequency! Make sure you're getting enough rest.")

    # --- GOAL vs NET CALORIES ---
    net_calories = metrics.average_calories_eaten - metrics.average_calories_burned
    goal = determine_goal_from_data(metrics)
    if goal == "weight_loss" and net_calories > metrics.calorie_goal:
        insights.append("⚖️ For weight loss, try to maintain a calorie deficit by eating less "
                        "or burning more through exercise.")
    elif goal == "hypertrophy" and net_calories < metrics.calorie_goal - 200:
        insights.append("⚖️ For muscle building, ensure you're eating enough to support growth "
                        "(slight calorie surplus).")

    # --- CARBS FOR ENDURANCE ---
    total_macros = metrics.average_protein + metrics.average_carbs + metrics.average_fats
    if total_macros > 0 and goal == "endurance":
        if metrics.average_carbs / total_macros < 0.25:
            insights.append("🍞 Endurance training benefits from higher carb intake. "
                            "Consider adding more carbs to fuel your workouts.")

    return insights


def recommend_adjustments(trainings: Iterable[Any], current_plan: WorkoutPlan) -> List[str]:
    """
    Compares the latest logged sessions with the plan.
    Entries are expected newest first, as the log stores them.
    """
    recent = as_trainings(trainings)[:7]
    recommendations = []

    completed_days = len({t.date for t in recent})
    planned_days = len([d for d in current_plan.weekly_schedule if d.focus != REST_FOCUS])

    if completed_days < planned_days * 0.7:
        recommendations.append(
            "Consider reducing training days to match your current schedule and build consistency."
        )
    elif completed_days == planned_days:
        recommendations.append(
            "Great consistency! You might be ready to progress to a more challenging plan."
        )

    types = [t.category.lower() for t in recent]
    has_cardio = any("cardio" in t or "run" in t for t in types)
    has_strength = any("strength" in t or "barbell" in t for t in types)

    if not has_cardio and current_plan.goal != "strength":
        recommendations.append("Add 1-2 cardio sessions per week for cardiovascular health.")

    if not has_strength and current_plan.goal != "endurance":
        recommendations.append("Include strength training to build muscle and improve metabolism.")

    return recommendations


def calculate_progress(
    trainings: Iterable[Any],
    window_days: int = 30,
    today: Optional[date] = None,
) -> ProgressRecord:
    today = today or clock.today()
    cutoff = today - timedelta(days=window_days)
    recent = [t for t in as_trainings(trainings) if t.date > cutoff]

    total_workouts = len(recent)
    total_calories = sum(t.calories for t in recent)
    per_week = total_workouts * 7 / window_days if window_days > 0 else 0.0

    # ties go to the weekday seen first
    day_count = {}
    for training in recent:
        name = WEEKDAY_NAMES[training.date.weekday()]
        day_count[name] = day_count.get(name, 0) + 1
    most_productive = max(day_count, key=day_count.get) if day_count else "None"

    # --- IMPROVEMENT: older half vs newer half of the window ---
    midpoint = window_days // 2
    first_half = [t for t in recent if (today - t.date).days >= midpoint]
    second_half = [t for t in recent if (today - t.date).days < midpoint]
    if first_half:
        improvement = (len(second_half) - len(first_half)) / len(first_half) * 100
    else:
        improvement = 0

    return ProgressRecord(
        total_workouts=total_workouts,
        total_calories_burned=total_calories,
        average_workouts_per_week=math.floor(per_week * 10 + 0.5) / 10,
        most_productive_day=most_productive,
        improvement=round_half_up(improvement),
    )
