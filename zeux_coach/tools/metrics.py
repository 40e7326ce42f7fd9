import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from zeux_coach.domain.models import (
    Difficulty,
    Goal,
    UserMetrics,
    as_foods,
    as_trainings,
    round_half_up,
)
from zeux_coach.utils import clock

logger = logging.getLogger(__name__)

DEFAULT_TRAINING_TYPE = "strength"


def analyze_user_data(
    foods: Iterable[Any],
    trainings: Iterable[Any],
    calorie_goal: int,
    window_days: int = 7,
    today: Optional[date] = None,
) -> UserMetrics:
    """
    Reduces the food and training log over the trailing window into daily averages.
    Calculates:
    1. Average calories eaten/burned and macros per day (sum / window length).
    2. Training frequency (distinct training days).
    3. Most common training type (ties go to the type seen first).
    """
    today = today or clock.today()
    cutoff = today - timedelta(days=window_days)

    # trailing window ends today; the cutoff day itself is outside
    recent_foods = [f for f in as_foods(foods) if f.date > cutoff]
    recent_trainings = [t for t in as_trainings(trainings) if t.date > cutoff]

    # --- AVERAGES: divided by the full window, not by active days ---
    def per_day(total: int) -> int:
        if window_days <= 0:
            return 0
        return round_half_up(total / window_days)

    # --- FREQUENCY: distinct dates, not entries ---
    training_frequency = len({t.date for t in recent_trainings})

    # --- DOMINANT TYPE ---
    # dicts keep insertion order, so max() returns the first tag seen with the top count
    type_counts = {}
    for training in recent_trainings:
        type_counts[training.category] = type_counts.get(training.category, 0) + 1
    if type_counts:
        most_common = max(type_counts, key=type_counts.get)
    else:
        most_common = DEFAULT_TRAINING_TYPE

    metrics = UserMetrics(
        calorie_goal=calorie_goal,
        average_calories_eaten=per_day(sum(f.calories for f in recent_foods)),
        average_calories_burned=per_day(sum(t.calories for t in recent_trainings)),
        average_protein=per_day(sum(f.protein for f in recent_foods)),
        average_carbs=per_day(sum(f.carbs for f in recent_foods)),
        average_fats=per_day(sum(f.fats for f in recent_foods)),
        training_frequency=training_frequency,
        most_common_training_type=most_common,
    )
    logger.debug(
        "Analyzed %d foods / %d trainings since %s: %s",
        len(recent_foods), len(recent_trainings), cutoff, metrics,
    )
    return metrics


def calorie_balance(metrics: UserMetrics) -> int:
    return metrics.average_calories_eaten - metrics.calorie_goal


def protein_ratio(metrics: UserMetrics) -> float:
    # protein grams against total calories expressed as grams (4 kcal/g)
    if metrics.average_calories_eaten == 0:
        return 0.0
    return metrics.average_protein / (metrics.average_calories_eaten / 4)


def determine_goal_from_data(metrics: UserMetrics) -> Goal:
    balance = calorie_balance(metrics)
    ratio = protein_ratio(metrics)
    training_type = metrics.most_common_training_type.lower()

    # Eating under goal while burning a lot
    if balance < -200 and metrics.average_calories_burned > 300:
        return "weight_loss"

    # High protein at maintenance
    if ratio > 0.25 and abs(balance) < 200:
        return "hypertrophy"

    if "cardio" in training_type or "run" in training_type:
        return "endurance"

    if "strength" in training_type or "barbell" in training_type:
        return "strength"

    return "general_fitness"


def determine_difficulty(metrics: UserMetrics) -> Difficulty:
    if metrics.training_frequency <= 2 or metrics.average_calories_burned < 200:
        return "beginner"

    if metrics.training_frequency <= 4 and metrics.average_calories_burned < 400:
        return "intermediate"

    return "advanced"


def suggest_training_frequency(metrics: UserMetrics) -> int:
    """Nudges the user one day up from where they are, capped at 5."""
    if metrics.training_frequency >= 5:
        return 5
    if metrics.training_frequency >= 3:
        return metrics.training_frequency + 1
    # 1-2 days and brand-new users both start at 3
    return 3
