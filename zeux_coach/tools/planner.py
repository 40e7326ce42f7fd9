import hashlib
import logging
from collections import Counter
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence, Union

from zeux_coach.domain.catalog import DEFAULT_CATALOG, ExerciseCatalog
from zeux_coach.domain.models import (
    REST_FOCUS,
    Difficulty,
    EquipmentTier,
    Exercise,
    Goal,
    UserMetrics,
    ValidationResult,
    WorkoutDay,
    WorkoutPlan,
    WorkoutPreferences,
    round_half_up,
)
from zeux_coach.tools.metrics import (
    analyze_user_data,
    calorie_balance,
    determine_difficulty,
    determine_goal_from_data,
    suggest_training_frequency,
)
from zeux_coach.utils import clock

logger = logging.getLogger(__name__)

WEEK_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

EXERCISES_PER_DIFFICULTY = {"beginner": 4, "intermediate": 5, "advanced": 6}
MET_VALUES = {"beginner": 4.0, "intermediate": 6.0, "advanced": 8.0}
HOURS_PER_EXERCISE = 0.08  # ~5 min
MINUTES_PER_EXERCISE = 5
DEFAULT_WEIGHT_KG = 70

FOCUS_ICONS = {
    "push": "arrow-up-outline",
    "pull": "arrow-down-outline",
    "legs": "body-outline",
    "lower body": "body-outline",
    "upper body": "barbell-outline",
    "full body": "fitness-outline",
    "cardio": "flash-outline",
    "cardio & core": "flash-outline",
    "rest & recovery": "bed-outline",
}
DEFAULT_ICON = "fitness-outline"

# Equipment tags usable at each tier (none < basic < full_gym)
_ALLOWED_EQUIPMENT = {
    "none": ("none",),
    "basic": ("none", "basic"),
    "full_gym": ("none", "basic", "full_gym"),
}


# =================================================
# EXERCISE SELECTION
# =================================================

def filter_by_equipment(exercises: Sequence[Exercise], equipment: EquipmentTier) -> List[Exercise]:
    allowed = _ALLOWED_EQUIPMENT.get(equipment)
    if allowed is None:
        # unknown tier behaves like a full gym
        return list(exercises)
    return [ex for ex in exercises if ex.equipment in allowed]


def adjust_sets_for_goal(sets: str, goal: str) -> str:
    """Endurance/weight-loss get one extra set; the leading number of the range is used."""
    if goal not in ("endurance", "weight_loss"):
        return sets
    try:
        num_sets = int(sets.split("-")[0])
    except ValueError:
        num_sets = 3
    if num_sets == 0:
        num_sets = 3
    return str(num_sets + 1)


def adjust_reps_for_goal(reps: str, goal: str) -> str:
    if goal == "strength":
        return "4-6"
    if goal in ("endurance", "weight_loss"):
        return "15-20"
    return reps


def select_exercises(
    focus: str,
    difficulty: Difficulty,
    equipment: EquipmentTier,
    goal: Goal,
    catalog: ExerciseCatalog = DEFAULT_CATALOG,
) -> List[Exercise]:
    """
    Picks exercises for one day, in catalog order, then adapts sets/reps to the goal.
    Same inputs always give the same list.
    """
    count = EXERCISES_PER_DIFFICULTY.get(difficulty, 5)

    def pool(exercises):
        return filter_by_equipment(exercises, equipment)

    key = focus.lower()
    if key in ("push", "upper body"):
        selected = pool(catalog.push)[:count]
    elif key == "pull":
        selected = pool(catalog.pull)[:count]
    elif key in ("legs", "lower body"):
        selected = (
            pool(catalog.quad_focused)[:2]
            + pool(catalog.hamstring_focused)[:2]
            + pool(catalog.calves)[:1]
        )[:count]
    elif key in ("cardio", "cardio & core"):
        selected = (pool(catalog.cardio)[:2] + pool(catalog.core)[:3])[:count]
    else:
        selected = (pool(catalog.full_body)[:3] + pool(catalog.core)[:2])[:count]

    return [
        Exercise(**{
            **ex.model_dump(),
            "sets": adjust_sets_for_goal(ex.sets, goal),
            "reps": adjust_reps_for_goal(ex.reps, goal),
        })
        for ex in selected
    ]


# =================================================
# PLAN GENERATION
# =================================================

def workout_split(days_per_week: int) -> List[str]:
    if days_per_week <= 3:
        return ["Full Body", "Full Body", "Full Body"]
    if days_per_week == 4:
        return ["Upper Body", "Lower Body", "Upper Body", "Lower Body"]
    if days_per_week == 5:
        return ["Push", "Pull", "Legs", "Push", "Pull"]
    return ["Push", "Pull", "Legs", "Upper Body", "Lower Body", "Full Body"]


def icon_for_focus(focus: str) -> str:
    return FOCUS_ICONS.get(focus.lower(), DEFAULT_ICON)


def calculate_duration(exercises: Sequence[Exercise]) -> str:
    return f"{len(exercises) * MINUTES_PER_EXERCISE} min"


def _plan_id(created_at: datetime, preferences: WorkoutPreferences) -> str:
    millis = int(created_at.timestamp() * 1000)
    digest = hashlib.blake2b(preferences.model_dump_json().encode(), digest_size=8).hexdigest()
    return f"plan_{millis}_{digest[:9]}"


def generate_workout_plan(
    preferences: Union[WorkoutPreferences, dict],
    catalog: ExerciseCatalog = DEFAULT_CATALOG,
    now: Optional[datetime] = None,
) -> WorkoutPlan:
    if not isinstance(preferences, WorkoutPreferences):
        preferences = WorkoutPreferences.model_validate(preferences)

    days_per_week = preferences.days_per_week
    split = workout_split(days_per_week)

    weekly_schedule = []
    for index, day in enumerate(WEEK_DAYS[:days_per_week]):
        focus = split[index] if index < len(split) else "Full Body"
        exercises = select_exercises(
            focus, preferences.difficulty, preferences.equipment, preferences.goal, catalog
        )
        weekly_schedule.append(WorkoutDay(
            day=day,
            focus=focus,
            duration=calculate_duration(exercises),
            icon=icon_for_focus(focus),
            exercises=exercises,
        ))

    if days_per_week < 7:
        weekly_schedule.append(WorkoutDay(
            day=WEEK_DAYS[days_per_week],
            focus=REST_FOCUS,
            duration="30 min",
            icon=icon_for_focus(REST_FOCUS),
            exercises=[Exercise(**ex.model_dump()) for ex in catalog.recovery[:2]],
        ))

    created_at = now or clock.now()
    plan = WorkoutPlan(
        id=_plan_id(created_at, preferences),
        name=f"Custom {preferences.difficulty} Plan",
        description=f"{days_per_week} day {preferences.goal} focused plan",
        weekly_schedule=weekly_schedule,
        created_at=created_at,
        difficulty=preferences.difficulty,
        goal=preferences.goal,
    )
    logger.info("Generated plan %s (%d days, %s/%s)", plan.id, len(weekly_schedule),
                plan.difficulty, plan.goal)
    return plan


def estimate_calories_burned(
    exercises: Sequence[Any],
    weight_kg: float = DEFAULT_WEIGHT_KG,
    difficulty: Difficulty = "intermediate",
) -> int:
    """Linear MET estimate: MET x kg x hours, with ~4.8 min per exercise."""
    met = MET_VALUES.get(difficulty, MET_VALUES["intermediate"])
    duration_hours = len(exercises) * HOURS_PER_EXERCISE
    return round_half_up(met * weight_kg * duration_hours)


def _plan_name(goal: Goal, difficulty: Difficulty, days_per_week: int) -> str:
    if goal == "weight_loss":
        return f"Weight Loss Plan ({days_per_week}x/week)"
    if goal == "hypertrophy":
        return f"Muscle Building Plan ({days_per_week}x/week)"
    if goal == "strength":
        return f"Strength Training Plan ({days_per_week}x/week)"
    return f"Smart {difficulty.capitalize()} Plan"


def _plan_description(metrics: UserMetrics, goal: Goal, days_per_week: int) -> str:
    is_deficit = calorie_balance(metrics) < -100
    description = f"Based on your {days_per_week} day training history, "

    if goal == "weight_loss":
        description += "this plan focuses on high-volume training and cardio to maximize calorie burn. "
        if is_deficit:
            description += "You're already in a good calorie deficit. Keep it up!"
        else:
            description += "Combine with a slight calorie deficit for best results."
    elif goal == "hypertrophy":
        quality = "excellent" if metrics.average_protein >= 100 else "good, but could be increased"
        description += "this plan emphasizes progressive overload and muscle building. "
        description += f"Your protein intake of {metrics.average_protein}g/day is {quality}."
    elif goal == "strength":
        description += "this plan focuses on low-rep, high-intensity compound movements. "
        description += "Ensure adequate rest and nutrition for optimal strength gains."
    elif goal == "endurance":
        description += "this plan builds cardiovascular endurance and stamina. "
        description += f"Stay consistent with {metrics.average_carbs}g carbs to fuel your workouts."
    else:
        description += "this balanced plan helps you maintain overall fitness and health."
    return description


def generate_data_driven_workout_plan(
    foods: Iterable[Any],
    trainings: Iterable[Any],
    calorie_goal: int,
    equipment: EquipmentTier = "basic",
    weight_kg: Optional[float] = None,
    catalog: ExerciseCatalog = DEFAULT_CATALOG,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> WorkoutPlan:
    """
    Builds a plan from the user's own log:
    metrics (7 days) -> goal, difficulty, days/week -> plan -> calorie estimates.
    """
    metrics = analyze_user_data(foods, trainings, calorie_goal, window_days=7, today=today)

    goal = determine_goal_from_data(metrics)
    difficulty = determine_difficulty(metrics)
    days_per_week = suggest_training_frequency(metrics)

    preferences = WorkoutPreferences(
        days_per_week=days_per_week,
        session_duration=40 if goal in ("endurance", "weight_loss") else 50,
        difficulty=difficulty,
        goal=goal,
        equipment=equipment,
    )
    plan = generate_workout_plan(preferences, catalog=catalog, now=now)

    weight = weight_kg or DEFAULT_WEIGHT_KG
    schedule = [
        day.model_copy(update={
            "calories_burned": estimate_calories_burned(day.exercises, weight, difficulty)
        })
        for day in plan.weekly_schedule
    ]

    return plan.model_copy(update={
        "name": _plan_name(goal, difficulty, days_per_week),
        "description": _plan_description(metrics, goal, days_per_week),
        "weekly_schedule": schedule,
    })


# =================================================
# VALIDATION
# =================================================

def validate_workout_plan(plan: WorkoutPlan) -> ValidationResult:
    warnings = []

    # Counter keeps first-seen order, so warnings follow the week
    focus_count = Counter(day.focus for day in plan.weekly_schedule)
    for focus, count in focus_count.items():
        if count > 3 and focus != REST_FOCUS:
            warnings.append(f"Too many {focus} sessions ({count}). Consider more variety.")

    rest_days = focus_count.get(REST_FOCUS, 0)
    if rest_days == 0 and len(plan.weekly_schedule) == 7:
        warnings.append("No rest days scheduled. Recovery is important for progress.")

    for day in plan.weekly_schedule:
        if len(day.exercises) > 8:
            warnings.append(
                f"{day.day} has too many exercises ({len(day.exercises)}). May lead to fatigue."
            )

    return ValidationResult(is_valid=not warnings, warnings=warnings)
