from datetime import datetime
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict

from zeux_coach.domain.models import Exercise, WorkoutDay, WorkoutPlan


class CatalogExercise(Exercise):
    model_config = ConfigDict(frozen=True)


class ExerciseCatalog(BaseModel):
    """
    Read-only exercise database, grouped by movement pattern.
    Order inside each group is the selection order used by the planner.
    """
    model_config = ConfigDict(frozen=True)

    push: Tuple[CatalogExercise, ...]
    pull: Tuple[CatalogExercise, ...]
    quad_focused: Tuple[CatalogExercise, ...]
    hamstring_focused: Tuple[CatalogExercise, ...]
    calves: Tuple[CatalogExercise, ...]
    core: Tuple[CatalogExercise, ...]
    cardio: Tuple[CatalogExercise, ...]
    full_body: Tuple[CatalogExercise, ...]
    recovery: Tuple[CatalogExercise, ...]


def _ex(name: str, sets: str, reps: str, equipment: str) -> CatalogExercise:
    return CatalogExercise(name=name, sets=sets, reps=reps, equipment=equipment)


DEFAULT_CATALOG = ExerciseCatalog(
    push=[
        _ex("Bench Press", "3-4", "8-12", "full_gym"),
        _ex("Incline Press", "3", "10-12", "full_gym"),
        _ex("Dumbbell Press", "3", "10-12", "basic"),
        _ex("Push-ups", "3-4", "12-20", "none"),
        _ex("Shoulder Press", "3", "10-12", "basic"),
        _ex("Lateral Raises", "3", "12-15", "basic"),
        _ex("Tricep Dips", "3", "10-15", "basic"),
        _ex("Chest Fly", "3", "12-15", "basic"),
    ],
    pull=[
        _ex("Pull-ups", "3-4", "6-12", "basic"),
        _ex("Lat Pulldown", "3", "10-12", "full_gym"),
        _ex("Dumbbell Row", "3", "10-12", "basic"),
        _ex("Face Pulls", "3", "15", "full_gym"),
        _ex("Bicep Curls", "3", "12-15", "basic"),
        _ex("Hammer Curls", "3", "12-15", "basic"),
        _ex("Bent Over Row", "3", "10-12", "basic"),
    ],
    quad_focused=[
        _ex("Squats", "4", "8-12", "basic"),
        _ex("Leg Press", "3", "12-15", "full_gym"),
        _ex("Lunges", "3", "12/leg", "basic"),
        _ex("Bulgarian Split Squats", "3", "10/leg", "basic"),
        _ex("Leg Extension", "3", "12-15", "full_gym"),
    ],
    hamstring_focused=[
        _ex("Romanian Deadlifts", "3-4", "10-12", "basic"),
        _ex("Leg Curls", "3", "12-15", "full_gym"),
        _ex("Good Mornings", "3", "10-12", "basic"),
        _ex("Glute Bridges", "3", "15-20", "none"),
    ],
    calves=[
        _ex("Calf Raises", "3-4", "15-20", "basic"),
        _ex("Seated Calf Raises", "3", "15-20", "full_gym"),
    ],
    core=[
        _ex("Planks", "3", "60 sec", "none"),
        _ex("Russian Twists", "3", "20", "basic"),
        _ex("Mountain Climbers", "3", "15", "none"),
        _ex("Bicycle Crunches", "3", "20", "none"),
        _ex("Dead Bug", "3", "12", "none"),
        _ex("Leg Raises", "3", "12-15", "basic"),
        _ex("Ab Wheel Rollouts", "3", "10-12", "basic"),
    ],
    cardio=[
        _ex("Running", "1", "20-30 min", "none"),
        _ex("Cycling", "1", "20-30 min", "basic"),
        _ex("Jump Rope", "5", "2 min", "basic"),
        _ex("Burpees", "4", "10-15", "none"),
        _ex("High Knees", "4", "30 sec", "none"),
        _ex("Rowing Machine", "1", "15-20 min", "full_gym"),
    ],
    full_body=[
        _ex("Deadlifts", "3-4", "6-10", "basic"),
        _ex("Clean and Press", "3", "8-10", "basic"),
        _ex("Thrusters", "3", "10-12", "basic"),
        _ex("Kettlebell Swings", "4", "15-20", "basic"),
        _ex("Turkish Get-ups", "3", "5/side", "basic"),
    ],
    recovery=[
        _ex("Stretching", "1", "15-20 min", "none"),
        _ex("Light Walking", "1", "15-30 min", "none"),
        _ex("Foam Rolling", "1", "10-15 min", "basic"),
        _ex("Yoga Flow", "1", "20-30 min", "none"),
    ],
)


# =================================================
# PRESET PLANS
# =================================================

_PRESET_DATE = datetime(2025, 1, 1)


def _day(day: str, focus: str, duration: str, icon: str, exercises) -> WorkoutDay:
    return WorkoutDay(
        day=day,
        focus=focus,
        duration=duration,
        icon=icon,
        exercises=[Exercise(name=n, sets=s, reps=r) for n, s, r in exercises],
    )


PRESET_PLANS: Dict[str, WorkoutPlan] = {
    "beginner_3day": WorkoutPlan(
        id="preset_beginner_3day",
        name="Beginner Full Body (3 Days)",
        difficulty="beginner",
        goal="general_fitness",
        created_at=_PRESET_DATE,
        weekly_schedule=[
            _day("Monday", "Full Body", "40 min", "fitness-outline", [
                ("Squats", "3", "10-12"),
                ("Push-ups", "3", "10-15"),
                ("Dumbbell Row", "3", "10-12"),
                ("Planks", "3", "30-45 sec"),
            ]),
            _day("Wednesday", "Full Body", "40 min", "fitness-outline", [
                ("Lunges", "3", "10/leg"),
                ("Shoulder Press", "3", "10-12"),
                ("Glute Bridges", "3", "15"),
                ("Bicycle Crunches", "3", "15"),
            ]),
            _day("Friday", "Full Body", "40 min", "fitness-outline", [
                ("Romanian Deadlifts", "3", "10-12"),
                ("Dumbbell Press", "3", "10-12"),
                ("Bicep Curls", "3", "12-15"),
                ("Mountain Climbers", "3", "12"),
            ]),
        ],
    ),
    "intermediate_5day_ppl": WorkoutPlan(
        id="preset_intermediate_5day_ppl",
        name="Push/Pull/Legs (5 Days)",
        difficulty="intermediate",
        goal="hypertrophy",
        created_at=_PRESET_DATE,
        weekly_schedule=[
            _day("Monday", "Push Day", "50 min", "arrow-up-outline", [
                ("Bench Press", "4", "8-10"),
                ("Incline Press", "3", "10-12"),
                ("Shoulder Press", "3", "10-12"),
                ("Lateral Raises", "3", "12-15"),
                ("Tricep Dips", "3", "10-12"),
            ]),
            _day("Tuesday", "Pull Day", "50 min", "arrow-down-outline", [
                ("Pull-ups", "4", "8-10"),
                ("Bent Over Row", "3", "10-12"),
                ("Face Pulls", "3", "15"),
                ("Bicep Curls", "3", "12-15"),
                ("Hammer Curls", "3", "12-15"),
            ]),
            _day("Thursday", "Leg Day", "55 min", "body-outline", [
                ("Squats", "4", "8-10"),
                ("Romanian Deadlifts", "3", "10-12"),
                ("Lunges", "3", "12/leg"),
                ("Leg Curls", "3", "12-15"),
                ("Calf Raises", "4", "15-20"),
            ]),
            _day("Friday", "Push Day", "50 min", "arrow-up-outline", [
                ("Dumbbell Press", "4", "8-10"),
                ("Chest Fly", "3", "12-15"),
                ("Lateral Raises", "4", "12-15"),
                ("Tricep Dips", "3", "10-12"),
            ]),
            _day("Saturday", "Pull Day", "50 min", "arrow-down-outline", [
                ("Lat Pulldown", "4", "10-12"),
                ("Dumbbell Row", "3", "10-12"),
                ("Face Pulls", "3", "15"),
                ("Hammer Curls", "3", "12-15"),
            ]),
        ],
    ),
    "cardio_weight_loss": WorkoutPlan(
        id="preset_cardio_weight_loss",
        name="Cardio + Strength (Weight Loss)",
        difficulty="intermediate",
        goal="weight_loss",
        created_at=_PRESET_DATE,
        weekly_schedule=[
            _day("Monday", "Cardio & Core", "35 min", "flash-outline", [
                ("Running", "1", "20 min"),
                ("Planks", "3", "60 sec"),
                ("Mountain Climbers", "3", "15"),
                ("Burpees", "3", "10"),
            ]),
            _day("Tuesday", "Upper Body", "40 min", "barbell-outline", [
                ("Push-ups", "3", "15-20"),
                ("Dumbbell Row", "3", "12-15"),
                ("Shoulder Press", "3", "12-15"),
                ("Bicep Curls", "3", "15"),
            ]),
            _day("Thursday", "Cardio & Core", "35 min", "flash-outline", [
                ("Cycling", "1", "20 min"),
                ("Russian Twists", "3", "20"),
                ("High Knees", "4", "30 sec"),
                ("Jump Rope", "4", "1 min"),
            ]),
            _day("Friday", "Lower Body", "40 min", "body-outline", [
                ("Squats", "3", "15-20"),
                ("Lunges", "3", "15/leg"),
                ("Glute Bridges", "3", "20"),
                ("Calf Raises", "3", "20"),
            ]),
            _day("Saturday", "Full Body HIIT", "30 min", "fitness-outline", [
                ("Burpees", "4", "12"),
                ("Mountain Climbers", "4", "20"),
                ("Jump Rope", "4", "2 min"),
                ("High Knees", "4", "45 sec"),
            ]),
        ],
    ),
}


def get_preset_plan(key: str) -> WorkoutPlan:
    """Returns an independent copy of a preset plan. Raises KeyError for unknown keys."""
    return PRESET_PLANS[key].model_copy(deep=True)
