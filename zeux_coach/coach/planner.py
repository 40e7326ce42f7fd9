import logging
from datetime import date
from typing import Optional

from zeux_coach.config import Config
from zeux_coach.domain.models import WorkoutPlan
from zeux_coach.storage import StorageService
from zeux_coach.tools.planner import generate_data_driven_workout_plan, validate_workout_plan


def run_planner_pipeline(
    storage: StorageService,
    equipment: Optional[str] = None,
    weight_kg: Optional[float] = None,
    today: Optional[date] = None,
) -> WorkoutPlan:
    """
    The entry point for plan creation:
    load the logs and settings, build a plan from them, check it, save it.
    """
    settings = storage.load_settings()
    foods = storage.load_foods()
    trainings = storage.load_trainings()
    print(f"🤖 Planner Active. {len(foods)} meals / {len(trainings)} trainings loaded.")

    plan = generate_data_driven_workout_plan(
        foods,
        trainings,
        settings.calorie_goal,
        equipment=equipment or Config.DEFAULT_EQUIPMENT,
        weight_kg=weight_kg or settings.weight or Config.DEFAULT_WEIGHT_KG,
        today=today,
    )

    result = validate_workout_plan(plan)
    for warning in result.warnings:
        print(f"⚠️ {warning}")

    storage.save_workout_plan(plan)
    print(f"💾 Saved: {plan.name} ({plan.id})")

    print("✅ Pipeline Finished.")
    return plan


# --- TEST RUN ---
if __name__ == "__main__":
    from zeux_coach.utils.database import PostgresKeyValueStore

    logging.basicConfig(level=Config.LOG_LEVEL)
    Config.validate_database()

    store = PostgresKeyValueStore()
    store.create_table()
    plan = run_planner_pipeline(StorageService(store))

    print(f"\n{plan.name}\n{plan.description}")
    for day in plan.weekly_schedule:
        print(f"\n{day.day} - {day.focus} ({day.duration}, ~{day.calories_burned} kcal)")
        for idx, exercise in enumerate(day.exercises, start=1):
            print(f"  {idx}. {exercise.name}: {exercise.sets} sets x {exercise.reps} reps")
