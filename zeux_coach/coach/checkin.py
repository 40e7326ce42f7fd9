import logging
from datetime import date
from typing import Any, Dict, Optional

from zeux_coach.config import Config
from zeux_coach.storage import StorageService
from zeux_coach.tools.insights import calculate_progress, generate_insights, recommend_adjustments

logger = logging.getLogger(__name__)


def run_weekly_checkin(
    storage: StorageService,
    plan_id: Optional[str] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Compares what was planned against what was logged.
    Uses the given plan, or the most recently created one.
    """
    settings = storage.load_settings()
    foods = storage.load_foods()
    trainings = storage.load_trainings()

    if plan_id:
        plan = next((p for p in storage.load_workout_plans() if p.id == plan_id), None)
    else:
        plan = storage.latest_workout_plan()

    if plan is None:
        logger.info("No workout plan found (plan_id=%s); skipping adjustments", plan_id)
        recommendations = []
    else:
        recommendations = recommend_adjustments(trainings, plan)

    return {
        "plan_id": plan.id if plan else None,
        "recommendations": recommendations,
        "insights": generate_insights(foods, trainings, settings.calorie_goal, today=today),
        "progress": calculate_progress(trainings, Config.PROGRESS_WINDOW_DAYS, today=today),
    }


if __name__ == "__main__":
    from zeux_coach.utils.database import PostgresKeyValueStore

    logging.basicConfig(level=Config.LOG_LEVEL)
    Config.validate_database()

    print("🕵️ Coach checking this week's progress...")
    report = run_weekly_checkin(StorageService(PostgresKeyValueStore()))

    for line in report["insights"] + report["recommendations"]:
        print(f" - {line}")
    progress = report["progress"]
    print(f"📊 {progress.total_workouts} workouts, {progress.total_calories_burned} kcal, "
          f"{progress.average_workouts_per_week}/week, best day: {progress.most_productive_day}, "
          f"trend: {progress.improvement:+d}%")
