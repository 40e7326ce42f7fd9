from conftest import food, training
from zeux_coach.coach.checkin import run_weekly_checkin
from zeux_coach.coach.planner import run_planner_pipeline


def seed(storage):
    storage.add_food(food(calories=2200, protein=180, carbs=200, fats=60))
    storage.add_training(training(calories=350, category="strength"))
    storage.update_settings(weight=80)


def test_planner_pipeline_saves_plan(storage, capsys):
    seed(storage)

    plan = run_planner_pipeline(storage)

    assert plan.name == "Strength Training Plan (3x/week)"
    assert [d.calories_burned for d in plan.weekly_schedule] == [102, 102, 102, 51]
    assert storage.load_workout_plans() == [plan]
    assert "✅ Pipeline Finished." in capsys.readouterr().out


def test_planner_pipeline_explicit_weight_and_equipment(storage):
    seed(storage)

    plan = run_planner_pipeline(storage, equipment="none", weight_kg=70)

    assert plan.weekly_schedule[-1].calories_burned == 45
    for day in plan.weekly_schedule:
        assert all(ex.equipment == "none" for ex in day.exercises)


def test_weekly_checkin_against_latest_plan(storage):
    seed(storage)
    plan = run_planner_pipeline(storage)

    report = run_weekly_checkin(storage)

    assert report["plan_id"] == plan.id
    assert report["recommendations"] == [
        "Consider reducing training days to match your current schedule and build consistency.",
    ]
    assert [i.split(" ")[0] for i in report["insights"]] == ["⚠️", "💪", "🏃"]
    assert report["progress"].total_workouts == 1
    assert report["progress"].total_calories_burned == 350


def test_weekly_checkin_without_plan(storage):
    seed(storage)

    report = run_weekly_checkin(storage)

    assert report["plan_id"] is None
    assert report["recommendations"] == []
    assert report["insights"]


def test_weekly_checkin_unknown_plan_id(storage):
    seed(storage)
    run_planner_pipeline(storage)

    report = run_weekly_checkin(storage, plan_id="plan_missing")

    assert report["plan_id"] is None
    assert report["recommendations"] == []
