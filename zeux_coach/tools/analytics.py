from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from zeux_coach.domain.models import (
    DailyTotals,
    DateRangeSummary,
    as_foods,
    as_trainings,
    parse_day,
    round_half_up,
)
from zeux_coach.utils import clock


def filter_by_date_range(entries: Iterable[Any], start: Any, end: Any) -> List[Any]:
    """Keeps entries whose day falls in [start, end], both ends included."""
    start_day, end_day = parse_day(start), parse_day(end)
    return [e for e in entries if start_day <= e.date <= end_day]


def foods_in_range(foods: Iterable[Any], start: Any, end: Any):
    return filter_by_date_range(as_foods(foods), start, end)


def trainings_in_range(trainings: Iterable[Any], start: Any, end: Any):
    return filter_by_date_range(as_trainings(trainings), start, end)


def summarize(foods: Iterable[Any], trainings: Iterable[Any]) -> DateRangeSummary:
    foods = as_foods(foods)
    trainings = as_trainings(trainings)

    consumed = sum(f.calories for f in foods)
    burned = sum(t.calories for t in trainings)
    return DateRangeSummary(
        total_calories_consumed=consumed,
        total_calories_burned=burned,
        net_calories=consumed - burned,
        total_protein=sum(f.protein for f in foods),
        total_carbs=sum(f.carbs for f in foods),
        total_fats=sum(f.fats for f in foods),
        total_workouts=len(trainings),
        total_meals=len(foods),
    )


def summarize_date_range(foods: Iterable[Any], trainings: Iterable[Any], start: Any, end: Any) -> DateRangeSummary:
    return summarize(foods_in_range(foods, start, end), trainings_in_range(trainings, start, end))


# =================================================
# HOME SCREEN
# =================================================

def get_today_calories(foods: Iterable[Any], trainings: Iterable[Any], today: Optional[date] = None) -> Dict[str, int]:
    today = today or clock.today()
    summary = summarize_date_range(foods, trainings, today, today)
    return {"eaten": summary.total_calories_consumed, "burned": summary.total_calories_burned}


def get_today_macros(foods: Iterable[Any], today: Optional[date] = None) -> Dict[str, int]:
    today = today or clock.today()
    todays = foods_in_range(foods, today, today)
    return {
        "protein": sum(f.protein for f in todays),
        "carbs": sum(f.carbs for f in todays),
        "fats": sum(f.fats for f in todays),
    }


def macro_goals_from_calories(calorie_goal: int) -> Dict[str, int]:
    # 30% protein, 40% carbs, 30% fat; 4 / 4 / 9 kcal per gram
    return {
        "protein": round_half_up(calorie_goal * 0.30 / 4),
        "carbs": round_half_up(calorie_goal * 0.40 / 4),
        "fats": round_half_up(calorie_goal * 0.30 / 9),
    }


# =================================================
# DAILY BREAKDOWN (week / month views)
# =================================================

def daily_totals(foods: Iterable[Any], trainings: Iterable[Any], start: Any, end: Any) -> List[DailyTotals]:
    """One row per calendar day in [start, end], days without entries included as zeros."""
    start_day, end_day = parse_day(start), parse_day(end)
    if start_day > end_day:
        return []

    rows = {}
    day = start_day
    while day <= end_day:
        rows[day] = DailyTotals(day=day)
        day += timedelta(days=1)

    for food in foods_in_range(foods, start_day, end_day):
        row = rows[food.date]
        row.calories += food.calories
        row.protein += food.protein
        row.carbs += food.carbs
        row.fats += food.fats

    for training in trainings_in_range(trainings, start_day, end_day):
        row = rows[training.date]
        row.burned += training.calories
        row.workouts += 1

    return list(rows.values())
