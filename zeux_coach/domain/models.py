import logging
import math
import uuid
from datetime import date, datetime
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

Difficulty = Literal["beginner", "intermediate", "advanced"]
Goal = Literal["strength", "hypertrophy", "endurance", "weight_loss", "general_fitness"]
EquipmentTier = Literal["none", "basic", "full_gym"]

REST_FOCUS = "Rest & Recovery"


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positives, like Math.round in the app."""
    return int(math.floor(value + 0.5))


def parse_day(value: Any) -> date:
    """
    Normalizes a stored day to a date.
    Accepts date/datetime objects, ISO strings (YYYY-MM-DD, optionally with a
    time part) and the app's locale format (M/D/YYYY).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "/" in text:
            return datetime.strptime(text, "%m/%d/%Y").date()
        return date.fromisoformat(text[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def coerce_amount(value: Any) -> int:
    """Safe numeric coercion: anything unparsable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return round_half_up(number)


def _new_id() -> str:
    return uuid.uuid4().hex


class FoodEntry(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = ""
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0
    time: str = ""
    image: Optional[str] = None
    date: date

    @field_validator("calories", "protein", "carbs", "fats", mode="before")
    @classmethod
    def _amount(cls, v):
        return coerce_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def _day(cls, v):
        return parse_day(v)


class TrainingEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    name: str = ""
    category: str = Field(default="", alias="type", description="e.g., 'strength', 'cardio', 'yoga'")
    duration: str = ""
    calories: int = 0
    notes: Optional[str] = None
    date: date

    @field_validator("calories", mode="before")
    @classmethod
    def _amount(cls, v):
        return coerce_amount(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return "" if v is None else str(v)

    @field_validator("date", mode="before")
    @classmethod
    def _day(cls, v):
        return parse_day(v)


class UserMetrics(BaseModel):
    calorie_goal: int
    average_calories_eaten: int = 0
    average_calories_burned: int = 0
    average_protein: int = 0
    average_carbs: int = 0
    average_fats: int = 0
    training_frequency: int = 0  # distinct training days in the window
    most_common_training_type: str = "strength"
    weight: Optional[float] = None


class Exercise(BaseModel):
    name: str
    sets: str
    reps: str
    equipment: Optional[EquipmentTier] = None
    rest_time: Optional[str] = None
    notes: Optional[str] = None


class WorkoutDay(BaseModel):
    day: str
    focus: str = Field(..., description="e.g., 'Push', 'Full Body', 'Rest & Recovery'")
    duration: str
    exercises: List[Exercise]
    icon: str
    calories_burned: Optional[int] = None


class WorkoutPlan(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    weekly_schedule: List[WorkoutDay]
    created_at: datetime
    difficulty: Difficulty
    goal: Goal


class WorkoutPreferences(BaseModel):
    days_per_week: int = Field(..., ge=1, le=7)
    session_duration: int = 50  # minutes, hint only
    difficulty: Difficulty
    goal: Goal
    equipment: EquipmentTier
    target_muscle_groups: Optional[List[str]] = None


class UserSettings(BaseModel):
    calorie_goal: int = 2000
    exercise_goal: int = 500
    water_goal: int = 8
    protein_goal: int = 150
    carbs_goal: int = 200
    fats_goal: int = 65
    user_name: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    age: Optional[int] = None


class ValidationResult(BaseModel):
    is_valid: bool
    warnings: List[str]


class DateRangeSummary(BaseModel):
    total_calories_consumed: int = 0
    total_calories_burned: int = 0
    net_calories: int = 0
    total_protein: int = 0
    total_carbs: int = 0
    total_fats: int = 0
    total_workouts: int = 0
    total_meals: int = 0


class ProgressRecord(BaseModel):
    total_workouts: int
    total_calories_burned: int
    average_workouts_per_week: float
    most_productive_day: str
    improvement: int  # % change, second half of the window vs first half


class DailyTotals(BaseModel):
    day: date
    calories: int = 0
    burned: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0
    workouts: int = 0


def valid_entries(model, entries: Iterable[Any]) -> List[Any]:
    """
    Validates each entry on its own. Entries that can't be read
    (bad or missing date, not an object) are skipped and logged.
    """
    valid = []
    for entry in entries:
        if isinstance(entry, model):
            valid.append(entry)
            continue
        try:
            valid.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping unreadable %s %r: %s", model.__name__, entry, e)
    return valid


def as_foods(entries: Iterable[Any]) -> List[FoodEntry]:
    """Accepts FoodEntry objects or plain dicts (as stored by the app)."""
    return valid_entries(FoodEntry, entries)


def as_trainings(entries: Iterable[Any]) -> List[TrainingEntry]:
    return valid_entries(TrainingEntry, entries)
