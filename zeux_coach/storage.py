import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from zeux_coach.config import Config
from zeux_coach.domain.models import (
    DateRangeSummary,
    FoodEntry,
    TrainingEntry,
    UserSettings,
    WorkoutPlan,
    as_foods,
    as_trainings,
    valid_entries,
)
from zeux_coach.tools.analytics import filter_by_date_range, summarize
from zeux_coach.utils import clock

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "foods": "@zeux_foods",
    "trainings": "@zeux_trainings",
    "settings": "@zeux_settings",
    "workout_plans": "@zeux_workout_plans",
}

_raw_list_adapter = TypeAdapter(List[Any])
_foods_adapter = TypeAdapter(List[FoodEntry])
_trainings_adapter = TypeAdapter(List[TrainingEntry])
_plans_adapter = TypeAdapter(List[WorkoutPlan])
_settings_adapter = TypeAdapter(UserSettings)


def _as_plans(entries) -> List[WorkoutPlan]:
    return valid_entries(WorkoutPlan, entries)


def _entry_id(item: Any) -> Optional[str]:
    return item.get("id") if isinstance(item, dict) else None


class StorageError(Exception):
    """The key-value store could not be read or written."""


class StorageService:
    """
    Persists the food log, training log, settings and saved plans as JSON
    values in a key-value store (one key per category).

    The store needs get_item(key), set_item(key, value) and multi_remove(keys);
    see zeux_coach.utils.database.PostgresKeyValueStore.
    Loads never raise: an unreadable value loads as empty/defaults and
    unreadable entries inside a list are skipped.
    Add/delete work on the stored list as-is, so entries this code can't
    read are kept. They raise StorageError when the list can't be read,
    instead of overwriting it.
    """

    def __init__(self, store):
        self.store = store

    # ==================== LOW LEVEL ====================

    def _read(self, category: str, adapter: TypeAdapter, default, strict: bool = False):
        """strict: a store failure raises StorageError instead of returning the default."""
        try:
            raw = self.store.get_item(STORAGE_KEYS[category])
        except Exception as e:
            logger.exception("Error loading %s", category)
            if strict:
                raise StorageError(f"Failed to load {category} data") from e
            return default
        if raw is None:
            return default
        try:
            return adapter.validate_json(raw)
        except ValidationError:
            logger.exception("Stored %s is unreadable", category)
            return default

    def _read_list(self, category: str) -> List[Any]:
        """The stored list, entries untouched. Raises StorageError if it can't be read."""
        try:
            raw = self.store.get_item(STORAGE_KEYS[category])
            return _raw_list_adapter.validate_json(raw) if raw is not None else []
        except Exception as e:
            logger.exception("Error loading %s", category)
            raise StorageError(f"Failed to load {category} data") from e

    def _load_list(self, category: str, parse: Callable[[List[Any]], List[Any]]) -> List[Any]:
        try:
            return parse(self._read_list(category))
        except StorageError:
            return []

    def _write(self, category: str, adapter: TypeAdapter, value):
        try:
            payload = adapter.dump_json(value, by_alias=True).decode()
            self.store.set_item(STORAGE_KEYS[category], payload)
        except Exception as e:
            logger.exception("Error saving %s", category)
            raise StorageError(f"Failed to save {category} data") from e

    def _prepend(self, category: str, entry):
        items = self._read_list(category)
        items.insert(0, entry.model_dump(mode="json", by_alias=True))
        self._write(category, _raw_list_adapter, items)

    def _remove(self, category: str, entry_id: str):
        items = self._read_list(category)
        self._write(category, _raw_list_adapter, [i for i in items if _entry_id(i) != entry_id])

    # ==================== FOOD OPERATIONS ====================

    def save_foods(self, foods: List[FoodEntry]):
        self._write("foods", _foods_adapter, foods)

    def load_foods(self) -> List[FoodEntry]:
        return self._load_list("foods", as_foods)

    def add_food(self, food: FoodEntry):
        """Newest entries go first."""
        self._prepend("foods", food)

    def delete_food(self, food_id: str):
        self._remove("foods", food_id)

    # ==================== TRAINING OPERATIONS ====================

    def save_trainings(self, trainings: List[TrainingEntry]):
        self._write("trainings", _trainings_adapter, trainings)

    def load_trainings(self) -> List[TrainingEntry]:
        return self._load_list("trainings", as_trainings)

    def add_training(self, training: TrainingEntry):
        self._prepend("trainings", training)

    def delete_training(self, training_id: str):
        self._remove("trainings", training_id)

    # ==================== SETTINGS OPERATIONS ====================

    def save_settings(self, settings: UserSettings):
        self._write("settings", _settings_adapter, settings)

    def load_settings(self) -> UserSettings:
        return self._read("settings", _settings_adapter, UserSettings(calorie_goal=Config.DEFAULT_CALORIE_GOAL))

    def update_settings(self, **changes) -> UserSettings:
        current = self._read(
            "settings", _settings_adapter, UserSettings(calorie_goal=Config.DEFAULT_CALORIE_GOAL), strict=True
        )
        updated = UserSettings.model_validate(current.model_copy(update=changes).model_dump())
        self.save_settings(updated)
        return updated

    # ==================== WORKOUT PLANS OPERATIONS ====================

    def save_workout_plans(self, plans: List[WorkoutPlan]):
        self._write("workout_plans", _plans_adapter, plans)

    def load_workout_plans(self) -> List[WorkoutPlan]:
        return self._load_list("workout_plans", _as_plans)

    def save_workout_plan(self, plan: WorkoutPlan):
        """Adds the plan, or replaces the stored one with the same id."""
        items = self._read_list("workout_plans")
        stored = plan.model_dump(mode="json")
        for index, item in enumerate(items):
            if _entry_id(item) == plan.id:
                items[index] = stored
                break
        else:
            items.append(stored)
        self._write("workout_plans", _raw_list_adapter, items)

    def delete_workout_plan(self, plan_id: str):
        self._remove("workout_plans", plan_id)

    # ==================== ANALYTICS & AGGREGATION ====================

    def get_foods_by_date_range(self, start: Any, end: Any) -> List[FoodEntry]:
        try:
            return filter_by_date_range(self.load_foods(), start, end)
        except ValueError:
            logger.exception("Error getting foods by date range %r - %r", start, end)
            return []

    def get_trainings_by_date_range(self, start: Any, end: Any) -> List[TrainingEntry]:
        try:
            return filter_by_date_range(self.load_trainings(), start, end)
        except ValueError:
            logger.exception("Error getting trainings by date range %r - %r", start, end)
            return []

    def get_date_range_summary(self, start: Any, end: Any) -> DateRangeSummary:
        foods = self.get_foods_by_date_range(start, end)
        trainings = self.get_trainings_by_date_range(start, end)
        return summarize(foods, trainings)

    # ==================== UTILITY FUNCTIONS ====================

    def clear_all_data(self):
        try:
            self.store.multi_remove(list(STORAGE_KEYS.values()))
        except Exception as e:
            logger.exception("Error clearing all data")
            raise StorageError("Failed to clear app data") from e

    def export_all_data(self) -> Dict[str, Any]:
        return {
            "foods": [f.model_dump(mode="json", by_alias=True) for f in self.load_foods()],
            "trainings": [t.model_dump(mode="json", by_alias=True) for t in self.load_trainings()],
            "settings": self.load_settings().model_dump(mode="json"),
            "workout_plans": [p.model_dump(mode="json") for p in self.load_workout_plans()],
            "export_date": clock.now().isoformat(),
        }

    def import_all_data(self, data: Dict[str, Any]):
        """Restores whichever categories are present in an export. Unreadable entries are skipped."""
        if data.get("foods") is not None:
            self.save_foods(as_foods(data["foods"]))
        if data.get("trainings") is not None:
            self.save_trainings(as_trainings(data["trainings"]))
        if data.get("settings") is not None:
            self.save_settings(UserSettings.model_validate(data["settings"]))
        if data.get("workout_plans") is not None:
            self.save_workout_plans(_as_plans(data["workout_plans"]))

    def latest_workout_plan(self) -> Optional[WorkoutPlan]:
        plans = self.load_workout_plans()
        if not plans:
            return None
        return max(plans, key=lambda p: p.created_at)
