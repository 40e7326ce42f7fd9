import json
from datetime import datetime

import pytest

from conftest import NOW, TODAY, days_ago, food, training
from zeux_coach.domain.catalog import get_preset_plan
from zeux_coach.domain.models import UserSettings
from zeux_coach.storage import STORAGE_KEYS, StorageError, StorageService


class BrokenStore:
    def get_item(self, key):
        raise ConnectionError("store is down")

    def set_item(self, key, value):
        raise ConnectionError("store is down")

    def multi_remove(self, keys):
        raise ConnectionError("store is down")


class ReadFailingStore:
    """Reads fail, writes are recorded."""

    def __init__(self):
        self.writes = []

    def get_item(self, key):
        raise ConnectionError("read timed out")

    def set_item(self, key, value):
        self.writes.append((key, value))

    def multi_remove(self, keys):
        pass


# -----------------------------------
# FOODS & TRAININGS
# -----------------------------------

def test_empty_store_loads_empty_lists(storage):
    assert storage.load_foods() == []
    assert storage.load_trainings() == []
    assert storage.load_workout_plans() == []
    assert storage.latest_workout_plan() is None


def test_new_entries_go_first(storage):
    storage.add_food(food(name="Breakfast", calories=400))
    storage.add_food(food(name="Lunch", calories=700))

    assert [f.name for f in storage.load_foods()] == ["Lunch", "Breakfast"]


def test_entries_round_trip(storage):
    entry = food(name="Oats", calories=350, protein=12, carbs=60, fats=7, time="08:15")
    storage.add_food(entry)
    assert storage.load_foods() == [entry]


def test_training_type_is_stored_under_type_key(storage, memory_store):
    storage.add_training(training(calories=250, category="cardio", name="Run"))

    stored = json.loads(memory_store.items[STORAGE_KEYS["trainings"]])
    assert stored[0]["type"] == "cardio"
    assert "category" not in stored[0]
    assert storage.load_trainings()[0].category == "cardio"


def test_app_written_values_are_readable(storage, memory_store):
    memory_store.items[STORAGE_KEYS["foods"]] = json.dumps([
        {"id": "1", "name": "Toast", "calories": "210", "protein": 7, "carbs": 30, "fats": 6,
         "time": "07:30", "date": "10/19/2026"},
    ])
    [toast] = storage.load_foods()
    assert toast.calories == 210
    assert toast.date == TODAY


def test_delete_entries(storage):
    keep, drop = food(name="Keep"), food(name="Drop")
    storage.save_foods([keep, drop])
    storage.delete_food(drop.id)
    assert [f.name for f in storage.load_foods()] == ["Keep"]

    session = training()
    storage.add_training(session)
    storage.delete_training(session.id)
    assert storage.load_trainings() == []


def test_corrupt_value_loads_as_empty(storage, memory_store):
    memory_store.items[STORAGE_KEYS["foods"]] = "{not json"
    assert storage.load_foods() == []


def store_foods_with_one_bad_date(memory_store):
    good = [food(name="Eggs", calories=300), food(name="Salad", calories=250, day=days_ago(2))]
    items = [f.model_dump(mode="json") for f in good]
    items.insert(1, {"id": "legacy", "name": "Pasta", "calories": 600, "date": "2026/10/16"})
    memory_store.items[STORAGE_KEYS["foods"]] = json.dumps(items)


def test_one_bad_entry_does_not_hide_the_rest(storage, memory_store):
    store_foods_with_one_bad_date(memory_store)
    assert [f.name for f in storage.load_foods()] == ["Eggs", "Salad"]


def test_adding_keeps_entries_that_cannot_be_read(storage, memory_store):
    store_foods_with_one_bad_date(memory_store)

    storage.add_food(food(name="Soup", calories=100))

    assert [f.name for f in storage.load_foods()] == ["Soup", "Eggs", "Salad"]
    stored = json.loads(memory_store.items[STORAGE_KEYS["foods"]])
    assert [item["name"] for item in stored] == ["Soup", "Eggs", "Pasta", "Salad"]


def test_deleting_keeps_entries_that_cannot_be_read(storage, memory_store):
    store_foods_with_one_bad_date(memory_store)
    eggs = storage.load_foods()[0]

    storage.delete_food(eggs.id)

    stored = json.loads(memory_store.items[STORAGE_KEYS["foods"]])
    assert [item["name"] for item in stored] == ["Pasta", "Salad"]


def test_unreadable_list_is_not_overwritten(storage, memory_store):
    memory_store.items[STORAGE_KEYS["trainings"]] = "{not json"

    with pytest.raises(StorageError):
        storage.add_training(training())
    with pytest.raises(StorageError):
        storage.delete_training("anything")
    assert memory_store.items[STORAGE_KEYS["trainings"]] == "{not json"


def test_failed_read_never_turns_into_a_write():
    store = ReadFailingStore()
    storage = StorageService(store)

    with pytest.raises(StorageError):
        storage.add_food(food())
    with pytest.raises(StorageError):
        storage.delete_training("t1")
    with pytest.raises(StorageError):
        storage.save_workout_plan(get_preset_plan("beginner_3day"))
    with pytest.raises(StorageError):
        storage.update_settings(calorie_goal=1800)
    assert store.writes == []


def test_unreachable_store_reads_defaults_and_fails_writes():
    storage = StorageService(BrokenStore())

    assert storage.load_trainings() == []
    assert storage.load_settings() == UserSettings()
    with pytest.raises(StorageError):
        storage.add_food(food())
    with pytest.raises(StorageError):
        storage.clear_all_data()


# -----------------------------------
# SETTINGS
# -----------------------------------

def test_settings_default_and_update(storage):
    assert storage.load_settings().calorie_goal == 2000

    updated = storage.update_settings(calorie_goal=2400, weight=82.5)

    assert updated.calorie_goal == 2400
    assert storage.load_settings().weight == 82.5
    assert storage.load_settings().protein_goal == 150


# -----------------------------------
# WORKOUT PLANS
# -----------------------------------

def test_save_workout_plan_replaces_same_id(storage):
    plan = get_preset_plan("beginner_3day")
    storage.save_workout_plan(plan)
    storage.save_workout_plan(get_preset_plan("cardio_weight_loss"))

    renamed = plan.model_copy(update={"name": "My Plan"})
    storage.save_workout_plan(renamed)

    plans = storage.load_workout_plans()
    assert [p.id for p in plans] == ["preset_beginner_3day", "preset_cardio_weight_loss"]
    assert plans[0].name == "My Plan"


def test_latest_workout_plan_uses_created_at(storage):
    older = get_preset_plan("beginner_3day")
    newer = get_preset_plan("intermediate_5day_ppl").model_copy(update={"created_at": NOW})
    storage.save_workout_plans([newer, older])

    assert storage.latest_workout_plan().id == newer.id

    storage.delete_workout_plan(newer.id)
    assert storage.latest_workout_plan().id == older.id


# -----------------------------------
# RANGES, EXPORT, CLEAR
# -----------------------------------

def test_date_range_summary(storage):
    storage.save_foods([food(calories=600), food(calories=900, day=days_ago(3)), food(calories=50, day=days_ago(30))])
    storage.save_trainings([training(calories=300, day=days_ago(1))])

    summary = storage.get_date_range_summary(days_ago(6), TODAY)

    assert summary.total_calories_consumed == 1500
    assert summary.total_calories_burned == 300
    assert summary.net_calories == 1200
    assert summary.total_meals == 2
    assert summary.total_workouts == 1


def test_bad_range_bounds_return_nothing(storage):
    storage.save_foods([food()])
    assert storage.get_foods_by_date_range("yesterday", TODAY) == []
    assert storage.get_trainings_by_date_range(TODAY, "31/31/2026") == []


def test_export_then_import_into_fresh_store(storage, memory_store):
    storage.add_food(food(calories=300))
    storage.add_training(training(calories=200, category="yoga"))
    storage.update_settings(user_name="Sam")
    storage.save_workout_plan(get_preset_plan("beginner_3day"))

    exported = storage.export_all_data()
    assert exported["export_date"] == NOW.isoformat()
    assert exported["trainings"][0]["type"] == "yoga"

    fresh = StorageService(type(memory_store)())
    fresh.import_all_data(json.loads(json.dumps(exported)))

    assert fresh.load_foods() == storage.load_foods()
    assert fresh.load_trainings() == storage.load_trainings()
    assert fresh.load_settings().user_name == "Sam"
    assert fresh.load_workout_plans()[0].created_at == datetime(2025, 1, 1)


def test_partial_import_leaves_other_keys(storage):
    storage.add_food(food(calories=300))
    storage.import_all_data({"trainings": [
        {"name": "Swim", "type": "cardio", "date": "2026-10-18"},
        {"name": "Hike", "type": "cardio", "date": "last week"},
    ]})

    assert len(storage.load_foods()) == 1
    assert [t.name for t in storage.load_trainings()] == ["Swim"]


def test_clear_all_data(storage, memory_store):
    storage.add_food(food())
    storage.update_settings(calorie_goal=1800)
    memory_store.items["unrelated"] = "kept"

    storage.clear_all_data()

    assert memory_store.items == {"unrelated": "kept"}
    assert storage.load_settings().calorie_goal == 2000
