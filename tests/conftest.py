from datetime import date, datetime, timedelta

import matplotlib
import pytest

matplotlib.use("Agg")

from zeux_coach.domain.models import FoodEntry, TrainingEntry
from zeux_coach.storage import StorageService
from zeux_coach.utils import clock

# A Monday
TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 9, 30)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def food(calories=0, protein=0, carbs=0, fats=0, day=None, **kwargs) -> FoodEntry:
    return FoodEntry(
        name=kwargs.pop("name", "Meal"),
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        date=day or TODAY,
        **kwargs,
    )


def training(calories=0, category="strength", day=None, **kwargs) -> TrainingEntry:
    return TrainingEntry(
        name=kwargs.pop("name", "Session"),
        category=category,
        duration=kwargs.pop("duration", "45 min"),
        calories=calories,
        date=day or TODAY,
        **kwargs,
    )


class MemoryStore:
    """Dict-backed key-value store with the same surface as PostgresKeyValueStore."""

    def __init__(self):
        self.items = {}

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value

    def multi_remove(self, keys):
        for key in keys:
            self.items.pop(key, None)


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch):
    monkeypatch.setattr(clock, "today", lambda: TODAY)
    monkeypatch.setattr(clock, "now", lambda: NOW)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def storage(memory_store):
    return StorageService(memory_store)
