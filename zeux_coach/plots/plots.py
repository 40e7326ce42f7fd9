from datetime import timedelta
from typing import Any, Iterable, Optional

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from zeux_coach.tools.analytics import daily_totals
from zeux_coach.utils import clock

COLUMNS = ["day", "calories", "burned", "net", "protein", "carbs", "fats", "workouts"]


# -----------------------------------
# DATA: daily calories and macros
# -----------------------------------
def build_daily_frame(foods: Iterable[Any], trainings: Iterable[Any], start: Any, end: Any) -> pd.DataFrame:
    """
    Returns a DataFrame with one row per day in [start, end]:
      - calories / burned / net: kcal eaten, burned and the difference
      - protein / carbs / fats: grams eaten
      - workouts: number of logged trainings
    """
    rows = [row.model_dump() for row in daily_totals(foods, trainings, start, end)]
    df = pd.DataFrame(rows, columns=[c for c in COLUMNS if c != "net"])
    df["net"] = df["calories"] - df["burned"]
    df["day"] = pd.to_datetime(df["day"])
    return df[COLUMNS]


def last_week_frame(foods: Iterable[Any], trainings: Iterable[Any], today=None) -> pd.DataFrame:
    """The week view: the 7 days ending today."""
    today = today or clock.today()
    return build_daily_frame(foods, trainings, today - timedelta(days=6), today)


def weekly_averages(df: pd.DataFrame) -> pd.DataFrame:
    """
    The month view: per calendar week (starting Monday) average daily calories,
    burned kcal and macros, plus total workouts.
    """
    if df.empty:
        return pd.DataFrame(columns=["week", "avg_calories", "avg_burned", "avg_protein",
                                     "avg_carbs", "avg_fats", "total_workouts"])

    week_start = df["day"] - pd.to_timedelta(df["day"].dt.weekday, unit="D")
    weekly = df.assign(week=week_start).groupby("week").agg({
        "calories": "mean",
        "burned": "mean",
        "protein": "mean",
        "carbs": "mean",
        "fats": "mean",
        "workouts": "sum",
    })
    weekly = weekly.rename(columns={
        "calories": "avg_calories",
        "burned": "avg_burned",
        "protein": "avg_protein",
        "carbs": "avg_carbs",
        "fats": "avg_fats",
        "workouts": "total_workouts",
    })
    averages = ["avg_calories", "avg_burned", "avg_protein", "avg_carbs", "avg_fats"]
    # half-up, like the rest of the analytics
    weekly[averages] = np.floor(weekly[averages].astype(float) + 0.5).astype(int)
    weekly["total_workouts"] = weekly["total_workouts"].astype(int)
    return weekly.reset_index()


# -----------------------------------
# PLOT FUNCTION
# -----------------------------------
def plot_daily_calories(df: pd.DataFrame, cumulative: bool = False, show: bool = True) -> Optional[plt.Figure]:
    """
    Plots calories eaten vs burned over time.
    x-axis: date
    y-axis: kcal (daily or cumulative)
    """
    if df.empty:
        print("No data to plot.")
        return None

    plot_df = df.copy()

    if cumulative:
        plot_df[["calories", "burned"]] = plot_df[["calories", "burned"]].cumsum()

    # --- FIGURE STYLE ---
    plt.style.use("ggplot")  # clean baseline

    fig, ax = plt.subplots(figsize=(12, 6), dpi=120)

    eaten_color = "#FC4C02"
    burned_color = "#2E86DE"

    x = plot_df["day"]
    for column, color, label in (
        ("calories", eaten_color, "Eaten"),
        ("burned", burned_color, "Burned"),
    ):
        ax.plot(
            x,
            plot_df[column],
            color=color,
            linewidth=2.4,
            marker="o",
            markersize=6,
            markerfacecolor="white",
            markeredgewidth=1.5,
            markeredgecolor=color,
            label=label,
        )

    # --- TITLES AND LABELS ---
    title = "Cumulative Calories" if cumulative else "Daily Calories"
    ax.set_title(
        title,
        fontsize=20,
        fontweight="bold",
        pad=20
    )

    ax.set_xlabel("Date", fontsize=14)
    ax.set_ylabel("kcal", fontsize=14)
    ax.legend()

    # --- GRID & AXES ---
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    ax.set_axisbelow(True)

    # Dynamic date formatting
    ax.xaxis.set_major_locator(mdates.AutoDateLocator())
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %d"))

    plt.setp(ax.get_xticklabels(), rotation=45, fontsize=10)
    plt.setp(ax.get_yticklabels(), fontsize=12)

    fig.tight_layout()

    if show:
        plt.show()
    return fig


# -----------------------------------
# MAIN
# -----------------------------------
if __name__ == "__main__":
    from zeux_coach.storage import StorageService
    from zeux_coach.utils.database import PostgresKeyValueStore

    storage = StorageService(PostgresKeyValueStore())
    df = last_week_frame(storage.load_foods(), storage.load_trainings())

    # 1) Daily calories
    plot_daily_calories(df, cumulative=False)
