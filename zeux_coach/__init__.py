from zeux_coach.tools.analytics import filter_by_date_range, summarize_date_range
from zeux_coach.tools.insights import calculate_progress, generate_insights, recommend_adjustments
from zeux_coach.tools.metrics import (
    analyze_user_data,
    determine_difficulty,
    determine_goal_from_data,
    suggest_training_frequency,
)
from zeux_coach.tools.planner import (
    estimate_calories_burned,
    generate_data_driven_workout_plan,
    generate_workout_plan,
    select_exercises,
    validate_workout_plan,
)
