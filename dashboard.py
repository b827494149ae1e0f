"""
Dashboard aggregations over already-fetched workouts
"""
from datetime import timedelta

from utils import day_bounds

TRAILING_DAYS = 7


def _for_user(workouts, user_id):
    if user_id is None:
        return list(workouts)
    return [w for w in workouts if w.user_id == user_id]


def _on_day(workouts, day):
    start, end = day_bounds(day)
    return [w for w in workouts if start <= w.date < end]


def total_calories(workouts):
    return sum(w.calories_burned or 0 for w in workouts)


def day_label(day):
    # Always "th", matching the labels the dashboard chart has always shown
    return f"{day.day}th"


def weekly_calories_burned(workouts, reference_date, user_id=None):
    """
    Calories burned per day over the 7 days ending on reference_date.

    Returns:
        dict: 'weeks' (day labels) and 'caloriesBurned' (daily totals), oldest first
    """
    workouts = _for_user(workouts, user_id)
    weeks = []
    calories_burned = []

    for i in range(TRAILING_DAYS - 1, -1, -1):
        day = reference_date - timedelta(days=i)
        weeks.append(day_label(day))
        calories_burned.append(total_calories(_on_day(workouts, day)))

    return {
        'weeks': weeks,
        'caloriesBurned': calories_burned
    }


def daily_summary(workouts, day, user_id=None):
    """Totals, average and per-category breakdown for one calendar day"""
    todays = _on_day(_for_user(workouts, user_id), day)

    total = total_calories(todays)
    count = len(todays)

    by_category = {}
    for workout in todays:
        by_category[workout.category] = by_category.get(workout.category, 0) + (workout.calories_burned or 0)

    return {
        'totalCaloriesBurnt': total,
        'totalWorkouts': count,
        'avgCaloriesBurntPerWorkout': total / count if count else 0,
        'pieChartData': [
            {'id': index, 'value': value, 'label': category}
            for index, (category, value) in enumerate(by_category.items())
        ]
    }
