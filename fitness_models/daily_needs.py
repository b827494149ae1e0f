"""
Daily calorie needs calculator
BMR from the Mifflin-St Jeor equation, scaled by activity level
"""
import math

from errors import ApiError

LB_TO_KG = 0.453592
IN_TO_CM = 2.54

ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,      # Little to no exercise
    'light': 1.375,        # Light exercise 1-3 days/week
    'moderate': 1.55,      # Moderate exercise 3-5 days/week
    'active': 1.725,       # Hard exercise 6-7 days/week
    'very_active': 1.9     # Very hard exercise, physical job
}

# Daily calorie offsets, 250 kcal/day is roughly 0.5 lb/week
WEIGHT_LOSS_OFFSETS = {'mild': 250, 'moderate': 500, 'aggressive': 750}
WEIGHT_GAIN_OFFSETS = {'mild': 250, 'moderate': 500}

MIN_BMR_FACTOR = 1.2


def _js_round(value):
    """Round half up, like Math.round"""
    return int(math.floor(value + 0.5))


def _to_float(value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) or math.isinf(value) else value


def validate_inputs(weight, height, age, activity_level):
    errors = {}
    if weight is None or weight <= 0:
        errors['weight'] = 'Please enter a valid weight'
    if height is None or height <= 0:
        errors['height'] = 'Please enter a valid height'
    if age is None or age <= 0 or age > 120:
        errors['age'] = 'Please enter a valid age (1-120)'
    if activity_level not in ACTIVITY_MULTIPLIERS:
        errors['activityLevel'] = f"Activity level must be one of: {', '.join(ACTIVITY_MULTIPLIERS)}"
    return errors


def calculate_bmr(weight_kg, height_cm, age, gender):
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)
    return bmr + 5 if gender == 'male' else bmr - 161


def calculate_daily_calories(weight, height, age, gender='male', activity_level='moderate', unit='metric'):
    """
    Calculate daily calorie targets

    Args:
        weight: Body weight (kg, or lbs for imperial)
        height: Height (cm, or inches for imperial)
        age: Age in years
        gender: 'male' or 'female'
        activity_level: One of ACTIVITY_MULTIPLIERS
        unit: 'metric' or 'imperial'

    Returns:
        dict: bmr, maintenance, weightLoss and weightGain targets
    """
    weight = _to_float(weight)
    height = _to_float(height)
    age = _to_float(age)

    errors = validate_inputs(weight, height, age, activity_level)
    if errors:
        message = '; '.join(f"{field}: {msg}" for field, msg in errors.items())
        raise ApiError(message)

    if unit == 'imperial':
        weight = weight * LB_TO_KG
        height = height * IN_TO_CM

    bmr = calculate_bmr(weight, height, age, gender)
    tdee = bmr * ACTIVITY_MULTIPLIERS[activity_level]

    # Never recommend going below 1.2x BMR
    floor = _js_round(bmr * MIN_BMR_FACTOR)

    return {
        'bmr': _js_round(bmr),
        'maintenance': _js_round(tdee),
        'weightLoss': {
            level: max(_js_round(tdee - offset), floor)
            for level, offset in WEIGHT_LOSS_OFFSETS.items()
        },
        'weightGain': {
            level: _js_round(tdee + offset)
            for level, offset in WEIGHT_GAIN_OFFSETS.items()
        },
        'activityLevel': activity_level,
        'unit': unit
    }
