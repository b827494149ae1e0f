"""
Utility functions for FitTrack application
"""

import math
import re
from datetime import datetime, timedelta

from errors import (
    InsufficientData,
    InvalidDateField,
    InvalidSetsRepsFormat,
    MissingRequiredField,
    NonNumericField,
    OutOfRangeField,
)

# "5 sets x 15 reps", "4 set X 10 rep", "3setsx12reps"
SETS_REPS_PATTERN = re.compile(r'(\d+)\s*sets?\s*x\s*(\d+)\s*reps?', re.IGNORECASE)

# First number anywhere in a line such as "50 kg" or "12.5 min"
FIRST_NUMBER_PATTERN = re.compile(r'(\d+(?:\.\d+)?)')

# Leading numeric prefix, read the way a browser's parseInt/parseFloat would
LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')
LEADING_FLOAT_PATTERN = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')

DATE_FORMATS = ['%m/%d/%Y']

# Upper limits for a single workout; sets/reps must fit a 32-bit INTEGER column
MAX_COUNT = 2 ** 31 - 1
MAX_WEIGHT_KG = 10000
MAX_DURATION_MIN = 24 * 60


def _is_finite(value):
    # ints are exact; math.isnan() overflows on ones too large for a float
    if isinstance(value, int):
        return True
    return not (math.isnan(value) or math.isinf(value))


def _leading_int(text, field):
    match = LEADING_INT_PATTERN.match(str(text))
    if not match:
        raise NonNumericField(f"Invalid numeric data in workout: {field} is '{text}'")
    try:
        return int(match.group(1))
    except ValueError:
        # past the interpreter's int-string conversion limit
        raise NonNumericField(f"Invalid numeric data in workout: {field} is too long")


def _leading_float(text, field):
    match = LEADING_FLOAT_PATTERN.match(str(text))
    if not match:
        raise NonNumericField(f"Invalid numeric data in workout: {field} is '{text}'")
    value = float(match.group(1))
    if math.isnan(value) or math.isinf(value):
        raise NonNumericField(f"Invalid numeric data in workout: {field} is '{text}'")
    return value


def _first_number(text):
    match = FIRST_NUMBER_PATTERN.search(str(text))
    return float(match.group(1)) if match else 0.0


def validate_workout_fields(sets, reps, weight, duration):
    """
    Check a workout's numbers before it is saved.
    Sets, reps and duration must be positive; weight can be 0 (bodyweight).
    """
    for field, value in (('sets', sets), ('reps', reps), ('weight', weight), ('duration', duration)):
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            raise NonNumericField(f"Invalid numeric data in workout: {field} is '{value}'")
        if not _is_finite(value):
            raise NonNumericField(f"Invalid numeric data in workout: {field} is '{value}'")

    if sets <= 0 or reps <= 0 or weight < 0 or duration <= 0:
        raise OutOfRangeField(
            'Invalid values (sets, reps, duration must be positive, weight can be 0): '
            f'sets={sets}, reps={reps}, weight={weight}, duration={duration}'
        )

    if sets > MAX_COUNT or reps > MAX_COUNT or weight > MAX_WEIGHT_KG or duration > MAX_DURATION_MIN:
        raise OutOfRangeField(
            f'Invalid values (sets and reps at most {MAX_COUNT}, weight at most {MAX_WEIGHT_KG} kg, '
            f'duration at most {MAX_DURATION_MIN} min)'
        )


def parse_workout_lines(lines, category):
    """
    Parse the lines describing one workout into workout fields.

    Two layouts are understood:
        ["Bench Press", "4 sets x 10 reps", "50 kg", "30 min"]
        ["Bench Press", "4", "10", "50", "30"]

    Args:
        lines (list): Text lines, exercise name first
        category (str): Category the workout is filed under

    Returns:
        dict: category, workout_name, sets, reps, weight, duration, date
    """
    if len(lines) < 4:
        raise InsufficientData(
            f"Insufficient workout data for category {category}: expected at least 4 lines, got {len(lines)}"
        )

    workout_name = str(lines[0]).strip()
    if not workout_name:
        raise MissingRequiredField('Workout name is missing')

    if len(lines) == 4:
        match = SETS_REPS_PATTERN.search(str(lines[1]))
        if not match:
            raise InvalidSetsRepsFormat(f"Invalid sets/reps format: {lines[1]}")
        sets = int(match.group(1))
        reps = int(match.group(2))
        weight = _first_number(lines[2])
        duration = _first_number(lines[3])
    else:
        sets = _leading_int(lines[1], 'sets')
        reps = _leading_int(lines[2], 'reps')
        weight = _leading_float(lines[3], 'weight')
        duration = _leading_float(lines[4], 'duration')

    validate_workout_fields(sets, reps, weight, duration)

    return {
        'category': category,
        'workout_name': workout_name,
        'sets': sets,
        'reps': reps,
        'weight': weight,
        'duration': duration,
        'date': datetime.now()
    }


def parse_workout_string(text):
    """
    Parse a block of planner text holding one or more workouts.

    Workouts are separated by ';'. A line starting with '#' names the
    category, which carries over to the following workouts. Other lines
    may start with '-'.

        #Legs
        -Back Squat
        -5 setsX15 reps
        -30 kg
        -10 min
        ;
        -Leg Press
        ...
    """
    workouts = []
    category = None

    for block in str(text or '').split(';'):
        lines = []
        for raw_line in block.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            if line.startswith('#'):
                category = line[1:].strip()
                continue
            lines.append(line.lstrip('-').strip())

        if not lines:
            continue
        if not category:
            raise MissingRequiredField(f"Category is missing for workout '{lines[0]}'")

        workouts.append(parse_workout_lines(lines, category))

    if not workouts:
        raise InsufficientData('No workouts found in workout text')

    return workouts


def _coerce_number(value, field, integer=False):
    if isinstance(value, bool):
        raise NonNumericField(f"Invalid numeric data in workout: {field} is '{value}'")

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise NonNumericField(f"Invalid numeric data in workout: {field} is '{value}'")

    if not isinstance(value, (int, float)) or not _is_finite(value):
        raise NonNumericField(f"Invalid numeric data in workout: {field} is '{value}'")

    if integer:
        if value != int(value):
            raise NonNumericField(f"{field} must be a whole number, got {value}")
        return int(value)
    try:
        return float(value)
    except OverflowError:
        raise NonNumericField(f"Invalid numeric data in workout: {field} is too large")


def workout_fields_from_request(data):
    """
    Map a JSON request body onto typed workout fields.
    Missing numbers default to 0 and are then rejected by validation.
    """
    if not isinstance(data, dict):
        raise MissingRequiredField('Required workout fields are missing')

    category = str(data.get('category') or '').strip()
    workout_name = str(data.get('workoutName') or '').strip()
    if not category or not workout_name:
        raise MissingRequiredField('Required workout fields are missing')

    sets = _coerce_number(data.get('sets') or 0, 'sets', integer=True)
    reps = _coerce_number(data.get('reps') or 0, 'reps', integer=True)
    weight = _coerce_number(data.get('weight') or 0, 'weight')
    duration = _coerce_number(data.get('duration') or 0, 'duration')

    validate_workout_fields(sets, reps, weight, duration)

    date = data.get('date')
    return {
        'category': category,
        'workout_name': workout_name,
        'sets': sets,
        'reps': reps,
        'weight': weight,
        'duration': duration,
        'date': parse_date_param(date) if date else datetime.now()
    }


def parse_date_param(value):
    """
    Parse a date from a query string or request body.
    Accepts MM/DD/YYYY or ISO 8601; aware times are converted to local time.
    """
    text = str(value).strip()

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            pass

    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDateField(f"Invalid date: '{value}' (use MM/DD/YYYY or ISO format)")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def start_of_day(moment):
    return datetime(moment.year, moment.month, moment.day)


def day_bounds(moment):
    """Half-open [start, end) window covering the calendar day of `moment`"""
    start = start_of_day(moment)
    return start, start + timedelta(days=1)
