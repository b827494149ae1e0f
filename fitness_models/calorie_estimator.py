"""
Calorie Burn Estimator
Estimates calories burned by a workout from its sets, reps, weight and duration
"""
from decimal import Decimal, ROUND_HALF_UP

DEFAULT_BODY_WEIGHT_KG = 70.0

# (intensity lower bound, MET) - checked top down, bound is exclusive
MET_THRESHOLDS = [
    (100, 8.0),  # High intensity
    (50, 7.0),   # Moderate-high intensity
    (25, 6.0),   # Moderate intensity
]
LOW_INTENSITY_MET = 4.0


class CalorieEstimator:
    """
    Estimates energy expenditure for a strength workout

    The workout's intensity score, (sets * reps * weight) / duration, picks a
    metabolic equivalent (MET). Calories are then the standard
    MET * body weight (kg) * time (hours), rounded to 2 decimal places.

    The body weight is not the lifted weight; it is the weight of the person
    working out, which defaults to an assumed 70 kg.
    """

    def __init__(self, body_weight_kg=DEFAULT_BODY_WEIGHT_KG):
        if body_weight_kg <= 0:
            raise ValueError(f"Body weight must be positive, got {body_weight_kg}")
        self.body_weight_kg = float(body_weight_kg)

    @staticmethod
    def intensity_score(sets, reps, weight_kg, duration_min):
        # duration_min > 0 is guaranteed by workout validation
        return (sets * reps * weight_kg) / duration_min

    @staticmethod
    def select_met(intensity):
        for lower_bound, met in MET_THRESHOLDS:
            if intensity > lower_bound:
                return met
        return LOW_INTENSITY_MET

    def estimate(self, sets, reps, weight_kg, duration_min):
        """
        Estimate calories burned for one workout

        Args:
            sets: Number of sets
            reps: Reps per set
            weight_kg: Weight lifted in kg (0 for bodyweight exercises)
            duration_min: Workout duration in minutes, must be > 0

        Returns:
            float: Calories burned, rounded to 2 decimal places
        """
        intensity = self.intensity_score(sets, reps, weight_kg, duration_min)
        met = self.select_met(intensity)
        calories = met * self.body_weight_kg * (duration_min / 60)
        return round_calories(calories)


def round_calories(value):
    return float(Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def estimate_calories(sets, reps, weight_kg, duration_min, body_weight_kg=DEFAULT_BODY_WEIGHT_KG):
    return CalorieEstimator(body_weight_kg).estimate(sets, reps, weight_kg, duration_min)
