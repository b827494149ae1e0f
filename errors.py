"""
Error types reported by the FitTrack API
"""


class ApiError(Exception):
    """An error that is returned to the client as a JSON message"""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {
            'success': False,
            'status': self.status_code,
            'message': self.message
        }


# ===== WORKOUT VALIDATION =====

class WorkoutError(ApiError):
    pass


class InsufficientData(WorkoutError):
    pass


class InvalidSetsRepsFormat(WorkoutError):
    pass


class NonNumericField(WorkoutError):
    pass


class OutOfRangeField(WorkoutError):
    pass


class MissingRequiredField(WorkoutError):
    pass


class InvalidDateField(WorkoutError):
    pass


# ===== AUTHENTICATION =====

class UserNotFound(ApiError):
    status_code = 404


class IncorrectPassword(ApiError):
    status_code = 403


class EmailInUse(ApiError):
    status_code = 409
