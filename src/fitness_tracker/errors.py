from __future__ import annotations


class FitnessTrackerError(Exception):
    """Base error for the fitness tracker.

    ``field`` names the offending input when the error comes from a form value.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidMetricError(FitnessTrackerError, ValueError):
    """A metric cannot be fed to the calorie engine (negative, NaN or zero duration)."""


class ValidationError(FitnessTrackerError, ValueError):
    """Caller-side validation of a form value failed."""


class DuplicateUsernameError(ValidationError):
    pass


class AuthenticationError(FitnessTrackerError):
    def __init__(self, message: str, *, remaining_attempts: int | None = None) -> None:
        super().__init__(message)
        self.remaining_attempts = remaining_attempts


class AccountLockedError(AuthenticationError):
    pass


class NotFoundError(FitnessTrackerError, LookupError):
    pass
