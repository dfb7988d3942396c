class EvacError(Exception):
    """Base class for recommendation engine errors."""


class InvalidInput(EvacError, ValueError):
    """Unrecognized persona, severity, hour or malformed coordinates."""


class NoAvailableFacility(EvacError):
    def __init__(self, required, hour=None):
        self.required = required
        self.hour = hour
        message = f"No open facility of the required type ({required})"
        if hour is not None:
            message += f" at {hour}:00"
        super().__init__(message)
