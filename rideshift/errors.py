class RideShiftError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RideShiftError):
    """Missing or malformed input"""

    status_code = 400


class InvalidStateError(RideShiftError):
    """Action not allowed in the record's current state"""

    status_code = 400


class NotFoundError(RideShiftError):
    status_code = 404


class ConflictError(RideShiftError):
    """Unique key already taken"""

    status_code = 409
