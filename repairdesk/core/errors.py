"""
Domain Errors - raised by services, rendered by the API layer
"""
from typing import Any, Dict


class RepairDeskError(Exception):
    """Base class for all domain errors"""
    status_code: int = 500
    default_message: str = "Unexpected error"

    def __init__(self, message: str = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error": type(self).__name__, **self.extra}


class ValidationError(RepairDeskError):
    status_code = 400
    default_message = "Invalid input"


class InvalidQuantityError(ValidationError):
    default_message = "Quantity must be a positive integer"


class NotFoundError(RepairDeskError):
    status_code = 404
    default_message = "Not found"


class PermissionDeniedError(RepairDeskError):
    status_code = 403
    default_message = "Permission denied"


class ConflictError(RepairDeskError):
    status_code = 409
    default_message = "Conflicting state"


class InsufficientStockError(ConflictError):
    default_message = "Insufficient inventory quantity"

    def __init__(self, shortfall: int, message: str = None):
        self.shortfall = shortfall
        super().__init__(message or f"Insufficient inventory quantity (short by {shortfall})", shortfall=shortfall)


class AlreadyClaimedError(ConflictError):
    default_message = "A warranty claim already exists for this job"


class InvalidStatusTransitionError(ConflictError):
    default_message = "Invalid status transition"


class ExpiredOrInvalidCodeError(RepairDeskError):
    # Same message for absent, mismatched, used and expired codes
    status_code = 400
    default_message = "Invalid or expired verification code"

    def __init__(self):
        super().__init__()


class DispatchError(RepairDeskError):
    status_code = 502
    default_message = "Failed to send verification code"
