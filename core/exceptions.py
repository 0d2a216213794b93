"""
Typed errors raised by the service layer.

Stores raise these; the memo workflow turns them into ServiceResult objects
and main.py maps any that escape to the JSON envelope.

    AppError
    +-- ValidationError   400  VALIDATION_ERROR
    +-- NotFoundError     404  NOT_FOUND
    +-- ConflictError     400  CONFLICT (approved shipments; 400 on the wire)
    +-- InternalError     500  INTERNAL_ERROR
"""
from typing import List, Optional


class AppError(Exception):
    code = "APP_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    """Mutation of an approved shipment. Kept as 400 for existing clients."""
    code = "CONFLICT"
    status_code = 400
    default_message = "Cannot modify approved shipment"


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal server error"


__all__ = ["AppError", "ValidationError", "NotFoundError", "ConflictError", "InternalError"]
