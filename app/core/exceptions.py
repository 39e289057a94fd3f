"""Domain errors raised by services and turned into responses in app.main.

Datastore faults (SQLAlchemy errors) never leave the service layer as-is:
integrity violations become ValidationError or ConflictError depending on
the operation, everything else becomes InternalError.
"""
from dataclasses import dataclass, asdict
from typing import Any, List, Optional

from fastapi import status


@dataclass
class FieldError:
    """A validation failure tied to one input field"""
    field: str
    message: str
    type: str = "value_error"

    def to_dict(self) -> dict:
        return asdict(self)


class AppError(Exception):
    """Base class for errors the API maps onto a response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Bad input shape or content, user correctable"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid request", errors: Optional[List[FieldError]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFoundError(AppError):
    """Referenced id does not exist"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: Any):
        super().__init__(f"{resource.capitalize()} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class ConflictError(AppError):
    """Write blocked by a referential or integrity constraint"""
    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    """Unexpected datastore or infrastructure fault"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "FieldError",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
