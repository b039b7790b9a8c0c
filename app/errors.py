"""Domain errors raised by the services."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event id does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class PermissionDeniedError(DomainError):
    """Raised when a non-admin user attempts an admin-only command."""

    def __init__(self, action: str) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_DENIED,
            message=f"Only administrators can {action} events",
        )
        self.action = action


class UnauthenticatedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UNAUTHENTICATED, message="Authentication required"
        )


class EmailAlreadyRegisteredError(DomainError):
    def __init__(self, email: str) -> None:
        super().__init__(
            code=ErrorCode.EMAIL_ALREADY_REGISTERED,
            message="Email is already registered",
        )
        self.email = email
