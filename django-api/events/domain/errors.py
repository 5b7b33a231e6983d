"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_EVENT_DATA = "INVALID_EVENT_DATA"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    EVENT_COMPLETED = "EVENT_COMPLETED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidEventDataError(DomainError):
    """Raised when admin-supplied event fields are unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT_DATA, message=message)


class NotAuthenticatedError(DomainError):
    """Raised when an operation needs a user identity and none was supplied."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="Authentication required to register for events",
        )


class EventCompletedError(DomainError):
    """Raised when registering for an event that has already taken place."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_COMPLETED,
            message="Cannot register for a completed event",
        )
        self.event_id = event_id


class AlreadyRegisteredError(DomainError):
    """Raised when a registration already exists for the (event, user) pair."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="You are already registered for this event",
        )
        self.event_id = event_id
        self.user_id = user_id


class StorageUnavailableError(DomainError):
    """Raised when the backing store fails transiently. Not retried."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_UNAVAILABLE,
            message="The service is temporarily unavailable, please try again",
        )
