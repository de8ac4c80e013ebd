"""
Domain layer exceptions.

These exceptions represent domain-level errors that occur when
business rules are violated or domain invariants are broken.
They should be caught and translated to appropriate responses
by the outer layers.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when an argument has the wrong shape or is out of bounds.

    Example: input text shorter than 1000 characters, blank flashcard front.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidStateError(DomainError):
    """
    Raised when an operation is not legal for the aggregate's current status.

    Example: completing a generation session that has already failed.
    """

    def __init__(self, message: str, current_status: object = None) -> None:
        details: dict[str, object] = {}
        if current_status is not None:
            details["current_status"] = str(current_status)
        super().__init__(message, details)
        self.current_status = current_status


class NotOwnedError(DomainError):
    """
    Raised when the caller-claimed owner does not own the aggregate.

    Example: user A approving suggestions of a session generated by user B.
    """

    def __init__(self, resource: str, resource_id: object, owner_id: object) -> None:
        message = f"{resource} {resource_id} is not owned by user {owner_id}"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id
        self.owner_id = owner_id
