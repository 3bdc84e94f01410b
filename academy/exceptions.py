"""Domain errors raised by services and mapped to HTTP responses in ``academy.main``."""

from uuid import UUID


class DomainError(Exception):
    """Base class for errors the API reports to the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(DomainError):
    """A course, unit or user looked up by id does not exist (404)."""

    def __init__(self, resource_type: str, resource_id: UUID | int | str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with ID {resource_id} not found")


class ValidationError(DomainError):
    """Input that passed schema validation but is still unusable (400)."""

    def __init__(self, message: str, *, issues: list[str] | None = None) -> None:
        self.issues = issues or []
        super().__init__(message)
