"""Domain-specific exceptions — framework-independent.

Each exception carries a machine-readable ``kind`` so the presentation
layer can map it to an HTTP status and a JSON body without inspecting
the message.
"""


class DomainError(Exception):
    """Base class for errors raised by the contract domain."""

    kind = "unexpected_error"


class UnauthenticatedError(DomainError):
    """Raised when a request carries no external identity."""

    kind = "unauthenticated"

    def __init__(self, message: str = "missing external identity"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when the resolved identity may not perform an operation."""

    kind = "forbidden"

    def __init__(self, operation: str, role: str):
        self.operation = operation
        self.role = role
        super().__init__(f"role '{role}' may not {operation} this contract")


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    kind = "not_found"

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(DomainError):
    """Raised when attempting to create a duplicate entity."""

    kind = "duplicate"

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationError(DomainError):
    """Raised when a required contract field is missing or empty."""

    kind = "validation_error"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class RenderError(DomainError):
    """Raised when the contract PDF could not be produced."""

    kind = "render_error"


class StorageError(DomainError):
    """Raised when the blob store rejects an upload or URL request."""

    kind = "storage_error"
