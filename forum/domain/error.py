"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for empty or over-length content, nesting beyond the depth limit,
    and references that do not line up (e.g. a parent reply on another post).
    """

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action on content they may not touch."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class ContentDeletedException(DomainError):
    """Raised when attempting to modify deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot modify deleted {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
