"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class DependencyError(DomainError):
    """Raised when the storage layer is unreachable or a lookup fails.

    Retryable by the caller with backoff.
    """

    pass


class DeadlineExceededError(DomainError):
    """Raised when a traversal-bearing operation runs past its deadline."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Deadline exceeded during {operation}")
