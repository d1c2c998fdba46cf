"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class ProviderContextError(ValidationError):
    """Raised when a provider cannot be used with a verification context."""

    def __init__(self, provider: str, context: str):
        self.provider = provider
        self.context = context
        super().__init__(f"Provider '{provider}' is not allowed for {context}")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a resource they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a resource is already owned by another user."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already claimed: {identifier}")
