"""Domain layer errors.

Every outcome the identity subsystem reports to its callers is one of
these types. Storage and network exceptions are translated before they
reach the application layer.
"""

from rediscover.domain.value import UnauthorizedReason


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class EmailTakenError(DomainError):
    """Raised when registering an email that already belongs to a user."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class InvalidInviteError(DomainError):
    """Raised when an invite code does not match a live invite for the email.

    Deliberately carries no detail about which part was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid invite code for this email")


class DuplicateInviteError(DomainError):
    """Raised when a live invite already exists for the email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Invite already exists for this email")


class CodeGenerationExhaustedError(DomainError):
    """Raised when every generated invite code collided with an existing one."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate unique invite code after {attempts} attempts")


class InvalidCredentialsError(DomainError):
    """Raised when email/password login fails for any reason."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class UnauthorizedError(DomainError):
    """Raised when a request cannot be authenticated."""

    def __init__(self, reason: UnauthorizedReason):
        self.reason = reason
        super().__init__(f"Unauthorized: {reason.value}")


class ProviderAuthFailedError(DomainError):
    """Raised when a third-party sign-in cannot be completed."""

    pass


class DuplicateRecordError(DomainError):
    """Raised by repositories when an insert violates a unique constraint."""

    def __init__(self, entity: str, field: str | None = None):
        self.entity = entity
        self.field = field
        detail = f" ({field})" if field else ""
        super().__init__(f"Duplicate {entity}{detail}")


class StoreUnavailableError(DomainError):
    """Raised when the backing store cannot be reached."""

    pass


class InvalidRecordError(DomainError):
    """Raised when the store rejects a value, e.g. one longer than its column."""

    def __init__(self, entity: str, detail: str):
        self.entity = entity
        super().__init__(f"Invalid {entity}: {detail}")
