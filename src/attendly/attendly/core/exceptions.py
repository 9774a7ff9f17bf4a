class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateUsernameError(ValidationError):
    """Raised when registering a username that is already taken."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user touches a workspace they do not own."""


class NotFoundError(DomainError):
    """Raised when a referenced workspace does not exist."""
