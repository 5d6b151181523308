"""
Gateway Exceptions

Exception classes raised by the services and translated into JSON error
responses by the handlers in ``exception_handler``.
"""


class XferLogicError(Exception):
    """
    Base exception for all gateway errors.

    Every subclass carries the HTTP status it maps to, so the boundary
    handler can answer with ``{"error": message}`` without knowing the type.
    """

    status_code: int = 500

    def __init__(self, message: str, code: str = "XFERLOGIC_ERROR", details: dict = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {'error': self.message}


class ValidationError(XferLogicError):
    """Raised when a request is well-formed but cannot be accepted."""

    status_code = 400

    def __init__(self, message: str = "Validation error", code: str = "VALIDATION_ERROR", details: dict = None):
        super().__init__(message=message, code=code, details=details)


class EmailExistsError(ValidationError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str = None):
        super().__init__(
            message="Email already exists",
            code="EMAIL_EXISTS",
            details={'email': email} if email else {}
        )
        self.email = email


class AuthError(XferLogicError):
    """
    Base class for authentication failures.

    Examples:
        - Missing bearer token
        - Invalid or expired token
        - Wrong email/password pair
    """

    status_code = 401

    def __init__(self, message: str = "Authentication failed", code: str = "AUTH_ERROR"):
        super().__init__(message=message, code=code)


class MissingTokenError(AuthError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self):
        super().__init__(message="Missing token", code="MISSING_TOKEN")


class InvalidTokenError(AuthError):
    """Raised when a bearer token fails signature, payload or expiry checks."""

    def __init__(self, reason: str = None):
        super().__init__(message="Invalid token", code="INVALID_TOKEN")
        self.reason = reason


class InvalidCredentialsError(AuthError):
    """
    Raised on login with an unknown email or a wrong password.

    The same message is used for both cases. Login answers with 400 like
    the rest of the public auth endpoints.
    """

    status_code = 400

    def __init__(self):
        super().__init__(message="Invalid credentials", code="INVALID_CREDENTIALS")


class NotFoundError(XferLogicError):
    """Raised when a requested record does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class ProviderError(XferLogicError):
    """
    Raised when an upstream text or image provider call fails.

    The upstream message is kept verbatim in ``message``.

    Attributes:
        provider: Name of the provider that failed
    """

    status_code = 500

    def __init__(self, message: str, provider: str = None):
        super().__init__(
            message=message,
            code="PROVIDER_ERROR",
            details={'provider': provider} if provider else {}
        )
        self.provider = provider


class RequestTooLargeError(XferLogicError):
    """Raised when the declared request body exceeds the configured limit."""

    status_code = 413

    def __init__(self, limit: int):
        super().__init__(
            message=f"Request body too large (> {limit // (1024 * 1024)} MB)",
            code="REQUEST_TOO_LARGE",
            details={'limit': limit}
        )
        self.limit = limit


__all__ = [
    'XferLogicError',
    'ValidationError',
    'EmailExistsError',
    'AuthError',
    'MissingTokenError',
    'InvalidTokenError',
    'InvalidCredentialsError',
    'NotFoundError',
    'ProviderError',
    'RequestTooLargeError',
]
