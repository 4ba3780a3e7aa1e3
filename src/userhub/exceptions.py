"""Identity and authentication exceptions.

These exceptions are raised by the identity layer and should be
caught and handled by the application or presentation layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class RegistrationFailedError(AuthError):
    """Raised when the user store reports a failed create."""

    def __init__(self, message: str = "Registration failed"):
        super().__init__(message)


class UnsupportedOperationError(NotImplementedError):
    """Raised by identity store members that are not implemented."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Identity store operation is not supported: {operation}")
