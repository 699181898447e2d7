"""Domain exceptions. Each carries the HTTP status the API renders it with."""


class MoltenDocsError(Exception):
    """Base class for errors surfaced to API callers as {"error": message}."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(MoltenDocsError):
    """No session cookie was presented."""

    status_code = 401
    default_message = "Not authenticated"


class InvalidSessionError(MoltenDocsError):
    """The presented session does not exist or has expired."""

    status_code = 401
    default_message = "Invalid session"


class InvalidCredentialsError(MoltenDocsError):
    """Login failed. Deliberately does not say whether the user exists."""

    status_code = 401
    default_message = "Invalid credentials"


class ConflictError(MoltenDocsError):
    status_code = 409
    default_message = "Conflict"


class NotFoundError(MoltenDocsError):
    status_code = 404
    default_message = "Not found"


class NotFoundOrProtectedError(MoltenDocsError):
    """Raised when a user delete matches no row: missing id or the protected admin account."""

    status_code = 400
    default_message = "User not found or cannot delete admin user"


class InvalidArgumentError(MoltenDocsError):
    status_code = 400
    default_message = "Invalid argument"


class InternalError(MoltenDocsError):
    status_code = 500
    default_message = "Internal server error"
