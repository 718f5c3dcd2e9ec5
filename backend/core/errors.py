"""Domain errors and their mapping onto HTTP status codes."""

from sqlalchemy.exc import SQLAlchemyError

DATABASE_UNAVAILABLE_MESSAGE = 'Database unavailable. Verify DATABASE_URL and database credentials.'
INTERNAL_ERROR_MESSAGE = 'Internal server error'


class DomainError(Exception):
    """Base class for errors the API reports to the caller as-is."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(DomainError):
    status_code = 400


class ConflictError(DomainError):
    status_code = 400


class AuthenticationError(DomainError):
    status_code = 401


class AuthorizationError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


def error_to_response(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, DomainError):
        return exc.status_code, exc.message
    if isinstance(exc, SQLAlchemyError):
        return 503, DATABASE_UNAVAILABLE_MESSAGE
    return 500, INTERNAL_ERROR_MESSAGE
