"""
API Errors

Exception types raised by the routes and services. Each one carries the
HTTP status it is reported with; the app renders them as {"message": ...}.
"""


class ApiError(Exception):
    """Base class for errors reported to API clients."""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'message': self.message}


class ValidationError(ApiError):
    """Missing or malformed request fields."""
    status_code = 400
    default_message = 'Invalid request'


class ConflictError(ApiError):
    """Uniqueness conflict, e.g. an already registered email."""
    status_code = 400
    default_message = 'User already exists'


class AuthenticationError(ApiError):
    """Bad credentials or a missing, invalid or expired token."""
    status_code = 401
    default_message = 'Authentication required'


class NotFoundError(ApiError):
    """Missing resource, also used for resources owned by another user."""
    status_code = 404
    default_message = 'Not found'
