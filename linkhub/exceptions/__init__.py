"""Custom exceptions for the linkhub API."""
from flask import current_app


ERROR_CODES = {
    'bad_request': 400,
    'unauthorized': 401,
    'forbidden': 403,
    'not_found': 404,
    'conflict': 409,
    'unprocessable_entity': 422,
    'rate_limit_exceeded': 429,
    'internal_server_error': 500,
}

DOCS_URL = 'https://linkhub.dev/docs/api-reference/errors'


class SaasError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None, code='internal_server_error'):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.code = code

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['code'] = self.code
        rv['message'] = self.message
        rv['doc_url'] = f"{DOCS_URL}#{self.code.replace('_', '-')}"
        return {'error': rv}


class ApiError(SaasError):
    """Structured API error identified by one of ERROR_CODES."""
    def __init__(self, code, message, payload=None):
        if code not in ERROR_CODES:
            raise ValueError(f"Unknown API error code: {code}")
        super().__init__(message, ERROR_CODES[code], payload, code)


class BusinessLogicError(ApiError):
    """Exception raised for business logic violations."""
    def __init__(self, message, payload=None):
        super().__init__('bad_request', message, payload)


class NotFoundError(ApiError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__('not_found', message, payload)


class UnauthorizedError(ApiError):
    """Raised when a user lacks permission for an action."""
    def __init__(self, message="Unauthorized access"):
        super().__init__('forbidden', message)


class ConflictError(ApiError):
    """Raised when a write collides with an existing unique value."""
    def __init__(self, message):
        super().__init__('conflict', message)


class UnknownFieldTypeError(ApiError):
    """Raised when an application form field carries an unsupported type tag."""
    def __init__(self, field_type):
        self.field_type = field_type
        super().__init__('unprocessable_entity', f'Unknown application form field type: "{field_type}"')


def is_unique_violation(error) -> bool:
    """
    Check whether a SQLAlchemy IntegrityError comes from a unique constraint.

    PostgreSQL reports SQLSTATE 23505; SQLite only exposes the message.
    """
    orig = getattr(error, 'orig', error)
    sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
    if sqlstate:
        return sqlstate == '23505'
    message = str(orig)
    return 'UNIQUE constraint failed' in message or 'duplicate key value' in message


def internal_error(error) -> ApiError:
    """Wrap an unexpected failure, exposing the raw message only when configured to."""
    if current_app.config.get('EXPOSE_ERROR_DETAILS', False):
        orig = getattr(error, 'orig', None)
        message = str(orig or error)
    else:
        message = 'An internal server error occurred. Please try again later.'
    return ApiError('internal_server_error', message)
