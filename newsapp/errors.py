"""Error types raised by services and turned into failure envelopes.

Every error carries a short human-readable ``error`` and an optional
``message`` with the underlying detail. The app factory registers a
handler that renders them as ``{success: false, error, message?}`` with
the class's ``status_code``.
"""


class NewsAppError(Exception):
    status_code = 500

    def __init__(self, error, message=None):
        self.error = error
        self.message = message
        super().__init__(error if message is None else f'{error}: {message}')

    def to_dict(self):
        data = {'success': False, 'error': self.error}
        if self.message:
            data['message'] = self.message
        return data


class ValidationError(NewsAppError):
    status_code = 400


class DuplicateError(ValidationError):
    """A unique value (email, saved article) is already taken."""


class AuthError(NewsAppError):
    status_code = 401


class NotFoundError(NewsAppError):
    status_code = 404


class ProviderError(NewsAppError):
    """The news provider failed or answered with a non-ok status."""

    def __init__(self, detail, status_code=None):
        self.detail = detail
        self.provider_status = status_code
        super().__init__('News provider error', detail)


def check_text(fields):
    """Raise ValidationError for the first field whose value is not a str.

    ``None`` means the field was not supplied and passes; the callers
    decide separately which fields are required.
    """
    for field, value in fields.items():
        if value is not None and not isinstance(value, str):
            raise ValidationError(f'{field} must be a string')
