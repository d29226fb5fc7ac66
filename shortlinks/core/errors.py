class ShortLinkError(Exception):
    """Base error. ``status_code`` is the HTTP status the API reports it as."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShortLinkError):
    status_code = 400


class InvalidFormat(ValidationError):
    """Custom code does not match the short code format."""


class ConflictError(ShortLinkError):
    status_code = 409


class AlreadyExists(ConflictError):
    """Custom code is already taken (application-level pre-check)."""


class DuplicateCode(ConflictError):
    """The store's unique constraint rejected the short code on insert."""


class NotFoundError(ShortLinkError):
    status_code = 404


class InternalError(ShortLinkError):
    status_code = 500
