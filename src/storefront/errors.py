"""Application errors that sit beside Protean's own exceptions.

Rule violations inside aggregates raise ``protean.exceptions.ValidationError``.
The classes below cover the remaining outcomes of a request: missing or bad
credentials, ownership failures, absent records and collaborator failures.
Each carries the HTTP status the API layer responds with.
"""


class StorefrontError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(StorefrontError):
    status_code = 401
    default_message = "Authentication required."


class Forbidden(StorefrontError):
    status_code = 403
    default_message = "You are not allowed to perform this action."


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found."


class UpstreamError(StorefrontError):
    """A payment gateway or asset host call failed."""

    status_code = 500
    default_message = "Upstream service failed."


class InvalidSignature(StorefrontError):
    """A payment callback did not carry the expected gateway signature."""

    status_code = 400
    default_message = "Invalid payment signature."
