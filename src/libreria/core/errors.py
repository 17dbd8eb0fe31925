"""
Domain exceptions for Libreria.

Storage and domain code raise these; the API layer renders each one as a JSON
body `{"message": ...}` with the exception's `status_code`.
"""


class LibreriaError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(LibreriaError):
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(LibreriaError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(LibreriaError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(LibreriaError):
    status_code = 404
    default_message = "Not found"


class Conflict(LibreriaError):
    status_code = 409
    default_message = "Conflict"
