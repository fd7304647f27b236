"""
core/exceptions.py
------------------
Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to. Services never build
HTTP responses; main.py registers a single handler that turns any
DealHubError into a JSON body of the form {"detail": <message>}.

Cross-organisation access is reported as NotFoundError on purpose, so a
caller cannot discover resources owned by someone else.
"""

from fastapi import status


class DealHubError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DealHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class RoomUnavailableError(DealHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Room not available"


class RoomExpiredError(DealHubError):
    status_code = status.HTTP_410_GONE
    default_message = "Room has expired"


class InvalidPasswordError(DealHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class ValidationError(DealHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(DealHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class PermissionDeniedError(DealHubError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin privileges required"


class PayloadTooLargeError(DealHubError):
    status_code = 413
    default_message = "File exceeds the upload limit"


class ObjectNotFoundError(NotFoundError):
    default_message = "Object not found"
