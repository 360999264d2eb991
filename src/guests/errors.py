"""Maps domain exceptions to the status code and message clients see.

Internal error text never reaches the client; every failure has a fixed message.
"""

from src.config.database import StoreError
from src.guests.dtos import (
    AdminNotConfiguredError,
    DirectoryUnavailableError,
    InvalidSubmissionError,
    RSVPNotFoundError,
    UnauthorizedError,
)
from src.guests.schemas import SERVER_ERROR_MESSAGE

HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = (
    InvalidSubmissionError,
    UnauthorizedError,
    AdminNotConfiguredError,
    RSVPNotFoundError,
    DirectoryUnavailableError,
    StoreError,
)


def describe_error(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, InvalidSubmissionError):
        return 400, exc.message
    if isinstance(exc, UnauthorizedError):
        return 401, "Invalid API key"
    if isinstance(exc, AdminNotConfiguredError):
        return 500, "Server configuration error"
    if isinstance(exc, RSVPNotFoundError):
        return 404, "No RSVP found for this email"
    return 500, SERVER_ERROR_MESSAGE
