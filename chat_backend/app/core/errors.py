"""
Domain errors raised by the service and repository layers.

The request adapter maps them to HTTP status codes:
- InvalidArgumentError -> 400 Bad Request
- NotFoundError -> 404 Not Found
- StorageError -> 500 Internal Server Error
"""


class ChatBackendError(Exception):
    """Base class for every error the core surfaces to the boundary."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(ChatBackendError):
    """Caller-supplied data violates a validation rule."""


class NotFoundError(ChatBackendError):
    """Referenced entity does not exist."""

    def __init__(self, message: str = "chat not found"):
        super().__init__(message)


class StorageError(ChatBackendError):
    """Underlying persistence failed. The original exception is chained as __cause__."""

    def __init__(self, message: str = "storage failure"):
        super().__init__(message)
