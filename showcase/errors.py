"""
Error taxonomy for the showcase.

Services raise these; the exception handlers in ``showcase.main`` turn them
into ``{"detail": message}`` JSON responses with the matching status code.
Every message is safe to show to the person at the keyboard.
"""

STORE_UNAVAILABLE_MESSAGE = (
    "Database connection not available. "
    "Please check your internet connection and refresh the page."
)


class ShowcaseError(Exception):
    """Base error carrying a user-facing message and HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class StoreUnavailableError(ShowcaseError):
    """The store credential pair was not configured, so there is no client."""

    status_code = 503

    def __init__(self, message: str = STORE_UNAVAILABLE_MESSAGE):
        super().__init__(message)


class StoreError(ShowcaseError):
    """A store or storage round trip failed (network, constraint, permission)."""

    status_code = 502


class StorageUploadError(StoreError):
    def __init__(self, reason: str):
        super().__init__(f"Storage upload failed: {reason}")


class PhotoRecordError(StoreError):
    def __init__(self, reason: str):
        super().__init__(f"Database error: {reason}")


class ValidationFailedError(ShowcaseError):
    """Input rejected before any store call."""

    status_code = 422


class DuplicateStockNumberError(ValidationFailedError):
    status_code = 400

    def __init__(self, stock_number: str):
        self.stock_number = stock_number
        super().__init__(f"A vehicle with stock number {stock_number} already exists")


class NotFoundError(ShowcaseError):
    status_code = 404
