"""
Error taxonomy for the booking core.

Routers let these propagate; ``app.main`` renders them with the same
``{"detail": ...}`` body FastAPI uses for ``HTTPException``.
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    """Missing or malformed request data (empty seat list, foreign seats...)."""

    status_code = 400


class NotFoundError(AppError):
    """Referenced row is absent, or the caller does not own it."""

    status_code = 404


class ConflictError(AppError):
    """A uniqueness constraint rejected the write (seat already sold, cinema race)."""

    status_code = 409


class TransactionError(AppError):
    """Storage failure. The in-flight transaction has been rolled back."""

    status_code = 500


class NotificationError(Exception):
    """Raised by notifier backends. Never reaches the client."""
