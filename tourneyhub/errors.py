"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class AuthenticationError(AppError):
    """Raised when a request carries no valid identity."""

    def __init__(self, message="Authentication required."):
        """Initialize the error."""
        super().__init__(message, 401)


class InsufficientCoinsError(AppError):
    """Raised when a balance cannot cover a debit."""

    def __init__(self, message="Insufficient coins."):
        """Initialize the error."""
        super().__init__(message, 402)


class PermissionDeniedError(AppError):
    """Raised when the caller lacks the role an operation needs."""

    def __init__(self, message="You are not authorized to perform this action."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class SlotUnavailableError(AppError):
    """Raised when the requested slot is already booked."""

    def __init__(
        self, message="This slot has already been taken. Please select another slot."
    ):
        """Initialize the error."""
        super().__init__(message, 409)


class InvalidTransitionError(AppError):
    """Raised when a settled transaction is settled again."""

    def __init__(self, message="Transaction has already been settled."):
        """Initialize the error."""
        super().__init__(message, 409)


class UploadError(AppError):
    """Raised when the payment proof upload fails."""

    def __init__(self, message="Failed to upload payment proof."):
        """Initialize the error."""
        super().__init__(message, 502)
