"""Exceptions raised by the services and turned into responses by error_handlers."""


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """A profile or webhook payload is missing required data."""

    def __init__(self, message="Required data is missing."):
        """Initialize the error."""
        super().__init__(message, 400)


class DuplicateResourceError(AppError):
    """The participant is already registered for the tournament."""

    def __init__(self, message="You are already registered for this tournament."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotFoundError(AppError):
    """A tournament or profile does not exist."""

    def __init__(self, message="Tournament not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class WebhookError(AppError):
    """The n8n webhook could not be reached or answered with an error.

    ``details`` carries the underlying reason; ``message`` is what API
    clients see as the error.
    """

    def __init__(self, details, message="Failed to send webhook"):
        """Initialize the error."""
        super().__init__(message, 500)
        self.details = details
