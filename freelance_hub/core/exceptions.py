"""Custom exceptions for the Freelance Hub application."""


class FreelanceHubError(Exception):
    """Base exception for Freelance Hub application."""

    pass


class ValidationError(FreelanceHubError):
    """Raised when input validation fails."""

    pass


class NotFoundError(FreelanceHubError):
    """Raised when a resource does not exist or is not owned by the caller."""

    pass


class InvalidReferenceError(FreelanceHubError):
    """Raised when a referenced client/project is missing or not owned."""

    pass


class ConflictError(FreelanceHubError):
    """Raised when a write conflicts with existing data."""

    pass


class DocumentWriteError(FreelanceHubError):
    """Raised when an invoice document cannot be written to storage."""

    pass


class DatabaseError(FreelanceHubError):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(FreelanceHubError):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(FreelanceHubError):
    """Raised when authentication fails."""

    pass


class AuthorizationError(FreelanceHubError):
    """Raised when an authenticated user lacks a required scope."""

    pass
