"""
Error taxonomy for StarFest Score System.

ConfigError is fatal at startup. Every other error is a per-request
condition that the service boundary translates into a status result.
"""


class StarfestError(Exception):
    """Base exception for all StarFest errors"""
    pass


class ConfigError(StarfestError):
    """Event catalog or startup configuration is missing or invalid"""
    pass


class NoActiveEventError(StarfestError):
    """Raised when an operation needs an active event and none is configured"""

    def __init__(self, message: str = "No active event"):
        super().__init__(message)


class ValidationError(StarfestError):
    """Malformed match payload, rejected before any state is touched"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class NotFoundError(StarfestError):
    """Unknown player, team or event id"""
    pass


class PersistenceError(StarfestError, OSError):
    """Saving or restoring the persisted state failed"""
    pass
