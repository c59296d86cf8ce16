"""Custom exceptions for SSH Client Hardener."""

from typing import Optional


class HardenerError(Exception):
    """Base exception for all hardener errors."""

    pass


class ConfigurationError(HardenerError):
    """Raised when configuration is invalid."""

    pass


class ValidationError(HardenerError):
    """Raised when validation fails."""

    pass


class InvalidPortError(ValidationError):
    """Raised when the port list is empty or holds an out-of-range value."""

    def __init__(self, message: str, port: Optional[object] = None) -> None:
        super().__init__(message)
        self.port = port


class CommandExecutionError(HardenerError):
    """Raised when command execution fails."""

    pass


class RollbackError(HardenerError):
    """Raised when rollback operation fails."""

    pass
