"""
Custom exceptions for UrBackup server operations.

Soft "not found" outcomes are not exceptions: operations return their
documented empty value instead.
"""
from typing import Optional


class UrBackupError(Exception):
    """Base exception for all urbackupy errors."""

    def __init__(self, message: str, action: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            action: Server action involved (if any)
        """
        self.action = action
        super().__init__(message)


class TransportError(UrBackupError):
    """HTTP-level failure: non-2xx status, network error or undecodable body."""

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        status: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            action: Server action that failed
            status: HTTP status code (None for network failures)
        """
        self.status = status
        super().__init__(message, action)


class AuthenticationError(UrBackupError):
    """Login rejected, unknown username or expired session."""
    pass


class DataIntegrityError(UrBackupError):
    """Server answered 2xx but the body lacks an expected field."""

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        field: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            action: Server action whose response was malformed
            field: Name of the missing or mistyped field
        """
        self.field = field
        super().__init__(message, action)


class ValidationError(UrBackupError, ValueError):
    """Caller supplied missing, invalid or contradictory parameters."""
    pass
