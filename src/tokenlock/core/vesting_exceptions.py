"""
Vesting-specific exception hierarchy for tokenlock.

Provides typed exceptions for schedule registration, accrual and caller
gating so failures can be handled precisely by the surrounding platform.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class VestingError(Exception):
    """Base exception for all vesting-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable


# ==================== Authorization Errors ====================


class AuthorizationError(VestingError):
    """Raised for caller identity and principal configuration failures."""
    pass


class UnauthorizedError(AuthorizationError):
    """Raised when the caller is not the designated principal for an operation."""
    pass


class InvalidPrincipalError(AuthorizationError):
    """Raised when a principal address is set to an empty identity."""
    pass


class InvalidNewOwnerError(AuthorizationError):
    """Raised when ownership would be transferred to an empty identity."""
    pass


# ==================== Validation Errors ====================


class VestingValidationError(VestingError):
    """Raised when schedule parameters or query inputs fail validation."""
    pass


class InvalidScheduleError(VestingValidationError):
    """Raised when schedule parameters are rejected at registration.

    Examples: empty account, negative amounts, zero period length.
    """
    pass


class UnknownPoolError(VestingValidationError):
    """Raised when a pool identifier does not name one of the four pools."""
    pass


# ==================== Accrual Errors ====================


class CliffNotElapsedError(VestingError):
    """Raised when accrual is requested before the cliff has fully elapsed.

    The whole aggregate query is rejected; retrying after the cliff succeeds.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details, recoverable)


class ArithmeticFaultError(VestingError):
    """Raised on unsigned overflow, underflow or division by zero."""
    pass


__all__ = [
    "VestingError",
    "AuthorizationError",
    "UnauthorizedError",
    "InvalidPrincipalError",
    "InvalidNewOwnerError",
    "VestingValidationError",
    "InvalidScheduleError",
    "UnknownPoolError",
    "CliffNotElapsedError",
    "ArithmeticFaultError",
]
