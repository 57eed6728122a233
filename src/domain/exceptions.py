"""
Domain exceptions - Semantic error types for account onboarding.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries an ErrorKind so the operation boundary can turn
it into a structured Failure result.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed account operation."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    CODE_EXPIRED = "code_expired"
    CODE_MISMATCH = "code_mismatch"
    STATE = "state"
    DELIVERY = "delivery"


class AccountError(Exception):
    """Base class for account domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(AccountError):
    """Required field missing or malformed."""

    kind = ErrorKind.VALIDATION


class ConflictError(AccountError):
    """IC number, email or phone number already registered."""

    kind = ErrorKind.CONFLICT


class AccountNotFound(AccountError):
    """No account for the given IC number."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Account not found") -> None:
        super().__init__(message)


class CodeError(AccountError):
    """Base class for verification code failures."""


class CodeExpired(CodeError):
    """No live code stored for the contact address."""

    kind = ErrorKind.CODE_EXPIRED

    def __init__(self, message: str = "Invalid or expired code") -> None:
        super().__init__(message)


class CodeMismatch(CodeError):
    """A live code exists but the submitted code differs."""

    kind = ErrorKind.CODE_MISMATCH

    def __init__(self, message: str = "Incorrect code") -> None:
        super().__init__(message)


class StateError(AccountError):
    """Account is not in a state that allows the operation."""

    kind = ErrorKind.STATE


class DeliveryError(AccountError):
    """A notifier could not deliver the verification code."""

    kind = ErrorKind.DELIVERY
