"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account verification and authentication state
machine. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .account import Account, VerificationChannel
from .exceptions import (
    AccountError,
    AccountNotFound,
    CodeError,
    CodeExpired,
    CodeMismatch,
    ConflictError,
    DeliveryError,
    ErrorKind,
    StateError,
    ValidationError,
)
from .ports import (
    AccountRepository,
    EmailSender,
    SmsSender,
    StoredCode,
    VerificationCodeStore,
)
from .results import Failure, OperationResult, Success
from .service import AccountService

__all__ = [
    "Account",
    "AccountError",
    "AccountNotFound",
    "AccountRepository",
    "AccountService",
    "CodeError",
    "CodeExpired",
    "CodeMismatch",
    "ConflictError",
    "DeliveryError",
    "EmailSender",
    "ErrorKind",
    "Failure",
    "OperationResult",
    "SmsSender",
    "StateError",
    "StoredCode",
    "Success",
    "ValidationError",
    "VerificationChannel",
    "VerificationCodeStore",
]
