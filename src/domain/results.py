"""
Operation results - Tagged success/failure values returned by AccountService.

Every public service operation returns either Success or Failure instead
of raising for expected business outcomes.
"""

from dataclasses import dataclass
from typing import Union

from .exceptions import AccountError, ErrorKind


@dataclass(frozen=True)
class Success:
    """Operation completed; account_id is set by register and login."""

    message: str
    account_id: int | None = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Operation rejected by the first failing check."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: AccountError) -> "Failure":
        return cls(kind=error.kind, message=error.message)


OperationResult = Union[Success, Failure]
