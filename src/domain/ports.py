"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from typing import NamedTuple, Protocol

from .account import Account


# Body handed to notifiers for every verification code
VERIFICATION_MESSAGE_TEMPLATE = "Your verification code is {code}. It expires in 10 minutes."


class StoredCode(NamedTuple):
    """A live verification code and its expiry (timezone-aware UTC)."""

    code: str
    expires_at: datetime


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    async def ic_number_exists(self, ic_number: str) -> bool:
        ...

    async def email_exists(self, email: str) -> bool:
        ...

    async def phone_number_exists(self, phone_number: str) -> bool:
        ...

    async def add(self, account: Account) -> int:
        """
        Persist a new account.

        Args:
            account: Account without an id

        Returns:
            The id assigned by the repository (also set on account.id)

        Raises:
            ConflictError: If the store rejects a duplicate unique field
        """
        ...

    async def get_by_ic_number(self, ic_number: str) -> Account | None:
        """
        Load the account registered under ic_number.

        Returns a copy owned by the caller, or None if absent.
        """
        ...

    async def update(self, account: Account) -> None:
        """Write back every mutable field of an existing account."""
        ...


class VerificationCodeStore(Protocol):
    """
    Port interface for the time-limited verification code store.

    Keys are contact addresses. At most one live entry exists per key and
    an expired entry reads as absent.
    """

    async def store(self, key: str, code: str, expires_at: datetime) -> None:
        """Store code under key, replacing any previous entry."""
        ...

    async def get(self, key: str) -> StoredCode | None:
        """Return the live entry for key, evicting it if expired."""
        ...

    async def remove(self, key: str) -> None:
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    async def send_verification_code(self, email: str, code: str) -> None:
        """
        Send verification code to email address.

        Raises:
            DeliveryError: If the message could not be delivered
        """
        ...


class SmsSender(Protocol):
    """Port interface for SMS delivery."""

    async def send_verification_code(self, phone_number: str, code: str) -> None:
        """
        Send verification code to phone number.

        Raises:
            DeliveryError: If the message could not be delivered
        """
        ...
