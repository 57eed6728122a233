"""
In-memory account repository - Implements AccountRepository protocol.

Used for local development (repository_backend = "memory") and tests.
Every read returns a copy so callers never share a live Account.
"""

import dataclasses
import itertools
import threading

from src.domain.account import Account
from src.domain.exceptions import ConflictError


class InMemoryAccountRepository:
    """
    Implements AccountRepository protocol with a dict keyed by id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    add() enforces uniqueness under the lock, like a unique constraint.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    async def ic_number_exists(self, ic_number: str) -> bool:
        return self._find(lambda a: a.ic_number == ic_number) is not None

    async def email_exists(self, email: str) -> bool:
        return self._find(lambda a: a.email == email) is not None

    async def phone_number_exists(self, phone_number: str) -> bool:
        return self._find(lambda a: a.phone_number == phone_number) is not None

    async def add(self, account: Account) -> int:
        with self._lock:
            for existing in self._accounts.values():
                if existing.ic_number == account.ic_number:
                    raise ConflictError("ICNumber already registered")
                if existing.email == account.email:
                    raise ConflictError("Email already registered")
                if existing.phone_number == account.phone_number:
                    raise ConflictError("Phone number already registered")
            account.id = next(self._ids)
            self._accounts[account.id] = dataclasses.replace(account)
        return account.id

    async def get_by_ic_number(self, ic_number: str) -> Account | None:
        found = self._find(lambda a: a.ic_number == ic_number)
        return dataclasses.replace(found) if found is not None else None

    async def update(self, account: Account) -> None:
        """
        Write back an existing account.

        Raises:
            KeyError: If the account was never added
        """
        with self._lock:
            current = self._accounts[account.id]
            # Uniqueness fields are immutable after creation
            self._accounts[account.id] = dataclasses.replace(
                account,
                ic_number=current.ic_number,
                email=current.email,
                phone_number=current.phone_number,
            )

    async def ping(self) -> None:
        """Always healthy (health check)."""

    def _find(self, predicate) -> Account | None:
        with self._lock:
            return next((a for a in self._accounts.values() if predicate(a)), None)
