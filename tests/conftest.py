"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- The anyio backend used by async tests
- A controllable clock and isolated code store per test
- In-memory repository and mocked notifiers
- Helpers that put an account into a given onboarding state
"""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from src.adapters.codes.memory import InMemoryVerificationCodeStore
from src.adapters.repository.memory import InMemoryAccountRepository
from src.domain.account import Account
from src.domain.service import AccountService


class FakeClock:
    """Clock that only moves when advanced."""

    def __init__(self) -> None:
        self.now = datetime(2025, 6, 3, 4, 8, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def code_store(clock: FakeClock) -> InMemoryVerificationCodeStore:
    """Isolated code store per test, sharing the test clock."""
    return InMemoryVerificationCodeStore(clock=clock)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def email_sender() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def sms_sender() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    email_sender: AsyncMock,
    sms_sender: AsyncMock,
    code_store: InMemoryVerificationCodeStore,
    clock: FakeClock,
) -> AccountService:
    return AccountService(
        repository=repository,
        email_sender=email_sender,
        sms_sender=sms_sender,
        code_store=code_store,
        clock=clock,
    )


@pytest.fixture
def add_account(repository: InMemoryAccountRepository) -> Callable[..., Awaitable[Account]]:
    """
    Factory adding an account with the given flag overrides.

    Defaults describe a fully onboarded account without a PIN.
    """

    async def _add(**overrides) -> Account:
        fields = {
            "customer_name": "John Doe",
            "ic_number": "900101145678",
            "email": "john@example.com",
            "phone_number": "+60123456789",
            "has_accepted_privacy_policy": True,
            "is_email_verified": True,
            "is_phone_verified": True,
        }
        fields.update(overrides)
        account = Account(**fields)
        await repository.add(account)
        return account

    return _add
