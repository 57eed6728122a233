"""
Account domain service - Verification and authentication state machine.

This module contains the core business logic for account onboarding:
registration, verification code issuance and redemption, PIN creation,
login and biometric toggles.

Account State Model
===================

Verification is two independent boolean axes:
- is_email_verified: set by redeeming an EMAIL code
- is_phone_verified: set by redeeming a PHONE code

Neither axis is ever reset. PIN creation and login both require:
    email verified AND phone verified AND privacy policy accepted
Login additionally requires a PIN to have been set, and each requested
biometric modality to be enabled on the account.

Every check runs in a fixed order and the first failing check decides
the Failure message.

Note: The service performs check-then-act on uniqueness. Concurrent
registrations with the same IC number, email or phone are only rejected
if the repository enforces uniqueness atomically (unique constraints).
"""

import functools
import logging
import secrets
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .account import Account, VerificationChannel, is_valid_email, is_valid_phone_number
from .exceptions import (
    AccountError,
    AccountNotFound,
    CodeExpired,
    CodeMismatch,
    ConflictError,
    DeliveryError,
    StateError,
    ValidationError,
)
from .ports import AccountRepository, EmailSender, SmsSender, VerificationCodeStore
from .results import Failure, OperationResult, Success

logger = logging.getLogger(__name__)

CODE_TTL = timedelta(minutes=10)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _operation(
    func: Callable[..., Awaitable[Success]],
) -> Callable[..., Awaitable[OperationResult]]:
    """
    Recover domain errors at the operation boundary.

    AccountError becomes a Failure result. DeliveryError and anything
    raised by infrastructure propagate to the caller unchanged.
    """

    @functools.wraps(func)
    async def wrapper(self: "AccountService", *args, **kwargs) -> OperationResult:
        try:
            return await func(self, *args, **kwargs)
        except DeliveryError:
            raise
        except AccountError as error:
            return Failure.from_error(error)

    return wrapper


def _require(value: str, message: str) -> None:
    if not value:
        raise ValidationError(message)


@dataclass
class AccountService:
    """
    Domain service for account onboarding and authentication.

    The code store is an explicit collaborator created once per process
    and shared by every service instance; tests pass an isolated store.
    """

    repository: AccountRepository
    email_sender: EmailSender
    sms_sender: SmsSender
    code_store: VerificationCodeStore
    clock: Callable[[], datetime] = utc_now

    @_operation
    async def register(
        self,
        customer_name: str,
        ic_number: str,
        email: str,
        phone_number: str,
        has_accepted_privacy_policy: bool,
    ) -> Success:
        """
        Register a new customer.

        Validation order: name, IC number, email, phone present; email
        format; phone format; IC number, email, phone not registered.

        Returns:
            Success carrying the new account id
        """
        _require(customer_name, "Customer Name is required")
        _require(ic_number, "ICNumber is required")
        _require(email, "Email is required")
        _require(phone_number, "Phone number is required")

        if not is_valid_email(email):
            raise ValidationError("Invalid email format")
        if not is_valid_phone_number(phone_number):
            raise ValidationError("Invalid phone number format")

        if await self.repository.ic_number_exists(ic_number):
            raise ConflictError("ICNumber already registered")
        if await self.repository.email_exists(email):
            raise ConflictError("Email already registered")
        if await self.repository.phone_number_exists(phone_number):
            raise ConflictError("Phone number already registered")

        account = Account(
            customer_name=customer_name,
            ic_number=ic_number,
            email=email,
            phone_number=phone_number,
            has_accepted_privacy_policy=has_accepted_privacy_policy,
        )
        account_id = await self.repository.add(account)
        logger.info("Registered account %s", account_id)
        return Success("Customer registered successfully.", account_id)

    @_operation
    async def send_email_verification_code(self, ic_number: str) -> Success:
        account = await self._load(ic_number)
        code = await self._issue_code(account.email)
        await self.email_sender.send_verification_code(account.email, code)
        logger.info("Email verification code sent to %s", account.email)
        return Success("Email verification code sent")

    @_operation
    async def send_mobile_verification_code(self, ic_number: str) -> Success:
        account = await self._load(ic_number)
        code = await self._issue_code(account.phone_number)
        await self.sms_sender.send_verification_code(account.phone_number, code)
        logger.info("Mobile verification code sent to %s", account.phone_number)
        return Success("Mobile verification code sent")

    @_operation
    async def verify_code(
        self, ic_number: str, code: str, channel: VerificationChannel
    ) -> Success:
        """
        Redeem a verification code for the given channel.

        An absent or expired entry fails with CodeExpired; a live entry
        with a different code fails with CodeMismatch and stays stored.
        A match consumes the entry and marks the channel verified.
        """
        _require(ic_number, "ICNumber is required")
        _require(code, "Verification code is required")
        try:
            channel = VerificationChannel(channel)
        except ValueError:
            raise ValidationError("Invalid verification type") from None
        account = await self._load(ic_number)

        key = account.contact_for(channel)
        stored = await self.code_store.get(key)
        if stored is None or stored.expires_at <= self.clock():
            raise CodeExpired()
        if not secrets.compare_digest(stored.code.encode(), code.encode()):
            raise CodeMismatch()

        await self.code_store.remove(key)
        if channel == VerificationChannel.EMAIL:
            account.is_email_verified = True
        else:
            account.is_phone_verified = True
        await self.repository.update(account)
        logger.info("Account %s verified %s", account.id, channel.value)
        return Success("Code verified successfully")

    @_operation
    async def create_pin(self, ic_number: str, pin_hash: str) -> Success:
        """
        Store a caller-hashed PIN.

        The value is opaque here: no hashing and no strength rules.
        """
        _require(ic_number, "ICNumber is required")
        _require(pin_hash, "PIN is required")
        account = await self._load(ic_number)
        self._check_onboarded(account)

        account.pin_hash = pin_hash
        await self.repository.update(account)
        return Success("PIN created successfully")

    @_operation
    async def login(
        self,
        ic_number: str,
        pin_hash: str,
        use_face_biometric: bool = False,
        use_fingerprint_biometric: bool = False,
    ) -> Success:
        """
        Authenticate with a PIN hash and optional biometric modalities.

        No session or token is issued; success carries the account id.
        """
        account = await self._load(ic_number)
        self._check_onboarded(account)

        if not account.pin_hash:
            raise StateError("PIN has not been set up")
        if not secrets.compare_digest(account.pin_hash.encode(), pin_hash.encode()):
            raise StateError("Invalid PIN")
        if use_face_biometric and not account.is_face_biometric_enabled:
            raise StateError("Face biometric login not enabled for this account")
        if use_fingerprint_biometric and not account.is_fingerprint_biometric_enabled:
            raise StateError("Fingerprint biometric login not enabled for this account")

        return Success("Login successful", account.id)

    @_operation
    async def manage_face_biometric(self, ic_number: str, enable: bool) -> Success:
        account = await self._load(ic_number)
        account.is_face_biometric_enabled = enable
        account.use_face_biometric = enable
        await self.repository.update(account)
        return Success(f"Face biometric {_toggle_word(enable)} successfully")

    @_operation
    async def manage_fingerprint_biometric(self, ic_number: str, enable: bool) -> Success:
        account = await self._load(ic_number)
        account.is_fingerprint_biometric_enabled = enable
        account.use_fingerprint_biometric = enable
        await self.repository.update(account)
        return Success(f"Fingerprint biometric {_toggle_word(enable)} successfully")

    async def _load(self, ic_number: str) -> Account:
        """Load a fresh copy of the account, checking the key first."""
        _require(ic_number, "ICNumber is required")
        account = await self.repository.get_by_ic_number(ic_number)
        if account is None:
            raise AccountNotFound()
        return account

    async def _issue_code(self, key: str) -> str:
        code = self._generate_verification_code()
        await self.code_store.store(key, code, self.clock() + CODE_TTL)
        return code

    def _check_onboarded(self, account: Account) -> None:
        if not account.is_email_verified:
            raise StateError("Email has not been verified yet")
        if not account.is_phone_verified:
            raise StateError("Phone number has not been verified yet")
        if not account.has_accepted_privacy_policy:
            raise StateError("Privacy Policy has not been accepted")

    def _generate_verification_code(self) -> str:
        """
        Generate a 6-digit verification code uniformly in [100000, 999999].

        Uses the secrets module rather than random so codes are not
        predictable from earlier ones.
        """
        return str(100000 + secrets.randbelow(900000))


def _toggle_word(enable: bool) -> str:
    return "enabled" if enable else "disabled"
