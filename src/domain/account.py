"""
Account record and contact validation helpers.

Account is a plain dataclass. The service always works on a fresh copy
loaded from the repository and writes it back through update(); it never
keeps a live reference between operations.
"""

import re
from dataclasses import dataclass
from enum import Enum

import email_validator
from email_validator import EmailNotValidError, validate_email

# "+" followed by 10-15 ASCII digits
_PHONE_PATTERN = re.compile(r"\+[0-9]{10,15}")

# Syntax only: reserved names such as localhost, .local and .test are mailboxes too
email_validator.SPECIAL_USE_DOMAIN_NAMES = []


class VerificationChannel(str, Enum):
    """Contact channel a verification code was issued for."""

    EMAIL = "EMAIL"
    PHONE = "PHONE"


@dataclass
class Account:
    """
    Persisted identity record.

    ic_number, email and phone_number are unique across accounts and
    never change after creation. The biometric use/enabled pairs are
    always written together by the biometric toggles.
    """

    customer_name: str
    ic_number: str
    email: str
    phone_number: str
    has_accepted_privacy_policy: bool = False
    pin_hash: str = ""
    is_email_verified: bool = False
    is_phone_verified: bool = False
    use_face_biometric: bool = False
    is_face_biometric_enabled: bool = False
    use_fingerprint_biometric: bool = False
    is_fingerprint_biometric_enabled: bool = False
    id: int | None = None

    def contact_for(self, channel: VerificationChannel) -> str:
        """Return the address a code for this channel is stored under."""
        if channel == VerificationChannel.EMAIL:
            return self.email
        return self.phone_number


def is_valid_email(email: str) -> bool:
    """
    Check that email is a bare mailbox address.

    Only syntax is checked. Dotless and reserved domains are accepted;
    display-name forms and surrounding whitespace are rejected.
    """
    if email != email.strip():
        return False
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone_number(phone_number: str) -> bool:
    return _PHONE_PATTERN.fullmatch(phone_number) is not None
