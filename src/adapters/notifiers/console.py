"""
Console notifier adapters - Implement EmailSender and SmsSender protocols.

This module provides console-based implementations of the domain's
notifier ports, logging verification codes for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification codes to stdout.
    """

    async def send_verification_code(self, email: str, code: str) -> None:
        """
        Log verification code to console (simulates email delivery).

        The code is logged at INFO level to be visible in docker-compose logs.

        Args:
            email: Recipient email address
            code: 6-digit verification code
        """
        logger.info("[VERIFICATION] Email: %s Code: %s", email, code)


class ConsoleSmsSender:
    """Implements SmsSender protocol via console logging."""

    async def send_verification_code(self, phone_number: str, code: str) -> None:
        logger.info("[VERIFICATION] SMS: %s Code: %s", phone_number, code)
