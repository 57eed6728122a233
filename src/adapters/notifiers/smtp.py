"""
SMTP email sender adapter - Implements EmailSender protocol.

smtplib is blocking, so each send runs in a worker thread.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import DeliveryError
from src.domain.ports import VERIFICATION_MESSAGE_TEMPLATE

logger = logging.getLogger(__name__)

SUBJECT = "Your Verification Code"


class SmtpEmailSender:
    """
    Implements EmailSender protocol over SMTP.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        use_tls: bool = True,
    ) -> None:
        if not host:
            raise ValueError("smtp_host is not configured")
        if not from_email:
            raise ValueError("smtp_from_email is not configured")
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email
        self._use_tls = use_tls

    async def send_verification_code(self, email: str, code: str) -> None:
        """
        Send verification code by email.

        Raises:
            ValueError: If email or code is empty
            DeliveryError: If the SMTP exchange fails
        """
        if not email:
            raise ValueError("Email is required")
        if not code:
            raise ValueError("Verification code is required")

        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = self._from_email
        message["To"] = email
        message.set_content(VERIFICATION_MESSAGE_TEMPLATE.format(code=code))

        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s failed: %s", email, e)
            raise DeliveryError(f"Failed to send email: {e}") from e

    def _send(self, message: EmailMessage) -> None:
        if self._use_tls:
            server = smtplib.SMTP_SSL(self._host, self._port)
        else:
            server = smtplib.SMTP(self._host, self._port)

        with server:
            if self._username:
                server.login(self._username, self._password)
            server.send_message(message)
