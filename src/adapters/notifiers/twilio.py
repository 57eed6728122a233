"""
Twilio SMS sender adapter - Implements SmsSender protocol.

Talks to the Twilio Messages REST resource directly with httpx.
"""

import logging

import httpx

from src.domain.exceptions import DeliveryError
from src.domain.ports import VERIFICATION_MESSAGE_TEMPLATE

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSmsSender:
    """
    Implements SmsSender protocol via the Twilio REST API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            account_sid: Twilio account SID
            auth_token: Twilio auth token
            from_number: Sending phone number in E.164 form
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        if not account_sid:
            raise ValueError("twilio_account_sid is not configured")
        if not auth_token:
            raise ValueError("twilio_auth_token is not configured")
        if not from_number:
            raise ValueError("twilio_from_number is not configured")
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._transport = transport

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_API_BASE}/Accounts/{self._account_sid}/Messages.json"

    async def send_verification_code(self, phone_number: str, code: str) -> None:
        """
        Send verification code by SMS.

        Raises:
            ValueError: If phone_number or code is empty
            DeliveryError: If the request fails or Twilio rejects it
        """
        if not phone_number:
            raise ValueError("Phone number is required")
        if not code:
            raise ValueError("Verification code is required")

        payload = {
            "To": phone_number,
            "From": self._from_number,
            "Body": VERIFICATION_MESSAGE_TEMPLATE.format(code=code),
        }

        try:
            async with httpx.AsyncClient(
                auth=(self._account_sid, self._auth_token),
                timeout=10,
                transport=self._transport,
            ) as client:
                r = await client.post(self.messages_url, data=payload)
                r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Twilio delivery to %s failed: %s", phone_number, e)
            raise DeliveryError(f"Failed to send SMS: {e}") from e
