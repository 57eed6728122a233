"""Notifier adapters - Verification code delivery."""

from .console import ConsoleEmailSender, ConsoleSmsSender
from .smtp import SmtpEmailSender
from .twilio import TwilioSmsSender

__all__ = ["ConsoleEmailSender", "ConsoleSmsSender", "SmtpEmailSender", "TwilioSmsSender"]
