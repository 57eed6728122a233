"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
All shared components are created once in the application lifespan
and read from app.state.
"""

from fastapi import Request

from src.adapters.notifiers import (
    ConsoleEmailSender,
    ConsoleSmsSender,
    SmtpEmailSender,
    TwilioSmsSender,
)
from src.config.settings import Settings
from src.domain.ports import (
    AccountRepository,
    EmailSender,
    SmsSender,
    VerificationCodeStore,
)
from src.domain.service import AccountService


def build_notifiers(settings: Settings) -> tuple[EmailSender, SmsSender]:
    """
    Create the email and SMS senders selected by settings.

    Raises:
        ValueError: If the live backend is selected but not configured
    """
    if settings.notifier_backend == "live":
        email_sender = SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            from_email=settings.smtp_from_email,
            use_tls=settings.smtp_use_tls,
        )
        sms_sender = TwilioSmsSender(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_from_number,
        )
        return email_sender, sms_sender
    return ConsoleEmailSender(), ConsoleSmsSender()


def get_repository(request: Request) -> AccountRepository:
    """Get the account repository from app state."""
    return request.app.state.repository


def get_code_store(request: Request) -> VerificationCodeStore:
    """
    Get the process-wide verification code store.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.code_store


def get_account_service(request: Request) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the repository, notifiers and code store for the domain service.
    """
    return AccountService(
        repository=get_repository(request),
        email_sender=request.app.state.email_sender,
        sms_sender=request.app.state.sms_sender,
        code_store=get_code_store(request),
    )
