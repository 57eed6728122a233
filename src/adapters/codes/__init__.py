"""Verification code store adapters."""

from .memory import InMemoryVerificationCodeStore

__all__ = ["InMemoryVerificationCodeStore"]
