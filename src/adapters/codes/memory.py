"""
In-memory verification code store - Implements VerificationCodeStore protocol.

Lifecycle: one instance is created at application startup, stored on
app.state and shared by every request. Codes are not persisted and are
lost on restart.

Expiry is evaluated lazily on read; there is no background sweep.
"""

import threading
from collections.abc import Callable
from datetime import datetime, timezone

from src.domain.ports import StoredCode


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryVerificationCodeStore:
    """
    Implements VerificationCodeStore protocol with a locked dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The lock is held only around dict access and never across an await,
    so the store is safe for concurrent tasks and for worker threads.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        """
        Initialize an empty store.

        Args:
            clock: Returns the current timezone-aware UTC time
        """
        self._clock = clock
        self._codes: dict[str, StoredCode] = {}
        self._lock = threading.Lock()

    async def store(self, key: str, code: str, expires_at: datetime) -> None:
        with self._lock:
            self._codes[key] = StoredCode(code, expires_at)

    async def get(self, key: str) -> StoredCode | None:
        """
        Return the live entry for key.

        An entry whose expiry has passed is evicted and reported as absent.
        """
        with self._lock:
            entry = self._codes.get(key)
            if entry is None:
                return None
            if entry.expires_at > self._clock():
                return entry
            del self._codes[key]
            return None

    async def remove(self, key: str) -> None:
        with self._lock:
            self._codes.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)

    def clear(self) -> None:
        """Drop every entry (process shutdown)."""
        with self._lock:
            self._codes.clear()
