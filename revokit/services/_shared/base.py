# revokit/services/_shared/base.py
from __future__ import annotations

import hashlib
from collections.abc import Callable
from datetime import UTC, datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BaseService:
    """
    Base class for the revocation services.

    Responsibilities
    ----------------
    * Own the wall-clock source so expiry decisions are testable.
    * Offer a log-safe reference for tokens (tokens are bearer secrets).

    Notes
    -----
    - Services hold their collaborators explicitly; there is no global client.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        """
        Initialize the base service.

        :param clock: Returns the current UTC-aware time. Defaults to ``datetime.now(UTC)``.
        :type clock: Callable[[], datetime] | None
        """
        self.clock = clock or _utcnow

    def now_utc(self) -> datetime:
        return self.clock()

    def now_ms(self) -> int:
        """Current time in epoch milliseconds."""
        return int(self.now_utc().timestamp() * 1000)

    @staticmethod
    def token_ref(token: str) -> str:
        """Short SHA-256 reference of a token, safe to put in logs."""
        return hashlib.sha256(token.encode()).hexdigest()[:12]
