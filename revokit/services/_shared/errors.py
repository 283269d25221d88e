"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, Redis or
PyJWT. Errors produced by those collaborators (``redis.exceptions.RedisError``,
``jwt.exceptions.InvalidTokenError`` and friends) are propagated unchanged and
are *not* wrapped here.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - Raised before any store or codec access when caused by caller input.
    - Never retried by this package.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class InvalidArgumentError(ServiceError):
    """Raised on missing or mistyped caller input (empty key, no signing key...)."""


class MalformedTokenError(ServiceError):
    """
    Raised when a token is not a header/payload/signature triple.

    :param message: Human-readable reason.
    """

    def __init__(self, message: str = "argument token is malformed") -> None:
        super().__init__(message)


@dataclass(slots=True, eq=False)
class RotationIncompleteError(ServiceError):
    """
    Raised when signing fails after the old pair has already been revoked.

    The old tokens stay revoked and no replacement exists. Retrying the rotation
    is safe because re-invalidating a revoked token is a no-op.

    :param access_token: The (now revoked) access token.
    :type access_token: str
    :param refresh_token: The (now revoked) refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str

    def __str__(self) -> str:
        return "Token pair revoked but no replacement pair was issued"
