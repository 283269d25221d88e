# revokit/services/rotation/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from revokit.services._shared.ports import SignOptions

DEFAULT_ACCESS_SIGN_OPTIONS = SignOptions(algorithm="HS256", expires_in=timedelta(minutes=15))
DEFAULT_REFRESH_SIGN_OPTIONS = SignOptions(algorithm="HS256", expires_in=timedelta(hours=2))

# ---------------------------- Input/Output DTOs --------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh token pair, used both as rotation input and output.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str

    def as_dict(self) -> dict[str, str]:
        return {"access_token": self.access_token, "refresh_token": self.refresh_token}


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class RotationOptions:
    """
    Payloads and signing parameters for the replacement pair.

    :param access_payload: Claims of the new access token.
    :param refresh_payload: Claims of the new refresh token.
    :param access_sign_options: Defaults to HS256, 15 minutes.
    :param refresh_sign_options: Defaults to HS256, 2 hours.
    """

    access_payload: dict[str, Any] = field(default_factory=dict)
    refresh_payload: dict[str, Any] = field(default_factory=dict)
    access_sign_options: SignOptions = DEFAULT_ACCESS_SIGN_OPTIONS
    refresh_sign_options: SignOptions = DEFAULT_REFRESH_SIGN_OPTIONS
