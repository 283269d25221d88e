from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol

Duration = timedelta | int | str

_DURATION_RE = re.compile(r"^\s*(\d+)\s*(s|m|h|d)?\s*$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def to_timedelta(value: Duration) -> timedelta:
    """
    Normalize a duration given as ``timedelta``, integer seconds or ``"15m"``-style text.

    :raises ValueError: If a string does not match ``<n>[s|m|h|d]``.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise TypeError("duration must not be a bool")
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(value)
    if match is None:
        raise ValueError(f"Unrecognized duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit or "s"])


@dataclass(frozen=True, slots=True)
class SignOptions:
    """
    Signing parameters for a single token.

    :param algorithm: JWS algorithm name (``HS256``, ``RS256``...).
    :param expires_in: Lifetime; sets ``exp``. ``None`` issues a token without ``exp``.
    :param not_before: Delay before the token becomes valid; sets ``nbf``.
    :param headers: Extra JOSE header fields (e.g. ``kid``).
    """

    algorithm: str = "HS256"
    expires_in: Duration | None = None
    not_before: Duration | None = None
    headers: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class VerifyOptions:
    """
    Verification parameters.

    :param algorithms: Accepted algorithms; never inferred from the token header.
    :param audience: Expected ``aud``.
    :param issuer: Expected ``iss``.
    :param leeway: Clock skew tolerance applied to ``exp``/``nbf``.
    :param require: Claims that must be present.
    """

    algorithms: Sequence[str] = ("HS256",)
    audience: str | Sequence[str] | None = None
    issuer: str | None = None
    leeway: timedelta | int = 0
    require: Sequence[str] = field(default_factory=tuple)


class TokenCodec(Protocol):
    """Port for signing, verifying and decoding signed bearer tokens."""

    def sign(self, payload: dict[str, Any], key: Any, options: SignOptions | None = None) -> str: ...

    def verify(self, token: str, key: Any, options: VerifyOptions | None = None) -> dict[str, Any]: ...

    def decode(self, token: str, *, complete: bool = False) -> dict[str, Any]: ...
