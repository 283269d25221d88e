# revokit/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, cast
from uuid import uuid4

import jwt
from jwt.exceptions import (
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)

from revokit.services._shared.ports import SignOptions, TokenCodec, VerifyOptions, to_timedelta

# Error kinds surfaced unchanged by verify()
JsonWebTokenError = InvalidTokenError
SignatureError = InvalidSignatureError
NotBeforeError = ImmatureSignatureError
TokenExpiredError = ExpiredSignatureError


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class PyJWTTokenCodec(TokenCodec):
    """
    Adapter for PyJWT.

    :param clock: Source of "now" used for ``iat``/``exp``/``nbf`` at signing time.
        Verification always uses PyJWT's own wall clock.
    """

    clock: Callable[[], datetime] = field(default=_utcnow)

    def sign(self, payload: dict[str, Any], key: Any, options: SignOptions | None = None) -> str:
        opts = options or SignOptions()
        claims = dict(payload or {})
        now = self.clock()

        if opts.expires_in is not None:
            claims["exp"] = int((now + to_timedelta(opts.expires_in)).timestamp())
        if opts.not_before is not None:
            claims["nbf"] = int((now + to_timedelta(opts.not_before)).timestamp())
        claims.setdefault("iat", int(now.timestamp()))
        # A random jti keeps two tokens signed in the same second distinct
        claims.setdefault("jti", uuid4().hex)

        return jwt.encode(claims, key, algorithm=opts.algorithm, headers=opts.headers)

    def verify(self, token: str, key: Any, options: VerifyOptions | None = None) -> dict[str, Any]:
        opts = options or VerifyOptions()
        decode_options: dict[str, Any] = {}
        if opts.require:
            decode_options["require"] = list(opts.require)
        return cast(
            dict[str, Any],
            jwt.decode(
                token,
                key,
                algorithms=list(opts.algorithms),
                audience=opts.audience,
                issuer=opts.issuer,
                leeway=opts.leeway,
                options=decode_options,
            ),
        )

    def decode(self, token: str, *, complete: bool = False) -> dict[str, Any]:
        """
        Decode without verifying anything.

        :param complete: Return ``{"header", "payload", "signature"}`` instead of
            just the claims. The signature is kept as base64url text.
        """
        unverified = {"verify_signature": False}
        if not complete:
            return cast(dict[str, Any], jwt.decode(token, options=unverified))

        header = jwt.get_unverified_header(token)
        payload = jwt.decode(token, options=unverified)
        signature = token.rsplit(".", 1)[-1]
        return {"header": header, "payload": payload, "signature": signature}
