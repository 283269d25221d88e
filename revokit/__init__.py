"""
revokit
=======

Revocation-aware lifecycle for signed bearer tokens: validate, invalidate,
rotate and sweep, with revocation state kept in Redis.

Typical use::

    import redis
    from revokit import SignOptions, create_manager

    manager = create_manager(redis.Redis(), prefix="token_")
    token = manager.sign({"userId": 1}, "secret", SignOptions(expires_in="15m"))
    manager.invalidate(token)
    assert manager.validate(token, "secret") is False
"""

from __future__ import annotations

from revokit.infra.jwt.pyjwt_token_codec import (
    JsonWebTokenError,
    NotBeforeError,
    PyJWTTokenCodec,
    SignatureError,
    TokenExpiredError,
)
from revokit.infra.redis.redis_revocation_store import RedisRevocationStore
from revokit.manager import TokenRevocationManager, create_manager
from revokit.services._shared.errors import (
    InvalidArgumentError,
    MalformedTokenError,
    RotationIncompleteError,
    ServiceError,
)
from revokit.services._shared.ports import (
    InMemoryRevocationStore,
    SignOptions,
    VerifyOptions,
)
from revokit.services.revocation.dto import RevocationRecord, RevocationStatus
from revokit.services.rotation.dto import RotationOptions, TokenPair

_default_codec = PyJWTTokenCodec()

sign = _default_codec.sign
verify = _default_codec.verify
decode = _default_codec.decode

__all__ = [
    "create_manager",
    "TokenRevocationManager",
    "RedisRevocationStore",
    "InMemoryRevocationStore",
    "PyJWTTokenCodec",
    "SignOptions",
    "VerifyOptions",
    "RotationOptions",
    "TokenPair",
    "RevocationRecord",
    "RevocationStatus",
    "ServiceError",
    "InvalidArgumentError",
    "MalformedTokenError",
    "RotationIncompleteError",
    "JsonWebTokenError",
    "SignatureError",
    "NotBeforeError",
    "TokenExpiredError",
    "sign",
    "verify",
    "decode",
]
