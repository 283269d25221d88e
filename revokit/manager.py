"""Public facade tying the store, codec and revocation services together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime
from typing import Any, Literal

import redis  # type: ignore[import-untyped]

from revokit.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
from revokit.infra.redis.redis_revocation_store import RedisRevocationStore
from revokit.services._shared.ports import RevocationStore, SignOptions, TokenCodec, VerifyOptions
from revokit.services._shared.ports.revocation_store import FieldValue
from revokit.services.revocation.service import RevocationCache
from revokit.services.rotation.dto import RotationOptions, TokenPair
from revokit.services.rotation.service import RotationCoordinator
from revokit.services.validation.service import (
    Claims,
    ValidationCallback,
    Validator,
    check_well_formed,
)

log = logging.getLogger(__name__)


class TokenRevocationManager:
    """
    Issue, validate, revoke and rotate tokens against one explicit store handle.

    The manager owns no global state: every instance carries its own store and
    codec, so several namespaces (or stores) can coexist in one process.
    """

    def __init__(
        self,
        *,
        store: RevocationStore,
        codec: TokenCodec | None = None,
        clock: Callable[[], datetime] | None = None,
        rotation_defaults: RotationOptions | None = None,
    ) -> None:
        if codec is None:
            codec = PyJWTTokenCodec(clock=clock) if clock else PyJWTTokenCodec()
        self.store = store
        self.codec = codec
        self.cache = RevocationCache(store=store, codec=self.codec, clock=clock)
        self.validator = Validator(cache=self.cache, codec=self.codec)
        self.rotator = RotationCoordinator(cache=self.cache, codec=self.codec, defaults=rotation_defaults)

    # ------------------------------------------------------------------ #
    # Raw store access
    # ------------------------------------------------------------------ #

    def put(self, key: str, fields: Mapping[str, FieldValue]) -> None:
        self.store.put(key, fields)

    def get(self, key: str) -> dict[str, str] | None:
        return self.store.get_record(key)

    def scan_keys(self) -> Iterator[str]:
        return self.store.scan_keys()

    def for_each_key(self, visitor: Callable[[str], object]) -> bool:
        return self.store.for_each_key(visitor)

    def wipe_store(self) -> bool:
        """Destroy the whole underlying store, every namespace included."""
        return self.store.flush_all()

    # ------------------------------------------------------------------ #
    # Token lifecycle
    # ------------------------------------------------------------------ #

    def sign(self, payload: dict[str, Any], key: Any, options: SignOptions | None = None) -> str:
        return self.codec.sign(payload, key, options)

    def verify(self, token: str, key: Any, options: VerifyOptions | None = None) -> Claims:
        return self.codec.verify(token, key, options)

    def decode(self, token: str, *, complete: bool = False) -> dict[str, Any]:
        return self.codec.decode(token, complete=complete)

    def validate(
        self, token: str, key: Any, options: VerifyOptions | None = None
    ) -> Claims | Literal[False]:
        return self.validator.validate(token, key, options)

    def validate_with_callback(
        self,
        token: str,
        key: Any,
        callback: ValidationCallback,
        options: VerifyOptions | None = None,
    ) -> None:
        self.validator.validate_with_callback(token, key, callback, options)

    def invalidate(self, token: str) -> Literal[True]:
        """Revoke ``token``; already expired or revoked tokens are accepted."""
        check_well_formed(token)
        self.cache.mark_revoked(token)
        return True

    def is_revoked(self, token: str) -> bool:
        return self.cache.is_revoked(token)

    def rotate(
        self, pair: TokenPair, key: Any, options: RotationOptions | None = None
    ) -> TokenPair:
        return self.rotator.rotate(pair.access_token, pair.refresh_token, key, options)

    # ------------------------------------------------------------------ #
    # Reclamation
    # ------------------------------------------------------------------ #

    def sweep_expired(self) -> Literal[True]:
        self.cache.sweep_expired()
        return True

    def wipe_all(self) -> Literal[True]:
        self.cache.wipe_all()
        return True


def create_manager(
    redis_client: redis.Redis,
    *,
    prefix: str = "",
    clock: Callable[[], datetime] | None = None,
    rotation_defaults: RotationOptions | None = None,
) -> TokenRevocationManager:
    """
    Build a Redis-backed manager.

    :param redis_client: Connected client; connection lifecycle stays with the caller.
    :param prefix: Key namespace inside the Redis database (stored as
        ``<prefix>:<token>``).
    """
    store = RedisRevocationStore(r=redis_client, prefix=prefix)
    log.debug(
        "Revocation manager bound to Redis namespace %r", store.namespace, extra={"namespace": store.namespace}
    )
    return TokenRevocationManager(store=store, clock=clock, rotation_defaults=rotation_defaults)
