# revokit/services/validation/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Literal

from revokit.services._shared.errors import InvalidArgumentError, MalformedTokenError
from revokit.services._shared.ports import TokenCodec, VerifyOptions
from revokit.services.revocation.service import RevocationCache

log = logging.getLogger(__name__)

Claims = dict[str, Any]
ValidationCallback = Callable[[BaseException | None, Any], object]


def check_well_formed(token: object) -> str:
    """
    Cheap syntactic precondition applied before any store or crypto work.

    :raises MalformedTokenError: If ``token`` is empty, not a string, or not three
        dot-separated segments.
    """
    if not token:
        raise MalformedTokenError("argument token is undefined or empty")
    if not isinstance(token, str):
        raise MalformedTokenError("argument token must be a string")
    if len(token.split(".")) != 3:
        raise MalformedTokenError()
    return token


def check_key_material(key: object) -> None:
    if not key:
        raise InvalidArgumentError("argument secretOrPublicKey is undefined or empty")


class Validator:
    """
    Decide whether a presented token is trusted.

    Revocation is an expected outcome and is reported as the value ``False``;
    everything the codec raises is propagated as-is.
    """

    def __init__(self, *, cache: RevocationCache, codec: TokenCodec) -> None:
        self.cache = cache
        self.codec = codec

    def validate(
        self, token: str, key: Any, options: VerifyOptions | None = None
    ) -> Claims | Literal[False]:
        """
        Blocking validation.

        :returns: Verified claims, or ``False`` when the token is revoked.
        :raises MalformedTokenError: Token is not three segments.
        :raises InvalidArgumentError: ``key`` is missing.
        :raises jwt.exceptions.InvalidTokenError: Any verification failure.
        """
        check_well_formed(token)
        check_key_material(key)
        return self._validate(token, key, options)

    def validate_with_callback(
        self,
        token: str,
        key: Any,
        callback: ValidationCallback,
        options: VerifyOptions | None = None,
    ) -> None:
        """
        Completion-style validation.

        Argument errors are raised immediately. Every other outcome reaches
        ``callback(error, result)``: ``(None, claims)``, ``(None, False)`` for a
        revoked token, or ``(exc, None)`` for store and codec failures.
        """
        check_well_formed(token)
        check_key_material(key)
        if not callable(callback):
            raise InvalidArgumentError("argument callback must be a function")

        try:
            result = self._validate(token, key, options)
        except Exception as exc:
            callback(exc, None)
            return
        callback(None, result)

    def _validate(self, token: str, key: Any, options: VerifyOptions | None) -> Claims | Literal[False]:
        if self.cache.is_revoked(token):
            log.debug("Rejected revoked token %s", self.cache.token_ref(token))
            return False
        return self.codec.verify(token, key, options)
