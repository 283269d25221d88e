# revokit/services/revocation/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from revokit.services._shared.base import BaseService
from revokit.services._shared.ports import RevocationStore, TokenCodec
from revokit.services.revocation.dto import STATUS_FIELD, RevocationRecord, RevocationStatus

log = logging.getLogger(__name__)


class RevocationCache(BaseService):
    """
    Token-level revocation semantics on top of a :class:`RevocationStore`.

    A record is keyed by the raw token and lives exactly as long as the token
    itself would pass verification; :meth:`sweep_expired` reclaims it afterwards.
    Records of tokens without ``exp`` are kept until :meth:`wipe_all`.
    The store has no native TTL in this design, so sweeps must be scheduled by
    the embedding application.
    """

    def __init__(
        self,
        *,
        store: RevocationStore,
        codec: TokenCodec,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        :param store: Namespaced hash-record store.
        :param codec: Used only for unverified decoding of ``exp``.
        :param clock: Wall-clock source (UTC-aware).
        """
        super().__init__(clock=clock)
        self.store = store
        self.codec = codec

    # ------------------------------------------------------------------ #
    # Revoke / lookup
    # ------------------------------------------------------------------ #

    def mark_revoked(self, token: str) -> bool:
        """
        Record ``token`` as invalidated until its own expiry.

        Already expired and already revoked tokens are accepted as no-ops.
        A token without a numeric ``exp`` is revoked with no expiry.

        :returns: Always ``True``.
        """
        claims = self.codec.decode(token)
        exp = claims.get("exp") if isinstance(claims, dict) else None
        expires_at_ms: int | None = None
        if isinstance(exp, int | float) and not isinstance(exp, bool):
            expires_at_ms = int(exp * 1000)

        if expires_at_ms is not None and expires_at_ms < self.now_ms():
            log.debug("Token %s already expired; nothing to revoke", self.token_ref(token))
            return True

        if self.is_revoked(token):
            return True

        record = RevocationRecord(status=RevocationStatus.INVALIDATED, expires_at_ms=expires_at_ms)
        self.store.put(token, record.to_fields())
        ref = self.token_ref(token)
        if expires_at_ms is None:
            log.debug("Token %s revoked with no expiry", ref, extra={"token_ref": ref})
        else:
            log.debug("Token %s revoked until %d", ref, expires_at_ms, extra={"token_ref": ref})
        return True

    def get_record(self, token: str) -> RevocationRecord | None:
        return RevocationRecord.from_fields(self.store.get_record(token))

    def is_revoked(self, token: str) -> bool:
        """Pure lookup on the ``status`` field; signature validity is never inspected here."""
        fields = self.store.get_record(token)
        return bool(fields) and fields.get(STATUS_FIELD) == RevocationStatus.INVALIDATED.value

    # ------------------------------------------------------------------ #
    # Reclamation
    # ------------------------------------------------------------------ #

    def sweep_expired(self) -> int:
        """
        Delete every record whose ``expires_at_ms`` is strictly before now.

        Records without an expiry are left in place.

        Safe to run concurrently with traffic and with other sweeps: deletes
        are idempotent and a record re-created mid-sweep carries its real expiry.

        :returns: Number of records deleted.
        """
        now_ms = self.now_ms()
        removed = 0
        for key in self.store.scan_keys():
            record = self.get_record(key)
            if record is None:
                # vanished meanwhile, or foreign data sharing the namespace
                continue
            if record.is_expired(now_ms):
                self.store.delete(key)
                removed += 1
        log.info("Revocation sweep removed %d expired record(s)", removed, extra={"removed": removed})
        return removed

    def wipe_all(self) -> int:
        """
        Delete every key in the namespace regardless of expiry.

        Unlike ``RevocationStore.flush_all`` this leaves other namespaces alone.

        :returns: Number of keys deleted.
        """
        removed = 0
        for key in self.store.scan_keys():
            self.store.delete(key)
            removed += 1
        log.info("Revocation cache wiped (%d key(s))", removed, extra={"removed": removed})
        return removed
