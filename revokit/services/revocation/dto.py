# revokit/services/revocation/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

STATUS_FIELD = "status"
EXPIRY_FIELD = "exp"


class RevocationStatus(str, Enum):
    """Terminal marking of a revoked token. Absence of a record means "not revoked"."""

    INVALIDATED = "invalidated"


@dataclass(frozen=True, slots=True)
class RevocationRecord:
    """
    Stored marker for an explicitly invalidated token.

    :param status: Revocation status.
    :type status: RevocationStatus
    :param expires_at_ms: The token's own ``exp`` claim in epoch milliseconds,
        or ``None`` for a token that never expires. Such records are never swept.
    :type expires_at_ms: int | None
    """

    status: RevocationStatus
    expires_at_ms: int | None = None

    def to_fields(self) -> dict[str, str]:
        fields = {STATUS_FIELD: self.status.value}
        if self.expires_at_ms is not None:
            fields[EXPIRY_FIELD] = str(self.expires_at_ms)
        return fields

    @classmethod
    def from_fields(cls, fields: Mapping[str, str] | None) -> RevocationRecord | None:
        """
        Parse a stored hash.

        Only ``status`` decides whether the hash is a record. A missing or
        non-integer ``exp`` (older writers stored ``NaN``) reads as "never expires".
        """
        if not fields:
            return None
        try:
            status = RevocationStatus(fields.get(STATUS_FIELD))
        except ValueError:
            return None
        try:
            expires_at_ms: int | None = int(fields[EXPIRY_FIELD])
        except (KeyError, ValueError):
            expires_at_ms = None
        return cls(status=status, expires_at_ms=expires_at_ms)

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at_ms is not None and now_ms > self.expires_at_ms
