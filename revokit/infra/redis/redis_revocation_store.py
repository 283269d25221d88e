# comments in English; reST docstrings
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

import redis  # type: ignore[import-untyped]

from revokit.services._shared.errors import InvalidArgumentError
from revokit.services._shared.ports import RevocationStore
from revokit.services._shared.ports.revocation_store import (
    FieldValue,
    check_fields,
    check_key,
    logical_key,
    namespace_of,
)

log = logging.getLogger(__name__)

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


def _b(value: bytes | str) -> str:
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


@dataclass(slots=True)
class RedisRevocationStore(RevocationStore):
    """
    Redis-backed revocation store over hash records.

    :param r: A Redis client (already connected). Works with and without
        ``decode_responses``.
    :param prefix: Key namespace. Physical keys are ``<prefix>:<key>``, the
        separator being added when ``prefix`` does not already end with it.
    :param scan_count: ``COUNT`` hint passed to ``SCAN``.
    """

    r: redis.Redis
    prefix: str = ""
    scan_count: int = 500
    namespace: str = field(init=False, default="")

    def __post_init__(self) -> None:
        self.namespace = namespace_of(self.prefix)

    # -------------------- helpers --------------------

    def _k(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def _match(self) -> str:
        # Escape glob metacharacters so a prefix like "t[1]" matches literally
        return _GLOB_SPECIALS.sub(r"\\\1", self.namespace) + "*"

    # -------------------- API ------------------------

    def put(self, key: str, fields: Mapping[str, FieldValue]) -> None:
        """
        Replace the hash at ``key`` with ``fields``.

        DEL + HSET run in one MULTI/EXEC so readers never see a mix of old and
        new fields.
        """
        k = self._k(check_key(key))
        mapping = {str(f): str(v) for f, v in check_fields(fields).items()}
        with self.r.pipeline(transaction=True) as p:
            p.delete(k)
            p.hset(k, mapping=mapping)
            p.execute()

    def get_record(self, key: str) -> dict[str, str] | None:
        h = self.r.hgetall(self._k(check_key(key)))
        if not h:
            return None
        return {_b(f): _b(v) for f, v in h.items()}

    def scan_keys(self) -> Iterator[str]:
        """
        Yield logical keys via incremental ``SCAN``.

        Only hash keys are reported: records are hashes, and other value
        types sharing the prefix would fail HGETALL with WRONGTYPE.
        Keys of nested namespaces (``<prefix>:<other>:<key>``) are skipped.
        Each call starts a fresh cursor. Keys created or deleted while the scan
        runs may or may not be reported, as per ``SCAN`` guarantees.
        """
        for raw in self.r.scan_iter(match=self._match(), count=self.scan_count, _type="hash"):
            key = logical_key(_b(raw), self.namespace)
            if key is not None:
                yield key

    def for_each_key(self, visitor: Callable[[str], object]) -> bool:
        if not callable(visitor):
            raise InvalidArgumentError("argument visitor must be callable")
        for key in self.scan_keys():
            visitor(key)
        return True

    def delete(self, key: str) -> None:
        self.r.delete(self._k(check_key(key)))

    def flush_all(self) -> bool:
        """
        ``FLUSHDB`` the underlying database, ignoring the namespace.

        .. warning::
           Destroys every key in the selected Redis database. Test/reset only.
        """
        log.warning("Flushing the entire Redis database (prefix %r ignored)", self.prefix)
        return bool(self.r.flushdb())
