from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from typing import Protocol

from revokit.services._shared.errors import InvalidArgumentError

log = logging.getLogger(__name__)

FieldValue = str | int

NAMESPACE_SEP = ":"


def namespace_of(prefix: str) -> str:
    """
    Physical key prefix for a configured ``prefix``.

    A non-empty prefix always ends with ``:``. Logical keys never contain
    ``:``, so two namespaces can only share keys when their prefixes are equal
    (``"t"`` and ``"tb"`` become ``"t:"`` and ``"tb:"``).
    """
    if not prefix or prefix.endswith(NAMESPACE_SEP):
        return prefix
    return prefix + NAMESPACE_SEP


def logical_key(physical: str, namespace: str) -> str | None:
    """Strip ``namespace`` from ``physical``; ``None`` when the key lives elsewhere."""
    if not physical.startswith(namespace):
        return None
    rest = physical[len(namespace):]
    # a further separator means a nested namespace such as "t:b:<token>"
    if not rest or NAMESPACE_SEP in rest:
        return None
    return rest


def check_key(key: object) -> str:
    """Return ``key`` if it is a non-empty string, else raise ``InvalidArgumentError``."""
    if not key:
        raise InvalidArgumentError("argument key is undefined or empty")
    if not isinstance(key, str):
        raise InvalidArgumentError("argument key must be a string")
    if NAMESPACE_SEP in key:
        raise InvalidArgumentError(f"argument key must not contain {NAMESPACE_SEP!r}")
    return key


def check_fields(fields: object) -> Mapping[str, FieldValue]:
    if not isinstance(fields, Mapping):
        raise InvalidArgumentError("argument fields must be a mapping")
    if not fields:
        raise InvalidArgumentError("argument fields is undefined or empty")
    return fields


class RevocationStore(Protocol):
    """
    Hash-record key/value store scoped to a key namespace.

    Keys handed in and out are *logical* keys: the namespace (see
    :func:`namespace_of`) is applied on write and stripped on enumeration by
    the store itself.
    """

    def put(self, key: str, fields: Mapping[str, FieldValue]) -> None:
        """Replace the record at ``key`` with ``fields`` in one atomic write."""

    def get_record(self, key: str) -> dict[str, str] | None:
        """Return the record at ``key`` or ``None`` when absent."""

    def scan_keys(self) -> Iterator[str]:
        """Lazily enumerate logical keys in the namespace (fresh scan per call)."""

    def for_each_key(self, visitor: Callable[[str], object]) -> bool:
        """Call ``visitor`` with every logical key. :returns: True."""

    def delete(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""

    def flush_all(self) -> bool:
        """Wipe the whole underlying store, not just this namespace."""


class InMemoryRevocationStore(RevocationStore):
    """
    Dict-backed store for unit tests and single-process use.

    Several instances may share one ``backing`` mapping to model tenants with
    different prefixes on the same store.

    .. note::
       Uses a threading lock so a record write is atomic like a Redis HSET.
    """

    def __init__(
        self,
        *,
        prefix: str = "",
        backing: MutableMapping[str, dict[str, str]] | None = None,
    ) -> None:
        self.prefix = prefix
        self.namespace = namespace_of(prefix)
        self._data: MutableMapping[str, dict[str, str]] = {} if backing is None else backing
        self._lock = threading.Lock()

    def _k(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def put(self, key: str, fields: Mapping[str, FieldValue]) -> None:
        key = check_key(key)
        fields = check_fields(fields)
        with self._lock:
            self._data[self._k(key)] = {str(f): str(v) for f, v in fields.items()}

    def get_record(self, key: str) -> dict[str, str] | None:
        key = check_key(key)
        with self._lock:
            record = self._data.get(self._k(key))
            return dict(record) if record else None

    def scan_keys(self) -> Iterator[str]:
        with self._lock:
            snapshot = list(self._data)
        for physical in snapshot:
            key = logical_key(physical, self.namespace)
            if key is not None:
                yield key

    def for_each_key(self, visitor: Callable[[str], object]) -> bool:
        if not callable(visitor):
            raise InvalidArgumentError("argument visitor must be callable")
        for key in self.scan_keys():
            visitor(key)
        return True

    def delete(self, key: str) -> None:
        key = check_key(key)
        with self._lock:
            self._data.pop(self._k(key), None)

    def flush_all(self) -> bool:
        log.warning("Flushing the entire in-memory store (all namespaces)")
        with self._lock:
            self._data.clear()
        return True
