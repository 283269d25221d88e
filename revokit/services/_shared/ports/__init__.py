"""
revokit.services._shared.ports
==============================

*Ports* (hexagonal interfaces) that the revocation services depend on.

Modules
-------
- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore` (namespaced hash-record storage) and
    :class:`~.InMemoryRevocationStore`, a dict-backed double.

- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` (sign / verify / decode of bearer tokens)
    together with :class:`~.SignOptions` and :class:`~.VerifyOptions`.

Concrete adapters (Redis, PyJWT) live under ``revokit.infra``.
"""

from __future__ import annotations

from .revocation_store import InMemoryRevocationStore, RevocationStore
from .token_codec import SignOptions, TokenCodec, VerifyOptions, to_timedelta

__all__ = [
    "RevocationStore",
    "InMemoryRevocationStore",
    "TokenCodec",
    "SignOptions",
    "VerifyOptions",
    "to_timedelta",
]
