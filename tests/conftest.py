"""Shared pytest fixtures: in-memory Redis, a controllable clock, wired services.

Every test gets a fresh :class:`fakeredis.FakeRedis`, so nothing leaks between
cases and no Redis server is needed.
"""

from __future__ import annotations

import logging

import fakeredis
import pytest

from revokit.core.logger import PACKAGE_LOGGER
from revokit.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
from revokit.infra.redis.redis_revocation_store import RedisRevocationStore
from revokit.manager import TokenRevocationManager
from revokit.services.revocation.service import RevocationCache

from tests.helpers.tokens import PREFIX, FakeClock


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def restore_package_logger():
    """Undo handler and level changes made to the ``revokit`` logger."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(pkg.handlers), pkg.level, pkg.propagate)
    yield pkg
    pkg.handlers[:] = saved[0]
    pkg.setLevel(saved[1])
    pkg.propagate = saved[2]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(fake_redis) -> RedisRevocationStore:
    """Provide a RedisRevocationStore backed by FakeRedis under ``PREFIX``."""
    return RedisRevocationStore(r=fake_redis, prefix=PREFIX)


@pytest.fixture
def codec(clock) -> PyJWTTokenCodec:
    return PyJWTTokenCodec(clock=clock)


@pytest.fixture
def cache(store, codec, clock) -> RevocationCache:
    return RevocationCache(store=store, codec=codec, clock=clock)


@pytest.fixture
def manager(store, codec, clock) -> TokenRevocationManager:
    return TokenRevocationManager(store=store, codec=codec, clock=clock)
