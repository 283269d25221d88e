# tests/unit/services/test_revocation_cache.py
"""
RevocationCache behaviour against a FakeRedis-backed store.

Covers mark_revoked (fresh, repeated, already expired, no exp), is_revoked,
sweep_expired with controlled expiries, and wipe_all namespace isolation.
"""

from __future__ import annotations

from datetime import timedelta

from revokit.infra.redis.redis_revocation_store import RedisRevocationStore
from revokit.services._shared.ports import SignOptions
from revokit.services.revocation.dto import RevocationRecord, RevocationStatus

from tests.helpers.tokens import NAMESPACE, SECRET, past_exp


def _token(codec, **claims) -> str:
    return codec.sign({"userId": 1, **claims}, SECRET, SignOptions(expires_in="15m"))


def test_mark_revoked_writes_record_with_token_expiry(cache, codec):
    token = _token(codec)

    assert cache.mark_revoked(token) is True
    assert cache.is_revoked(token) is True

    record = cache.get_record(token)
    assert record == RevocationRecord(RevocationStatus.INVALIDATED, codec.decode(token)["exp"] * 1000)
    assert cache.store.get_record(token) == {
        "status": "invalidated",
        "exp": str(codec.decode(token)["exp"] * 1000),
    }


def test_mark_revoked_twice_is_idempotent(cache, codec, clock):
    token = _token(codec)
    cache.mark_revoked(token)
    first = cache.store.get_record(token)

    clock.advance(timedelta(minutes=1))
    assert cache.mark_revoked(token) is True
    assert cache.store.get_record(token) == first


def test_mark_revoked_on_expired_token_writes_nothing(cache, codec):
    token = codec.sign({"userId": 1, "exp": past_exp()}, SECRET)

    assert cache.mark_revoked(token) is True
    assert cache.store.get_record(token) is None
    assert cache.is_revoked(token) is False
    assert list(cache.store.scan_keys()) == []


def test_mark_revoked_without_exp_revokes_with_no_expiry(cache, codec, clock):
    token = codec.sign({"userId": 1}, SECRET)  # no expires_in -> no exp

    assert cache.mark_revoked(token) is True
    assert cache.is_revoked(token) is True
    assert cache.store.get_record(token) == {"status": "invalidated"}
    assert cache.get_record(token) == RevocationRecord(RevocationStatus.INVALIDATED, None)

    # never reclaimed by a sweep, however late
    clock.advance(timedelta(days=3650))
    assert cache.sweep_expired() == 0
    assert cache.is_revoked(token) is True

    assert cache.wipe_all() == 1
    assert cache.is_revoked(token) is False


def test_is_revoked_is_false_for_unknown_token(cache, codec):
    assert cache.is_revoked(_token(codec)) is False


def test_is_revoked_reads_status_alone(cache, codec):
    token = _token(codec)
    cache.store.put(token, {"status": "invalidated"})
    assert cache.is_revoked(token) is True

    legacy = _token(codec, role="legacy")
    cache.store.put(legacy, {"status": "invalidated", "exp": "NaN"})
    assert cache.is_revoked(legacy) is True
    assert cache.get_record(legacy).expires_at_ms is None
    assert cache.sweep_expired() == 0


def test_is_revoked_ignores_foreign_hashes(cache, fake_redis):
    fake_redis.hset(f"{NAMESPACE}a.b.c", mapping={"status": "something-else", "exp": "1"})
    assert cache.is_revoked("a.b.c") is False


def test_sweep_removes_exactly_past_records(cache):
    now_ms = cache.now_ms()
    cache.store.put("past", RevocationRecord(RevocationStatus.INVALIDATED, now_ms - 1).to_fields())
    cache.store.put("long-past", RevocationRecord(RevocationStatus.INVALIDATED, now_ms - 60_000).to_fields())
    cache.store.put("now", RevocationRecord(RevocationStatus.INVALIDATED, now_ms).to_fields())
    cache.store.put("future", RevocationRecord(RevocationStatus.INVALIDATED, now_ms + 60_000).to_fields())

    assert cache.sweep_expired() == 2
    assert sorted(cache.store.scan_keys()) == ["future", "now"]


def test_sweep_skips_non_record_hashes(cache):
    cache.store.put("junk", {"foo": "bar"})
    assert cache.sweep_expired() == 0
    assert list(cache.store.scan_keys()) == ["junk"]


def test_sweep_after_clock_passes_token_expiry(cache, codec, clock):
    token = _token(codec)
    cache.mark_revoked(token)

    assert cache.sweep_expired() == 0
    assert cache.is_revoked(token) is True

    clock.advance(timedelta(minutes=16))
    assert cache.sweep_expired() == 1
    assert cache.is_revoked(token) is False


def test_sweep_leaves_other_namespaces_untouched(cache, fake_redis):
    fake_redis.hset("other_ns:t", mapping={"status": "invalidated", "exp": "1"})
    cache.store.put("t", {"status": "invalidated", "exp": "1"})

    assert cache.sweep_expired() == 1
    assert fake_redis.exists("other_ns:t") == 1


def test_concurrent_revoke_after_sweep_keeps_real_expiry(cache, codec):
    """A record re-created while a sweep runs is not reclaimed before its token expires."""
    token = _token(codec)
    cache.mark_revoked(token)
    cache.store.delete(token)  # e.g. removed by a concurrent wipe
    cache.mark_revoked(token)

    assert cache.sweep_expired() == 0
    assert cache.is_revoked(token) is True


def test_wipe_all_ignores_expiry_and_namespace(cache, codec, fake_redis):
    for _ in range(3):
        cache.mark_revoked(_token(codec))
    other = RedisRevocationStore(r=fake_redis, prefix="tenant2")
    other.put("x", {"status": "invalidated", "exp": "99999999999999"})

    assert cache.wipe_all() == 3
    assert list(cache.store.scan_keys()) == []
    assert list(other.scan_keys()) == ["x"]
