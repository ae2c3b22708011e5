"""
Unit tests for RedisRefreshTokenStore using fakeredis.

These tests exercise the main flows:
- add + contains
- remove (idempotent, reports prior membership)
- size / clear
- tokens are stored hashed
- connectivity failures surface as StoreUnavailableError
"""

from __future__ import annotations

import hashlib
import logging

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from storefront.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
from storefront.services._shared.errors import StoreUnavailableError


@pytest.fixture
def server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake(server):
    return fakeredis.FakeRedis(server=server)


@pytest.fixture
def store(fake):
    """Provide a RedisRefreshTokenStore backed by FakeRedis."""
    return RedisRefreshTokenStore(r=fake, key="test:refresh_tokens")


def test_add_then_contains(store):
    store.add("token-a")
    assert store.contains("token-a")
    assert not store.contains("token-b")


def test_add_is_idempotent(store):
    store.add("token-a")
    store.add("token-a")
    assert store.size() == 1


def test_remove_reports_prior_membership(store):
    store.add("token-a")
    assert store.remove("token-a") is True
    assert store.remove("token-a") is False
    assert not store.contains("token-a")


def test_remove_unknown_token_is_not_an_error(store):
    assert store.remove("never-added") is False


def test_clear_returns_removed_count(store):
    for i in range(3):
        store.add(f"token-{i}")
    assert store.clear() == 3
    assert store.size() == 0
    assert store.clear() == 0


def test_members_are_sha256_digests(store, fake):
    store.add("raw-bearer-token")
    members = {m.decode() for m in fake.smembers("test:refresh_tokens")}
    assert members == {hashlib.sha256(b"raw-bearer-token").hexdigest()}


def test_stores_sharing_a_server_see_each_other(server):
    a = RedisRefreshTokenStore(r=fakeredis.FakeRedis(server=server))
    b = RedisRefreshTokenStore(r=fakeredis.FakeRedis(server=server))
    a.add("shared")
    assert b.contains("shared")
    assert b.remove("shared")
    assert not a.contains("shared")


class TestUnavailable:
    def test_disconnected_server_raises_store_unavailable(self, store, server):
        server.connected = False
        with pytest.raises(StoreUnavailableError):
            store.add("token-a")
        with pytest.raises(StoreUnavailableError):
            store.contains("token-a")
        with pytest.raises(StoreUnavailableError):
            store.remove("token-a")

    def test_timeout_is_never_a_membership_answer(self, store, fake, monkeypatch):
        store.add("token-a")

        def _timeout(*args, **kwargs):
            raise RedisTimeoutError("Timeout reading from socket")

        monkeypatch.setattr(fake, "sismember", _timeout)
        with pytest.raises(StoreUnavailableError):
            store.contains("token-a")

    def test_failure_is_logged_without_token_value(self, store, fake, monkeypatch, caplog):
        def _refused(*args, **kwargs):
            raise RedisConnectionError("Connection refused")

        monkeypatch.setattr(fake, "srem", _refused)
        with caplog.at_level(logging.ERROR), pytest.raises(StoreUnavailableError):
            store.remove("secret-token-value")
        assert "refresh_store.remove failed" in caplog.text
        assert "secret-token-value" not in caplog.text
