# comments in English; reST docstrings
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from storefront.services._shared.errors import StoreUnavailableError
from storefront.services._shared.ports import RefreshTokenStore

log = logging.getLogger(__name__)

DEFAULT_SET_KEY = "auth:refresh_tokens"


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed set of active refresh tokens.

    Every operation is a single Redis command (``SADD``/``SISMEMBER``/``SREM``),
    so it is atomic server-side and visible to all instances sharing the
    Redis database. Members are SHA-256 digests of the token strings; raw
    bearer tokens never land in Redis.

    :param r: A Redis client (already connected). Its socket timeouts bound
        every call made here.
    :param key: Name of the Redis set.
    """

    r: redis.Redis
    key: str = DEFAULT_SET_KEY

    # -------------------- helpers --------------------

    @staticmethod
    def _member(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def _unavailable(self, op: str, exc: RedisError) -> StoreUnavailableError:
        log.error("refresh_store.%s failed: %s", op, type(exc).__name__, exc_info=exc)
        return StoreUnavailableError()

    # -------------------- API ------------------------

    def add(self, token: str) -> None:
        try:
            self.r.sadd(self.key, self._member(token))
        except RedisError as exc:
            raise self._unavailable("add", exc) from exc

    def contains(self, token: str) -> bool:
        try:
            return bool(self.r.sismember(self.key, self._member(token)))
        except RedisError as exc:
            raise self._unavailable("contains", exc) from exc

    def remove(self, token: str) -> bool:
        try:
            return cast(int, self.r.srem(self.key, self._member(token))) == 1
        except RedisError as exc:
            raise self._unavailable("remove", exc) from exc

    def size(self) -> int:
        try:
            return int(cast(int, self.r.scard(self.key)))
        except RedisError as exc:
            raise self._unavailable("size", exc) from exc

    def clear(self) -> int:
        try:
            with self.r.pipeline(transaction=True) as p:
                p.scard(self.key)
                p.delete(self.key)
                out = cast(list[int], p.execute())
        except RedisError as exc:
            raise self._unavailable("clear", exc) from exc
        return int(out[0])
