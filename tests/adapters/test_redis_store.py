# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for RedisTokenStore using a FakeRedis stub."""

from __future__ import annotations

from datetime import timedelta

import pytest

from csrfly.adapters.redis import RedisTokenStore
from csrfly.ports.outbound import TokenStore


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.ttls: dict[str, int | None] = {}
        self.closed = False
        self.pinged = False

    async def set(self, key: str, value: bytes, ex: int | None = None) -> None:
        self._store[key] = value
        self.ttls[key] = ex

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                count += 1
        return count

    async def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if k in self._store)

    async def ping(self) -> bool:
        self.pinged = True
        return True

    async def aclose(self) -> None:
        self.closed = True


class TestRedisTokenStore:
    def test_implements_token_store(self) -> None:
        assert isinstance(RedisTokenStore(FakeRedis()), TokenStore)

    @pytest.mark.asyncio
    async def test_set_uses_prefix_and_ttl(self) -> None:
        client = FakeRedis()
        store = RedisTokenStore(client, expiration=timedelta(minutes=5))
        await store.set("tok")
        assert client.ttls == {"csrfly:token:tok": 300}
        assert await store.contains("tok") is True

    @pytest.mark.asyncio
    async def test_unknown_token(self) -> None:
        assert await RedisTokenStore(FakeRedis()).contains("missing") is False

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self) -> None:
        store = RedisTokenStore(FakeRedis())
        await store.set("tok")
        await store.delete("tok")
        await store.delete("tok")
        assert await store.contains("tok") is False

    @pytest.mark.asyncio
    async def test_custom_prefix(self) -> None:
        client = FakeRedis()
        store = RedisTokenStore(client, prefix="app:csrf:")
        await store.set("tok")
        assert "app:csrf:tok" in client.ttls

    @pytest.mark.asyncio
    async def test_sub_second_expiration_rounds_up(self) -> None:
        client = FakeRedis()
        await RedisTokenStore(client, expiration=timedelta(milliseconds=10)).set("tok")
        assert client.ttls["csrfly:token:tok"] == 1

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        client = FakeRedis()
        store = RedisTokenStore(client)
        await store.start()
        await store.stop()
        assert client.pinged is True
        assert client.closed is True
