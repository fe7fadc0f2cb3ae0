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
"""Redis-backed token store."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, cast

_KEY_PREFIX = "csrfly:token:"
_PLACEHOLDER = b"1"


class RedisTokenStore:
    """Token store backed by ``redis.asyncio``.

    Expiry is delegated to Redis (``SET ... EX``). Keys are prefixed with
    ``csrfly:token:`` for namespace isolation; the stored value is a
    placeholder since only presence matters.
    """

    def __init__(
        self,
        client: Any,
        expiration: timedelta = timedelta(hours=1),
        prefix: str = _KEY_PREFIX,
    ) -> None:
        self._client = client
        self._ttl = max(1, int(expiration.total_seconds()))
        self._prefix = prefix

    def _key(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def set(self, token: str) -> None:
        """Store *token* with the configured TTL."""
        await self._client.set(self._key(token), _PLACEHOLDER, ex=self._ttl)

    async def contains(self, token: str) -> bool:
        """Check whether *token* exists."""
        count = await self._client.exists(self._key(token))
        return cast(bool, count > 0)

    async def delete(self, token: str) -> None:
        """Remove *token*."""
        await self._client.delete(self._key(token))

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        await self._client.ping()

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
