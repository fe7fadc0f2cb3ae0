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
"""In-memory token store with TTL-based expiry."""

from __future__ import annotations

import asyncio
import time
from datetime import timedelta

_DEFAULT_EXPIRATION = timedelta(hours=1)
_DEFAULT_GC_INTERVAL = timedelta(seconds=10)


class InMemoryTokenStore:
    """In-memory token store with TTL support and asyncio.Lock for safety.

    Expired tokens are dropped lazily when read, and the whole map is swept
    on write whenever ``gc_interval`` has passed since the previous sweep,
    so tokens that are never presented again do not accumulate.

    Suitable for development, testing, and single-process applications.
    """

    def __init__(
        self,
        expiration: timedelta = _DEFAULT_EXPIRATION,
        gc_interval: timedelta = _DEFAULT_GC_INTERVAL,
    ) -> None:
        self._store: dict[str, float] = {}
        self._lock = asyncio.Lock()
        self._ttl = expiration.total_seconds()
        self._gc_interval = gc_interval.total_seconds()
        self._last_gc = time.monotonic()

    async def set(self, token: str) -> None:
        """Record *token* as valid for the configured TTL."""
        async with self._lock:
            now = time.monotonic()
            if now - self._last_gc >= self._gc_interval:
                self._purge(now)
            self._store[token] = now + self._ttl

    async def contains(self, token: str) -> bool:
        """Check if *token* exists and is not expired."""
        async with self._lock:
            expires_at = self._store.get(token)
            if expires_at is None:
                return False
            if time.monotonic() > expires_at:
                del self._store[token]
                return False
            return True

    async def delete(self, token: str) -> None:
        """Remove *token*. Deleting an unknown token is a no-op."""
        async with self._lock:
            self._store.pop(token, None)

    async def purge_expired(self) -> int:
        """Drop every expired token. Returns the number removed."""
        async with self._lock:
            return self._purge(time.monotonic())

    def _purge(self, now: float) -> int:
        expired = [token for token, expires_at in self._store.items() if now > expires_at]
        for token in expired:
            del self._store[token]
        self._last_gc = now
        return len(expired)

    def __len__(self) -> int:
        return len(self._store)
