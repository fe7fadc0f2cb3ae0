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
"""Token store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Tracks which CSRF tokens are currently valid.

    A token present in the store is valid; absence, including after its
    TTL has elapsed, means invalid. All backends (in-memory, Redis, etc.)
    must implement this protocol and be safe under concurrent use.
    """

    async def set(self, token: str) -> None: ...

    async def contains(self, token: str) -> bool: ...

    async def delete(self, token: str) -> None: ...
