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
"""CSRF configuration properties (csrfly.csrf.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from csrfly.config import config_properties


@config_properties(prefix="csrfly.csrf")
@dataclass
class CsrfProperties:
    """Declarative CSRF settings bindable from YAML/TOML and environment.

    ``expiration`` is in seconds. ``storage`` is ``memory``, ``redis`` or
    ``auto`` (Redis when ``redis.asyncio`` is importable).
    """

    key_lookup: str = "header:X-Csrf-Token"
    cookie_name: str = "csrf_"
    cookie_domain: str = ""
    cookie_path: str = "/"
    cookie_secure: bool = False
    cookie_http_only: bool = False
    cookie_same_site: str = "Strict"
    expiration: int = 3600
    context_key: str = ""
    exclude_patterns: list[str] = field(default_factory=list)
    storage: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
