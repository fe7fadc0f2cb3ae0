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
"""CsrfOptions — the complete runtime configuration of a CSRF filter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from csrfly.cookie import CookieSpec
from csrfly.ports.outbound import TokenStore
from csrfly.properties import CsrfProperties
from csrfly.token import TokenGenerator, generate_token

BypassPredicate = Callable[[Any], bool]
"""Returns ``True`` for requests that skip CSRF protection entirely."""


@dataclass
class CsrfOptions:
    """Options for :class:`~csrfly.csrf_filter.CsrfFilter`.

    Attributes:
        key_lookup: ``"<source>:<key>"`` naming where unsafe requests carry
            the token. Source is ``header``, ``query``, ``param``, ``form``
            or ``cookie``.
        cookie_name: Name of the cookie the token is issued in.
        cookie_domain: Cookie domain; empty for host-only.
        cookie_path: Cookie path.
        cookie_secure: Mark the cookie ``Secure``.
        cookie_http_only: Mark the cookie ``HttpOnly``.
        cookie_same_site: ``Strict``, ``Lax`` or ``None``.
        expiration: Cookie lifetime and token TTL.
        token_generator: Produces new tokens.
        context_key: When set, the resolved token is exposed to downstream
            handlers as ``request.state.<context_key>``.
        storage: Token store; ``None`` selects an in-memory store.
        next: Optional bypass predicate evaluated before anything else.
        exclude_patterns: URL glob patterns exempt from protection.
    """

    key_lookup: str = "header:X-Csrf-Token"
    cookie_name: str = "csrf_"
    cookie_domain: str = ""
    cookie_path: str = "/"
    cookie_secure: bool = False
    cookie_http_only: bool = False
    cookie_same_site: str = "Strict"
    expiration: timedelta = timedelta(hours=1)
    token_generator: TokenGenerator = generate_token
    context_key: str = ""
    storage: TokenStore | None = None
    next: BypassPredicate | None = None
    exclude_patterns: list[str] = field(default_factory=list)

    def cookie_spec(self) -> CookieSpec:
        """Build the immutable cookie policy for these options."""
        return CookieSpec(
            name=self.cookie_name,
            domain=self.cookie_domain,
            path=self.cookie_path,
            expiration=self.expiration,
            secure=self.cookie_secure,
            http_only=self.cookie_http_only,
            same_site=self.cookie_same_site,
        )

    @classmethod
    def from_properties(cls, props: CsrfProperties, **overrides: Any) -> CsrfOptions:
        """Create options from bound properties; *overrides* supply callables and the store."""
        values: dict[str, Any] = {
            "key_lookup": props.key_lookup,
            "cookie_name": props.cookie_name,
            "cookie_domain": props.cookie_domain,
            "cookie_path": props.cookie_path,
            "cookie_secure": props.cookie_secure,
            "cookie_http_only": props.cookie_http_only,
            "cookie_same_site": props.cookie_same_site,
            "expiration": timedelta(seconds=props.expiration),
            "context_key": props.context_key,
            "exclude_patterns": list(props.exclude_patterns),
        }
        values.update(overrides)
        return cls(**values)
