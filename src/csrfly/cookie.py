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
"""CookieSpec — attributes of the outgoing CSRF cookie.

One spec is computed when the filter is built and shared read-only by all
requests. It renders two variants: the *issue* cookie carrying the token
with a fresh expiry, and the *expire* cookie dated in the past so the
client discards a token the server rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from csrfly.exceptions import ConfigurationException

SAME_SITE_VALUES: frozenset[str] = frozenset({"strict", "lax", "none"})

_EXPIRED_OFFSET = timedelta(minutes=1)


@dataclass(frozen=True)
class CookieSpec:
    """Immutable CSRF cookie policy.

    Attributes:
        name: Cookie name.
        domain: Cookie domain; empty means host-only.
        path: Cookie path.
        expiration: Lifetime of an issued cookie.
        secure: Send the cookie over HTTPS only.
        http_only: Hide the cookie from JavaScript.
        same_site: ``strict``, ``lax`` or ``none`` (case-insensitive).
    """

    name: str
    domain: str = ""
    path: str = "/"
    expiration: timedelta = timedelta(hours=1)
    secure: bool = False
    http_only: bool = False
    same_site: str = "strict"

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationException("CookieName must not be empty", code="CSRF_COOKIE_POLICY")
        if self.expiration <= timedelta(0):
            raise ConfigurationException(
                "Expiration must be positive",
                code="CSRF_COOKIE_POLICY",
                context={"expiration": str(self.expiration)},
            )
        same_site = self.same_site.lower()
        if same_site not in SAME_SITE_VALUES:
            raise ConfigurationException(
                f"CookieSameSite must be one of {sorted(SAME_SITE_VALUES)}, got '{self.same_site}'",
                code="CSRF_COOKIE_POLICY",
                context={"same_site": self.same_site},
            )
        object.__setattr__(self, "same_site", same_site)

    def _attributes(self, value: str, expires: datetime) -> dict[str, Any]:
        return {
            "key": self.name,
            "value": value,
            "expires": expires,
            "path": self.path,
            "domain": self.domain or None,
            "secure": self.secure,
            "httponly": self.http_only,
            "samesite": self.same_site,
        }

    def issue_attributes(self, token: str, now: datetime | None = None) -> dict[str, Any]:
        """Return ``set_cookie`` keyword arguments that hand *token* to the client."""
        now = now or datetime.now(UTC)
        return self._attributes(token, now + self.expiration)

    def expire_attributes(self, now: datetime | None = None) -> dict[str, Any]:
        """Return ``set_cookie`` keyword arguments that make the client drop the cookie."""
        now = now or datetime.now(UTC)
        return self._attributes("", now - _EXPIRED_OFFSET)

    def issue(self, response: Any, token: str) -> None:
        """Attach the token cookie to *response*."""
        response.set_cookie(**self.issue_attributes(token))

    def expire(self, response: Any) -> None:
        """Attach a past-dated cookie to *response*."""
        response.set_cookie(**self.expire_attributes())
