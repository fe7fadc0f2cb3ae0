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
"""Exception hierarchy for csrfly.

All library exceptions inherit from CsrfException so callers can catch
the whole family at once, or a specific subclass for targeted handling.

Categories:
- ConfigurationException: invalid middleware configuration, raised at startup
- SecurityException: per-request CSRF failures, always rendered as HTTP 403
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CsrfException(Exception):
    """Base exception for all csrfly errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_KEY_LOOKUP").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(CsrfException):
    """The middleware cannot be built from the supplied options."""


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(CsrfException):
    """A request failed CSRF protection."""


class ForbiddenException(SecurityException):
    """The request must be rejected with 403 Forbidden."""


class MissingTokenException(ForbiddenException):
    """No token was found at the configured location.

    Subclasses name the location; ``context`` carries ``source`` and ``key``.
    """

    location: str = "request"

    def __init__(self, key: str) -> None:
        super().__init__(
            f"missing csrf token in {self.location}",
            code=f"CSRF_MISSING_{self.location.upper()}",
            context={"source": self.location, "key": key},
        )


class MissingHeaderTokenException(MissingTokenException):
    location = "header"


class MissingQueryTokenException(MissingTokenException):
    location = "query"


class MissingParamTokenException(MissingTokenException):
    location = "param"


class MissingFormTokenException(MissingTokenException):
    location = "form"


class MissingCookieTokenException(MissingTokenException):
    location = "cookie"


class InvalidTokenException(ForbiddenException):
    """The submitted token is unknown to the store or has expired."""

    def __init__(self) -> None:
        super().__init__("csrf token is invalid or expired", code="CSRF_INVALID_TOKEN")
