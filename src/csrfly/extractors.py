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
"""Token extractors — pull the client-submitted token out of a request.

Exactly one :class:`Extractor` is active per filter. It is derived from a
``"<source>:<key>"`` lookup string when the filter is built, so malformed
lookups fail at startup rather than on the first unsafe request.

Requests are accessed through the Starlette attribute protocol
(``headers``, ``query_params``, ``path_params``, ``cookies`` and the
awaitable ``body()``/``form()``), so lightweight stand-ins work in tests.
Path parameters are only resolved once routing has happened, so a
``param`` lookup needs the filter applied per route (see
:func:`csrfly.middleware.csrf_protect`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import structlog
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from csrfly.exceptions import (
    ConfigurationException,
    MissingCookieTokenException,
    MissingFormTokenException,
    MissingHeaderTokenException,
    MissingParamTokenException,
    MissingQueryTokenException,
)

logger = structlog.get_logger("csrfly.extractors")


class TokenSource(enum.StrEnum):
    """Request location a token is read from."""

    HEADER = "header"
    QUERY = "query"
    PARAM = "param"
    FORM = "form"
    COOKIE = "cookie"


def canonical_header_key(key: str) -> str:
    """Return the canonical MIME form of a header name (``x-csrf-token`` -> ``X-Csrf-Token``).

    Keys containing characters that are not valid in a header token are
    returned unchanged.
    """
    if not key or not all(c.isalnum() or c in "-!#$%&'*+.^_`|~" for c in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


@dataclass(frozen=True)
class Extractor:
    """Reads the token from one fixed request location.

    Attributes:
        source: Where to look.
        key: Header, parameter, form field or cookie name.
    """

    source: TokenSource
    key: str

    async def extract(self, request: Any) -> str:
        """Return the token, or raise the location's ``MissingTokenException``."""
        match self.source:
            case TokenSource.HEADER:
                token = request.headers.get(self.key)
                if not token:
                    raise MissingHeaderTokenException(self.key)
            case TokenSource.QUERY:
                token = request.query_params.get(self.key)
                if not token:
                    raise MissingQueryTokenException(self.key)
            case TokenSource.PARAM:
                token = request.path_params.get(self.key)
                if not token:
                    raise MissingParamTokenException(self.key)
            case TokenSource.FORM:
                # Read the body first so it stays cached for the handler
                await request.body()
                try:
                    form = await request.form()
                except (MultiPartException, HTTPException) as exc:
                    raise MissingFormTokenException(self.key) from exc
                token = form.get(self.key)
                # File uploads are not tokens
                if not token or not isinstance(token, str):
                    raise MissingFormTokenException(self.key)
            case TokenSource.COOKIE:
                token = request.cookies.get(self.key)
                if not token:
                    raise MissingCookieTokenException(self.key)
        return str(token)

    def __str__(self) -> str:
        return f"{self.source.value}:{self.key}"


def parse_key_lookup(key_lookup: str, cookie_name: str) -> Extractor:
    """Build the extractor described by *key_lookup*.

    Args:
        key_lookup: ``"<source>:<key>"`` where source is one of
            ``header``, ``query``, ``param``, ``form`` or ``cookie``.
        cookie_name: Name of the CSRF cookie; a cookie source may not
            read the token back from that same cookie.

    Raises:
        ConfigurationException: If *key_lookup* is not exactly two parts,
            or a cookie source collides with *cookie_name*.

    An unrecognized source keyword falls back to a header lookup.
    """
    selectors = key_lookup.split(":")
    if len(selectors) != 2:
        raise ConfigurationException(
            "KeyLookup must be in the form of <source>:<key>",
            code="CSRF_KEY_LOOKUP",
            context={"key_lookup": key_lookup},
        )

    source, key = selectors
    if source == TokenSource.COOKIE and key == cookie_name:
        raise ConfigurationException(
            f"KeyLookup key {key} can't be the same as CookieName {cookie_name}",
            code="CSRF_COOKIE_COLLISION",
            context={"key_lookup": key_lookup, "cookie_name": cookie_name},
        )

    try:
        token_source = TokenSource(source)
    except ValueError:
        logger.warning("csrf.key_lookup.unknown_source", source=source, fallback="header")
        token_source = TokenSource.HEADER

    if token_source is TokenSource.HEADER:
        key = canonical_header_key(key)
    return Extractor(token_source, key)
