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
"""CsrfFilter — double-submit cookie CSRF protection backed by a token store.

* **Safe methods** (GET, HEAD, OPTIONS, TRACE): the token from the CSRF
  cookie is reused; when there is none a new token is generated and
  registered in the store. The cookie is (re)sent on every response so its
  expiry is refreshed.
* **Unsafe methods** (POST, PUT, PATCH, DELETE): the token is extracted
  from the configured location and must be present in the store. A missing
  token yields 403. An unknown or expired token is deleted from the store,
  the cookie is expired and the request is rejected with 403, so the
  client picks up a fresh token on its next safe request.

Successful verification leaves the token valid: one token may authorize
several unsafe requests until it expires or fails verification.

Every handled response varies on ``Cookie`` so shared caches never serve
one client's token to another.
"""

from __future__ import annotations

from typing import Any

import structlog
from starlette.responses import JSONResponse

from csrfly.adapters.memory import InMemoryTokenStore
from csrfly.exceptions import ForbiddenException, InvalidTokenException, MissingTokenException
from csrfly.extractors import parse_key_lookup
from csrfly.filters import OncePerRequestFilter
from csrfly.options import CsrfOptions
from csrfly.ports.filter import CallNext
from csrfly.ports.outbound import TokenStore

logger = structlog.get_logger("csrfly.csrf_filter")

SAFE_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
"""HTTP methods that issue tokens."""

UNSAFE_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})
"""HTTP methods that must present a valid token."""


class CsrfFilter(OncePerRequestFilter):
    """Store-backed double-submit cookie CSRF filter.

    All configuration is validated here, so a misconfigured filter fails
    when the application starts rather than on the first request.

    Raises:
        ConfigurationException: For a malformed ``key_lookup``, a cookie
            lookup that reads the CSRF cookie itself, or an invalid cookie
            policy.
    """

    def __init__(self, options: CsrfOptions | None = None) -> None:
        self._options = options or CsrfOptions()
        opts = self._options
        self._extractor = parse_key_lookup(opts.key_lookup, opts.cookie_name)
        self._cookie = opts.cookie_spec()
        self._store: TokenStore = (
            opts.storage if opts.storage is not None else InMemoryTokenStore(expiration=opts.expiration)
        )
        self._generate = opts.token_generator
        self._bypass = opts.next
        self._context_key = opts.context_key
        self.exclude_patterns = list(opts.exclude_patterns)

    @property
    def store(self) -> TokenStore:
        return self._store

    @property
    def options(self) -> CsrfOptions:
        return self._options

    def should_not_filter(self, request: Any) -> bool:
        if self._bypass is not None and self._bypass(request):
            return True
        return super().should_not_filter(request)

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        method = request.method.upper()
        token = ""

        if method in SAFE_METHODS:
            token = request.cookies.get(self._cookie.name) or ""
            if not token:
                token = self._generate()
                await self._store.set(token)
                logger.debug("csrf.token.issued", method=method, path=request.url.path)

        elif method in UNSAFE_METHODS:
            try:
                token = await self._verify(request)
            except ForbiddenException as exc:
                return self._reject(request, exc)

        if token and self._context_key:
            setattr(request.state, self._context_key, token)

        response = await call_next(request)

        if method in SAFE_METHODS:
            self._cookie.issue(response, token)
        response.headers.add_vary_header("Cookie")
        return response

    async def _verify(self, request: Any) -> str:
        """Return the request's token if the store knows it, else raise ``ForbiddenException``."""
        token = await self._extractor.extract(request)
        if not await self._store.contains(token):
            await self._store.delete(token)
            raise InvalidTokenException()
        logger.debug("csrf.token.verified", method=request.method, path=request.url.path)
        return token

    def _reject(self, request: Any, exc: ForbiddenException) -> JSONResponse:
        """Build the 403 response; the cause is logged but never sent to the client."""
        logger.info(
            "csrf.request.rejected",
            reason=exc.code,
            method=request.method,
            path=request.url.path,
            **exc.context,
        )
        response = JSONResponse(
            {
                "error": {
                    "message": "Forbidden",
                    "code": "CSRF_FORBIDDEN",
                    "status": 403,
                    "path": request.url.path,
                }
            },
            status_code=403,
        )
        if not isinstance(exc, MissingTokenException):
            self._cookie.expire(response)
        response.headers.add_vary_header("Cookie")
        return response
