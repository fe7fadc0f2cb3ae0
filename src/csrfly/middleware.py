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
"""ASGI middleware that runs CSRF protection in front of a Starlette app.

Usage::

    app = Starlette(routes=routes, middleware=[
        Middleware(CsrfMiddleware, key_lookup="form:csrf_token", context_key="csrf"),
    ])
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import Any, cast

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from csrfly.csrf_filter import CsrfFilter
from csrfly.options import CsrfOptions
from csrfly.ports.filter import CallNext, WebFilter

Endpoint = Callable[[Request], Any]


class FilterChainMiddleware:
    """Pure ASGI middleware that executes a chain of :class:`WebFilter` instances.

    Each filter's ``should_not_filter()`` is checked before invocation; if it
    returns ``True``, the filter is skipped and the next one in the chain runs.

    A request body read by a filter (for example to extract a form field) is
    replayed to the downstream application.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters = list(filters)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)

        async def _call_app(req: Any) -> Response:
            """Terminal: run downstream ASGI app and capture its response."""
            status_code = 200
            raw_headers: list[tuple[bytes, bytes]] = []
            body_parts: list[bytes] = []

            async def _intercept(message: Any) -> None:
                nonlocal status_code, raw_headers
                if message["type"] == "http.response.start":
                    status_code = message["status"]
                    raw_headers = list(message.get("headers", []))
                elif message["type"] == "http.response.body":
                    body = message.get("body", b"")
                    if body:
                        body_parts.append(body)

            await self.app(req.scope, _replay_receive(req, receive), _intercept)

            response = Response(content=b"".join(body_parts), status_code=status_code)
            response.raw_headers[:] = raw_headers
            return response

        chain: CallNext = _call_app
        for f in reversed(self._filters):
            chain = _wrap(f, chain)

        response = cast(Response, await chain(request))
        await response(scope, receive, send)


class CsrfMiddleware(FilterChainMiddleware):
    """Single-filter chain running a :class:`CsrfFilter`.

    Accepts either a prepared :class:`CsrfOptions` or its fields as keyword
    arguments.
    """

    def __init__(self, app: ASGIApp, options: CsrfOptions | None = None, **kwargs: Any) -> None:
        self.csrf_filter = CsrfFilter(options or CsrfOptions(**kwargs))
        super().__init__(app, [self.csrf_filter])


def _replay_receive(request: Request, receive: Receive) -> Receive:
    """Return a receive callable that first replays a body already consumed by *request*."""
    # Starlette caches a fully-read body on Request._body
    body: bytes | None = getattr(request, "_body", None)
    if body is None:
        return receive

    replayed = False

    async def _receive() -> Message:
        nonlocal replayed
        if not replayed:
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return _receive


def _wrap(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    """Create a closure that conditionally invokes *web_filter*."""

    async def _inner(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return _inner


def csrf_protect(web_filter: WebFilter) -> Callable[[Endpoint], Endpoint]:
    """Apply *web_filter* to a single Starlette endpoint.

    Unlike the ASGI middleware this runs after routing, so
    ``request.path_params`` is populated and ``param:<key>`` lookups work::

        csrf = CsrfFilter(CsrfOptions(key_lookup="param:token"))

        @csrf_protect(csrf)
        async def update(request): ...
    """

    def decorator(endpoint: Endpoint) -> Endpoint:
        async def _call_endpoint(request: Request) -> Response:
            if inspect.iscoroutinefunction(endpoint):
                return cast(Response, await endpoint(request))
            return cast(Response, await run_in_threadpool(endpoint, request))

        @functools.wraps(endpoint)
        async def _endpoint(request: Request) -> Response:
            if web_filter.should_not_filter(request):
                return await _call_endpoint(request)
            return cast(Response, await web_filter.do_filter(request, _call_endpoint))

        return _endpoint

    return decorator
