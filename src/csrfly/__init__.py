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
"""csrfly — store-backed double-submit cookie CSRF protection for Starlette/ASGI.

A token is issued in a cookie on safe requests and must be echoed back
through a second channel (header, query string, path parameter, form field
or another cookie) on state-changing requests. Valid tokens are tracked in
a pluggable :class:`TokenStore` so they can expire and be revoked.

Import the Redis store from its adapter module::

    from csrfly.adapters.redis import RedisTokenStore
"""

from csrfly.adapters.memory import InMemoryTokenStore
from csrfly.auto_configuration import create_csrf_filter, create_token_store
from csrfly.config import Config, config_properties
from csrfly.cookie import CookieSpec
from csrfly.csrf_filter import SAFE_METHODS, UNSAFE_METHODS, CsrfFilter
from csrfly.exceptions import (
    ConfigurationException,
    CsrfException,
    ForbiddenException,
    InvalidTokenException,
    MissingTokenException,
    SecurityException,
)
from csrfly.extractors import Extractor, TokenSource, parse_key_lookup
from csrfly.middleware import CsrfMiddleware, FilterChainMiddleware, csrf_protect
from csrfly.options import CsrfOptions
from csrfly.ports.outbound import TokenStore
from csrfly.properties import CsrfProperties
from csrfly.token import TokenGenerator, generate_token, uuid_token

__all__ = [
    "SAFE_METHODS",
    "UNSAFE_METHODS",
    "Config",
    "ConfigurationException",
    "CookieSpec",
    "CsrfException",
    "CsrfFilter",
    "CsrfMiddleware",
    "CsrfOptions",
    "CsrfProperties",
    "Extractor",
    "FilterChainMiddleware",
    "ForbiddenException",
    "InMemoryTokenStore",
    "InvalidTokenException",
    "MissingTokenException",
    "SecurityException",
    "TokenGenerator",
    "TokenSource",
    "TokenStore",
    "config_properties",
    "create_csrf_filter",
    "create_token_store",
    "csrf_protect",
    "generate_token",
    "parse_key_lookup",
    "uuid_token",
]
