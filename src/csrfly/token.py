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
"""CSRF token generation.

Tokens are opaque, URL-safe strings drawn from the operating system's
CSPRNG. Any zero-argument callable returning a string can be used in
place of :func:`generate_token`, e.g. to derive tokens from an existing
session identifier.
"""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Callable

TokenGenerator = Callable[[], str]
"""Zero-argument callable producing a fresh token."""


def generate_token() -> str:
    """Generate a cryptographically-secure CSRF token.

    Returns:
        A URL-safe base64-encoded random string (43 characters).
    """
    return secrets.token_urlsafe(32)


def uuid_token() -> str:
    """Generate a random UUID4 token in canonical hyphenated form."""
    return str(uuid.uuid4())
