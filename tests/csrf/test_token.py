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
"""Tests for CSRF token generators."""

from __future__ import annotations

import uuid

from csrfly.token import generate_token, uuid_token


class TestGenerateToken:
    def test_returns_url_safe_string(self) -> None:
        token = generate_token()
        assert isinstance(token, str)
        assert len(token) == 43
        assert all(c.isalnum() or c in "-_" for c in token)

    def test_tokens_do_not_repeat(self) -> None:
        tokens = {generate_token() for _ in range(1000)}
        assert len(tokens) == 1000


class TestUuidToken:
    def test_is_uuid4(self) -> None:
        token = uuid_token()
        assert uuid.UUID(token).version == 4

    def test_tokens_do_not_repeat(self) -> None:
        assert uuid_token() != uuid_token()
