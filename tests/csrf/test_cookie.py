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
"""Tests for CookieSpec — issue and expire cookie attributes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from starlette.responses import Response

from csrfly.cookie import CookieSpec
from csrfly.exceptions import ConfigurationException

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class TestCookieSpec:
    def test_issue_attributes(self) -> None:
        spec = CookieSpec(
            name="csrf_",
            domain="example.com",
            path="/app",
            expiration=timedelta(minutes=30),
            secure=True,
            http_only=True,
            same_site="Lax",
        )
        attrs = spec.issue_attributes("tok", now=NOW)
        assert attrs == {
            "key": "csrf_",
            "value": "tok",
            "expires": NOW + timedelta(minutes=30),
            "path": "/app",
            "domain": "example.com",
            "secure": True,
            "httponly": True,
            "samesite": "lax",
        }

    def test_expire_attributes_are_in_the_past(self) -> None:
        spec = CookieSpec(name="csrf_")
        attrs = spec.expire_attributes(now=NOW)
        assert attrs["value"] == ""
        assert attrs["expires"] < NOW
        assert attrs["key"] == "csrf_"

    def test_empty_domain_is_host_only(self) -> None:
        assert CookieSpec(name="csrf_").issue_attributes("tok")["domain"] is None

    def test_same_site_normalized(self) -> None:
        assert CookieSpec(name="csrf_", same_site="Strict").same_site == "strict"

    def test_invalid_same_site_rejected(self) -> None:
        with pytest.raises(ConfigurationException):
            CookieSpec(name="csrf_", same_site="sometimes")

    def test_non_positive_expiration_rejected(self) -> None:
        with pytest.raises(ConfigurationException):
            CookieSpec(name="csrf_", expiration=timedelta(0))

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigurationException):
            CookieSpec(name="")

    def test_issue_sets_cookie_header(self) -> None:
        response = Response()
        CookieSpec(name="csrf_", secure=True).issue(response, "tok")
        header = response.headers["set-cookie"]
        assert header.startswith("csrf_=tok;")
        assert "Secure" in header
        assert "SameSite=strict" in header
        assert "Path=/" in header

    def test_expire_sets_empty_cookie(self) -> None:
        response = Response()
        CookieSpec(name="csrf_").expire(response)
        assert response.headers["set-cookie"].startswith('csrf_="";')
