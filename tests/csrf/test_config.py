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
"""Tests for Config loading, CsrfProperties binding and CsrfOptions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

import pytest

from csrfly.config import Config, config_properties
from csrfly.options import CsrfOptions
from csrfly.properties import CsrfProperties
from csrfly.token import generate_token


class TestConfig:
    def test_get_nested_value(self) -> None:
        config = Config({"csrfly": {"csrf": {"cookie_name": "xsrf"}}})
        assert config.get("csrfly.csrf.cookie_name") == "xsrf"

    def test_get_with_default(self) -> None:
        assert Config({}).get("missing.key", "default") == "default"

    def test_falsy_values_are_returned(self) -> None:
        config = Config({"csrfly": {"csrf": {"cookie_secure": False, "cookie_domain": ""}}})
        assert config.get("csrfly.csrf.cookie_secure", True) is False
        assert config.get("csrfly.csrf.cookie_domain", "x") == ""

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSRFLY_CSRF_COOKIE_NAME", "env-cookie")
        config = Config({"csrfly": {"csrf": {"cookie_name": "file-cookie"}}})
        assert config.get("csrfly.csrf.cookie_name") == "env-cookie"

    def test_placeholder_resolution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSRF_DOMAIN", "example.com")
        config = Config({"csrfly": {"csrf": {"cookie_domain": "${CSRF_DOMAIN}", "cookie_path": "${APP_PATH:/app}"}}})
        assert config.get("csrfly.csrf.cookie_domain") == "example.com"
        assert config.get("csrfly.csrf.cookie_path") == "/app"

    def test_unresolvable_placeholder(self) -> None:
        config = Config({"csrfly": {"csrf": {"cookie_domain": "${NO_SUCH_CSRFLY_VAR}"}}})
        with pytest.raises(ValueError):
            config.get("csrfly.csrf.cookie_domain")

    def test_from_file_merges_over_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "csrfly.yaml"
        config_file.write_text("csrfly:\n  csrf:\n    cookie_name: xsrf\n")
        config = Config.from_file(config_file)
        assert config.get("csrfly.csrf.cookie_name") == "xsrf"
        assert config.get("csrfly.csrf.key_lookup") == "header:X-Csrf-Token"
        assert config.loaded_sources[-1] == str(config_file)

    def test_from_toml_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "csrfly.toml"
        config_file.write_text('[csrfly.csrf]\nkey_lookup = "query:csrf_token"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("csrfly.csrf.key_lookup") == "query:csrf_token"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("csrfly.csrf.cookie_name") == "csrf_"

    def test_bind_requires_decorator(self) -> None:
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)

    def test_bind_custom_properties(self) -> None:
        @config_properties(prefix="app")
        @dataclass
        class AppProperties:
            port: int = 80
            debug: bool = False

        props = Config({"app": {"port": "8080", "debug": "yes"}}).bind(AppProperties)
        assert props.port == 8080
        assert props.debug is True


class TestCsrfProperties:
    def test_defaults(self) -> None:
        props = Config({}).bind(CsrfProperties)
        assert props == CsrfProperties()
        assert props.cookie_same_site == "Strict"
        assert props.expiration == 3600

    def test_bind_with_env_coercion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSRFLY_CSRF_EXPIRATION", "600")
        monkeypatch.setenv("CSRFLY_CSRF_COOKIE_SECURE", "true")
        props = Config({}).bind(CsrfProperties)
        assert props.expiration == 600
        assert props.cookie_secure is True

    def test_bind_list_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSRFLY_CSRF_EXCLUDE_PATTERNS", "/webhooks/*, /health")
        props = Config({}).bind(CsrfProperties)
        assert props.exclude_patterns == ["/webhooks/*", "/health"]
        assert CsrfOptions.from_properties(props).exclude_patterns == ["/webhooks/*", "/health"]


class TestCsrfOptions:
    def test_defaults(self) -> None:
        options = CsrfOptions()
        assert options.key_lookup == "header:X-Csrf-Token"
        assert options.cookie_name == "csrf_"
        assert options.expiration == timedelta(hours=1)
        assert options.token_generator is generate_token
        assert options.storage is None
        assert options.next is None

    def test_cookie_spec(self) -> None:
        spec = CsrfOptions(cookie_name="xsrf", cookie_same_site="Lax", cookie_secure=True).cookie_spec()
        assert spec.name == "xsrf"
        assert spec.same_site == "lax"
        assert spec.secure is True

    def test_from_properties_with_overrides(self) -> None:
        props = CsrfProperties(cookie_name="xsrf", expiration=120, exclude_patterns=["/health"])
        options = CsrfOptions.from_properties(props, context_key="token")
        assert options.cookie_name == "xsrf"
        assert options.expiration == timedelta(seconds=120)
        assert options.exclude_patterns == ["/health"]
        assert options.context_key == "token"
