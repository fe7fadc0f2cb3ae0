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
"""Build token stores and CSRF filters from :class:`~csrfly.config.Config`."""

from __future__ import annotations

import importlib
from datetime import timedelta
from typing import Any

import structlog

from csrfly.adapters.memory import InMemoryTokenStore
from csrfly.config import Config
from csrfly.csrf_filter import CsrfFilter
from csrfly.exceptions import ConfigurationException
from csrfly.options import CsrfOptions
from csrfly.ports.outbound import TokenStore
from csrfly.properties import CsrfProperties

logger = structlog.get_logger("csrfly.auto_configuration")


def is_available(module_name: str) -> bool:
    """Check if a Python package is importable."""
    try:
        importlib.import_module(module_name)
        return True
    except ImportError:
        return False


def detect_storage_provider() -> str:
    """Detect the best available token store provider."""
    if is_available("redis.asyncio"):
        return "redis"
    return "memory"


def create_token_store(props: CsrfProperties) -> TokenStore:
    """Create the token store selected by ``props.storage``.

    Raises:
        ConfigurationException: For an unknown provider, or ``redis`` without
            the ``redis`` package installed.
    """
    provider = props.storage if props.storage != "auto" else detect_storage_provider()
    expiration = timedelta(seconds=props.expiration)

    if provider == "redis":
        if not is_available("redis.asyncio"):
            raise ConfigurationException(
                "storage 'redis' requires the 'redis' package (pip install csrfly[redis])",
                code="CSRF_STORAGE",
            )
        import redis.asyncio as aioredis

        from csrfly.adapters.redis import RedisTokenStore

        client = aioredis.from_url(props.redis_url)
        logger.info("csrf.storage.configured", provider="redis")
        return RedisTokenStore(client=client, expiration=expiration)

    if provider == "memory":
        logger.info("csrf.storage.configured", provider="memory")
        return InMemoryTokenStore(expiration=expiration)

    raise ConfigurationException(
        f"Unknown csrf storage provider '{provider}'",
        code="CSRF_STORAGE",
        context={"storage": provider},
    )


def create_csrf_filter(config: Config, **overrides: Any) -> CsrfFilter:
    """Bind ``csrfly.csrf.*`` from *config* and build a :class:`CsrfFilter`.

    *overrides* supply options that cannot be expressed in a config file,
    such as ``token_generator``, ``next`` or a ready-made ``storage``.
    """
    props = config.bind(CsrfProperties)
    if "storage" not in overrides:
        overrides["storage"] = create_token_store(props)
    return CsrfFilter(CsrfOptions.from_properties(props, **overrides))
