"""Configuration resolution from environment variables.

:func:`resolve_client_config` builds a :class:`~jikan_client.models.ClientConfig`
with this precedence (high to low):

    1. Explicit keyword overrides
    2. Environment variables
    3. Model defaults

Recognised variables:

* ``JIKAN_BASE_URL`` -- API base location.
* ``JIKAN_ENABLE_LOGGING`` -- ``1/true/yes/on`` or ``0/false/no/off``.
* ``JIKAN_TIMEOUT`` -- request timeout in seconds.
* ``JIKAN_CACHE_ENABLED`` -- boolean, as above.
* ``JIKAN_CACHE_TTL`` -- cache TTL in seconds.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from jikan_client.exceptions import ConfigError
from jikan_client.models import ClientConfig

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}")


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid number for {name}: {raw!r}") from exc


def resolve_client_config(**overrides: Any) -> ClientConfig:
    """Build a :class:`ClientConfig` from overrides, environment, and defaults.

    Args:
        **overrides: Any :class:`ClientConfig` field. ``None`` values are
            ignored so callers can forward optional arguments directly.

    Returns:
        The resolved, frozen configuration.

    Raises:
        ConfigError: If an environment variable cannot be parsed or the
            merged settings fail validation.
    """
    data: dict[str, Any] = {}

    base_url = os.environ.get("JIKAN_BASE_URL")
    if base_url:
        data["base_url"] = base_url

    enable_logging = _env_bool("JIKAN_ENABLE_LOGGING")
    if enable_logging is not None:
        data["enable_logging"] = enable_logging

    timeout = _env_float("JIKAN_TIMEOUT")
    if timeout is not None:
        data["timeout"] = timeout

    cache: dict[str, Any] = {}
    cache_enabled = _env_bool("JIKAN_CACHE_ENABLED")
    if cache_enabled is not None:
        cache["enabled"] = cache_enabled
    cache_ttl = _env_float("JIKAN_CACHE_TTL")
    if cache_ttl is not None:
        cache["ttl_seconds"] = cache_ttl
    if cache:
        data["cache_options"] = cache

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ClientConfig.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
