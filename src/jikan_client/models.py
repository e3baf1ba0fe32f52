"""Pydantic models for client construction.

Two configuration models are defined here:

* :class:`CachePolicy` -- the rules the caching layer applies to every
  request (TTL, cacheable methods, ``Cache-Control`` handling, key
  headers). It is forwarded verbatim to
  :class:`~jikan_client.transport.CachingTransport`.
* :class:`ClientConfig` -- everything a
  :class:`~jikan_client.client.ResourceClient` needs at construction:
  logging flag, cache policy, base URL, and timeout.

Both models are frozen; a client's configuration cannot change after it
has been built.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jikan_client.constants import DEFAULT_BASE_URL


class CachePolicy(BaseModel):
    """Response cache rules for one client.

    Accepts partial input: any field left out keeps its default, so
    ``CachePolicy.model_validate({"ttl_seconds": 60})`` is a complete
    policy.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=True, description="Store and serve cached responses")
    ttl_seconds: float = Field(
        default=300, ge=0, description="Lifetime of a stored response in seconds"
    )
    methods: tuple[str, ...] = Field(
        default=("GET", "HEAD"), description="HTTP methods eligible for caching"
    )
    interpret_header: bool = Field(
        default=True,
        description="Honour Cache-Control (no-store, no-cache, private, max-age) on responses",
    )
    vary_headers: tuple[str, ...] = Field(
        default=("accept",), description="Request headers included in the cache key"
    )
    cache_takeover: bool = Field(
        default=False,
        description="Send no-cache request headers so intermediate caches are bypassed",
    )

    @field_validator("methods")
    @classmethod
    def _upper_methods(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(m.upper() for m in value)

    @field_validator("vary_headers")
    @classmethod
    def _lower_headers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(h.lower() for h in value)


class ClientConfig(BaseModel):
    """Construction settings for a :class:`~jikan_client.client.ResourceClient`.

    ``cache_options`` may be given as a :class:`CachePolicy` or as a plain
    (partial) dict. See :func:`~jikan_client.config.resolve_client_config`
    for building one from environment variables.
    """

    model_config = ConfigDict(frozen=True)

    enable_logging: bool = Field(default=False, description="Log request/response traffic")
    cache_options: CachePolicy = Field(default_factory=CachePolicy)
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base location of the API")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
