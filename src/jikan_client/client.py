"""Resource client base: the single ``fetch_resource`` entry point.

:class:`ResourceClient` ties the other modules together:

1. :func:`~jikan_client.template.resolve_path` turns an endpoint template
   and path parameters into a concrete path (failing before any I/O).
2. The interception strategy chosen at construction
   (:mod:`jikan_client.interception`) sends a GET through the httpx client
   built by :func:`~jikan_client.transport.build_http_client`, which may
   answer from its private cache.
3. Only the decoded body is returned.

Concrete resource clients do not subclass :class:`ResourceClient`; they
hold any object satisfying :class:`ResourceFetcher` and build their own
templates and result types on top of it::

    class AnimeClient:
        def __init__(self, fetcher: ResourceFetcher) -> None:
            self._fetcher = fetcher

        async def get_anime(self, anime_id: int) -> dict:
            return await self._fetcher.fetch_resource("/anime/{id}", {"id": anime_id})
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Union

import httpx

from jikan_client import output
from jikan_client.interception import Interception, Observation, select_interception
from jikan_client.models import CachePolicy, ClientConfig
from jikan_client.template import resolve_path, template_placeholders
from jikan_client.transport import build_http_client


class ResourceFetcher(Protocol):
    """Anything that can fetch a decoded resource from an endpoint template."""

    async def fetch_resource(
        self,
        endpoint: str,
        path_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> Any: ...


class ResourceClient:
    """Asynchronous GET client with path templating, caching, and optional traffic logging.

    Construction is synchronous and performs no network I/O. Either pass a
    complete :class:`~jikan_client.models.ClientConfig` or use the keyword
    shortcuts, which build one.

    Args:
        config: Full client configuration. When given, the keyword
            shortcuts must be left unset.
        enable_logging: Log every request and response to stderr.
        cache_options: Cache policy, as a
            :class:`~jikan_client.models.CachePolicy` or a partial dict.
        base_url: API base location. Defaults to the public Jikan instance.
        observation: Custom hooks to run instead of the default logging
            hooks. Takes precedence over ``enable_logging``.
        transport: Network transport to wrap with the cache. Intended for
            tests (:class:`httpx.MockTransport`).

    Example::

        async with ResourceClient(enable_logging=True) as client:
            episodes = await client.fetch_resource(
                "/anime/{id}/episodes", {"id": 1}, {"page": 2}
            )
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        enable_logging: Optional[bool] = None,
        cache_options: Union[CachePolicy, Mapping[str, Any], None] = None,
        base_url: Optional[str] = None,
        observation: Optional[Observation] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        shortcuts = {
            "enable_logging": enable_logging,
            "cache_options": cache_options,
            "base_url": base_url,
        }
        overrides = {k: v for k, v in shortcuts.items() if v is not None}
        if config is None:
            config = ClientConfig.model_validate(overrides)
        elif overrides:
            raise TypeError(
                "Pass either a ClientConfig or keyword settings, not both "
                f"(got {', '.join(sorted(overrides))})"
            )

        self._config = config
        self._interception: Interception = select_interception(
            config.enable_logging, observation
        )
        self._http = build_http_client(config, transport)

    @property
    def config(self) -> ClientConfig:
        """The immutable configuration this client was built with."""
        return self._config

    @property
    def is_observed(self) -> bool:
        """Whether interception hooks run on this client's traffic."""
        return isinstance(self._interception, Observation)

    async def __aenter__(self) -> ResourceClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client and remove the private cache store."""
        await self._http.aclose()

    async def fetch_resource(
        self,
        endpoint: str,
        path_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """GET a resource and return its decoded body.

        Args:
            endpoint: Endpoint template, e.g. ``"/users/{id}/posts"``.
            path_params: Values for the template placeholders.
            query_params: Query-string parameters, passed to httpx as-is.

        Returns:
            The parsed JSON body, the raw text when the body is not JSON,
            or ``None`` for an empty body.

        Raises:
            ValidationError: A path parameter has no placeholder in
                *endpoint*. No request is made.
            httpx.HTTPStatusError: The server answered with a non-2xx status.
            httpx.HTTPError: Any other transport failure (connection, timeout).
        """
        path = resolve_path(endpoint, path_params or {})
        unresolved = template_placeholders(path)
        if unresolved:
            output.debug(f"unresolved placeholders in {path}: {', '.join(unresolved)}")
        response = await self._interception.send(
            self._http, "GET", path, params=dict(query_params or {})
        )
        return _decode_body(response)


def _decode_body(response: httpx.Response) -> Any:
    """Return JSON if the body parses as JSON, otherwise text; ``None`` when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
