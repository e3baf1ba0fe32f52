"""HTTP transport construction with a per-client response cache.

:func:`build_http_client` produces the :class:`httpx.AsyncClient` owned by
one :class:`~jikan_client.client.ResourceClient`. Its transport is a
:class:`CachingTransport` wrapping the real network transport, so cache
hits short-circuit before any connection is opened while the rest of the
httpx client (base URL joining, default headers, query encoding,
redirects, timeouts) behaves exactly as usual.

The cache store is :mod:`diskcache`, placed in a private temporary
directory per transport. Two clients never see each other's entries and
the directory is removed when the client is closed, or when the transport
is garbage-collected without being closed.

diskcache is synchronous: lookups and stores run on the event loop thread
and block it for the duration of the sqlite read or write. Entries are
small JSON bodies, so the pause is short, but it is not zero.

Cache keys are SHA-256 hashes of ``METHOD|URL|vary-header values``; the
URL includes the encoded query string, so parameter values are part of
the request identity.
"""

from __future__ import annotations

import hashlib
import shutil
import tempfile
import time
import weakref
from typing import Any, Optional

import diskcache
import httpx

from jikan_client import output
from jikan_client.constants import DEFAULT_HEADERS
from jikan_client.models import CachePolicy, ClientConfig

# Directives that forbid storing a response when the policy interprets headers.
_NO_STORE_DIRECTIVES = frozenset({"no-store", "no-cache", "private"})

# Entity headers that no longer describe the stored (already decoded) body.
_STRIPPED_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})

_TAKEOVER_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Expires": "0",
}


class CachingTransport(httpx.AsyncBaseTransport):
    """Async transport that serves repeated requests from a private cache.

    Wraps *inner* and applies *policy* to every request: requests whose
    method is listed in :attr:`CachePolicy.methods` are looked up first and,
    on a miss, their 2xx responses are stored for the policy TTL (or the
    response's ``max-age`` when headers are interpreted).

    Every returned response carries ``extensions["from_cache"]`` (bool);
    cacheable requests also carry ``extensions["cache_key"]``.

    Args:
        inner: The transport that performs real network I/O.
        policy: Cache rules for this transport.
    """

    def __init__(self, inner: httpx.AsyncBaseTransport, policy: CachePolicy) -> None:
        self._inner = inner
        self._policy = policy
        self._directory = tempfile.mkdtemp(prefix="jikan-cache-")
        self._cache = diskcache.Cache(self._directory)
        self._release = weakref.finalize(self, _release_store, self._cache, self._directory)

    @property
    def policy(self) -> CachePolicy:
        """The policy this transport applies."""
        return self._policy

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if not self._is_cacheable_request(request):
            response = await self._forward(request)
            response.extensions = {**response.extensions, "from_cache": False}
            return response

        key = self._make_key(request)
        entry = self._cache.get(key)
        if entry is not None:
            output.debug(f"cache hit {request.method} {request.url}")
            return _rebuild_response(
                entry,
                {
                    "from_cache": True,
                    "cache_key": key,
                    "cache_age": time.time() - entry["stored_at"],
                },
            )

        output.debug(f"cache miss {request.method} {request.url}")
        response = await self._forward(request)
        try:
            content = await response.aread()
        except BaseException:
            await response.aclose()
            raise
        entry = {
            "status_code": response.status_code,
            "headers": [
                (name, value)
                for name, value in response.headers.multi_items()
                if name.lower() not in _STRIPPED_HEADERS
            ],
            "content": content,
            "stored_at": time.time(),
        }

        ttl = self._storage_ttl(response)
        if ttl is not None:
            self._cache.set(key, entry, expire=ttl)
            output.debug(f"cache store {request.method} {request.url} ttl={ttl:g}s")

        return _rebuild_response(
            entry,
            {**response.extensions, "from_cache": False, "cache_key": key},
        )

    async def aclose(self) -> None:
        await self._inner.aclose()
        self._release()

    def clear(self) -> None:
        """Remove every stored response."""
        self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``enabled``, ``size``, ``directory``, and ``ttl_seconds``."""
        return {
            "enabled": self._policy.enabled,
            "size": len(self._cache),
            "directory": self._directory,
            "ttl_seconds": self._policy.ttl_seconds,
        }

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _forward(self, request: httpx.Request) -> httpx.Response:
        if self._policy.cache_takeover:
            request.headers.update(_TAKEOVER_HEADERS)
        return await self._inner.handle_async_request(request)

    def _is_cacheable_request(self, request: httpx.Request) -> bool:
        return self._policy.enabled and request.method.upper() in self._policy.methods

    def _make_key(self, request: httpx.Request) -> str:
        """Generate a cache key from method, full URL, and the policy's vary headers."""
        parts = [request.method.upper(), str(request.url)]
        for name in self._policy.vary_headers:
            parts.append(f"{name}={request.headers.get(name, '')}")
        raw = "|".join(parts)
        return hashlib.sha256(raw.encode()).hexdigest()

    def _storage_ttl(self, response: httpx.Response) -> Optional[float]:
        """Return the TTL to store *response* with, or ``None`` to skip storing."""
        if not (200 <= response.status_code < 300):
            return None

        ttl = self._policy.ttl_seconds
        if self._policy.interpret_header:
            directives = _parse_cache_control(response.headers.get("cache-control", ""))
            if _NO_STORE_DIRECTIVES & directives.keys():
                return None
            max_age = directives.get("max-age")
            if max_age is not None:
                try:
                    ttl = float(int(max_age))
                except ValueError:
                    pass

        if ttl <= 0:
            return None
        return ttl


def _release_store(cache: diskcache.Cache, directory: str) -> None:
    """Close *cache* and delete its directory. Runs at most once per transport."""
    cache.close()
    shutil.rmtree(directory, ignore_errors=True)


def _parse_cache_control(value: str) -> dict[str, Optional[str]]:
    """Parse a ``Cache-Control`` header into ``{directive: argument-or-None}``."""
    directives: dict[str, Optional[str]] = {}
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        name, sep, arg = part.partition("=")
        directives[name.strip().lower()] = arg.strip().strip('"') if sep else None
    return directives


def _rebuild_response(entry: dict[str, Any], extensions: dict[str, Any]) -> httpx.Response:
    return httpx.Response(
        status_code=entry["status_code"],
        headers=entry["headers"],
        content=entry["content"],
        extensions=extensions,
    )


def build_http_client(
    config: ClientConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build the httpx client for one resource client.

    The client is bound to ``config.base_url``, sends the default JSON
    content type, and routes every request through a fresh
    :class:`CachingTransport`. ``cache_takeover`` is always forced off,
    whatever the supplied policy says. No network I/O happens here.

    Args:
        config: The owning client's configuration.
        transport: Network transport to wrap. Defaults to
            :class:`httpx.AsyncHTTPTransport`; tests pass an
            :class:`httpx.MockTransport`.

    Returns:
        A ready-to-use :class:`httpx.AsyncClient`.
    """
    policy = config.cache_options.model_copy(update={"cache_takeover": False})
    inner = transport if transport is not None else httpx.AsyncHTTPTransport()
    return httpx.AsyncClient(
        base_url=config.base_url,
        headers=DEFAULT_HEADERS,
        timeout=config.timeout,
        follow_redirects=True,
        transport=CachingTransport(inner, policy),
    )
