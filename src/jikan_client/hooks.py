"""Default diagnostic hooks for the interception pipeline.

These four functions are the logging sink used when a client is built with
``enable_logging=True``. Each one writes a single line to stderr through
:mod:`jikan_client.output` and hands its argument back untouched, so
traffic semantics are identical with or without them.
"""

from __future__ import annotations

import httpx

from jikan_client import output


def log_request(request: httpx.Request) -> httpx.Request:
    """Log an outgoing request and return it unchanged."""
    output.info(f"[request] {request.method} {request.url}")
    return request


def log_request_error(error: BaseException) -> BaseException:
    """Log a failure raised while preparing a request and return it for re-raising."""
    output.error(f"[request-error] {type(error).__name__}: {error}")
    return error


def log_response(response: httpx.Response) -> httpx.Response:
    """Log a completed response, marking whether it came from the cache."""
    source = "cached" if response.extensions.get("from_cache") else "network"
    request = response.request
    output.info(
        f"[response] {response.status_code} {request.method} {request.url} ({source})"
    )
    return response


def log_response_error(error: BaseException) -> BaseException:
    """Log a transport or HTTP-status failure and return it for re-raising."""
    if isinstance(error, httpx.HTTPStatusError):
        status = str(error.response.status_code)
    else:
        status = type(error).__name__
    output.error(f"[response-error] {status} {_describe_request(error)}: {error}")
    return error


def _describe_request(error: BaseException) -> str:
    """Return ``METHOD URL`` for the request behind *error*, if one is attached."""
    if not isinstance(error, (httpx.RequestError, httpx.HTTPStatusError)):
        return "<unknown request>"
    try:
        request = error.request
    except RuntimeError:
        return "<unknown request>"
    return f"{request.method} {request.url}"
