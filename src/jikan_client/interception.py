"""Interception pipeline: optional request/response observation.

A client picks one strategy at construction and keeps it for its whole
lifetime:

* :class:`NoObservation` -- requests go straight to the httpx client.
* :class:`Observation` -- four hook callables run around every request:

  ========================  =====================================================
  ``before_request``        receives the built :class:`httpx.Request`, returns
                            the request to send
  ``request_error``         receives an error raised while building the request
                            or inside ``before_request``, returns the exception
                            to raise
  ``after_response``        receives the successful :class:`httpx.Response`
                            (cache hits included), returns it
  ``response_error``        receives any :class:`httpx.HTTPError` from sending
                            or status checking, returns the exception to raise
  ========================  =====================================================

Error hooks cannot swallow a failure: whatever they return is raised.
Non-2xx responses are converted to :class:`httpx.HTTPStatusError` inside
the pipeline, so they pass through ``response_error`` like network
failures do.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

import httpx

from jikan_client import hooks


class NoObservation:
    """Strategy that sends requests without any hooks."""

    async def send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        request = client.build_request(method, url, params=params)
        response = await client.send(request)
        response.raise_for_status()
        return response


@dataclass(frozen=True)
class Observation:
    """Strategy that runs the four diagnostic hooks around every request.

    Attributes:
        before_request: Called with the outgoing request.
        request_error: Called with an error from request preparation.
        after_response: Called with each successful response.
        response_error: Called with each transport or status failure.
    """

    before_request: Callable[[httpx.Request], httpx.Request]
    request_error: Callable[[BaseException], BaseException]
    after_response: Callable[[httpx.Response], httpx.Response]
    response_error: Callable[[BaseException], BaseException]

    async def send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        try:
            request = self.before_request(client.build_request(method, url, params=params))
        except Exception as exc:
            raise self.request_error(exc)

        try:
            response = await client.send(request)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise self.response_error(exc)

        return self.after_response(response)


Interception = Union[NoObservation, Observation]


def logging_observation() -> Observation:
    """Return an :class:`Observation` wired to the default stderr logging hooks."""
    return Observation(
        before_request=hooks.log_request,
        request_error=hooks.log_request_error,
        after_response=hooks.log_response,
        response_error=hooks.log_response_error,
    )


def select_interception(
    enable_logging: bool,
    observation: Optional[Observation] = None,
) -> Interception:
    """Pick the strategy for a new client.

    An explicit *observation* always wins; otherwise ``enable_logging``
    chooses between :func:`logging_observation` and :class:`NoObservation`.
    """
    if observation is not None:
        return observation
    if enable_logging:
        return logging_observation()
    return NoObservation()
