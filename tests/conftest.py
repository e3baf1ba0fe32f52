"""Shared test fixtures for jikan_client.

Provides a quiet, colourless diagnostic output for every test, plus a
recording :class:`httpx.MockTransport` handler used as a transport spy.
"""

from __future__ import annotations

from typing import Callable, Optional

import httpx
import pytest

from jikan_client.output import DiagnosticOutput, reset_output, set_output


# ---------------------------------------------------------------------------
# Global output state
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Install a plain-text, verbose output and reset it after each test.

    ``no_color=True`` routes messages through ``print`` on the current
    ``sys.stderr`` so ``capsys`` sees them.
    """
    set_output(DiagnosticOutput(no_color=True, verbose=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Transport spy
# ---------------------------------------------------------------------------


class RecordingHandler:
    """``httpx.MockTransport`` handler that records every request it receives.

    Args:
        responder: Builds the response for a request. Defaults to
            ``200 {"ok": true}``.
    """

    def __init__(
        self,
        responder: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def recorder() -> RecordingHandler:
    """A recording handler answering ``200 {"ok": true}``."""
    return RecordingHandler()


@pytest.fixture
def recorder_factory() -> Callable[..., RecordingHandler]:
    """Build recording handlers with a custom responder."""
    return RecordingHandler
