from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from http_facade import HttpContext
from http_facade.http_client import TransportOptions

Handler = Callable[[httpx.Request], httpx.Response]


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=b"ok")


def echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=request.content)


class StubTransport:
    """Stand-in transport capability: records bindings, requests and releases."""

    def __init__(self, handler: Handler = _ok) -> None:
        self.handler = handler
        self.options: List[TransportOptions] = []
        self.requests: List[httpx.Request] = []
        self.closed = 0

    def respond(self, status_code: int = 200, content: bytes = b"") -> None:
        self.handler = lambda request: httpx.Response(status_code, content=content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def factory(self, options: TransportOptions) -> httpx.BaseTransport:
        self.options.append(options)
        return _RecordingTransport(self)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request reached the transport"
        return self.requests[-1]


class _RecordingTransport(httpx.MockTransport):
    def __init__(self, stub: StubTransport) -> None:
        super().__init__(stub._handle)
        self._stub = stub

    def close(self) -> None:
        self._stub.closed += 1


@pytest.fixture
def stub() -> StubTransport:
    return StubTransport()


@pytest.fixture
def context(stub: StubTransport) -> HttpContext:
    return HttpContext(base_url="http://stub.test", trust_env=False, transport_factory=stub.factory)
