"""In-process stand-in for the AssemblyAI API, built on ``httpx.MockTransport``."""

from __future__ import annotations

from typing import Any, AsyncIterator, Callable

import httpx

from scribe_relay.services.assemblyai import AssemblyAIClient

BASE_URL = "https://api.assemblyai.com/v2"
BASE_PATH = "/v2"

ResponseFactory = Callable[[httpx.Request], httpx.Response]


class FakeAssemblyAI:
    """Scripted responses per ``(method, path)``; records every request.

    Responses queued for a route are served in order and the last one keeps
    being served once the queue is down to it.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[ResponseFactory]] = {}
        self.requests: list[httpx.Request] = []
        self.served_clients: list[AssemblyAIClient] = []

    def add(self, method: str, path: str, *responses: ResponseFactory) -> "FakeAssemblyAI":
        self.routes.setdefault((method, BASE_PATH + path), []).extend(responses)
        return self

    def add_json(self, method: str, path: str, *bodies: Any, status_code: int = 200) -> "FakeAssemblyAI":
        return self.add(method, path, *(json_response(body, status_code) for body in bodies))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {request.method} {request.url.path}"})
        factory = queue.pop(0) if len(queue) > 1 else queue[0]
        return factory(request)

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == BASE_PATH + path]

    def client(self, **kwargs: Any) -> AssemblyAIClient:
        return AssemblyAIClient(
            "test-key",
            BASE_URL,
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )

    async def dependency(self) -> AsyncIterator[AssemblyAIClient]:
        """Drop-in for ``get_transcription_client``: yields a client, then closes it."""
        async with self.client() as client:
            self.served_clients.append(client)
            yield client


def json_response(body: Any, status_code: int = 200) -> ResponseFactory:
    return lambda _request: httpx.Response(status_code, json=body)


def text_response(text: str, status_code: int = 200, content_type: str = "text/plain") -> ResponseFactory:
    return lambda _request: httpx.Response(status_code, text=text, headers={"content-type": content_type})


class FakeClock:
    """Monotonic clock that only moves when :meth:`sleep` is awaited."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
