"""Async test client for wayfinder applications.

Drives any ASGI app in-process and returns the same ``Response`` type
handlers produce. No HTTP involved.
"""

from __future__ import annotations

from typing import Any

from wayfinder._internal.asgi import ASGIApp
from wayfinder._internal.invoke import invoke
from wayfinder.http.response import Response


class TestClient:
    """Async test client.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200

    Entering the context runs the app's startup hooks and leaving it runs
    the shutdown hooks, mirroring ASGI lifespan.
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("app", "base_url")

    def __init__(self, app: ASGIApp, *, base_url: str = "http://testserver") -> None:
        self.app = app
        self.base_url = base_url

    async def __aenter__(self) -> TestClient:
        for hook in getattr(self.app, "_startup_hooks", ()):
            await invoke(hook)
        return self

    async def __aexit__(self, *args: object) -> None:
        for hook in getattr(self.app, "_shutdown_hooks", ()):
            await invoke(hook)

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body)

    async def navigate(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET the way a browser does for a top-level page load."""
        nav_headers = {"Sec-Fetch-Mode": "navigate", "Accept": "text/html", **(headers or {})}
        return await self.request("GET", path, headers=nav_headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = path.partition("?")
        scheme, _, netloc = self.base_url.partition("://")

        raw_headers: list[tuple[bytes, bytes]] = [(b"host", netloc.encode("latin-1"))]
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "scheme": scheme,
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if body_sent:
                return {"type": "http.disconnect"}
            body_sent = True
            return {"type": "http.request", "body": body or b"", "more_body": False}

        status = 200
        response_headers: list[tuple[str, str]] = []
        chunks: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers.extend(
                    (name.decode("latin-1"), value.decode("latin-1"))
                    for name, value in message.get("headers", [])
                )
            elif message["type"] == "http.response.body":
                chunks.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = next(
            (value for name, value in response_headers if name == "content-type"), ""
        )
        return Response(
            body=b"".join(chunks),
            status=status,
            content_type=content_type,
            headers=tuple(response_headers),
        )
