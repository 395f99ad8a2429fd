"""Immutable HTTP request.

Frozen metadata with raw async body access. Wayfinder never parses or
validates bodies; handlers that need the body read the bytes themselves.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any

from wayfinder._internal.asgi import Receive, Scope, header_value
from wayfinder.http.headers import Headers
from wayfinder.http.url import URL


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``mode`` follows the browser's ``Sec-Fetch-Mode`` header; when a
    client doesn't send it, a ``GET`` that accepts ``text/html`` is
    treated as a navigation and anything else leaves it ``None``.
    """

    method: str
    url: URL
    headers: Headers
    mode: str | None = None
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: body cache (the dict is mutable even though the field is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def path(self) -> str:
        """The URL path."""
        return self.url.path

    @property
    def is_navigation(self) -> bool:
        """True for top-level page loads."""
        return self.mode == "navigate"

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body (cached after the first read)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        result = b"".join([chunk async for chunk in self.stream()])
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str,
        url: str | URL,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
        mode: str | None = None,
    ) -> Request:
        """Create a request without an ASGI server (scripts, other event sources).

        Usage::

            request = Request.build("GET", "https://example.com/images/logo.png")
        """
        parsed = url if isinstance(url, URL) else URL.parse(url)
        sent = False

        async def receive() -> dict[str, Any]:
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        hdrs = Headers.from_mapping(headers or {})
        method = method.upper()
        return cls(
            method=method,
            url=parsed,
            headers=hdrs,
            mode=mode or _infer_mode(method, hdrs),
            _receive=receive,
        )

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive, *, default_scheme: str = "http") -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        scheme = scope.get("scheme") or default_scheme
        host = header_value(scope, b"host")
        if not host:
            server = scope.get("server")
            host = f"{server[0]}:{server[1]}" if server else "localhost"
        path = scope.get("root_path", "") + scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")
        url = URL.parse(f"{scheme}://{host}{path}" + (f"?{query}" if query else ""))

        headers = Headers(scope.get("headers", ()))
        method = scope["method"].upper()
        client = scope.get("client")
        return cls(
            method=method,
            url=url,
            headers=headers,
            mode=_infer_mode(method, headers),
            client=tuple(client) if client else None,
            _receive=receive,
        )


def _infer_mode(method: str, headers: Headers) -> str | None:
    mode = headers.get("sec-fetch-mode")
    if mode:
        return mode.lower()
    if method == "GET" and "text/html" in (headers.get("accept") or ""):
        return "navigate"
    return None
