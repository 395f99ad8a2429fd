"""Inbound request events.

A ``RequestEvent`` is what an event source hands the dispatcher: the
request plus a slot where the dispatcher's awaitable response can be
attached. The ASGI adapter creates one per HTTP scope; other sources
(queues, test harnesses, scripts) can build them directly::

    event = RequestEvent(Request.build("GET", "https://example.com/"))
    app.listen(event)
    if event.responded:
        response = await event.response()
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

from wayfinder._internal.asgi import Receive, Scope
from wayfinder.http.request import Request
from wayfinder.http.url import URL


class RequestEvent:
    """A single inbound request awaiting a response."""

    __slots__ = ("_response", "request")

    def __init__(self, request: Request) -> None:
        self.request = request
        self._response: Awaitable[Any] | None = None

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive, *, default_scheme: str = "http") -> RequestEvent:
        """Wrap an ASGI HTTP scope."""
        return cls(Request.from_asgi(scope, receive, default_scheme=default_scheme))

    @property
    def url(self) -> URL:
        return self.request.url

    @property
    def responded(self) -> bool:
        """True once ``respond_with`` has been called."""
        return self._response is not None

    def respond_with(self, response: Awaitable[Any]) -> None:
        """Attach the awaitable that will produce this event's response.

        May be called at most once per event.
        """
        if self._response is not None:
            msg = "respond_with() was already called for this event."
            raise RuntimeError(msg)
        self._response = response

    async def response(self) -> Any:
        """Await the attached response.

        Raises ``LookupError`` if nothing was attached.
        """
        if self._response is None:
            msg = f"No response attached for {self.request.method} {self.url}"
            raise LookupError(msg)
        return await self._response

    def __repr__(self) -> str:
        return f"RequestEvent({self.request.method} {self.url})"
