"""Handler protocol and normalizer.

A handler is anything with a ``handle(context)`` method returning an
awaitable response. No base class required; the dispatcher checks the
shape, not the lineage. Bare callables are wrapped so callers always see
the same capability::

    # Object handler
    class CacheFirst:
        async def handle(self, context: HandlerContext) -> Response: ...

    # Function handler (sync or async)
    def hello(context: HandlerContext) -> Response:
        return Response("hello")
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from wayfinder._internal.invoke import invoke
from wayfinder._internal.types import HandlerCallback
from wayfinder.errors import TypeMismatch

if TYPE_CHECKING:
    from wayfinder.events import RequestEvent
    from wayfinder.http.url import URL


@dataclass(frozen=True, slots=True)
class HandlerContext:
    """What a handler receives.

    ``params`` is the normalized match result (``None`` when the route
    extracted nothing, or for the default handler). ``error`` is only set
    for the catch handler.
    """

    url: URL
    event: RequestEvent
    params: Any = None
    error: BaseException | None = None

    @property
    def request(self) -> Any:
        return self.event.request


@runtime_checkable
class Handler(Protocol):
    """Protocol for request handlers.

    ``handle`` may be ``async def`` or a plain ``def``; the dispatcher
    awaits whatever comes back when it is awaitable.
    """

    def handle(self, context: HandlerContext) -> Any: ...


class CallbackHandler:
    """Adapts a plain function to the ``Handler`` protocol."""

    __slots__ = ("callback",)

    def __init__(self, callback: HandlerCallback) -> None:
        self.callback = callback

    def handle(self, context: HandlerContext) -> Awaitable[Any]:
        return invoke(self.callback, context)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackHandler({name})"


def normalize_handler(handler: Handler | HandlerCallback | None) -> Handler | None:
    """Return *handler* as a ``Handler``, or ``None`` if none was given.

    Objects exposing a callable ``handle`` are returned unchanged; plain
    callables are wrapped in ``CallbackHandler``. Raises ``TypeMismatch``
    for anything else.
    """
    if handler is None:
        return None
    if callable(getattr(handler, "handle", None)):
        return handler  # type: ignore[return-value]
    if callable(handler):
        return CallbackHandler(handler)
    raise TypeMismatch("handler", "a Handler or a callable", handler)
