"""Request dispatcher: picks the handler for each inbound request.

Routes are kept per HTTP method, most recently registered first. Each
request walks its method's routes in that order and the first route whose
match callable reports a match (see ``is_match``) wins. Unmatched requests
fall back to the default handler, if any. Handler failures can be
recovered by a catch handler.

The walk is synchronous. Registration publishes a fresh list for the
method (copy-on-write under a lock), so a dispatch already iterating a
snapshot never sees a half-applied change.
"""

import logging
import threading
from collections.abc import Awaitable, Iterable
from typing import Any

from wayfinder._internal.invoke import invoke
from wayfinder._internal.types import HandlerCallback, MatchResult
from wayfinder.errors import TypeMismatch
from wayfinder.events import RequestEvent
from wayfinder.http.url import URL
from wayfinder.routing.handler import Handler, HandlerContext, normalize_handler
from wayfinder.routing.route import Route, is_route

logger = logging.getLogger("wayfinder.routing")


def is_match(match_result: MatchResult) -> bool:
    """True if a match callable's result means "matched".

    Lists, tuples, and dicts always match, even when empty (an empty
    container means "matched, no params"). Anything else matches when
    truthy, so ``None`` and ``False`` are the usual "no match".
    """
    if isinstance(match_result, (list, tuple, dict)):
        return True
    return bool(match_result)


def normalize_params(match_result: MatchResult) -> MatchResult:
    """Turn an empty list, tuple, or plain dict into ``None``.

    Only those exact empty shapes are normalized; any other value
    (including other falsy-looking objects and dict subclasses) reaches
    the handler unchanged.
    """
    if isinstance(match_result, (list, tuple)) and len(match_result) == 0:
        return None
    if type(match_result) is dict and not match_result:
        return None
    return match_result


class Dispatcher:
    """Routes inbound request events to handlers.

    Usage::

        dispatcher = Dispatcher()
        dispatcher.register_route(PathRoute("/images/{name}", image_handler))
        dispatcher.set_default_handler(network_handler)
        dispatcher.set_catch_handler(lambda context: Response("offline", status=503))

        result = dispatcher.handle_request(event)
        if result is not None:
            response = await result

    Thread safety:
        Registration may happen from any thread. Each mutation replaces
        the method's route list instead of editing it, so concurrent
        dispatches keep iterating the list they started with.
    """

    __slots__ = ("_catch_handler", "_default_handler", "_lock", "_routes")

    def __init__(self) -> None:
        # HTTP method ("GET", ...) -> routes, most recently registered first
        self._routes: dict[str, list[Route]] = {}
        self._default_handler: Handler | None = None
        self._catch_handler: Handler | None = None
        self._lock = threading.Lock()

    # -- Handler slots --

    @property
    def default_handler(self) -> Handler | None:
        """Handler used when no route matches, or ``None``."""
        return self._default_handler

    @property
    def catch_handler(self) -> Handler | None:
        """Handler used when the selected handler fails, or ``None``."""
        return self._catch_handler

    def set_default_handler(self, handler: Handler | HandlerCallback | None) -> None:
        """Set (or clear, with ``None``) the handler for unmatched requests.

        Without one, unmatched requests get no response from the
        dispatcher and the event source's own default applies.
        """
        self._default_handler = normalize_handler(handler)

    def set_catch_handler(self, handler: Handler | HandlerCallback | None) -> None:
        """Set (or clear, with ``None``) the handler for failed requests.

        It receives the original ``error`` in its context, and its result
        replaces the failure.
        """
        self._catch_handler = normalize_handler(handler)

    # -- Route table --

    @property
    def routes(self) -> dict[str, tuple[Route, ...]]:
        """Snapshot of the route table, in matching order per method."""
        with self._lock:
            table = dict(self._routes)
        return {method: tuple(routes) for method, routes in table.items()}

    def register_route(self, route: Route) -> None:
        """Register a single route. It takes precedence over earlier ones.

        Raises ``TypeMismatch`` if *route* isn't route-shaped.
        """
        self.register_routes([route])

    def register_routes(self, routes: Iterable[Route]) -> None:
        """Register routes in order; each one goes to the front of its method.

        Every element is checked before any is registered, so a bad
        element leaves the table untouched.
        """
        routes = _checked_routes(routes)
        with self._lock:
            for route in routes:
                bucket = self._routes.get(route.method, [])
                # Most recent registration is checked first
                self._routes[route.method] = [route, *bucket]
                logger.debug("Registered %r", route)

    def unregister_route(self, route: Route) -> None:
        """Unregister a single route (matched by identity)."""
        self.unregister_routes([route])

    def unregister_routes(self, routes: Iterable[Route]) -> None:
        """Unregister routes; unknown routes are logged and skipped."""
        routes = _checked_routes(routes)
        with self._lock:
            for route in routes:
                bucket = self._routes.get(route.method)
                if bucket is None:
                    logger.warning(
                        "Can't unregister %r; there are no %s routes registered.",
                        route,
                        route.method,
                    )
                    continue

                index = next((i for i, r in enumerate(bucket) if r is route), None)
                if index is None:
                    logger.warning(
                        "Can't unregister %r; the route wasn't previously registered.",
                        route,
                    )
                    continue

                self._routes[route.method] = bucket[:index] + bucket[index + 1 :]
                logger.debug("Unregistered %r", route)

    # -- Dispatch --

    def handle_request(self, event: RequestEvent) -> Awaitable[Any] | None:
        """Apply the routing rules to *event*.

        Returns an awaitable response, or ``None`` when the dispatcher
        declines: the URL isn't http(s), or nothing matched and there is
        no default handler. Raises ``TypeMismatch`` if *event* isn't a
        ``RequestEvent``.
        """
        if not isinstance(event, RequestEvent):
            raise TypeMismatch("event", "a RequestEvent", event)

        url = event.url
        if not url.scheme.startswith("http"):
            logger.debug("Skipping %s: the URL is not http(s), so it can't be handled.", url)
            return None

        handler, params = self._find_handler_and_params(event, url)

        if handler is None:
            handler = self._default_handler
            if handler is None:
                logger.debug("No route or default handler for %s %s", event.request.method, url)
                return None
            logger.debug(
                "No route matched %s %s; using the default handler", event.request.method, url
            )

        # Plain ``def handle`` objects fail and return through the awaitable too
        result = invoke(handler.handle, HandlerContext(url=url, event=event, params=params))

        catch_handler = self._catch_handler
        if catch_handler is not None:
            return _recover_with(catch_handler, result, url, event)
        return result

    def _find_handler_and_params(
        self, event: RequestEvent, url: URL
    ) -> tuple[Handler | None, MatchResult]:
        """First-match-wins walk over the request method's routes."""
        for route in self._routes.get(event.request.method, ()):
            match_result = route.match(url, event)
            if is_match(match_result):
                logger.debug("%r matched %s %s", route, event.request.method, url)
                return route.handler, normalize_params(match_result)
        return None, None


async def _recover_with(
    catch_handler: Handler,
    result: Awaitable[Any],
    url: URL,
    event: RequestEvent,
) -> Any:
    try:
        return await result
    except Exception as exc:
        logger.error(
            "Handler for %s %s failed; using the catch handler.",
            event.request.method,
            url,
            exc_info=exc,
        )
        return await invoke(catch_handler.handle, HandlerContext(url=url, event=event, error=exc))


def _checked_routes(routes: Iterable[Route]) -> list[Route]:
    if isinstance(routes, (str, bytes)) or not isinstance(routes, Iterable):
        raise TypeMismatch("routes", "an iterable of routes", routes)
    routes = list(routes)
    for route in routes:
        if not is_route(route):
            raise TypeMismatch("route", "a Route", route)
    return routes
