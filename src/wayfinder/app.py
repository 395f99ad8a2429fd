"""Wayfinder application class.

Wires a ``Dispatcher`` to ASGI. Unlike a compiled router, the route table
stays live: routes can be added and removed while serving, and take effect
on the next request.
"""

import logging
from collections.abc import Callable
from typing import Any

from wayfinder._internal.asgi import ASGIApp, Receive, Scope, Send
from wayfinder._internal.invoke import invoke
from wayfinder._internal.types import HandlerCallback
from wayfinder.config import AppConfig
from wayfinder.events import RequestEvent
from wayfinder.routing.dispatcher import Dispatcher
from wayfinder.routing.handler import Handler
from wayfinder.routing.route import PathRoute, Route
from wayfinder.server.handler import handle_request, respond

logger = logging.getLogger("wayfinder.server")


class App:
    """The wayfinder application.

    Usage::

        app = App()

        @app.route("/images/{name}")
        async def image(context):
            return Response(await load(context.params["name"]), content_type="image/png")

        @app.catch
        def offline(context):
            return Response("offline", status=503)

    Requests the dispatcher declines go to *fallback* (any ASGI app),
    or get a 404 when there is none.
    """

    __slots__ = ("_dispatcher", "_fallback", "_shutdown_hooks", "_startup_hooks", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        fallback: ASGIApp | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._dispatcher = dispatcher or Dispatcher()
        self._fallback = fallback
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        origin: str | None = None,
    ) -> Callable[[HandlerCallback], HandlerCallback]:
        """Register a path route via decorator, one ``PathRoute`` per method.

        Args:
            path: Path pattern. Use ``{param}`` or ``{param:int}``.
            methods: HTTP methods. Defaults to ``["GET"]``.
            origin: Restrict matching to this origin.
        """

        def decorator(func: HandlerCallback) -> HandlerCallback:
            self._dispatcher.register_routes(
                [PathRoute(path, func, method, origin=origin) for method in methods or ["GET"]]
            )
            return func

        return decorator

    def add_route(self, route: Route) -> None:
        """Register a prebuilt route (``RegexRoute``, ``NavigationRoute``, ...)."""
        self._dispatcher.register_route(route)

    def remove_route(self, route: Route) -> None:
        """Unregister a route previously passed to ``add_route``."""
        self._dispatcher.unregister_route(route)

    # -- Handler slots --

    def default(self, handler: Handler | HandlerCallback) -> Handler | HandlerCallback:
        """Set the default handler; usable as a decorator."""
        self._dispatcher.set_default_handler(handler)
        return handler

    def catch(self, handler: Handler | HandlerCallback) -> Handler | HandlerCallback:
        """Set the catch handler; usable as a decorator."""
        self._dispatcher.set_catch_handler(handler)
        return handler

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync hook run during ASGI lifespan startup."""
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync hook run during ASGI lifespan shutdown."""
        self._shutdown_hooks.append(func)
        return func

    # -- Event source integration --

    def listen(self, event: RequestEvent) -> bool:
        """Dispatch *event*, attaching the result via ``event.respond_with``.

        Returns True if the dispatcher responded. This is the hook for
        event sources other than ASGI.
        """
        return respond(self._dispatcher, event)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce."""
        from wayfinder.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            # Websockets and server-specific scopes aren't dispatched
            if self._fallback is not None:
                await self._fallback(scope, receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            config=self.config,
            fallback=self._fallback,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return
