"""Wayfinder: a request-routing dispatcher for ASGI and other event sources.

Routes are checked most-recent-first per HTTP method; the first match
handles the request. Unmatched requests fall back to a default handler,
and handler failures can be recovered by a catch handler.

Basic usage::

    from wayfinder import App, Response

    app = App()

    @app.route("/users/{id:int}")
    def user(context):
        return Response(f"user {context.params['id']}")

    app.run()

Without ASGI::

    from wayfinder import Dispatcher, PathRoute, Request, RequestEvent

    dispatcher = Dispatcher()
    dispatcher.register_route(PathRoute("/", index))
    result = dispatcher.handle_request(RequestEvent(Request.build("GET", "https://example.com/")))
"""

__version__ = "0.1.0"
__all__ = [
    "URL",
    "App",
    "AppConfig",
    "CallbackHandler",
    "ConfigurationError",
    "Dispatcher",
    "Handler",
    "HandlerContext",
    "NavigationRoute",
    "PathRoute",
    "RegexRoute",
    "Request",
    "RequestEvent",
    "Response",
    "Route",
    "TypeMismatch",
    "WayfinderError",
    "normalize_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfinder`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wayfinder.app import App

        return App

    if name == "AppConfig":
        from wayfinder.config import AppConfig

        return AppConfig

    if name == "Dispatcher":
        from wayfinder.routing.dispatcher import Dispatcher

        return Dispatcher

    if name in ("Route", "RegexRoute", "PathRoute", "NavigationRoute"):
        from wayfinder.routing import route as _route

        return getattr(_route, name)

    if name in ("CallbackHandler", "Handler", "HandlerContext", "normalize_handler"):
        from wayfinder.routing import handler as _handler

        return getattr(_handler, name)

    if name == "RequestEvent":
        from wayfinder.events import RequestEvent

        return RequestEvent

    if name == "Request":
        from wayfinder.http.request import Request

        return Request

    if name == "Response":
        from wayfinder.http.response import Response

        return Response

    if name == "URL":
        from wayfinder.http.url import URL

        return URL

    if name in ("ConfigurationError", "TypeMismatch", "WayfinderError"):
        from wayfinder import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
