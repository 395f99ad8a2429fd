"""ASGI handler: feeds HTTP scopes to the dispatcher as request events.

The only component that touches raw ASGI HTTP traffic. Each scope becomes
a ``RequestEvent``; when the dispatcher responds, the awaited result is
sent back. When it declines, the request passes through to the fallback
app (or a 404, without one), the way a browser goes to the network when
no service worker responds.
"""

import logging

from wayfinder._internal.asgi import ASGIApp, Receive, Scope, Send
from wayfinder.config import AppConfig
from wayfinder.events import RequestEvent
from wayfinder.http.response import Response, to_response
from wayfinder.routing.dispatcher import Dispatcher
from wayfinder.server.errors import handle_internal_error
from wayfinder.server.sender import send_response

logger = logging.getLogger("wayfinder.server")


def respond(dispatcher: Dispatcher, event: RequestEvent) -> bool:
    """Dispatch *event* and attach the result as its response.

    Returns True if the dispatcher responded.
    """
    result = dispatcher.handle_request(event)
    if result is None:
        return False
    event.respond_with(result)
    return True


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    config: AppConfig,
    fallback: ASGIApp | None = None,
) -> None:
    """Process a single HTTP scope."""
    event = RequestEvent.from_asgi(scope, receive, default_scheme=config.default_scheme)
    request = event.request

    try:
        responded = respond(dispatcher, event)
        response = to_response(await event.response()) if responded else None
    except Exception as exc:
        responded = True
        response = handle_internal_error(exc, request, debug=config.debug)

    if not responded:
        if fallback is not None:
            logger.debug("Passing %s %s to the fallback app", request.method, request.url)
            await fallback(scope, receive, send)
            return
        response = Response(body=config.not_found_body, status=404)

    await send_response(response, send, head=request.method == "HEAD")
