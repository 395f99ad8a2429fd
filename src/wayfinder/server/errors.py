"""Turning unrecovered handler failures into responses."""

import logging
import traceback

from wayfinder.http.request import Request
from wayfinder.http.response import Response

logger = logging.getLogger("wayfinder.server")


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log *exc* and build a 500 response.

    In debug mode the body carries the traceback; otherwise it is a plain
    ``Internal Server Error``.
    """
    logger.error("500 %s %s", request.method, request.url, exc_info=exc)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)
    return Response(body="Internal Server Error", status=500)
