"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response, so a handler's response can
be adjusted by whoever awaits it without aliasing surprises.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, *, status: int = 200) -> Response:
        """Serialize *data* as a JSON response."""
        return cls(
            body=json_module.dumps(data),
            status=status,
            content_type="application/json",
        )

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def to_response(value: Any) -> Response:
    """Coerce a handler's return value into a ``Response``.

    ``Response`` passes through, ``str`` becomes ``text/html``, ``bytes``
    becomes ``application/octet-stream``, and ``dict``/``list`` become
    JSON. Anything else is a handler bug.
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, str):
        return Response(body=value, content_type="text/html; charset=utf-8")
    if isinstance(value, bytes):
        return Response(body=value, content_type="application/octet-stream")
    if isinstance(value, (dict, list)):
        return Response.json(value)
    msg = (
        f"Handler returned {type(value).__name__}, expected Response, str, bytes, "
        "dict, or list."
    )
    raise TypeError(msg)
