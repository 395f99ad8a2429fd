"""Routes: a method, a match callable, and a handler.

The dispatcher accepts any object shaped like ``Route``; the classes here
are the stock matching strategies:

- ``Route``: any match callable you like.
- ``RegexRoute``: a regular expression over the full URL.
- ``PathRoute``: a ``{param}`` path pattern with typed converters.
- ``NavigationRoute``: top-level page loads, filtered by allow/deny lists.

A match callable receives ``(url, event)`` and returns ``None`` or
``False`` for no match. Lists, tuples and dicts (even empty ones) are a
match and become the handler's ``params``; other truthy values are an
opaque match.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from wayfinder._internal.types import HandlerCallback, MatchCallback
from wayfinder.errors import TypeMismatch
from wayfinder.events import RequestEvent
from wayfinder.http.url import URL
from wayfinder.routing.handler import Handler, normalize_handler
from wayfinder.routing.params import CompiledPath, compile_path

logger = logging.getLogger("wayfinder.routing")

DEFAULT_METHOD = "GET"


class Route:
    """A route built from an arbitrary match callable.

    Usage::

        def is_api(url, event):
            return url.path.startswith("/api/")

        route = Route(is_api, api_handler, method="POST")
    """

    __slots__ = ("handler", "match", "method")

    def __init__(
        self,
        match: MatchCallback,
        handler: Handler | HandlerCallback,
        method: str = DEFAULT_METHOD,
    ) -> None:
        if not callable(match):
            raise TypeMismatch("match", "a callable", match)
        normalized = normalize_handler(handler)
        if normalized is None:
            raise TypeMismatch("handler", "a Handler or a callable", handler)
        if not isinstance(method, str) or not method:
            raise TypeMismatch("method", "a non-empty string", method)
        self.match = match
        self.handler: Handler = normalized
        self.method = method.upper()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.method}, {self.handler!r})"


def is_route(value: object) -> bool:
    """True if *value* is shaped like a ``Route``.

    ``Route`` instances always are; other objects qualify when they carry
    a string ``method``, a callable ``match``, and a handler with a
    callable ``handle``.
    """
    if isinstance(value, Route):
        return True
    method = getattr(value, "method", None)
    handler = getattr(value, "handler", None)
    return (
        isinstance(method, str)
        and callable(getattr(value, "match", None))
        and callable(getattr(handler, "handle", None))
    )


class RegexRoute(Route):
    """Match the full URL (``url.href``) against a regular expression.

    The match result is the tuple of capture groups, so a pattern without
    groups hands the handler no params.

    When *origin* is given, cross-origin URLs only match if the pattern
    matches from the very start of the URL. This keeps a loose pattern
    like ``r"/styles/.*\\.css"`` from capturing third-party requests.
    """

    __slots__ = ("origin", "regex")

    def __init__(
        self,
        pattern: str | re.Pattern[str],
        handler: Handler | HandlerCallback,
        method: str = DEFAULT_METHOD,
        *,
        origin: str | None = None,
    ) -> None:
        if not isinstance(pattern, (str, re.Pattern)):
            raise TypeMismatch("pattern", "a string or compiled regex", pattern)
        self.regex: re.Pattern[str] = re.compile(pattern)
        self.origin = URL.parse(origin).origin if origin else None
        super().__init__(self._match_url, handler, method)

    def _match_url(self, url: URL, event: RequestEvent) -> tuple[Any, ...] | None:
        m = self.regex.search(url.href)
        if m is None:
            return None
        if self.origin is not None and url.origin != self.origin and m.start() != 0:
            logger.debug(
                "%r matched cross-origin %s mid-URL; only matches at the start "
                "of a cross-origin URL count.",
                self.regex.pattern,
                url,
            )
            return None
        return m.groups()


class PathRoute(Route):
    """Match the URL path against a ``{param}`` pattern.

    Returns a dict of converted params (``{id:int}`` yields an ``int``).
    When *origin* is given, only same-origin URLs match.

    Usage::

        PathRoute("/users/{id:int}", show_user)
    """

    __slots__ = ("compiled", "origin")

    def __init__(
        self,
        path: str,
        handler: Handler | HandlerCallback,
        method: str = DEFAULT_METHOD,
        *,
        origin: str | None = None,
    ) -> None:
        if not isinstance(path, str):
            raise TypeMismatch("path", "a string", path)
        self.compiled: CompiledPath = compile_path(path)
        self.origin = URL.parse(origin).origin if origin else None
        super().__init__(self._match_path, handler, method)

    @property
    def path(self) -> str:
        return self.compiled.pattern

    def _match_path(self, url: URL, event: RequestEvent) -> dict[str, Any] | None:
        if self.origin is not None and url.origin != self.origin:
            return None
        return self.compiled.match(url.path)

    def __repr__(self) -> str:
        return f"PathRoute({self.method} {self.path!r})"


class NavigationRoute(Route):
    """Match top-level navigation requests.

    A navigation matches when its path plus query matches at least one
    *allowlist* pattern (every navigation, if the allowlist is empty) and
    no *denylist* pattern. Always registered for ``GET``.
    """

    __slots__ = ("allowlist", "denylist")

    def __init__(
        self,
        handler: Handler | HandlerCallback,
        *,
        allowlist: Iterable[str | re.Pattern[str]] = (),
        denylist: Iterable[str | re.Pattern[str]] = (),
    ) -> None:
        self.allowlist: tuple[re.Pattern[str], ...] = tuple(re.compile(p) for p in allowlist)
        self.denylist: tuple[re.Pattern[str], ...] = tuple(re.compile(p) for p in denylist)
        super().__init__(self._match_navigation, handler, DEFAULT_METHOD)

    def _match_navigation(self, url: URL, event: RequestEvent) -> bool:
        if not event.request.is_navigation:
            return False
        target = url.path_and_query
        for pattern in self.denylist:
            if pattern.search(target):
                logger.debug("Navigation to %s skipped: denylisted by %r.", target, pattern.pattern)
                return False
        if self.allowlist and not any(p.search(target) for p in self.allowlist):
            logger.debug("Navigation to %s skipped: not in the allowlist.", target)
            return False
        return True
