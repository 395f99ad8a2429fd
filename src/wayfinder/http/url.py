"""Parsed, absolute request URL.

Routes match against this rather than raw strings: the scheme decides
whether a request is dispatchable at all, the origin decides same-origin
rules, and the path and query feed the path and navigation matchers.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from wayfinder.http.query import QueryParams

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


@dataclass(frozen=True, slots=True)
class URL:
    """An absolute URL split into its parts.

    Build one with ``URL.parse("https://example.com/a?b=1")``. The
    ``port`` is ``None`` when the URL uses the scheme's default port.
    """

    scheme: str
    host: str = ""
    port: int | None = None
    path: str = "/"
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, url: str) -> URL:
        """Parse an absolute URL string."""
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        port = parts.port
        if port is not None and _DEFAULT_PORTS.get(scheme) == port:
            port = None
        return cls(
            scheme=scheme,
            host=(parts.hostname or "").lower(),
            port=port,
            path=parts.path or ("/" if parts.netloc else ""),
            query=parts.query,
            fragment=parts.fragment,
        )

    @property
    def netloc(self) -> str:
        """``host[:port]``, with the port omitted when it is the default."""
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def origin(self) -> str:
        """``scheme://host[:port]``, or ``"null"`` for host-less URLs."""
        if not self.host:
            return "null"
        return f"{self.scheme}://{self.netloc}"

    @property
    def params(self) -> QueryParams:
        """The query string, parsed."""
        return QueryParams(self.query)

    @property
    def href(self) -> str:
        """The full URL as a string."""
        if self.host:
            url = f"{self.scheme}://{self.netloc}{self.path}"
        else:
            url = f"{self.scheme}:{self.path}"
        if self.query:
            url = f"{url}?{self.query}"
        if self.fragment:
            url = f"{url}#{self.fragment}"
        return url

    @property
    def path_and_query(self) -> str:
        """Path plus ``?query`` when present (what navigation filters see)."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    def __str__(self) -> str:
        return self.href
