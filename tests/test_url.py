"""Tests for wayfinder.http.url: parsed absolute URLs."""

import pytest

from wayfinder.http.url import URL


class TestParse:
    def test_parts(self) -> None:
        url = URL.parse("https://Example.com:8443/a/b?x=1#top")
        assert url.scheme == "https"
        assert url.host == "example.com"
        assert url.port == 8443
        assert url.path == "/a/b"
        assert url.query == "x=1"
        assert url.fragment == "top"

    def test_default_port_dropped(self) -> None:
        assert URL.parse("http://example.com:80/").port is None
        assert URL.parse("https://example.com:443/").port is None

    def test_empty_path_becomes_root(self) -> None:
        assert URL.parse("https://example.com").path == "/"

    def test_non_http_scheme(self) -> None:
        url = URL.parse("chrome-extension://abcdef/popup.html")
        assert url.scheme == "chrome-extension"
        assert url.path == "/popup.html"

    def test_frozen(self) -> None:
        url = URL.parse("https://example.com/")
        with pytest.raises(AttributeError):
            url.path = "/other"  # type: ignore[misc]


class TestComputed:
    def test_origin(self) -> None:
        assert URL.parse("https://example.com:8443/a").origin == "https://example.com:8443"
        assert URL.parse("https://example.com/a").origin == "https://example.com"

    def test_origin_without_host(self) -> None:
        assert URL.parse("data:text/plain,hi").origin == "null"

    def test_href_round_trip(self) -> None:
        raw = "https://example.com:8443/a/b?x=1#top"
        assert URL.parse(raw).href == raw
        assert str(URL.parse(raw)) == raw

    def test_path_and_query(self) -> None:
        assert URL.parse("https://example.com/a?b=1").path_and_query == "/a?b=1"
        assert URL.parse("https://example.com/a").path_and_query == "/a"

    def test_params(self) -> None:
        params = URL.parse("https://example.com/?tag=a&tag=b&q=").params
        assert params["tag"] == "a"
        assert params.get_list("tag") == ["a", "b"]
        assert params["q"] == ""
