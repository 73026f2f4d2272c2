"""Tests for crumbs.request: properties and cookie accessors."""

import pytest

from crumbs.config import CookieConfig
from crumbs.exceptions import ConfigurationError
from crumbs.request import Request

from tests.conftest import make_receive, make_scope


class TestRequestProperties:
    """Basic request property access."""

    def test_method(self) -> None:
        req = Request(make_scope(method="POST"), make_receive())
        assert req.method == "POST"

    def test_path(self) -> None:
        req = Request(make_scope(path="/hello"), make_receive())
        assert req.path == "/hello"

    def test_headers(self) -> None:
        req = Request(make_scope(headers={"X-Custom": "val"}), make_receive())
        assert req.headers["x-custom"] == "val"
        assert req.get_header("X-Custom") == "val"
        assert req.get_header("missing", "-") == "-"

    def test_repeated_cookie_headers_are_joined(self) -> None:
        scope = make_scope()
        scope["headers"] = [(b"cookie", b"a=1"), (b"cookie", b"b=2")]
        assert Request(scope).get_header("cookie") == "a=1; b=2"

    def test_receive_is_optional(self) -> None:
        assert Request(make_scope(path="/x")).path == "/x"


class TestCookieAccess:
    def test_cookie_without_middleware(self) -> None:
        req = Request(make_scope(), make_receive())
        with pytest.raises(ConfigurationError):
            req.cookie

    def test_unsign_cookie_without_middleware(self) -> None:
        req = Request(make_scope(), make_receive())
        with pytest.raises(ConfigurationError):
            req.unsign_cookie("bob.sig")

    def test_cookie_from_scope(self) -> None:
        config = CookieConfig.build(secret="abc")
        scope = make_scope(headers={"Cookie": "foo=bar; baz=qux"})
        req = Request(scope, make_receive())
        scope["cookie"] = config.new_jar(lambda: req.get_header("cookie"))
        scope["unsign_cookie"] = config.key_ring.unsign_cookie

        assert req.cookie["foo"] == "bar"
        assert req.cookie["baz"] == "qux"
        assert req.unsign_cookie("bar.nope") == (False, None)
