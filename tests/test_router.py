"""Tests for routebook.routing.router: trie router behind the Mux contract."""

import pytest

from routebook.errors import ConfigurationError, MethodNotAllowed, NotFound
from routebook.routing.router import Router, parse_path


def _handler() -> str:
    return "ok"


def _other() -> str:
    return "other"


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        assert parse_path("/users/{id:int}")[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{param}" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_path("/items/{id:uuid}")


class TestMuxContract:
    @pytest.mark.parametrize("method", ["HEAD", "GET", "POST", "PUT", "PATCH", "DELETE"])
    def test_method_binders(self, method: str) -> None:
        r = Router()
        getattr(r, method.lower())("/things", _handler)
        match = r.match(method, "/things")
        assert match.binding.method == method
        assert match.binding.handler is _handler

    def test_paths_across_methods(self) -> None:
        r = Router()
        r.get("/a", _handler)
        r.post("/a", _handler)
        r.delete("/b/{id}", _handler)
        assert r.paths() == frozenset({"/a", "/b/{id}"})

    def test_bindings_in_order(self) -> None:
        r = Router()
        r.post("/b", _handler)
        r.get("/a", _handler)
        assert [(b.method, b.path) for b in r.bindings] == [("POST", "/b"), ("GET", "/a")]

    def test_rebinding_replaces_handler(self) -> None:
        r = Router()
        r.get("/a", _handler)
        r.get("/a", _other)
        assert r.match("GET", "/a").binding.handler is _other


class TestMatching:
    def test_root(self) -> None:
        r = Router()
        r.get("/", _handler)
        assert r.match("GET", "/").path_params == {}

    def test_trailing_slash_ignored(self) -> None:
        r = Router()
        r.get("/users", _handler)
        assert r.match("GET", "/users/").binding.path == "/users"

    def test_string_param(self) -> None:
        r = Router()
        r.get("/users/{name}", _handler)
        assert r.match("GET", "/users/alice").path_params == {"name": "alice"}

    def test_int_param_converted(self) -> None:
        r = Router()
        r.get("/users/{id:int}", _handler)
        assert r.match("GET", "/users/42").path_params == {"id": 42}

    def test_int_param_rejects_non_digit(self) -> None:
        r = Router()
        r.get("/users/{id:int}", _handler)
        with pytest.raises(NotFound):
            r.match("GET", "/users/alice")

    def test_float_param(self) -> None:
        r = Router()
        r.get("/price/{amount:float}", _handler)
        assert r.match("GET", "/price/9.99").path_params == {"amount": 9.99}

    def test_path_param(self) -> None:
        r = Router()
        r.get("/files/{filepath:path}", _handler)
        match = r.match("GET", "/files/docs/api/index.html")
        assert match.path_params == {"filepath": "docs/api/index.html"}

    def test_static_preferred_over_param(self) -> None:
        r = Router()
        r.get("/users/me", _other)
        r.get("/users/{id}", _handler)
        assert r.match("GET", "/users/me").binding.handler is _other
        assert r.match("GET", "/users/42").binding.handler is _handler


class TestErrors:
    def test_not_found(self) -> None:
        r = Router()
        r.get("/users", _handler)
        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/nonexistent")
        assert exc_info.value.status == 404

    def test_method_not_allowed(self) -> None:
        r = Router()
        r.get("/users", _handler)
        r.head("/users", _handler)
        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("POST", "/users")
        err = exc_info.value
        assert err.status == 405
        assert dict(err.headers)["Allow"] == "GET, HEAD"
