"""Trie-based router implementing the ``Mux`` binding contract.

Handlers are bound per method during setup; requests are matched in
O(path-depth) by walking static, parameter, and catch-all edges.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from routebook.errors import ConfigurationError, MethodNotAllowed, NotFound

_FLASK_STYLE = re.compile(r"<[^>]+>")

# Segment converter -> (regex pattern, python type)
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Binding:
    """One (method, path) -> handler entry."""

    method: str
    path: str
    handler: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match. Path params are already converted."""

    binding: Binding
    path_params: dict[str, Any]


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for ``<param>`` style segments or
    unknown converters.
    """
    if _FLASK_STYLE.search(path):
        msg = f"Route path {path!r} uses <param> syntax; use {{param}} instead."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in route path {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("bindings_by_method", "catch_all", "children", "param_child")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (path converter)
        self.catch_all: _CatchAllEdge | None = None
        # Bindings at this node, keyed by HTTP method
        self.bindings_by_method: dict[str, Binding] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge that consumes the remaining path."""

    param_name: str
    bindings_by_method: dict[str, Binding]


class Router:
    """Trie-based router.

    Usage::

        router = Router()
        router.get("/users", list_users)
        router.get("/users/{id:int}", show_user)
        match = router.match("GET", "/users/42")
        match.binding.handler(**match.path_params)
    """

    __slots__ = ("_bindings", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._bindings: list[Binding] = []

    # -- Mux contract --

    def head(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("HEAD", path, handler)

    def get(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("GET", path, handler)

    def post(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("POST", path, handler)

    def put(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("PUT", path, handler)

    def patch(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("PATCH", path, handler)

    def delete(self, path: str, handler: Callable[..., Any]) -> None:
        self.add("DELETE", path, handler)

    def paths(self) -> frozenset[str]:
        return frozenset(b.path for b in self._bindings)

    # -- Registration --

    def add(self, method: str, path: str, handler: Callable[..., Any]) -> None:
        """Bind *handler* to (*method*, *path*). A later binding replaces an earlier one."""
        binding = Binding(method=method, path=path, handler=handler)
        node = self._root

        for seg in parse_path(path):
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        bindings_by_method={},
                    )
                node.catch_all.bindings_by_method[method] = binding
                self._record(binding)
                return

            if seg.is_param:
                if node.param_child is None:
                    pattern, _ = CONVERTERS[seg.param_type]
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=re.compile(f"^{pattern}$"),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        node.bindings_by_method[method] = binding
        self._record(binding)

    def _record(self, binding: Binding) -> None:
        key = (binding.method, binding.path)
        self._bindings = [b for b in self._bindings if (b.method, b.path) != key]
        self._bindings.append(binding)

    @property
    def bindings(self) -> list[Binding]:
        """All bindings in the order they were added."""
        return list(self._bindings)

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against bound handlers.

        Raises ``NotFound`` if no binding matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})

        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        bindings, raw_params = result
        if method not in bindings:
            raise MethodNotAllowed(frozenset(bindings))

        binding = bindings[method]
        return RouteMatch(binding=binding, path_params=self._convert(binding.path, raw_params))

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[dict[str, Binding], dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.bindings_by_method:
                return node.bindings_by_method, params
            return None

        part = parts[index]

        # 1. Static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            new_params = {**params, node.catch_all.param_name: remaining}
            return node.catch_all.bindings_by_method, new_params

        return None

    @staticmethod
    def _convert(path: str, raw: dict[str, str]) -> dict[str, Any]:
        """Convert captured strings using the converters declared in *path*."""
        types = {s.param_name: s.param_type for s in parse_path(path) if s.is_param}
        return {
            name: CONVERTERS[types.get(name, "str")][1](value) for name, value in raw.items()
        }
