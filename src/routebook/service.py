"""Service registry.

A ``Service`` owns a root path, an ordered list of frozen routes, and the
service-level documentation. It is populated once during setup and then
read-only: ``dispatch_table()`` can be called any number of times, each
call binding the current routes into a mux.

Basic usage::

    service = Service().path("/api").doc("Document store")
    service.route(service.get("/docs/{id}").to(show_doc).doc("Fetch one document"))
    router = service.dispatch_table()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import IO, Any

from routebook.builder import RouteBuilder, normalize_doc
from routebook.config import DocConfig
from routebook.docs import render_json, render_markdown
from routebook.http.response import Response
from routebook.route import Route, concat_path
from routebook.routing.mux import Mux
from routebook.routing.router import Router

logger = logging.getLogger("routebook.service")

# Methods dispatch_table() binds; anything else is documented only
BINDABLE_METHODS = frozenset({"HEAD", "GET", "POST", "PUT", "PATCH", "DELETE"})


class Service:
    """Aggregates routes under a root path and documents them."""

    __slots__ = ("_documentation", "_root_path", "_routes", "config")

    def __init__(self, config: DocConfig | None = None) -> None:
        self.config: DocConfig = config or DocConfig()
        self._root_path = "/"
        self._routes: list[Route] = []
        self._documentation = ""

    # -- Setup --

    def path(self, root: str) -> Service:
        """Set the root path. All routes are relative to it."""
        self._root_path = root
        return self

    def doc(self, plain_text: str) -> Service:
        """Set the service documentation. Indentation after newlines is stripped."""
        self._documentation = normalize_doc(plain_text)
        return self

    def route(self, builder: RouteBuilder) -> Service:
        """Build the route under this service's root and append it to the route list."""
        route = builder._rebase(self._root_path).build()
        self._routes.append(route)
        logger.debug("Declared %s", route)
        return self

    # -- Accessors --

    def root_path(self) -> str:
        return self._root_path

    def documentation(self) -> str:
        return self._documentation

    def routes(self) -> list[Route]:
        return list(self._routes)

    # -- Builder shortcuts --

    def method(self, http_method: str) -> RouteBuilder:
        """A new builder under this service's root with *http_method* preset."""
        return RouteBuilder(self._root_path).method(http_method)

    def head(self, sub_path: str) -> RouteBuilder:
        return self.method("HEAD").path(sub_path)

    def get(self, sub_path: str) -> RouteBuilder:
        return self.method("GET").path(sub_path)

    def post(self, sub_path: str) -> RouteBuilder:
        return self.method("POST").path(sub_path)

    def put(self, sub_path: str) -> RouteBuilder:
        return self.method("PUT").path(sub_path)

    def patch(self, sub_path: str) -> RouteBuilder:
        return self.method("PATCH").path(sub_path)

    def options(self, sub_path: str) -> RouteBuilder:
        """OPTIONS routes are documented but never bound by ``dispatch_table()``."""
        return self.method("OPTIONS").path(sub_path)

    def delete(self, sub_path: str) -> RouteBuilder:
        return self.method("DELETE").path(sub_path)

    # -- Dispatch --

    def dispatch_table(self, mux: Mux | None = None) -> Mux:
        """Bind every declared route into *mux* and add the implicit endpoints.

        Routes with a method outside HEAD/GET/POST/PUT/PATCH/DELETE are
        left unbound. The ``/md``, ``/jsondoc`` and ``/health`` endpoints
        are added under the root only where no declared route already
        holds that exact path.
        """
        if mux is None:
            mux = Router()

        for route in self._routes:
            match route.method:
                case "HEAD":
                    mux.head(route.path, route.handler)
                case "GET":
                    mux.get(route.path, route.handler)
                case "POST":
                    mux.post(route.path, route.handler)
                case "PUT":
                    mux.put(route.path, route.handler)
                case "PATCH":
                    mux.patch(route.path, route.handler)
                case "DELETE":
                    mux.delete(route.path, route.handler)
                case _:
                    logger.debug("Not binding %s: unsupported method", route)
                    continue
            logger.debug("Bound %s", route)

        implicit: list[tuple[str, Callable[..., Any]]] = [
            (self.config.markdown_path, self.get_doc_md),
            (self.config.json_path, self.get_json_doc),
            (self.config.health_path, self.get_health),
        ]
        taken = set(mux.paths())
        for sub_path, handler in implicit:
            path = concat_path(self._root_path, sub_path)
            if path in taken:
                logger.debug("Skipping implicit GET %s: path already bound", path)
                continue
            mux.get(path, handler)
            taken.add(path)

        return mux

    # -- Implicit handlers --

    def get_doc_md(self) -> Response:
        return Response(render_markdown(self), content_type="text/markdown; charset=utf-8")

    def get_json_doc(self) -> Response:
        return Response(render_json(self), content_type="application/json")

    def get_health(self) -> Response:
        return Response(self.config.health_body)

    # -- Documentation output --

    def generate_documentation(self, stream: IO[str]) -> None:
        """Write the Markdown documentation to *stream*."""
        stream.write(render_markdown(self))

    def generate_json_doc(self, stream: IO[str]) -> None:
        """Write the JSON route list to *stream*."""
        stream.write(render_json(self))
