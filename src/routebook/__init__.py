"""Routebook: declare HTTP endpoints once, get a dispatch table and docs.

A route declaration carries both dispatch information and documentation.
The service binds routes into a router and serves its own Markdown and
JSON documentation next to them.

Basic usage::

    from routebook import Service, path_parameter

    service = Service().path("/api").doc("Document store")
    service.route(
        service.get("/docs/{id}")
        .to(show_doc)
        .doc("Fetch one document")
        .param(path_parameter("id", "Document id"))
        .produces("application/json")
    )
    router = service.dispatch_table()  # also serves /api/md, /api/jsondoc, /api/health
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DocConfig",
    "MissingHandlerError",
    "Mux",
    "Parameter",
    "ParameterKind",
    "ResponseError",
    "Response",
    "Route",
    "RouteBuilder",
    "Router",
    "RoutebookError",
    "Service",
    "body_parameter",
    "form_parameter",
    "header_parameter",
    "path_parameter",
    "query_parameter",
    "render_json",
    "render_markdown",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routebook`` fast while providing a clean top-level API.
    """
    if name == "Service":
        from routebook.service import Service

        return Service

    if name == "RouteBuilder":
        from routebook.builder import RouteBuilder

        return RouteBuilder

    if name == "DocConfig":
        from routebook.config import DocConfig

        return DocConfig

    if name in ("Route", "ResponseError"):
        from routebook import route as _route

        return getattr(_route, name)

    if name in (
        "Parameter",
        "ParameterKind",
        "body_parameter",
        "form_parameter",
        "header_parameter",
        "path_parameter",
        "query_parameter",
    ):
        from routebook import params as _params

        return getattr(_params, name)

    if name in ("Mux", "Router"):
        from routebook import routing as _routing

        return getattr(_routing, name)

    if name == "Response":
        from routebook.http.response import Response

        return Response

    if name in ("render_json", "render_markdown"):
        from routebook import docs as _docs

        return getattr(_docs, name)

    if name in ("ConfigurationError", "MissingHandlerError", "RoutebookError"):
        from routebook import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
