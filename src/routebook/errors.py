"""Routebook exception hierarchy.

Shared across the builder, service, router, and ASGI app so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class RoutebookError(Exception):
    """Base for all routebook-specific errors."""


class ConfigurationError(RoutebookError):
    """Raised when a service declaration is invalid.

    Surfaces while the service is being set up, before any request
    is served.
    """


class MissingHandlerError(ConfigurationError):
    """Raised by ``RouteBuilder.build()`` when no handler was bound via ``to()``."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No function specified for route: {path!r}")


@dataclass(frozen=True, slots=True)
class HTTPError(RoutebookError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when a request cannot be dispatched. The ASGI
    app turns these into plain-text responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
