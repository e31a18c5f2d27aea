"""The binding contract between a service and a request multiplexer."""

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Mux(Protocol):
    """Anything a ``Service`` can bind its dispatch table into.

    One binding call per supported method, plus ``paths()`` so the
    service can check whether a path is already taken before adding
    its own endpoints.
    """

    def head(self, path: str, handler: Callable[..., Any]) -> None: ...

    def get(self, path: str, handler: Callable[..., Any]) -> None: ...

    def post(self, path: str, handler: Callable[..., Any]) -> None: ...

    def put(self, path: str, handler: Callable[..., Any]) -> None: ...

    def patch(self, path: str, handler: Callable[..., Any]) -> None: ...

    def delete(self, path: str, handler: Callable[..., Any]) -> None: ...

    def paths(self) -> Iterable[str]:
        """Every path bound so far, across all methods."""
        ...
