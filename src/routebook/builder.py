"""Fluent route builder.

Mutable during service setup, frozen into a ``Route`` by ``build()``.
Every setter returns the builder itself so a whole declaration reads
as one chain::

    service.route(
        service.post("/docs")
        .to(create_doc)
        .doc("Create a document")
        .consumes("application/json")
        .reads(NewDoc(title="x"))
        .returns(400, "document is invalid")
    )
"""

from __future__ import annotations

import re
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from routebook.errors import MissingHandlerError
from routebook.params import Parameter, ParameterData, ParameterKind
from routebook.route import ResponseError, Route, Sample, concat_path

_INDENT_AFTER_NEWLINE = re.compile(r"\n[ \t]+")


def normalize_doc(text: str) -> str:
    """Strip the indentation that follows each newline.

    Lets source code indent documentation blocks without the
    indentation leaking into rendered output.
    """
    return _INDENT_AFTER_NEWLINE.sub("\n", text)


class RouteBuilder:
    """Accumulates one route's declaration, then freezes it with ``build()``."""

    __slots__ = (
        "_consumes",
        "_current_path",
        "_doc",
        "_error_map",
        "_handler",
        "_http_method",
        "_notes",
        "_operation",
        "_parameters",
        "_produces",
        "_read_sample",
        "_root_path",
        "_write_sample",
    )

    def __init__(self, root_path: str = "/") -> None:
        self._root_path = root_path
        self._current_path = ""
        self._http_method = ""
        self._handler: Callable[..., Any] | None = None
        self._consumes: tuple[str, ...] = ()
        self._produces: tuple[str, ...] = ()
        self._doc = ""
        self._notes = ""
        self._operation = ""
        self._read_sample: Sample | None = None
        self._write_sample: Sample | None = None
        self._parameters: list[Parameter] = []
        self._error_map: dict[int, ResponseError] = {}

    # -- Dispatch --

    def path(self, sub_path: str) -> RouteBuilder:
        """Path relative to the service root. Default is ``"/"``."""
        self._current_path = sub_path
        return self

    def method(self, http_method: str) -> RouteBuilder:
        self._http_method = http_method
        return self

    def to(self, handler: Callable[..., Any]) -> RouteBuilder:
        """Bind the route to a handler. Required."""
        self._handler = handler
        return self

    # -- Media types --

    def consumes(self, *mime_types: str) -> RouteBuilder:
        """Accepted media types, in order of preference."""
        self._consumes = mime_types
        return self

    def produces(self, *mime_types: str) -> RouteBuilder:
        """Produced media types, in order of preference."""
        self._produces = mime_types
        return self

    # -- Documentation --

    def doc(self, documentation: str) -> RouteBuilder:
        """Short description of the route. Indentation after newlines is stripped."""
        self._doc = normalize_doc(documentation)
        return self

    def notes(self, notes: str) -> RouteBuilder:
        """Verbose explanation of the route. Indentation after newlines is stripped."""
        self._notes = normalize_doc(notes)
        return self

    def operation(self, name: str) -> RouteBuilder:
        """Label used as the documentation title and anchor.

        Defaults to the handler's ``__name__`` when never called.
        """
        self._operation = name
        return self

    def reads(self, sample: Any) -> RouteBuilder:
        """Record an example request payload.

        Also adds a required Body parameter named ``"body"`` whose data
        type is the sample's type name.
        """
        self._read_sample = Sample(sample)
        body = Parameter(
            ParameterData(
                name="body",
                kind=ParameterKind.BODY,
                required=True,
                data_type=type(sample).__name__,
            )
        )
        return self.param(body)

    def writes(self, sample: Any) -> RouteBuilder:
        """Record an example response payload."""
        self._write_sample = Sample(sample)
        return self

    def param(self, parameter: Parameter) -> RouteBuilder:
        """Add a parameter. Duplicates are not checked."""
        self._parameters.append(parameter)
        return self

    def parameter_named(self, name: str) -> Parameter | None:
        """Return an already-added parameter, or ``None``."""
        for each in self._parameters:
            if each.data().name == name:
                return each
        return None

    def returns(self, code: int, message: str, model: Any = None) -> RouteBuilder:
        """Document a possible response. Redeclaring a code replaces it."""
        self._error_map[code] = ResponseError(code=code, message=message, model=model)
        return self

    def _rebase(self, root_path: str) -> RouteBuilder:
        """Place the route under *root_path*. Used by ``Service.route()``."""
        self._root_path = root_path
        return self

    # -- Freeze --

    def build(self) -> Route:
        """Create the frozen ``Route``.

        Raises ``MissingHandlerError`` if ``to()`` was never called.
        """
        if self._handler is None:
            raise MissingHandlerError(self._current_path)

        operation = self._operation or getattr(self._handler, "__name__", "")
        return Route(
            method=self._http_method,
            path=concat_path(self._root_path, self._current_path),
            handler=self._handler,
            doc=self._doc,
            notes=self._notes,
            operation=operation,
            consumes=self._consumes,
            produces=self._produces,
            parameters=tuple(p.freeze() for p in self._parameters),
            response_errors=MappingProxyType(dict(self._error_map)),
            read_sample=self._read_sample,
            write_sample=self._write_sample,
        )
