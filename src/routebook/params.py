"""Request parameter documentation.

A ``Parameter`` describes one documented request parameter. Each kind has
its own factory which fixes the kind and seeds sensible defaults; the
chained setters then refine the description::

    path_parameter("id", "The document id").data_type("integer")

``ParameterData`` is immutable. Setters swap in an updated copy, so a
snapshot taken by ``RouteBuilder.build()`` never changes afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Any

from routebook.errors import ConfigurationError


class ParameterKind(IntEnum):
    """Where a parameter travels in the request."""

    PATH = 0
    QUERY = 1
    BODY = 2
    HEADER = 3
    FORM = 4


_KIND_NAMES: dict[int, str] = {
    ParameterKind.PATH: "Path",
    ParameterKind.QUERY: "Query",
    ParameterKind.BODY: "Body",
    ParameterKind.HEADER: "Header",
    ParameterKind.FORM: "Form",
}


@dataclass(frozen=True, slots=True)
class ParameterData:
    """The state of a Parameter."""

    name: str
    description: str = ""
    data_type: str = ""
    data_format: str = ""
    kind: int = ParameterKind.PATH
    required: bool = False
    allowable_values: Mapping[str, str] | None = None
    allow_multiple: bool = False
    default_value: str = ""

    def parameter_kind(self) -> str:
        """Return the kind as a display string, ``"Unknown"`` if out of range."""
        return _KIND_NAMES.get(self.kind, "Unknown")


class Parameter:
    """A documented request parameter with a chainable setter API.

    A frozen parameter (see ``freeze()``) belongs to a built route and
    rejects every setter with ``ConfigurationError``.
    """

    __slots__ = ("_data", "_frozen")

    def __init__(self, data: ParameterData, *, frozen: bool = False) -> None:
        self._data = data
        self._frozen = frozen

    def __repr__(self) -> str:
        return f"Parameter({self._data.name!r}, kind={self._data.parameter_kind()})"

    def data(self) -> ParameterData:
        return self._data

    def kind(self) -> int:
        return self._data.kind

    def freeze(self) -> Parameter:
        """A read-only copy sharing the current data."""
        return Parameter(self._data, frozen=True)

    def _update(self, **changes: Any) -> Parameter:
        if self._frozen:
            msg = f"Parameter {self._data.name!r} belongs to a built route and cannot be changed"
            raise ConfigurationError(msg)
        self._data = replace(self._data, **changes)
        return self

    # -- Chainable setters --

    def required(self, required: bool) -> Parameter:
        return self._update(required=required)

    def allow_multiple(self, multiple: bool) -> Parameter:
        return self._update(allow_multiple=multiple)

    def allowable_values(self, values: Mapping[str, str]) -> Parameter:
        return self._update(allowable_values=MappingProxyType(dict(values)))

    def data_type(self, type_name: str) -> Parameter:
        return self._update(data_type=type_name)

    def data_format(self, format_name: str) -> Parameter:
        """Set a format hint such as ``"int64"`` or ``"date-time"``."""
        return self._update(data_format=format_name)

    def default_value(self, string_representation: str) -> Parameter:
        return self._update(default_value=string_representation)

    def description(self, doc: str) -> Parameter:
        return self._update(description=doc)


# -- Kind-specific factories --


def path_parameter(name: str, description: str = "") -> Parameter:
    """Create a Path parameter. Required, typed ``"string"``."""
    return Parameter(
        ParameterData(
            name=name,
            description=description,
            data_type="string",
            kind=ParameterKind.PATH,
            required=True,
        )
    )


def query_parameter(name: str, description: str = "") -> Parameter:
    """Create a Query parameter. Optional, typed ``"string"``."""
    return Parameter(
        ParameterData(
            name=name,
            description=description,
            data_type="string",
            kind=ParameterKind.QUERY,
        )
    )


def body_parameter(name: str, description: str = "") -> Parameter:
    """Create a Body parameter. Required, untyped."""
    return Parameter(
        ParameterData(
            name=name,
            description=description,
            kind=ParameterKind.BODY,
            required=True,
        )
    )


def header_parameter(name: str, description: str = "") -> Parameter:
    """Create an HTTP header parameter. Optional, typed ``"string"``."""
    return Parameter(
        ParameterData(
            name=name,
            description=description,
            data_type="string",
            kind=ParameterKind.HEADER,
        )
    )


def form_parameter(name: str, description: str = "") -> Parameter:
    """Create a Form parameter (``application/x-www-form-urlencoded``).

    Optional, typed ``"string"``.
    """
    return Parameter(
        ParameterData(
            name=name,
            description=description,
            data_type="string",
            kind=ParameterKind.FORM,
        )
    )
