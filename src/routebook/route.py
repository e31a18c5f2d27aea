"""Route, ResponseError, and Sample frozen dataclasses.

A ``Route`` binds a method and path to a handler and carries the
documentation for that endpoint. It also exposes the two derived views
used by the documentation renderer: the code-format tag and the rendered
read/write samples.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from routebook.params import Parameter

logger = logging.getLogger("routebook.docs")

# Media type -> fenced code block language
_CODE_FORMATS: dict[str, str] = {
    "text/plain": "text",
    "text/markdown": "markdown",
    "text/html": "html",
    "application/json": "json",
}

_READ_TEXT_TYPES = frozenset({"text/plain", "text/markdown", "text/html"})
_WRITE_TEXT_TYPES = frozenset({"text/plain"})
_JSON_TYPES = frozenset({"application/json"})

_DEFAULT_PREFIX = " " * 8


def concat_path(root: str, sub: str) -> str:
    """Join a root and a sub path with exactly one separating slash.

    ::

        concat_path("/api/", "/widgets") -> "/api/widgets"
        concat_path("/", "foo")          -> "/foo"
    """
    return root.rstrip("/") + "/" + sub.lstrip("/")


def _encode_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Sample:
    """An example payload: either a string or a structured value.

    The renderer picks a representation from the route's media types,
    not from the payload's shape. Each accessor returns ``None`` when
    the payload cannot be shown that way.
    """

    value: Any

    def as_text(self) -> str | None:
        if isinstance(self.value, str):
            return self.value
        return None

    def as_json(self, *, indent: int = 2, prefix: str = _DEFAULT_PREFIX) -> str | None:
        """Serialize with sorted keys; continuation lines start with *prefix*."""
        try:
            text = json.dumps(self.value, indent=indent, sort_keys=True, default=_encode_default)
        except (TypeError, ValueError) as exc:
            logger.debug("Sample of type %s is not serializable: %s", type(self.value).__name__, exc)
            return None
        return text.replace("\n", "\n" + prefix)


@dataclass(frozen=True, slots=True)
class ResponseError:
    """A documented response for one status code."""

    code: int
    message: str
    model: Any = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Produced once by ``RouteBuilder.build()`` and appended to a
    ``Service``. The handler is an opaque reference and is never
    serialized.
    """

    method: str
    path: str
    handler: Callable[..., Any] = field(repr=False, compare=False)

    # Documentation
    doc: str = ""
    notes: str = ""
    operation: str = ""
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    response_errors: Mapping[int, ResponseError] = field(
        default_factory=lambda: MappingProxyType({})
    )
    read_sample: Sample | None = None
    write_sample: Sample | None = None

    def __str__(self) -> str:
        return f"{self.method} {self.path}"

    def code_format(self) -> str:
        """Fenced code block language for this route's samples."""
        for mime in self.consumes:
            if mime in _CODE_FORMATS:
                return _CODE_FORMATS[mime]
        return ""

    def reads(self, *, indent: int = 2, prefix: str = _DEFAULT_PREFIX) -> str:
        """Formatted example request payload, ``""`` if none renders."""
        return _render_sample(self.read_sample, self.consumes, _READ_TEXT_TYPES, indent, prefix)

    def writes(self, *, indent: int = 2, prefix: str = _DEFAULT_PREFIX) -> str:
        """Formatted example response payload, ``""`` if none renders."""
        return _render_sample(self.write_sample, self.produces, _WRITE_TEXT_TYPES, indent, prefix)


def _render_sample(
    sample: Sample | None,
    media_types: tuple[str, ...],
    text_types: frozenset[str],
    indent: int,
    prefix: str,
) -> str:
    """Render *sample* using the first media type that knows how.

    A text media type with a non-string sample ends the scan with ``""``.
    A JSON media type whose serialization fails moves on to the next one.
    """
    if sample is None:
        return ""
    for mime in media_types:
        if mime in text_types:
            text = sample.as_text()
            if text is None:
                logger.debug("Sample for %s is not a string", mime)
                return ""
            return text
        if mime in _JSON_TYPES:
            rendered = sample.as_json(indent=indent, prefix=prefix)
            if rendered is None:
                continue
            return rendered
    return ""
