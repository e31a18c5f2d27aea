"""Markdown documentation for a service.

The document is rendered by a kida template compiled once per process.
Route data is flattened into small view objects first so the template
only loops and tests for emptiness.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING

from kida import Environment

from routebook.route import Route

if TYPE_CHECKING:
    from kida.template import Template

    from routebook.config import DocConfig
    from routebook.service import Service

_NOT_ANCHOR = re.compile(r"[^\w\- ]")

MARKDOWN_TEMPLATE = """\
---
# `{{ root_path }}`

{% if documentation %}
{{ documentation }}

{% end %}
{% if routes %}
{% for route in routes %}
* [{{ route.title }}](#{{ route.anchor }})
{% end %}

{% end %}
{% for route in routes %}
---
## {{ route.title }}

### `{{ route.method }} {{ route.path }}`

{% if route.doc %}
_{{ route.doc }}_

{% end %}
{% if route.notes %}
{{ route.notes }}

{% end %}
{% if route.parameters %}
_**Parameters:**_

Name | Kind | Description | DataType
---- | ---- | ----------- | --------
{% for p in route.parameters %}
 {{ p.name }} | {{ p.kind }} | {{ p.description }} | {{ p.data_type }}
{% end %}

{% end %}
{% if route.consumes %}
_**Consumes:**_ `{{ route.consumes }}`

{% end %}
{% if route.reads %}
_**Reads:**_
```{{ route.code_format }}
        {{ route.reads }}
```

{% end %}
{% if route.produces %}
_**Produces:**_ `{{ route.produces }}`

{% end %}
{% if route.writes %}
_**Writes:**_
```{{ route.code_format }}
        {{ route.writes }}
```

{% end %}
{% if route.errors %}
_**Error returns:**_

Code | Meaning
---- | --------
{% for e in route.errors %}
 {{ e.code }} | {{ e.message }}
{% end %}

{% end %}
{% end %}
"""


@dataclass(frozen=True, slots=True)
class _ParameterView:
    name: str
    kind: str
    description: str
    data_type: str


@dataclass(frozen=True, slots=True)
class _ErrorView:
    code: int
    message: str


@dataclass(frozen=True, slots=True)
class _RouteView:
    title: str
    anchor: str
    method: str
    path: str
    doc: str
    notes: str
    parameters: tuple[_ParameterView, ...]
    consumes: str
    produces: str
    code_format: str
    reads: str
    writes: str
    errors: tuple[_ErrorView, ...]


@cache
def _template() -> Template:
    env = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)
    return env.from_string(MARKDOWN_TEMPLATE)


def _anchor(title: str) -> str:
    """GitHub heading anchor: lowercased, punctuation dropped, spaces to hyphens."""
    return _NOT_ANCHOR.sub("", title.lower()).replace(" ", "-")


def _route_view(route: Route, config: DocConfig) -> _RouteView:
    parameters = tuple(
        _ParameterView(
            name=d.name,
            kind=d.parameter_kind(),
            description=d.description,
            data_type=d.data_type,
        )
        for d in (p.data() for p in route.parameters)
    )
    errors = tuple(
        _ErrorView(code=code, message=err.message)
        for code, err in sorted(route.response_errors.items())
    )
    title = route.operation or str(route)
    return _RouteView(
        title=title,
        anchor=_anchor(title),
        method=route.method,
        path=route.path,
        doc=route.doc,
        notes=route.notes,
        parameters=parameters,
        consumes=", ".join(route.consumes),
        produces=", ".join(route.produces),
        code_format=route.code_format(),
        reads=route.reads(indent=config.json_indent, prefix=config.sample_prefix),
        writes=route.writes(indent=config.json_indent, prefix=config.sample_prefix),
        errors=errors,
    )


def render_markdown(service: Service) -> str:
    """Render the service's documentation as GitHub-flavored Markdown."""
    context = {
        "root_path": service.root_path(),
        "documentation": service.documentation(),
        "routes": [_route_view(r, service.config) for r in service.routes()],
    }
    return _template().render(context)
