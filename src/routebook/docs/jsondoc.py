"""Structured route list.

Each route becomes a plain dict with a stable key layout. Handlers,
response errors, and samples are left out.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from routebook.params import Parameter
from routebook.route import Route

if TYPE_CHECKING:
    from routebook.service import Service


def parameter_to_dict(parameter: Parameter) -> dict[str, Any]:
    data = parameter.data()
    return {
        "data": {
            "name": data.name,
            "description": data.description,
            "datatype": data.data_type,
            "dataformat": data.data_format,
            "kind": int(data.kind),
            "required": data.required,
            "allowablevalues": (
                dict(data.allowable_values) if data.allowable_values is not None else None
            ),
            "allowmultiple": data.allow_multiple,
            "defaultvalue": data.default_value,
        }
    }


def route_to_dict(route: Route) -> dict[str, Any]:
    return {
        "method": route.method,
        "path": route.path,
        "doc": route.doc,
        "notes": route.notes,
        "operation": route.operation,
        "consumes": list(route.consumes),
        "produces": list(route.produces),
        "parms": [parameter_to_dict(p) for p in route.parameters],
    }


def render_json(service: Service) -> str:
    """Serialize the service's routes, in registration order, as a JSON array."""
    return json.dumps([route_to_dict(r) for r in service.routes()])
