"""Document assembler: RouteDescriptors -> OpenAPI ``paths`` object."""

from typing import Iterable

from routedoc.generator.response import build_response_schema, expand_properties
from routedoc.parser.base import ParameterDescriptor, RouteDescriptor

SECURITY = [{"BearerAuth": []}]


def _parameter(param: ParameterDescriptor) -> dict:
    result = {
        "name": param.name,
        "in": param.location,
        "required": param.required,
        "description": param.description or "",
        "schema": param.field_schema,
    }
    if param.location == "query":
        result["allowEmptyValue"] = not param.required
    return result


def build_operation(route: RouteDescriptor) -> dict:
    """OpenAPI operation object for one route."""
    tags = route.tag if isinstance(route.tag, list) else [route.tag]
    operation: dict = {
        "summary": route.summary,
        "description": route.description,
        "tags": tags,
        "security": [dict(s) for s in SECURITY],
    }

    if route.parameters:
        operation["parameters"] = [_parameter(p) for p in route.parameters]

    if route.method.upper() != "GET" and route.request_body_schema:
        operation["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": expand_properties(route.request_body_schema),
                    },
                },
            },
        }

    operation["responses"] = {
        "200": {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "schema": build_response_schema(route.response_schema),
                },
            },
        },
        "400": {"description": "Bad request, invalid parameters"},
        "500": {"description": "Internal server error"},
    }
    return operation


def assemble_paths(routes: Iterable[RouteDescriptor]) -> dict[str, dict[str, dict]]:
    """Fold routes into ``{path: {method: operation}}``.

    A later route with the same path and method replaces the earlier one.
    """
    paths: dict[str, dict[str, dict]] = {}
    for route in routes:
        paths.setdefault(route.path, {})[route.method.lower()] = build_operation(route)
    return paths
