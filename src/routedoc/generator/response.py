"""Response shape resolution.

Route owners describe responses loosely, usually as ``{"data": <shape>}``.
``build_response_schema`` turns any accepted shorthand into the canonical
``{success, message, code, data}`` envelope. A payload without a ``data``
key is documented as a bare object instead, without the envelope; legacy
routes rely on that shape.
"""

from typing import Any


def runtime_type(value: Any) -> str:
    """OpenAPI type name for a literal example value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def literal_schema(value: Any) -> dict:
    if value is None:
        return {"type": "null"}
    return {"type": runtime_type(value), "example": value}


def envelope(data_schema: dict) -> dict:
    return {
        "type": "object",
        "properties": {
            "success": {"type": "boolean", "example": True},
            "message": {"type": "string", "example": "Operation successful"},
            "code": {"type": "integer", "example": 200},
            "data": data_schema,
        },
    }


def _drop_absent(schema: dict) -> dict:
    return {k: v for k, v in schema.items() if v is not None}


def _array_items(items: Any) -> dict:
    if not isinstance(items, dict):
        return {"type": "string"}
    if items.get("type") == "object":
        return {"type": "object", "properties": expand_properties(items.get("properties") or {})}
    example = items.get("example")
    return {"type": items.get("type") or "string", "example": "" if example is None else example}


def _expand_value(value: Any) -> dict:
    if not isinstance(value, dict):
        return literal_schema(value)

    if value.get("type") == "array":
        return _drop_absent({
            "type": "array",
            "items": _array_items(value.get("items")),
            "description": value.get("description"),
        })

    if value.get("type") == "object":
        return _drop_absent({
            "type": "object",
            "properties": expand_properties(value.get("properties") or {}),
            "description": value.get("description"),
        })

    return _drop_absent({
        "type": value.get("type"),
        "example": value.get("example"),
        "description": value.get("description"),
        "enum": value.get("enum"),
        "default": value.get("default"),
    })


def expand_properties(properties: Any) -> dict:
    """Expand a ``{name: schema-or-literal}`` mapping into OpenAPI properties."""
    if not isinstance(properties, dict):
        return literal_schema(properties)
    return {key: _expand_value(value) for key, value in properties.items()}


def _resolve_data(data: Any) -> dict | None:
    """Schema for the envelope's ``data`` member, or None when no shorthand fits."""
    if data is None:
        return {"type": "null"}

    if not isinstance(data, (dict, list)):
        return literal_schema(data)

    if isinstance(data, list):
        data = {"items": data}

    items = data.get("items")

    # a list of example values: the first one decides the item type
    if isinstance(items, list):
        first = items[0] if items else None
        if isinstance(first, dict) and first.get("type"):
            item_schema = {"type": first["type"], "example": first.get("example")}
        elif first is not None and not isinstance(first, (dict, list)):
            item_schema = literal_schema(first)
        else:
            item_schema = {"type": "string"}
        return {"type": "array", "items": item_schema}

    if isinstance(items, dict) and items.get("type"):
        return {"type": "array", "items": _array_items(items)}

    properties = data.get("properties")
    if isinstance(properties, dict) or properties:
        return {"type": "object", "properties": expand_properties(properties)}

    if data.get("type") == "array":
        return {"type": "array", "items": _array_items(items if isinstance(items, dict) else {})}

    return None


def build_response_schema(response_schema: Any) -> dict:
    """Canonical 200 response schema for a route's declared response shape."""
    if not isinstance(response_schema, dict):
        return {}

    if "data" in response_schema:
        data_schema = _resolve_data(response_schema["data"])
        if data_schema is not None:
            return envelope(data_schema)

    return {"type": "object", "properties": expand_properties(response_schema)}
