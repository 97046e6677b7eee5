"""Schema transcoder: SchemaNode -> OpenAPI schema with example values.

Every scalar leaf in the output carries an ``example``. Examples come from,
in order: the first enum value, the declared default, the field name, and
finally the field type.
"""

import copy
from datetime import datetime, timezone
from typing import Any

from routedoc.schema.nodes import ArrayNode, ObjectNode, ScalarNode

GENERIC_FIELD = {"type": "string", "example": "string", "description": "Generic string field"}


def example_from_key(key: str) -> Any:
    """Representative value for a field, guessed from its name."""
    lower_key = key.lower()
    if "id" in lower_key:
        return 125069
    if lower_key == "limit":
        return 10
    if lower_key == "start":
        return 0
    if lower_key == "email":
        return "user@example.com"
    if "date" in lower_key:
        return "2024-01-01"
    if "status" in lower_key:
        return "active"
    if "name" in lower_key:
        return "John Doe"
    return "example"


def description_from_key(key: str, route_tag: str) -> str:
    lower_key = key.lower()
    if lower_key == "custid":
        return f"Enter customer ID to fetch {route_tag}-related records."
    if lower_key == "limit":
        return f"Number of {route_tag} records to fetch."
    if lower_key == "start":
        return f"Starting index for {route_tag} pagination."
    if "status" in lower_key:
        return f"Status of the {route_tag} (e.g., active, inactive)."
    return f"{key[:1].upper()}{key[1:]} related to {route_tag}."


def example_from_type(field_type: str) -> Any:
    if field_type == "string":
        return "example string"
    if field_type in ("number", "integer"):
        return 123
    if field_type == "boolean":
        return True
    if field_type == "date":
        return datetime.now(timezone.utc).isoformat()
    return f"sample {field_type}"


def transcode(node: Any, key: str = "", route_tag: str = "") -> dict:
    """Convert ``node`` (and its children) into an OpenAPI schema dict."""
    if isinstance(node, ArrayNode):
        items = transcode(node.item, "", route_tag)
        return {
            "type": "array",
            "items": items,
            "example": [items.get("example")],
            "description": f"List of {key}s",
        }

    if isinstance(node, ObjectNode):
        properties = {}
        example = {}
        for sub_key, child in node.children.items():
            field = transcode(child, sub_key, route_tag)
            properties[sub_key] = field
            if field.get("example") is not None:
                example[sub_key] = field["example"]
        return {"type": "object", "properties": properties, "example": example}

    if not isinstance(node, ScalarNode):
        return dict(GENERIC_FIELD)

    field_type = node.type or "string"
    schema: dict[str, Any] = {"type": field_type}
    example = None

    if node.enum:
        schema["enum"] = list(node.enum)
        example = copy.deepcopy(node.enum[0])

    if node.has_default:
        schema["default"] = copy.deepcopy(node.default)
        if example is None:
            example = copy.deepcopy(node.default)

    if node.description:
        schema["description"] = node.description
    elif key:
        schema["description"] = description_from_key(key, route_tag)

    if example is None and key:
        example = example_from_key(key)
    if example is None:
        example = example_from_type(field_type)

    schema["example"] = example
    return schema
