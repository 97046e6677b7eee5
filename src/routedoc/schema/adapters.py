"""Adapters from concrete schema declarations into SchemaNode trees.

Two declaration styles are understood:

* the compact dict/YAML style used by registry files::

      id: {type: number, required: true}
      tags: {type: array, items: {type: string}}
      address: {type: object, properties: {city: string}}

* JSON Schema fragments, e.g. the output of pydantic's ``model_json_schema()``.
"""

from typing import Any

from routedoc.errors import SchemaDefinitionError
from routedoc.schema.nodes import ArrayNode, ObjectNode, ScalarNode, ValidationSchema

SECTIONS = ("body", "params", "query")

_SCALAR_KEYS = ("type", "enum", "default", "description")


def node_from_dict(spec: Any, required: bool | None = None):
    """Convert one compact field declaration into a SchemaNode."""
    if isinstance(spec, str):
        return ScalarNode(type=spec, required=bool(required))
    if not isinstance(spec, dict):
        raise SchemaDefinitionError(f"Unsupported field declaration: {spec!r}")

    if required is None:
        required = spec.get("required") is True or spec.get("presence") == "required"
    field_type = spec.get("type")
    description = spec.get("description")

    if field_type == "object" or (field_type is None and "properties" in spec):
        return ObjectNode(
            children=_children_from_dict(spec.get("properties") or {}, spec.get("required")),
            description=description,
            required=required,
        )

    if field_type == "array":
        items = spec.get("items")
        return ArrayNode(
            item=node_from_dict(items) if items is not None else None,
            description=description,
            required=required,
        )

    values = {key: spec[key] for key in _SCALAR_KEYS if key in spec}
    if "valid" in spec and "enum" not in values:
        values["enum"] = spec["valid"]
    return ScalarNode(required=required, **values)


def _children_from_dict(properties: dict, required_names: Any = None) -> dict:
    if not isinstance(properties, dict):
        raise SchemaDefinitionError(f"Expected a mapping of fields, got {type(properties).__name__}")
    names = set(required_names) if isinstance(required_names, list) else set()
    children = {}
    for name, child in properties.items():
        children[str(name)] = node_from_dict(child, required=True if name in names else None)
    return children


def section_from_dict(section: Any) -> ObjectNode | None:
    """A section is either a field mapping or a full object declaration."""
    if section is None:
        return None
    if isinstance(section, dict) and section.get("type") == "object":
        return node_from_dict(section)
    return ObjectNode(children=_children_from_dict(section))


def validation_schema_from_dict(spec: Any) -> ValidationSchema:
    """Build the body/params/query sections of one route schema."""
    if isinstance(spec, ValidationSchema):
        return spec
    if not isinstance(spec, dict):
        raise SchemaDefinitionError(f"Validation schema must be a mapping, got {type(spec).__name__}")
    return ValidationSchema(**{name: section_from_dict(spec.get(name)) for name in SECTIONS})


# -- JSON Schema ---------------------------------------------------------------


def node_from_json_schema(schema: dict, root: dict | None = None, required: bool = False):
    """Convert a JSON Schema fragment into a SchemaNode.

    Local ``$ref`` pointers are resolved against ``root`` (``$defs`` or
    ``definitions``), and ``anyOf``/``oneOf`` unions with a ``null`` branch
    collapse to their non-null member.
    """
    root = root if root is not None else schema
    schema = _resolve(schema, root)

    for union_key in ("anyOf", "oneOf"):
        if union_key in schema:
            branches = [_resolve(b, root) for b in schema[union_key]]
            concrete = [b for b in branches if b.get("type") != "null"]
            merged = dict(concrete[0]) if concrete else {"type": "null"}
            for key in ("default", "description"):
                if key in schema:
                    merged[key] = schema[key]
            return node_from_json_schema(merged, root, required)

    if "allOf" in schema and len(schema["allOf"]) == 1:
        merged = {**_resolve(schema["allOf"][0], root), **{k: v for k, v in schema.items() if k != "allOf"}}
        return node_from_json_schema(merged, root, required)

    field_type = schema.get("type")
    if isinstance(field_type, list):
        field_type = next((t for t in field_type if t != "null"), "string")
    description = schema.get("description")

    if field_type == "object" or (field_type is None and "properties" in schema):
        names = set(schema.get("required") or [])
        children = {
            name: node_from_json_schema(child, root, name in names)
            for name, child in (schema.get("properties") or {}).items()
        }
        return ObjectNode(children=children, description=description, required=required)

    if field_type == "array":
        items = schema.get("items")
        return ArrayNode(
            item=node_from_json_schema(items, root) if isinstance(items, dict) else None,
            description=description,
            required=required,
        )

    values: dict[str, Any] = {"type": field_type}
    if "enum" in schema:
        values["enum"] = list(schema["enum"])
    elif "const" in schema:
        values["enum"] = [schema["const"]]
    if "default" in schema:
        values["default"] = schema["default"]
    if description is not None:
        values["description"] = description
    return ScalarNode(required=required, **values)


def _resolve(schema: dict, root: dict) -> dict:
    ref = schema.get("$ref")
    if not ref:
        return schema
    if not ref.startswith("#/"):
        raise SchemaDefinitionError(f"Only local $ref pointers are supported: {ref}")
    target: Any = root
    for part in ref[2:].split("/"):
        if not isinstance(target, dict) or part not in target:
            raise SchemaDefinitionError(f"Unresolvable $ref: {ref}")
        target = target[part]
    return _resolve(target, root)


def validation_schema_from_json_schema(
    body: dict | None = None,
    params: dict | None = None,
    query: dict | None = None,
) -> ValidationSchema:
    """Build route sections from JSON Schema objects (one per section)."""
    sections = {}
    for name, schema in (("body", body), ("params", params), ("query", query)):
        if schema is None:
            continue
        node = node_from_json_schema(schema)
        if not isinstance(node, ObjectNode):
            raise SchemaDefinitionError(f"The {name} section must be an object schema")
        sections[name] = node
    return ValidationSchema(**sections)
