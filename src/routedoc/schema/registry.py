"""Schema registry: module name -> schema name -> ValidationSchema.

Routes refer to their schema as ``"<Module>.<SchemaName>"``; this module
loads registries and resolves those references into request bodies and
parameters.
"""

import logging
from pathlib import Path
from typing import Any, Mapping

from routedoc.errors import SchemaDefinitionError
from routedoc.loader import load_document
from routedoc.parser.base import ParameterDescriptor
from routedoc.schema.adapters import validation_schema_from_dict
from routedoc.schema.nodes import ValidationSchema
from routedoc.schema.transcoder import transcode

logger = logging.getLogger("routedoc.schema.registry")

SchemaRegistry = dict[str, dict[str, ValidationSchema]]

_PARAMETER_LOCATIONS = {"params": "path", "query": "query"}


def build_registry(mapping: Mapping[str, Any] | None) -> SchemaRegistry:
    """Adapt a plain ``{module: {schema: sections}}`` mapping into a registry."""
    if mapping is None:
        return {}
    if not isinstance(mapping, Mapping):
        raise SchemaDefinitionError("Schema registry must be a mapping of modules")

    registry: SchemaRegistry = {}
    for module_name, schemas in mapping.items():
        if not isinstance(schemas, Mapping):
            raise SchemaDefinitionError(f"Module {module_name!r} must map schema names to sections")
        registry[str(module_name)] = {
            str(name): validation_schema_from_dict(spec) for name, spec in schemas.items()
        }
    return registry


def load_registry(file_path: Path) -> SchemaRegistry:
    """Load a schema registry from a YAML or JSON file."""
    return build_registry(load_document(file_path) or {})


def resolve_schema(schema_ref: str, registry: SchemaRegistry) -> ValidationSchema | None:
    module_name, _, schema_name = schema_ref.partition(".")
    module = registry.get(module_name)
    if module is None:
        return None
    return module.get(schema_name)


def route_tag(route_path: str, module_name: str) -> str:
    """First path segment, lower-cased; falls back to the schema module name."""
    segments = [s for s in route_path.split("/") if s]
    if segments:
        return segments[0].lower()
    return module_name.lower()


def extract_schema(
    schema_ref: str,
    registry: SchemaRegistry,
    route_path: str = "",
) -> tuple[dict, list[ParameterDescriptor]]:
    """Turn a schema reference into ``(request_body_schema, parameters)``.

    Unknown modules or schema names are not an error: the route simply gets
    no body and no parameters.
    """
    schema = resolve_schema(schema_ref, registry)
    if schema is None:
        logger.debug("Schema reference %s not found in registry", schema_ref)
        return {}, []

    tag = route_tag(route_path, schema_ref.partition(".")[0])
    request_body_schema: dict = {}
    parameters: list[ParameterDescriptor] = []

    for section_name, section in schema.sections():
        for key, node in section.children.items():
            field_schema = transcode(node, key, tag)
            if section_name == "body":
                request_body_schema[key] = field_schema
                continue
            parameters.append(ParameterDescriptor(
                name=key,
                location=_PARAMETER_LOCATIONS[section_name],
                required=node.required,
                description=field_schema.get("description", ""),
                field_schema=field_schema,
                example=field_schema.get("example"),
                default=field_schema.get("default"),
            ))

    return request_body_schema, parameters
