"""Route extraction from Express-style JavaScript route modules.

A route module registers its routes imperatively::

    router.get('/:id', Validation.validate(UserSchema.getById), UserController.getById);

The module is parsed with tree-sitter, the tree is walked in source order, and
every call site accepted by the router recognizer becomes a RouteDescriptor.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from routedoc.config import ExtractorConfig
from routedoc.errors import RouteParseError
from routedoc.parser.base import (
    DEFAULT_DESCRIPTION,
    DEFAULT_SUMMARY,
    NO_SCHEMA,
    UNKNOWN_CONTROLLER,
    ExtractionResult,
    FileFailure,
    ResponseOverride,
    RouteDescriptor,
)
from routedoc.parser.paths import transform_route_path
from routedoc.parser.recognizers import Node, is_node
from routedoc.parser.syntax import parse_javascript
from routedoc.schema.registry import SchemaRegistry, extract_schema

logger = logging.getLogger("routedoc.parser.javascript")

_POSITION_KEYS = ("loc",)


def parse_source(source: str, file_path: str) -> Node:
    """Parse a JavaScript module into the generic dict tree."""
    return parse_javascript(source, file_path)


def iter_call_expressions(tree: Node) -> Iterator[Node]:
    """Yield every CallExpression, parents before children, in source order."""
    stack: list[Any] = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
            continue
        if not isinstance(current, dict):
            continue
        if current.get("type") == "CallExpression":
            yield current
        children = [
            value for key, value in current.items()
            if key not in _POSITION_KEYS and isinstance(value, (dict, list))
        ]
        stack.extend(reversed(children))


def _string_literal(node: Any) -> str | None:
    if is_node(node, "Literal") and isinstance(node.get("value"), str):
        return node["value"]
    return None


def _line_number(node: Node) -> int | None:
    start = (node.get("loc") or {}).get("start")
    return start.get("line") if isinstance(start, dict) else None


def route_prefix(file_name: str, suffix: str) -> str:
    """``user.route.js`` -> ``/user``."""
    base = Path(file_name).name
    return "/" + base.removesuffix(suffix)


def extract_routes_from_source(
    source: str,
    file_name: str,
    registry: SchemaRegistry | None = None,
    responses: Mapping[str, Any] | None = None,
    config: ExtractorConfig | None = None,
) -> list[RouteDescriptor]:
    """Extract the routes registered by one route module.

    Raises RouteParseError when ``source`` is not valid JavaScript.
    """
    config = config or ExtractorConfig()
    registry = registry or {}
    responses = responses or {}
    recognizers = config.recognizers()

    tree = parse_source(source, file_name)
    prefix = route_prefix(file_name, config.file_suffix)
    tag = prefix.lstrip("/")
    common_payload = ResponseOverride.from_value(responses.get("200")).payload

    routes = []
    for call in iter_call_expressions(tree):
        if not recognizers.router.matches(call):
            continue

        method = recognizers.router.method(call)
        arguments = call.get("arguments") or []
        route_path = transform_route_path(_string_literal(arguments[0]) if arguments else None)
        middlewares = arguments[1:]

        schema_ref = None
        validator = recognizers.validator.find(middlewares)
        if validator is not None:
            schema_ref = recognizers.validator.reference(validator)

        controller_ref = None
        controller = recognizers.controller.find(middlewares)
        if controller is not None:
            controller_ref = recognizers.controller.reference(controller)

        if prefix in config.absolute_prefixes:
            full_path = route_path
        else:
            full_path = prefix + route_path

        request_body_schema: dict = {}
        parameters: list = []
        if schema_ref:
            request_body_schema, parameters = extract_schema(schema_ref, registry, prefix)

        override = ResponseOverride.from_value(responses.get(full_path))
        routes.append(RouteDescriptor(
            method=method,
            path=full_path,
            schema_ref=schema_ref or NO_SCHEMA,
            controller_ref=controller_ref or UNKNOWN_CONTROLLER,
            tag=tag,
            request_body_schema=request_body_schema,
            parameters=tuple(parameters),
            description=override.description or DEFAULT_DESCRIPTION,
            summary=override.summary or DEFAULT_SUMMARY,
            response_schema={**common_payload, **(override.response_data or {})},
            file_path=file_name,
            line_number=_line_number(call),
        ))
        logger.debug("%s:%s %s %s", file_name, _line_number(call), method.upper(), full_path)

    return routes


def extract_routes(
    files: Iterable[Path],
    registry: SchemaRegistry | None = None,
    responses: Mapping[str, Any] | None = None,
    config: ExtractorConfig | None = None,
    strict: bool = False,
) -> ExtractionResult:
    """Extract routes from every file, isolating per-file failures.

    Unreadable or unparsable files are reported in ``failures`` and the
    remaining files are still processed. With ``strict`` the first failure
    is raised instead.
    """
    routes: list[RouteDescriptor] = []
    failures: list[FileFailure] = []

    for file_path in files:
        logger.debug("Scanning %s", file_path)
        try:
            source = file_path.read_text(encoding="utf-8")
            routes.extend(extract_routes_from_source(
                source, str(file_path), registry, responses, config,
            ))
        except RouteParseError as e:
            if strict:
                raise
            logger.warning("Skipping %s: %s", file_path, e.message)
            failures.append(FileFailure(file_path=str(file_path), error=e.message, line=e.line))
        except (OSError, UnicodeDecodeError) as e:
            if strict:
                raise RouteParseError(str(file_path), str(e)) from e
            logger.warning("Skipping %s: %s", file_path, e)
            failures.append(FileFailure(file_path=str(file_path), error=str(e)))

    return ExtractionResult(routes=tuple(routes), failures=tuple(failures))
