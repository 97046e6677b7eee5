"""JavaScript parsing with tree-sitter.

tree-sitter produces a concrete syntax tree. The recognizers work on the
generic tagged form instead: nested dicts with a ``"type"`` key and
ESTree-style names for the handful of node kinds they inspect
(``Program``, ``CallExpression``, ``MemberExpression``, ``Identifier``,
``Literal``). Every other node keeps its tree-sitter type and lists its
converted children under ``"children"``.
"""

from typing import Any

import tree_sitter_javascript
from tree_sitter import Language, Node as TSNode, Parser

from routedoc.errors import RouteParseError

JS_LANGUAGE = Language(tree_sitter_javascript.language())

_IDENTIFIERS = {
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def _text(node: TSNode) -> str:
    return node.text.decode("utf-8")


def _loc(node: TSNode) -> dict:
    row, column = node.start_point[0], node.start_point[1]
    return {"start": {"line": row + 1, "column": column}}


def _named(node: TSNode) -> list[TSNode]:
    return [child for child in node.named_children if child.type != "comment"]


def _string_value(node: TSNode) -> str:
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(_text(child))
        elif child.type == "escape_sequence":
            escaped = _text(child)[1:]
            parts.append(_ESCAPES.get(escaped, escaped))
    return "".join(parts)


def _first_error(node: TSNode) -> TSNode | None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def to_tagged(node: TSNode) -> dict[str, Any]:
    """Convert a tree-sitter node into the generic tagged dict form."""
    kind = node.type

    if kind == "parenthesized_expression":
        inner = _named(node)
        if len(inner) == 1:
            return to_tagged(inner[0])

    if kind == "program":
        return {"type": "Program", "loc": _loc(node), "body": [to_tagged(c) for c in _named(node)]}

    if kind == "call_expression":
        args = node.child_by_field_name("arguments")
        if args is None:
            arguments = []
        elif args.type == "arguments":
            arguments = [to_tagged(a) for a in _named(args)]
        else:
            arguments = [to_tagged(args)]
        return {
            "type": "CallExpression",
            "loc": _loc(node),
            "callee": to_tagged(node.child_by_field_name("function")),
            "arguments": arguments,
        }

    if kind in ("member_expression", "subscript_expression"):
        computed = kind == "subscript_expression"
        prop = node.child_by_field_name("index" if computed else "property")
        return {
            "type": "MemberExpression",
            "loc": _loc(node),
            "computed": computed,
            "optional": node.child_by_field_name("optional_chain") is not None,
            "object": to_tagged(node.child_by_field_name("object")),
            "property": to_tagged(prop) if prop is not None else None,
        }

    if kind in _IDENTIFIERS:
        return {"type": "Identifier", "loc": _loc(node), "name": _text(node)}

    if kind == "string":
        return {"type": "Literal", "loc": _loc(node), "value": _string_value(node), "raw": _text(node)}

    return {"type": kind, "loc": _loc(node), "children": [to_tagged(c) for c in _named(node)]}


def parse_javascript(source: str, file_path: str) -> dict[str, Any]:
    """Parse a JavaScript module (ES2022, CommonJS or ESM) into the tagged form.

    Raises RouteParseError at the first syntax error.
    """
    parser = Parser(JS_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        error = _first_error(root) or root
        line = error.start_point[0] + 1
        if error.is_missing:
            message = f"Missing '{error.type}'"
        else:
            snippet = _text(error).strip().splitlines()
            message = f"Unexpected syntax near {snippet[0][:40]!r}" if snippet else "Unexpected end of input"
        raise RouteParseError(file_path, message, line)

    return to_tagged(root)
