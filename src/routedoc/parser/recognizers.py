"""Call-site recognizers.

Each recognizer is a predicate over a syntax-tree node in the generic tagged
form (a dict with a ``"type"`` key, as produced by ``routedoc.parser.syntax``).
The extractor walk never compares identifier names itself; swapping a
recognizer is enough to follow a different naming convention.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

Node = dict[str, Any]


def is_node(value: Any, node_type: str) -> bool:
    return isinstance(value, dict) and value.get("type") == node_type


def identifier_name(node: Any) -> str | None:
    if is_node(node, "Identifier"):
        return node.get("name")
    return None


def member_parts(node: Any) -> tuple[str, str] | None:
    """``(object, property)`` names of a plain ``a.b`` member access."""
    if not is_node(node, "MemberExpression") or node.get("computed"):
        return None
    obj = identifier_name(node.get("object"))
    prop = identifier_name(node.get("property"))
    if obj is None or prop is None:
        return None
    return obj, prop


def member_reference(node: Any) -> str | None:
    parts = member_parts(node)
    return f"{parts[0]}.{parts[1]}" if parts else None


class Recognizer(ABC):
    """Predicate over one syntax-tree node."""

    @abstractmethod
    def matches(self, node: Node) -> bool:
        pass

    def find(self, nodes: Iterable[Node]) -> Node | None:
        """First node of ``nodes`` this recognizer accepts."""
        return next((n for n in nodes if self.matches(n)), None)


class RouterCallRecognizer(Recognizer):
    """``router.<method>(...)`` where ``router`` is one of ``identifiers``.

    With ``methods`` set, only those property names count as routes;
    otherwise any call on the router object does.
    """

    def __init__(self, identifiers: Iterable[str] = ("router",), methods: Iterable[str] | None = None):
        self.identifiers = frozenset(identifiers)
        self.methods = frozenset(m.lower() for m in methods) if methods is not None else None

    def matches(self, node: Node) -> bool:
        if not is_node(node, "CallExpression"):
            return False
        parts = member_parts(node.get("callee"))
        if parts is None or parts[0] not in self.identifiers:
            return False
        return self.methods is None or parts[1].lower() in self.methods

    def method(self, node: Node) -> str:
        return member_parts(node["callee"])[1]


class ValidatorRecognizer(Recognizer):
    """``Validation.validate(<Module>.<Schema>)`` middleware calls."""

    def __init__(self, identifier: str = "Validation", method: str = "validate"):
        self.identifier = identifier
        self.method = method

    def matches(self, node: Node) -> bool:
        if not is_node(node, "CallExpression"):
            return False
        return member_parts(node.get("callee")) == (self.identifier, self.method)

    def reference(self, node: Node) -> str | None:
        arguments = node.get("arguments") or []
        if not arguments:
            return None
        return member_reference(arguments[0])


class ControllerRecognizer(Recognizer):
    """Bare ``SomethingController.handler`` references."""

    def __init__(self, suffix: str = "Controller"):
        self.suffix = suffix

    def matches(self, node: Node) -> bool:
        parts = member_parts(node)
        return parts is not None and parts[0].endswith(self.suffix)

    def reference(self, node: Node) -> str | None:
        return member_reference(node)


@dataclass(frozen=True)
class Recognizers:
    router: RouterCallRecognizer
    validator: ValidatorRecognizer
    controller: ControllerRecognizer
