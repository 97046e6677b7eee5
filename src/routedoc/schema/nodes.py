"""Validation schema node model.

This is the only shape the transcoder understands. Adapters in
``routedoc.schema.adapters`` convert concrete schema declarations into it.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ScalarNode(BaseModel):
    """A leaf field: string, number, integer, boolean, date, ..."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    type: str | None = None
    enum: list[Any] | None = None
    default: Any = None
    description: str | None = None
    required: bool = False

    @property
    def has_default(self) -> bool:
        # an explicit null default still counts as declared
        return "default" in self.model_fields_set


class ObjectNode(BaseModel):
    """A field holding named children, in declaration order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    children: dict[str, "SchemaNode"] = Field(default_factory=dict)
    description: str | None = None
    required: bool = False


class ArrayNode(BaseModel):
    """A list field; ``item`` describes every element."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    item: "SchemaNode | None" = None
    description: str | None = None
    required: bool = False


SchemaNode = Annotated[Union[ScalarNode, ObjectNode, ArrayNode], Field(discriminator="kind")]

ObjectNode.model_rebuild()
ArrayNode.model_rebuild()


class ValidationSchema(BaseModel):
    """The request sections validated for one route."""

    model_config = ConfigDict(frozen=True)

    body: ObjectNode | None = None
    params: ObjectNode | None = None
    query: ObjectNode | None = None

    def sections(self) -> list[tuple[str, ObjectNode]]:
        return [
            (name, section)
            for name, section in (("body", self.body), ("params", self.params), ("query", self.query))
            if section is not None
        ]
