from datetime import datetime

import pytest

from routedoc.schema.nodes import ArrayNode, ObjectNode, ScalarNode
from routedoc.schema.transcoder import (
    description_from_key,
    example_from_key,
    example_from_type,
    transcode,
)


class TestExampleFromKey:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("id", 125069),
            ("userId", 125069),
            ("limit", 10),
            ("start", 0),
            ("email", "user@example.com"),
            ("createdDate", "2024-01-01"),
            ("orderStatus", "active"),
            ("firstName", "John Doe"),
            ("comment", "example"),
        ],
    )
    def test_patterns(self, key, expected):
        assert example_from_key(key) == expected


class TestDescriptionFromKey:
    def test_custid(self):
        assert description_from_key("custId", "ads") == "Enter customer ID to fetch ads-related records."

    def test_limit_and_start(self):
        assert description_from_key("limit", "ads") == "Number of ads records to fetch."
        assert description_from_key("start", "ads") == "Starting index for ads pagination."

    def test_status(self):
        assert description_from_key("paymentStatus", "push") == "Status of the push (e.g., active, inactive)."

    def test_generic(self):
        assert description_from_key("title", "events") == "Title related to events."


class TestExampleFromType:
    def test_known_types(self):
        assert example_from_type("string") == "example string"
        assert example_from_type("number") == 123
        assert example_from_type("integer") == 123
        assert example_from_type("boolean") is True
        assert example_from_type("binary") == "sample binary"

    def test_date_is_iso_timestamp(self):
        # format-only: the value depends on the clock
        value = example_from_type("date")
        assert isinstance(datetime.fromisoformat(value), datetime)


class TestTranscodeScalar:
    def test_none_gives_generic_string(self):
        assert transcode(None) == {"type": "string", "example": "string", "description": "Generic string field"}

    def test_unrecognized_input_gives_generic_string(self):
        assert transcode({"type": "number"})["description"] == "Generic string field"

    def test_missing_type_defaults_to_string(self):
        assert transcode(ScalarNode())["type"] == "string"

    def test_enum_first_value_is_example(self):
        result = transcode(ScalarNode(type="string", enum=["draft", "live"]), "state", "ads")
        assert result["enum"] == ["draft", "live"]
        assert result["example"] == "draft"

    def test_declared_default_beats_key_pattern(self):
        result = transcode(ScalarNode(type="integer", default=25), "limit", "ads")
        assert result["default"] == 25
        assert result["example"] == 25

    def test_falsy_default_is_kept(self):
        result = transcode(ScalarNode(type="integer", default=0), "userId", "ads")
        assert result["example"] == 0

    def test_mutable_default_is_copied(self):
        node = ScalarNode(type="array", default=["a"])
        first = transcode(node, "labels", "ads")
        first["example"].append("b")
        first["default"].append("c")
        assert node.default == ["a"]
        assert transcode(node, "labels", "ads")["example"] == ["a"]

    def test_key_pattern_beats_type(self):
        assert transcode(ScalarNode(type="string"), "email", "user")["example"] == "user@example.com"
        assert transcode(ScalarNode(type="number"), "limit", "user")["example"] == 10

    def test_type_fallback_without_key(self):
        assert transcode(ScalarNode(type="boolean"))["example"] is True
        assert "description" not in transcode(ScalarNode(type="boolean"))

    def test_explicit_description_wins(self):
        result = transcode(ScalarNode(type="string", description="Shown to users"), "title", "events")
        assert result["description"] == "Shown to users"

    def test_synthesized_description_uses_tag(self):
        result = transcode(ScalarNode(type="integer"), "limit", "meetings")
        assert result["description"] == "Number of meetings records to fetch."

    def test_is_deterministic(self):
        node = ScalarNode(type="string", enum=["a", "b"])
        assert transcode(node, "kind", "x") == transcode(node, "kind", "x")


class TestTranscodeComposite:
    def test_array_of_scalars(self):
        result = transcode(ArrayNode(item=ScalarNode(type="string")), "tag", "ads")
        assert result["type"] == "array"
        assert result["items"]["example"] == "example string"
        assert result["example"] == ["example string"]
        assert result["description"] == "List of tags"

    def test_array_without_item(self):
        result = transcode(ArrayNode(), "value", "ads")
        assert result["items"]["type"] == "string"
        assert result["example"] == ["string"]

    def test_object_properties_and_example_in_order(self):
        node = ObjectNode(children={
            "name": ScalarNode(type="string"),
            "age": ScalarNode(type="number", default=30),
        })
        result = transcode(node, "person", "user")
        assert list(result["properties"]) == ["name", "age"]
        assert result["example"] == {"name": "John Doe", "age": 30}

    def test_empty_composites_terminate(self):
        assert transcode(ObjectNode()) == {"type": "object", "properties": {}, "example": {}}
        assert transcode(ArrayNode(item=ObjectNode()))["example"] == [{}]

    def test_every_leaf_has_example(self):
        node = ObjectNode(children={
            "items": ArrayNode(item=ObjectNode(children={
                "sku": ScalarNode(type="string"),
                "qty": ScalarNode(type="integer"),
                "meta": ObjectNode(children={"flag": ScalarNode(type="boolean")}),
            })),
        })

        def leaves(schema):
            if schema["type"] == "object":
                for child in schema["properties"].values():
                    yield from leaves(child)
            elif schema["type"] == "array":
                yield from leaves(schema["items"])
            else:
                yield schema

        found = list(leaves(transcode(node, "order", "shop")))
        assert len(found) == 3
        assert all(leaf.get("example") is not None for leaf in found)
