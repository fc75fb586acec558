from __future__ import annotations

import pytest

from json_schema_engine.exceptions import MalformedSchemaError, SchemaTooDeepError
from json_schema_engine.models.schema_node import SchemaNode, parse_schema


def test_boolean_schemas() -> None:
    assert parse_schema(True).boolean is True
    assert parse_schema(False).boolean is False
    assert parse_schema(True).is_boolean
    assert not parse_schema({}).is_boolean


@pytest.mark.parametrize(
    "document",
    [
        True,
        {},
        {"type": ["string", "null"], "minLength": 2, "pattern": "^a"},
        {
            "$id": "https://example.com/root.json",
            "$defs": {"positive": {"type": "integer", "exclusiveMinimum": 0}},
            "properties": {"n": {"$ref": "#/$defs/positive"}, "flag": False},
            "patternProperties": {"^x-": {"description": "extension"}},
            "items": [{"const": 1}, {"enum": [1, "a", None]}],
            "dependencies": {"a": ["b"], "c": {"required": ["d"]}},
            "x-vendor": {"nested": [1, 2, {"deep": True}]},
            "default": {"n": 1},
        },
    ],
)
def test_to_json_round_trips(document) -> None:
    assert parse_schema(document).to_json() == document


def test_subschemas_are_nodes() -> None:
    node = parse_schema({"allOf": [{"type": "string"}, True], "properties": {"a": {}}, "not": False})
    assert isinstance(node.get("allOf"), tuple)
    assert all(isinstance(child, SchemaNode) for child in node.get("allOf"))
    assert isinstance(node.get("properties")["a"], SchemaNode)
    assert node.get("not").boolean is False
    assert node.get("allOf")[1].pointer == "/allOf/1"


def test_iter_subschemas_reports_relative_tokens() -> None:
    node = parse_schema({"items": [{}, {}], "properties": {"a/b": {}}, "if": {}})
    tokens = {relative for relative, _child in node.iter_subschemas()}
    assert tokens == {("items", "0"), ("items", "1"), ("properties", "a/b"), ("if",)}


def test_unknown_keywords_are_kept_verbatim() -> None:
    node = parse_schema({"x-anything": {"type": 5}})
    assert node.get("x-anything") == {"type": 5}
    assert not isinstance(node.get("x-anything"), SchemaNode)


def test_patterns_are_compiled_once() -> None:
    node = parse_schema({"pattern": "^a+$", "patternProperties": {"^b": {}}})
    assert node.pattern("^a+$").search("aaa")
    assert node.pattern("^b").search("bee")


@pytest.mark.parametrize(
    "document, keyword",
    [
        ({"type": "integr"}, "type"),
        ({"type": ["string", "string"]}, "type"),
        ({"minLength": -1}, "minLength"),
        ({"maxItems": 1.5}, "maxItems"),
        ({"multipleOf": 0}, "multipleOf"),
        ({"required": ["a", "a"]}, "required"),
        ({"required": "a"}, "required"),
        ({"pattern": "("}, "pattern"),
        ({"patternProperties": {"[": {}}}, "patternProperties"),
        ({"allOf": []}, "allOf"),
        ({"properties": {"a": 1}}, "properties"),
        ({"not": "string"}, "not"),
        ({"uniqueItems": "yes"}, "uniqueItems"),
        ({"enum": "a"}, "enum"),
        ({"$ref": 5}, "$ref"),
        ({"$anchor": "1bad"}, "$anchor"),
        ({"$recursiveRef": "#/defs"}, "$recursiveRef"),
        ({"dependentRequired": {"a": [1]}}, "dependentRequired"),
    ],
)
def test_malformed_keyword_values(document, keyword) -> None:
    with pytest.raises(MalformedSchemaError) as excinfo:
        parse_schema(document)
    assert excinfo.value.keyword == keyword


def test_malformed_error_carries_location() -> None:
    with pytest.raises(MalformedSchemaError) as excinfo:
        parse_schema({"properties": {"a": {"minimum": "0"}}})
    assert excinfo.value.keyword == "minimum"
    assert excinfo.value.path == "/properties/a"


def test_non_schema_root_is_malformed() -> None:
    with pytest.raises(MalformedSchemaError):
        parse_schema(["not", "a", "schema"])


def test_parse_depth_is_bounded() -> None:
    document: dict = {}
    for _ in range(20):
        document = {"not": document}
    with pytest.raises(SchemaTooDeepError):
        parse_schema(document, max_depth=10)


def test_parsed_node_passes_through() -> None:
    node = parse_schema({"type": "string"})
    assert parse_schema(node) is node
