from __future__ import annotations

from json_schema_engine import validate


def test_unevaluated_properties_false() -> None:
    schema = {"properties": {"a": {}}, "unevaluatedProperties": False}
    assert validate(schema, {"a": 1}).valid
    outcome = validate(schema, {"a": 1, "b": 2})
    assert [v.keyword for v in outcome.violations] == ["unevaluatedProperties"]
    assert "'b'" in outcome.violations[0].message


def test_pattern_properties_count_as_evaluated() -> None:
    schema = {"properties": {"a": {}}, "patternProperties": {"^b": {}}, "unevaluatedProperties": False}
    assert validate(schema, {"a": 1, "b": 2}).valid


def test_keyword_order_does_not_matter() -> None:
    schema = {"unevaluatedProperties": False, "properties": {"a": {}}}
    assert validate(schema, {"a": 1}).valid


def test_in_place_applicators_contribute() -> None:
    schema = {
        "allOf": [{"properties": {"a": {}}}],
        "anyOf": [{"properties": {"b": {}}}, {"properties": {"c": {}}, "required": ["c"]}],
        "unevaluatedProperties": False,
    }
    assert validate(schema, {"a": 1, "b": 2}).valid
    # "c" is only declared in an anyOf branch that fails here
    assert not validate({**schema, "anyOf": [{"properties": {"b": {}}}, {"properties": {"c": {}}, "required": ["x"]}]}, {"c": 1}).valid


def test_failing_branch_does_not_evaluate() -> None:
    schema = {
        "anyOf": [{"properties": {"a": {"type": "string"}}}, True],
        "unevaluatedProperties": False,
    }
    assert validate(schema, {"a": "x"}).valid
    assert not validate(schema, {"a": 1}).valid


def test_ref_contributes() -> None:
    schema = {
        "$defs": {"base": {"properties": {"a": {}}}},
        "$ref": "#/$defs/base",
        "properties": {"b": {}},
        "unevaluatedProperties": False,
    }
    assert validate(schema, {"a": 1, "b": 2}).valid
    assert not validate(schema, {"a": 1, "c": 2}).valid


def test_if_then_else_contribute() -> None:
    schema = {
        "if": {"properties": {"kind": {"const": "a"}}, "required": ["kind"]},
        "then": {"properties": {"alpha": {}}},
        "else": {"properties": {"beta": {}}},
        "unevaluatedProperties": False,
    }
    assert validate(schema, {"kind": "a", "alpha": 1}).valid
    assert not validate(schema, {"kind": "a", "beta": 1}).valid
    # a failing "if" does not mark "kind" as evaluated
    assert not validate(schema, {"kind": "b", "beta": 1}).valid
    assert validate(schema, {"beta": 1}).valid


def test_dependent_schemas_contribute() -> None:
    schema = {
        "properties": {"card": {}},
        "dependentSchemas": {"card": {"properties": {"billing": {}}}},
        "unevaluatedProperties": False,
    }
    assert validate(schema, {"card": 1, "billing": 2}).valid
    assert not validate(schema, {"billing": 2}).valid


def test_nested_evaluation_does_not_leak_upwards() -> None:
    schema = {
        "properties": {"inner": {"properties": {"a": {}}}},
        "unevaluatedProperties": False,
    }
    assert not validate(schema, {"inner": {"a": 1}, "a": 1}).valid


def test_unevaluated_properties_schema() -> None:
    schema = {"properties": {"a": {}}, "unevaluatedProperties": {"type": "integer"}}
    assert validate(schema, {"a": "x", "b": 1}).valid
    violations = validate(schema, {"b": "x"}).violations
    assert [(v.keyword, v.instance_path) for v in violations] == [("type", "/b")]


def test_unevaluated_items() -> None:
    schema = {"items": [{"type": "string"}], "unevaluatedItems": False}
    assert validate(schema, ["a"]).valid
    assert [v.keyword for v in validate(schema, ["a", 1]).violations] == ["unevaluatedItems"]


def test_unevaluated_items_with_schema_items() -> None:
    assert validate({"items": {}, "unevaluatedItems": False}, [1, 2, 3]).valid


def test_unevaluated_items_through_all_of() -> None:
    schema = {"allOf": [{"items": [True, True]}], "unevaluatedItems": {"type": "null"}}
    assert validate(schema, [1, 2, None]).valid
    assert not validate(schema, [1, 2, 3]).valid


def test_contains_marks_matching_items() -> None:
    schema = {"contains": {"type": "string"}, "unevaluatedItems": {"type": "integer"}}
    assert validate(schema, ["a", 1, "b"]).valid
    assert not validate(schema, ["a", None]).valid


def test_unevaluated_keywords_ignored_in_draft_07() -> None:
    from json_schema_engine import ValidationOptions

    schema = {"properties": {"a": {}}, "unevaluatedProperties": False}
    assert validate(schema, {"a": 1, "b": 2}, ValidationOptions(dialect="draft-07")).valid
