from __future__ import annotations

import pytest

from json_schema_engine import ValidationOptions, validate


def _valid(schema, instance, **options) -> bool:
    return validate(schema, instance, ValidationOptions(**options)).valid


def _keywords(schema, instance, **options) -> list:
    return [v.keyword for v in validate(schema, instance, ValidationOptions(**options)).violations]


# ---- type / enum / const -------------------------------------------------------


@pytest.mark.parametrize(
    "type_name, instance, expected",
    [
        ("integer", 1, True),
        ("integer", 1.0, True),
        ("integer", 1.5, False),
        ("integer", True, False),
        ("number", 2.5, True),
        ("number", False, False),
        ("boolean", False, True),
        ("null", None, True),
        ("string", "", True),
        ("array", [], True),
        ("object", {}, True),
        ("object", [], False),
    ],
)
def test_type(type_name, instance, expected) -> None:
    assert _valid({"type": type_name}, instance) is expected


def test_type_list() -> None:
    assert _valid({"type": ["string", "null"]}, None)
    assert not _valid({"type": ["string", "null"]}, 1)


def test_enum_uses_structural_equality() -> None:
    assert _valid({"enum": [1, "a", {"k": [1]}]}, 1.0)
    assert _valid({"enum": [1, "a", {"k": [1]}]}, {"k": [1.0]})
    assert not _valid({"enum": [1]}, True)
    assert not _valid({"enum": [False]}, 0)


def test_const() -> None:
    assert _valid({"const": None}, None)
    assert not _valid({"const": 0}, False)
    assert _keywords({"const": "a"}, "b") == ["const"]


# ---- numeric --------------------------------------------------------------------


def test_bounds() -> None:
    assert _valid({"minimum": 1, "maximum": 3}, 3)
    assert not _valid({"maximum": 3}, 3.5)
    assert not _valid({"exclusiveMaximum": 3}, 3)
    assert not _valid({"exclusiveMinimum": 1}, 1)
    assert _valid({"minimum": 5}, "not a number")


@pytest.mark.parametrize(
    "divisor, instance, expected",
    [
        (2, 10, True),
        (2, 7, False),
        (0.1, 0.3, True),
        (0.01, 19.99, True),
        (0.5, 4.5, True),
        (1.5, 4, False),
        (1e-30, 1e20, True),
        (0.123456789, 1e308, False),
        (1e-308, 1e308, False),
    ],
)
def test_multiple_of(divisor, instance, expected) -> None:
    assert _valid({"multipleOf": divisor}, instance) is expected


# ---- string ---------------------------------------------------------------------


def test_lengths_count_code_points() -> None:
    assert _valid({"maxLength": 2}, "\U0001F600\U0001F600")
    assert not _valid({"minLength": 3}, "ab")


def test_pattern_is_not_anchored() -> None:
    assert _valid({"pattern": "b+"}, "abbbc")
    assert not _valid({"pattern": "^b"}, "abc")
    assert _valid({"pattern": "^b"}, 42)


def test_dollar_anchors_at_end_of_input() -> None:
    assert _valid({"pattern": "^abc$"}, "abc")
    assert not _valid({"pattern": "^abc$"}, "abc\n")
    assert _valid({"pattern": "^[$]+$"}, "$$")
    assert _valid({"pattern": r"^a\$"}, "a$")
    schema = {"patternProperties": {"^x$": {}}, "additionalProperties": False}
    assert _valid(schema, {"x": 1})
    assert not _valid(schema, {"x\n": 1})


# ---- arrays ---------------------------------------------------------------------


def test_items_single_schema() -> None:
    assert _valid({"items": {"type": "integer"}}, [1, 2])
    violations = validate({"items": {"type": "integer"}}, [1, "x"]).violations
    assert [(v.keyword, v.instance_path, v.schema_path) for v in violations] == [("type", "/1", "/items/type")]


def test_positional_items_and_additional_items() -> None:
    schema = {"items": [{"type": "string"}, {"type": "integer"}], "additionalItems": False}
    assert _valid(schema, ["a", 1])
    assert _valid(schema, ["a"])
    assert _keywords(schema, ["a", 1, None]) == ["additionalItems"]
    assert _valid({"items": [{}], "additionalItems": {"type": "null"}}, [1, None, None])


def test_additional_items_ignored_without_positional_items() -> None:
    assert _valid({"items": {}, "additionalItems": False}, [1, 2, 3])
    assert _valid({"additionalItems": False}, [1, 2, 3])


def test_contains() -> None:
    assert _valid({"contains": {"const": 3}}, [1, 2, 3])
    outcome = validate({"contains": {"const": 3}}, [1, 2])
    assert [v.keyword for v in outcome.violations] == ["contains"]
    assert len(outcome.violations[0].causes) == 2
    assert not _valid({"contains": {}}, [])


def test_min_and_max_contains() -> None:
    schema = {"contains": {"type": "integer"}, "minContains": 2, "maxContains": 3}
    assert _valid(schema, [1, 2, "a"])
    assert _keywords(schema, [1, "a"]) == ["minContains"]
    assert _keywords(schema, [1, 2, 3, 4]) == ["maxContains"]
    assert _valid({"contains": {"type": "integer"}, "minContains": 0}, ["a"])


def test_min_contains_ignored_in_draft_07() -> None:
    schema = {"contains": {"type": "integer"}, "minContains": 2}
    assert _valid(schema, [1], dialect="draft-07")
    assert not _valid(schema, [1], dialect="2019-09")


def test_item_counts() -> None:
    assert not _valid({"maxItems": 1}, [1, 2])
    assert not _valid({"minItems": 1}, [])


def test_unique_items() -> None:
    assert not _valid({"uniqueItems": True}, [1, 1.0, "1"])
    assert _valid({"uniqueItems": True}, [1, "1"])
    assert _valid({"uniqueItems": True}, [1, True])
    assert not _valid({"uniqueItems": True}, [{"a": [1]}, {"a": [1.0]}])
    assert _valid({"uniqueItems": False}, [1, 1])


# ---- objects --------------------------------------------------------------------


def test_properties_and_required() -> None:
    schema = {"properties": {"a": {"type": "string"}}, "required": ["a", "b"]}
    outcome = validate(schema, {"a": 1})
    assert sorted(v.keyword for v in outcome.violations) == ["required", "type"]
    assert [v.message for v in outcome.violations if v.keyword == "required"] == ["'b' is a required property"]


def test_additional_properties_respects_patterns() -> None:
    schema = {"properties": {"a": {}}, "patternProperties": {"^x-": {"type": "string"}}, "additionalProperties": False}
    assert _valid(schema, {"a": 1, "x-b": "ok"})
    assert not _valid(schema, {"a": 1, "x-b": 2})
    assert _keywords(schema, {"a": 1, "c": 2}) == ["additionalProperties"]


def test_additional_properties_schema() -> None:
    schema = {"properties": {"a": {}}, "additionalProperties": {"type": "integer"}}
    assert _valid(schema, {"a": "x", "b": 1})
    violations = validate(schema, {"b": "x"}).violations
    assert violations[0].instance_path == "/b"


def test_property_names() -> None:
    assert _valid({"propertyNames": {"maxLength": 3}}, {"abc": 1})
    violations = validate({"propertyNames": {"maxLength": 3}}, {"abcd": 1}).violations
    assert [(v.keyword, v.instance_path) for v in violations] == [("maxLength", "/abcd")]


def test_property_counts() -> None:
    assert not _valid({"maxProperties": 1}, {"a": 1, "b": 2})
    assert not _valid({"minProperties": 1}, {})


def test_dependent_required_and_schemas() -> None:
    assert not _valid({"dependentRequired": {"card": ["billing"]}}, {"card": 1})
    assert _valid({"dependentRequired": {"card": ["billing"]}}, {"other": 1})
    schema = {"dependentSchemas": {"card": {"required": ["billing"]}}}
    assert _keywords(schema, {"card": 1}) == ["required"]


def test_draft07_dependencies() -> None:
    schema = {"dependencies": {"a": ["b"], "c": {"properties": {"d": {"type": "integer"}}}}}
    assert _valid(schema, {"a": 1, "b": 2}, dialect="draft-07")
    assert _keywords(schema, {"a": 1}, dialect="draft-07") == ["dependencies"]
    assert _keywords(schema, {"c": 1, "d": "x"}, dialect="draft-07") == ["type"]


def test_dependent_keywords_ignored_in_draft_07() -> None:
    assert _valid({"dependentRequired": {"a": ["b"]}}, {"a": 1}, dialect="draft-07")


# ---- combinators and conditionals ----------------------------------------------


def test_all_of_flattens_violations() -> None:
    outcome = validate({"allOf": [{"type": "string"}, {"minLength": 2}]}, 5)
    assert [v.keyword for v in outcome.violations] == ["type"]
    assert outcome.violations[0].schema_path == "/allOf/0/type"


def test_any_of_wraps_causes() -> None:
    outcome = validate({"anyOf": [{"type": "string"}, {"type": "null"}]}, 5)
    assert [v.keyword for v in outcome.violations] == ["anyOf"]
    assert [c.schema_path for c in outcome.violations[0].causes] == ["/anyOf/0/type", "/anyOf/1/type"]


def test_one_of() -> None:
    assert _valid({"oneOf": [{"type": "string"}, {"type": "number"}]}, "x")
    outcome = validate({"oneOf": [{"minimum": 0}, {"maximum": 10}]}, 5)
    assert [v.keyword for v in outcome.violations] == ["oneOf"]
    assert "more than one" in outcome.violations[0].message
    outcome = validate({"oneOf": [{"type": "string"}, {"type": "null"}]}, 5)
    assert "not valid under any" in outcome.violations[0].message


def test_not() -> None:
    assert _valid({"not": {"type": "string"}}, 1)
    assert _keywords({"not": {"type": "string"}}, "x") == ["not"]


def test_if_then_else() -> None:
    schema = {"if": {"type": "integer"}, "then": {"minimum": 0}, "else": {"type": "string"}}
    assert _valid(schema, 3)
    assert not _valid(schema, -3)
    assert _valid(schema, "x")
    violations = validate(schema, None).violations
    assert [v.schema_path for v in violations] == ["/else/type"]


def test_missing_branch_is_not_a_failure() -> None:
    assert _valid({"if": {"type": "integer"}, "then": {"minimum": 0}}, "anything")
    assert _valid({"then": False}, 1)
    assert _valid({"if": {"type": "integer"}}, 1)


# ---- annotations ----------------------------------------------------------------


def test_annotations_are_recorded_on_success() -> None:
    outcome = validate({"title": "Root", "properties": {"a": {"default": 1, "deprecated": True}}}, {"a": 2})
    collected = {(a.keyword, a.instance_path): a.value for a in outcome.annotations}
    assert collected[("title", "")] == "Root"
    assert collected[("default", "/a")] == 1
    assert collected[("deprecated", "/a")] is True


def test_annotations_dropped_from_failing_branches() -> None:
    outcome = validate({"anyOf": [{"title": "a", "type": "string"}, {"title": "b"}]}, 1)
    assert [a.value for a in outcome.annotations] == ["b"]


def test_annotations_dropped_when_invalid() -> None:
    assert validate({"title": "x", "type": "string"}, 1).annotations == []
