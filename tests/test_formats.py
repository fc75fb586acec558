from __future__ import annotations

import base64
import json

import pytest

from json_schema_engine import ValidationOptions, validate
from json_schema_engine.formats import FormatRegistry
from json_schema_engine.formats.content import decoder_for, parser_for

REGISTRY = FormatRegistry()


@pytest.mark.parametrize(
    "name, value",
    [
        ("date-time", "1963-06-19T08:30:06.283185Z"),
        ("date-time", "1963-06-19t08:30:06+01:00"),
        ("date", "2020-02-29"),
        ("time", "23:59:60Z"),
        ("time", "08:30:06-05:00"),
        ("duration", "P4DT12H30M5S"),
        ("duration", "P2W"),
        ("email", "joe.bloggs@example.com"),
        ("email", "user@[127.0.0.1]"),
        ("idn-email", "实例@实例.测试"),
        ("hostname", "www.example.com"),
        ("idn-hostname", "bücher.example"),
        ("ipv4", "192.168.0.1"),
        ("ipv6", "::1"),
        ("ipv6", "2001:db8::8a2e:370:7334"),
        ("uri", "https://example.com/path?q=1#frag"),
        ("uri", "urn:isbn:0451450523"),
        ("uri-reference", "../relative/path#x"),
        ("iri", "https://例え.テスト/パス"),
        ("iri-reference", "//例え.テスト"),
        ("uuid", "2eb8aa08-aa98-11ea-b4aa-73b441d16380"),
        ("uri-template", "https://example.com/{user}/repos{?page,per_page}"),
        ("json-pointer", ""),
        ("json-pointer", "/a~1b/0"),
        ("relative-json-pointer", "0#"),
        ("relative-json-pointer", "1/a"),
        ("regex", "^[a-z]+$"),
    ],
)
def test_valid_formats(name, value) -> None:
    assert REGISTRY.conforms(name, value)


@pytest.mark.parametrize(
    "name, value",
    [
        ("date-time", "1963-06-19 08:30:06Z"),
        ("date-time", "1963-06-19T08:30:06"),
        ("date", "2021-02-29"),
        ("date", "2020-1-01"),
        ("time", "24:00:00Z"),
        ("time", "08:30:06"),
        ("duration", "P"),
        ("duration", "PT"),
        ("duration", "P1Y2W"),
        ("email", "no-at-sign"),
        ("email", ".joe@example.com"),
        ("email", "实例@example.com"),
        ("hostname", "-bad.example"),
        ("hostname", "a" * 64 + ".example"),
        ("idn-hostname", "bücher..example"),
        ("ipv4", "256.1.1.1"),
        ("ipv4", "01.2.3.4"),
        ("ipv6", "12345::"),
        ("ipv6", "fe80::1%eth0"),
        ("uri", "relative/path"),
        ("uri", "https://example.com/with space"),
        ("uri", "https://例え.テスト"),
        ("uri-reference", "\\\\server\\share"),
        ("uuid", "2eb8aa08-aa98-11ea-b4aa-73b441d1638"),
        ("uri-template", "https://example.com/{user"),
        ("json-pointer", "a/b"),
        ("json-pointer", "/a~2"),
        ("relative-json-pointer", "-1/a"),
        ("relative-json-pointer", "01"),
        ("regex", "(unclosed"),
    ],
)
def test_invalid_formats(name, value) -> None:
    assert not REGISTRY.conforms(name, value)


def test_non_strings_and_unknown_formats_conform() -> None:
    assert REGISTRY.conforms("email", 42)
    assert REGISTRY.conforms("x-unknown", "anything")


def test_registry_register() -> None:
    registry = FormatRegistry()
    registry.register("upper", str.isupper)
    assert registry.known("upper")
    assert registry.conforms("upper", "ABC")
    assert not registry.conforms("upper", "abc")


def test_format_is_annotation_only_by_default() -> None:
    outcome = validate({"format": "email"}, "not-an-email")
    assert outcome.valid
    assert [(a.keyword, a.value) for a in outcome.annotations] == [("format", "email")]


def test_format_assertion() -> None:
    options = ValidationOptions(assert_format=True)
    assert not validate({"format": "email"}, "not-an-email", options).valid
    assert validate({"format": "x-unknown"}, "whatever", options).valid
    assert validate({"format": "ipv4"}, 12, options).valid


@pytest.mark.parametrize(
    "encoding, text, expected",
    [
        ("base64", base64.b64encode(b"hello").decode(), b"hello"),
        ("base32", base64.b32encode(b"hello").decode(), b"hello"),
        ("base16", "68656C6C6F", b"hello"),
        ("quoted-printable", "caf=C3=A9", "café".encode("utf-8")),
        ("7bit", "plain", b"plain"),
        ("8bit", "caf\xe9", b"caf\xe9"),
    ],
)
def test_decoders(encoding, text, expected) -> None:
    assert decoder_for(encoding)(text) == expected


def test_decoder_errors() -> None:
    with pytest.raises(ValueError):
        decoder_for("base64")("not base64!")
    with pytest.raises(ValueError):
        decoder_for("7bit")("café")
    assert decoder_for("x-custom") is None


def test_media_type_parsing() -> None:
    assert parser_for("application/json; charset=utf-8")(b'{"a": 1}') == {"a": 1}
    with pytest.raises(ValueError):
        parser_for("application/json")(b"{")
    assert parser_for("text/plain") is None


def test_content_keywords_are_annotations_by_default() -> None:
    schema = {"contentEncoding": "base64", "contentMediaType": "application/json"}
    outcome = validate(schema, "%%%")
    assert outcome.valid
    assert {a.keyword for a in outcome.annotations} == {"contentEncoding", "contentMediaType"}


def test_content_assertion() -> None:
    options = ValidationOptions(assert_content=True)
    schema = {
        "contentEncoding": "base64",
        "contentMediaType": "application/json",
        "contentSchema": {"required": ["id"]},
    }
    good = base64.b64encode(json.dumps({"id": 1}).encode()).decode()
    missing_id = base64.b64encode(json.dumps({"name": "x"}).encode()).decode()
    not_json = base64.b64encode(b"{oops").decode()

    assert validate(schema, good, options).valid
    assert [v.keyword for v in validate(schema, missing_id, options).violations] == ["required"]
    assert [v.keyword for v in validate(schema, not_json, options).violations] == ["contentMediaType"]
    assert [v.keyword for v in validate(schema, "%%%", options).violations] == ["contentEncoding"]


def test_content_schema_ignored_in_draft_07() -> None:
    options = ValidationOptions(assert_content=True, dialect="draft-07")
    schema = {"contentMediaType": "application/json", "contentSchema": {"required": ["id"]}}
    assert validate(schema, "{}", options).valid
    assert not validate(schema, "{", options).valid
