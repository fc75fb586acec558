# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""In-memory schema model.

``parse_schema`` translates a JSON-like document into a tree of
:class:`SchemaNode`. Only the *shape* of keyword values is checked here;
whether an instance satisfies them is the engine's job. Unknown keywords are
kept verbatim so that ``to_json`` reproduces the input exactly.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Pattern, Tuple

from ..exceptions import MalformedSchemaError, SchemaTooDeepError
from ..utils import json_pointer
from ..utils.json_types import TYPE_NAMES, is_integer, is_number

# Nesting bound for parsing and indexing; keeps well below the interpreter
# recursion limit.
MAX_PARSE_DEPTH = 256

SUBSCHEMA_KEYWORDS = frozenset(
    {
        "additionalItems",
        "unevaluatedItems",
        "contains",
        "additionalProperties",
        "unevaluatedProperties",
        "propertyNames",
        "not",
        "if",
        "then",
        "else",
        "contentSchema",
    }
)
SCHEMA_ARRAY_KEYWORDS = frozenset({"allOf", "anyOf", "oneOf"})
SCHEMA_MAP_KEYWORDS = frozenset({"properties", "patternProperties", "$defs", "definitions", "dependentSchemas"})
STRING_KEYWORDS = frozenset(
    {
        "$id",
        "$schema",
        "$ref",
        "$comment",
        "title",
        "description",
        "format",
        "contentEncoding",
        "contentMediaType",
    }
)
NUMBER_KEYWORDS = frozenset({"maximum", "minimum", "exclusiveMaximum", "exclusiveMinimum"})
COUNT_KEYWORDS = frozenset(
    {
        "maxLength",
        "minLength",
        "maxItems",
        "minItems",
        "maxContains",
        "minContains",
        "maxProperties",
        "minProperties",
    }
)
BOOLEAN_KEYWORDS = frozenset({"uniqueItems", "$recursiveAnchor", "deprecated", "readOnly", "writeOnly"})
ARRAY_KEYWORDS = frozenset({"enum", "examples"})

_ANCHOR_RE = re.compile(r"^[A-Za-z][-A-Za-z0-9.:_]*$")


@dataclass(frozen=True, eq=False)
class SchemaNode:
    """A parsed schema: a boolean schema or a keyword mapping.

    Subschema-valued keywords hold ``SchemaNode`` (single), ``tuple`` of nodes
    (``allOf``/``anyOf``/``oneOf``, positional ``items``) or ``dict`` of nodes.
    Nodes compare by identity and are never mutated after parsing.
    """

    keywords: Mapping[str, Any] = field(default_factory=dict)
    pointer: str = ""
    boolean: Optional[bool] = None
    patterns: Mapping[str, Pattern] = field(default_factory=dict, repr=False)

    @property
    def is_boolean(self) -> bool:
        return self.boolean is not None

    def __contains__(self, keyword: str) -> bool:
        return keyword in self.keywords

    def get(self, keyword: str, default: Any = None) -> Any:
        return self.keywords.get(keyword, default)

    def pattern(self, source: str) -> Pattern:
        return self.patterns[source]

    def iter_subschemas(self) -> Iterator[Tuple[Tuple[str, ...], "SchemaNode"]]:
        """Yield ``(relative pointer tokens, child)`` for every direct subschema."""
        for keyword, value in self.keywords.items():
            if isinstance(value, SchemaNode):
                yield (keyword,), value
            elif isinstance(value, tuple):
                for index, child in enumerate(value):
                    yield (keyword, str(index)), child
            elif isinstance(value, dict):
                for key, child in value.items():
                    if isinstance(child, SchemaNode):
                        yield (keyword, key), child

    def to_json(self) -> Any:
        if self.boolean is not None:
            return self.boolean
        return {keyword: _to_json(value) for keyword, value in self.keywords.items()}


def _to_json(value: Any) -> Any:
    if isinstance(value, SchemaNode):
        return value.to_json()
    if isinstance(value, tuple):
        return [_to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    return copy.deepcopy(value)


def parse_schema(raw: Any, pointer: str = "", *, max_depth: int = MAX_PARSE_DEPTH) -> SchemaNode:
    """Parse a JSON-like schema document into a :class:`SchemaNode` tree.

    Args:
        raw: Boolean or mapping (already-parsed nodes are returned unchanged)
        pointer: JSON Pointer of ``raw`` within its document
        max_depth: Maximum subschema nesting

    Raises:
        MalformedSchemaError: If a keyword value has the wrong shape
        SchemaTooDeepError: If nesting exceeds ``max_depth``
    """
    if isinstance(raw, SchemaNode):
        return raw
    return _SchemaParser(max_depth).parse(raw, pointer, 0)


class _SchemaParser:
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        self._handlers: Dict[str, Callable[[str, Any, str, int, Dict[str, Pattern]], Any]] = {}
        for keyword in SUBSCHEMA_KEYWORDS:
            self._handlers[keyword] = self._subschema
        for keyword in SCHEMA_ARRAY_KEYWORDS:
            self._handlers[keyword] = self._schema_array
        for keyword in SCHEMA_MAP_KEYWORDS:
            self._handlers[keyword] = self._schema_map
        for keyword in STRING_KEYWORDS:
            self._handlers[keyword] = self._string
        for keyword in NUMBER_KEYWORDS:
            self._handlers[keyword] = self._number
        for keyword in COUNT_KEYWORDS:
            self._handlers[keyword] = self._count
        for keyword in BOOLEAN_KEYWORDS:
            self._handlers[keyword] = self._boolean
        for keyword in ARRAY_KEYWORDS:
            self._handlers[keyword] = self._array
        self._handlers.update(
            {
                "items": self._items,
                "type": self._type,
                "required": self._required,
                "dependentRequired": self._dependent_required,
                "dependencies": self._dependencies,
                "multipleOf": self._multiple_of,
                "pattern": self._pattern,
                "$anchor": self._anchor,
                "$recursiveRef": self._recursive_ref,
                "$vocabulary": self._vocabulary,
            }
        )

    def parse(self, raw: Any, pointer: str, depth: int) -> SchemaNode:
        if depth > self.max_depth:
            raise SchemaTooDeepError(f"Schema nesting exceeds {self.max_depth} levels at '{pointer or '/'}'")
        if isinstance(raw, SchemaNode):
            return raw
        if isinstance(raw, bool):
            return SchemaNode(keywords={}, pointer=pointer, boolean=raw)
        if not isinstance(raw, dict):
            raise MalformedSchemaError("", pointer, f"schema must be an object or boolean, got {type(raw).__name__}")

        keywords: Dict[str, Any] = {}
        patterns: Dict[str, Pattern] = {}
        for keyword, value in raw.items():
            if not isinstance(keyword, str):
                raise MalformedSchemaError(str(keyword), pointer, "keyword names must be strings")
            handler = self._handlers.get(keyword)
            if handler is None:
                keywords[keyword] = copy.deepcopy(value)
            else:
                keywords[keyword] = handler(keyword, value, pointer, depth, patterns)
        return SchemaNode(keywords=keywords, pointer=pointer, patterns=patterns)

    # ---- applicators ---------------------------------------------------------

    def _subschema(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, (bool, dict)):
            raise MalformedSchemaError(keyword, pointer, "value must be a schema (object or boolean)")
        return self.parse(value, json_pointer.join(pointer, keyword), depth + 1)

    def _schema_array(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, list) or not value:
            raise MalformedSchemaError(keyword, pointer, "value must be a non-empty array of schemas")
        return tuple(
            self._child(keyword, item, json_pointer.join(pointer, keyword, index), depth)
            for index, item in enumerate(value)
        )

    def _schema_map(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, dict):
            raise MalformedSchemaError(keyword, pointer, "value must be an object of schemas")
        result = {}
        for key, item in value.items():
            if keyword == "patternProperties":
                patterns[key] = _compile(keyword, key, pointer)
            result[key] = self._child(keyword, item, json_pointer.join(pointer, keyword, key), depth)
        return result

    def _items(self, keyword, value, pointer, depth, patterns):
        if isinstance(value, list):
            return tuple(
                self._child(keyword, item, json_pointer.join(pointer, keyword, index), depth)
                for index, item in enumerate(value)
            )
        return self._subschema(keyword, value, pointer, depth, patterns)

    def _dependencies(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, dict):
            raise MalformedSchemaError(keyword, pointer, "value must be an object")
        result = {}
        for key, item in value.items():
            if isinstance(item, list):
                result[key] = _unique_strings(keyword, item, pointer)
            else:
                result[key] = self._child(keyword, item, json_pointer.join(pointer, keyword, key), depth)
        return result

    def _child(self, keyword, item, child_pointer, depth):
        if not isinstance(item, (bool, dict)):
            raise MalformedSchemaError(keyword, child_pointer, "value must be a schema (object or boolean)")
        return self.parse(item, child_pointer, depth + 1)

    # ---- scalar keywords -----------------------------------------------------

    def _string(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, str):
            raise MalformedSchemaError(keyword, pointer, "value must be a string")
        return value

    def _number(self, keyword, value, pointer, depth, patterns):
        if not is_number(value):
            raise MalformedSchemaError(keyword, pointer, "value must be a number")
        return value

    def _multiple_of(self, keyword, value, pointer, depth, patterns):
        if not is_number(value) or value <= 0:
            raise MalformedSchemaError(keyword, pointer, "value must be a number strictly greater than 0")
        return value

    def _count(self, keyword, value, pointer, depth, patterns):
        if not is_integer(value) or value < 0:
            raise MalformedSchemaError(keyword, pointer, "value must be a non-negative integer")
        return value

    def _boolean(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, bool):
            raise MalformedSchemaError(keyword, pointer, "value must be a boolean")
        return value

    def _array(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, list):
            raise MalformedSchemaError(keyword, pointer, "value must be an array")
        return copy.deepcopy(value)

    def _type(self, keyword, value, pointer, depth, patterns):
        if isinstance(value, str):
            names = [value]
        elif isinstance(value, list):
            names = value
        else:
            raise MalformedSchemaError(keyword, pointer, "value must be a type name or an array of type names")
        for name in names:
            if name not in TYPE_NAMES:
                raise MalformedSchemaError(keyword, pointer, f"unknown type name {name!r}")
        if len(set(names)) != len(names):
            raise MalformedSchemaError(keyword, pointer, "type names must be unique")
        return copy.deepcopy(value)

    def _required(self, keyword, value, pointer, depth, patterns):
        return _unique_strings(keyword, value, pointer)

    def _dependent_required(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, dict):
            raise MalformedSchemaError(keyword, pointer, "value must be an object of string arrays")
        return {key: _unique_strings(keyword, item, pointer) for key, item in value.items()}

    def _pattern(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, str):
            raise MalformedSchemaError(keyword, pointer, "value must be a string")
        patterns[value] = _compile(keyword, value, pointer)
        return value

    def _anchor(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, str) or not _ANCHOR_RE.match(value):
            raise MalformedSchemaError(keyword, pointer, "value must be a plain-name anchor")
        return value

    def _recursive_ref(self, keyword, value, pointer, depth, patterns):
        if value != "#":
            raise MalformedSchemaError(keyword, pointer, 'value must be "#"')
        return value

    def _vocabulary(self, keyword, value, pointer, depth, patterns):
        if not isinstance(value, dict) or not all(isinstance(v, bool) for v in value.values()):
            raise MalformedSchemaError(keyword, pointer, "value must be an object of booleans")
        return dict(value)


def _unique_strings(keyword: str, value: Any, pointer: str) -> list:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedSchemaError(keyword, pointer, "value must be an array of strings")
    if len(set(value)) != len(value):
        raise MalformedSchemaError(keyword, pointer, "array items must be unique")
    return list(value)


def _end_anchored(source: str) -> str:
    """Rewrite ``$`` outside character classes as ``\\Z``.

    Schema patterns follow ECMA-262, where ``$`` only matches at the end of
    input; Python's ``$`` also matches before a trailing newline.
    """
    parts = []
    in_class = False
    index = 0
    while index < len(source):
        char = source[index]
        if char == "\\":
            parts.append(source[index:index + 2])
            index += 2
            continue
        if in_class:
            in_class = char != "]"
        elif char == "[":
            in_class = True
        elif char == "$":
            char = r"\Z"
        parts.append(char)
        index += 1
    return "".join(parts)


def _compile(keyword: str, source: str, pointer: str) -> Pattern:
    try:
        return re.compile(_end_anchored(source))
    except re.error as exc:
        raise MalformedSchemaError(keyword, pointer, f"invalid regular expression {source!r}: {exc}") from exc
