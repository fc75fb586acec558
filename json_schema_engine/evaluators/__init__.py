"""Keyword evaluator registry.

Every evaluator has the signature ``evaluator(ctx, value, instance)`` and
returns a :class:`ValidationOutcome` or None when it has nothing to report.
Keywords without an entry (``then``, ``else``, ``minContains``, ``$defs``,
unknown keywords, ...) are read by other evaluators or ignored.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.dialect import Dialect
from . import array, combinators, conditional, format_keywords, numeric, objects, references, string, type_keywords, unevaluated

Evaluator = Callable[[EvaluationContext, Any, Any], Optional[ValidationOutcome]]

# Run after all other keywords of the same schema object.
DEFERRED_KEYWORDS = ("unevaluatedItems", "unevaluatedProperties")

COMMON: Dict[str, Evaluator] = {
    "$ref": references.ref,
    "type": type_keywords.type_,
    "enum": type_keywords.enum,
    "const": type_keywords.const,
    "multipleOf": numeric.multiple_of,
    "maximum": numeric.maximum,
    "exclusiveMaximum": numeric.exclusive_maximum,
    "minimum": numeric.minimum,
    "exclusiveMinimum": numeric.exclusive_minimum,
    "maxLength": string.max_length,
    "minLength": string.min_length,
    "pattern": string.pattern,
    "items": array.items,
    "additionalItems": array.additional_items,
    "contains": array.contains,
    "maxItems": array.max_items,
    "minItems": array.min_items,
    "uniqueItems": array.unique_items,
    "properties": objects.properties,
    "patternProperties": objects.pattern_properties,
    "additionalProperties": objects.additional_properties,
    "propertyNames": objects.property_names,
    "required": objects.required,
    "maxProperties": objects.max_properties,
    "minProperties": objects.min_properties,
    "allOf": combinators.all_of,
    "anyOf": combinators.any_of,
    "oneOf": combinators.one_of,
    "not": combinators.not_,
    "if": conditional.if_,
    "format": format_keywords.format_,
    "contentEncoding": format_keywords.content_encoding,
    "contentMediaType": format_keywords.content_media_type,
}

for _keyword in ("title", "description", "default", "readOnly", "writeOnly", "examples"):
    COMMON[_keyword] = format_keywords.annotate(_keyword)

DRAFT_07: Dict[str, Evaluator] = {
    **COMMON,
    "dependencies": objects.dependencies,
}

DRAFT_2019_09: Dict[str, Evaluator] = {
    **COMMON,
    "dependentRequired": objects.dependent_required,
    "dependentSchemas": objects.dependent_schemas,
    "dependencies": objects.dependencies,
    "$recursiveRef": references.recursive_ref,
    "contentSchema": format_keywords.content_schema,
    "deprecated": format_keywords.annotate("deprecated"),
    "unevaluatedItems": unevaluated.unevaluated_items,
    "unevaluatedProperties": unevaluated.unevaluated_properties,
}

_VOCABULARIES: Mapping[Dialect, Mapping[str, Evaluator]] = {
    Dialect.DRAFT_07: MappingProxyType(DRAFT_07),
    Dialect.DRAFT_2019_09: MappingProxyType(DRAFT_2019_09),
}


def evaluators_for(dialect: Dialect) -> Mapping[str, Evaluator]:
    """Read-only keyword to evaluator mapping for ``dialect``."""
    return _VOCABULARIES[dialect]


__all__ = ["DEFERRED_KEYWORDS", "Evaluator", "evaluators_for"]
