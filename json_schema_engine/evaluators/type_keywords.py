"""Evaluators for ``type``, ``enum`` and ``const``."""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..utils.json_types import contains_equal, json_equal, json_type_name, matches_type


def type_(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    names = [value] if isinstance(value, str) else value
    if any(matches_type(instance, name) for name in names):
        return None
    expected = names[0] if len(names) == 1 else " or ".join(names)
    return ctx.fail("type", f"{instance!r} is not of type {expected} (got {json_type_name(instance)})")


def enum(ctx: EvaluationContext, value: list, instance: Any) -> Optional[ValidationOutcome]:
    if contains_equal(value, instance):
        return None
    return ctx.fail("enum", f"{instance!r} is not one of {value!r}")


def const(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if json_equal(value, instance):
        return None
    return ctx.fail("const", f"{value!r} was expected, got {instance!r}")
