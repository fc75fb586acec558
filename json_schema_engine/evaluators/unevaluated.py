"""``unevaluatedItems`` / ``unevaluatedProperties``.

These run after every other keyword of their schema object, reading the
members already evaluated from ``ctx.outcome``.
"""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.schema_node import SchemaNode


def unevaluated_items(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, list):
        return None

    leftover = [index for index in range(len(instance)) if index not in ctx.outcome.evaluated_items]
    if not leftover:
        return None
    if value.boolean is False:
        indices = ", ".join(str(index) for index in leftover)
        return ctx.fail("unevaluatedItems", f"Unevaluated items are not allowed (items {indices} were unexpected)")

    outcome = ValidationOutcome()
    for index in leftover:
        outcome.add_nested(ctx.descend(value, instance[index], "unevaluatedItems", instance_token=index))
    outcome.evaluated_items.update(leftover)
    return outcome


def unevaluated_properties(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    leftover = [name for name in instance if name not in ctx.outcome.evaluated_properties]
    if not leftover:
        return None
    if value.boolean is False:
        listed = ", ".join(repr(name) for name in leftover)
        verb = "was" if len(leftover) == 1 else "were"
        return ctx.fail("unevaluatedProperties", f"Unevaluated properties are not allowed ({listed} {verb} unexpected)")

    outcome = ValidationOutcome()
    for name in leftover:
        outcome.add_nested(ctx.descend(value, instance[name], "unevaluatedProperties", instance_token=name))
    outcome.evaluated_properties.update(leftover)
    return outcome
