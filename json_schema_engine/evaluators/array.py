"""Array keyword evaluators. Non-arrays are not applicable."""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.dialect import Dialect
from ..models.schema_node import SchemaNode
from ..utils.json_types import first_duplicate


def items(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, list):
        return None

    outcome = ValidationOutcome()
    if isinstance(value, SchemaNode):
        for index, item in enumerate(instance):
            outcome.add_nested(ctx.descend(value, item, "items", instance_token=index))
        outcome.evaluated_items.update(range(len(instance)))
    else:
        for index, (schema, item) in enumerate(zip(value, instance)):
            outcome.add_nested(ctx.descend(schema, item, "items", index, instance_token=index))
        outcome.evaluated_items.update(range(min(len(value), len(instance))))
    return outcome


def additional_items(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    positional = ctx.schema.get("items")
    # only meaningful after an array form of "items"
    if not isinstance(instance, list) or not isinstance(positional, tuple):
        return None

    extra = range(len(positional), len(instance))
    if not extra:
        return None
    if value.boolean is False:
        return ctx.fail(
            "additionalItems",
            f"Additional items are not allowed ({len(extra)} beyond the {len(positional)} positional schemas)",
        )

    outcome = ValidationOutcome()
    for index in extra:
        outcome.add_nested(ctx.descend(value, instance[index], "additionalItems", instance_token=index))
    outcome.evaluated_items.update(extra)
    return outcome


def contains(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, list):
        return None

    min_contains, max_contains = 1, None
    if ctx.dialect is Dialect.DRAFT_2019_09:
        min_contains = ctx.schema.get("minContains", 1)
        max_contains = ctx.schema.get("maxContains")

    matched, causes = [], []
    for index, item in enumerate(instance):
        result = ctx.descend(value, item, "contains", instance_token=index)
        if result.valid:
            matched.append(index)
        else:
            causes.extend(result.violations)
    outcome = ValidationOutcome(evaluated_items=set(matched))

    if len(matched) < min_contains:
        if "minContains" in ctx.schema and ctx.dialect is Dialect.DRAFT_2019_09:
            outcome.add(
                ctx.error(
                    "minContains",
                    f"{instance!r} contains {len(matched)} matching items, fewer than the minimum of {int(min_contains)}",
                    causes=causes,
                )
            )
        else:
            outcome.add(
                ctx.error("contains", f"{instance!r} does not contain items matching the given schema", causes=causes)
            )
    if max_contains is not None and len(matched) > max_contains:
        outcome.add(
            ctx.error(
                "maxContains",
                f"{instance!r} contains {len(matched)} matching items, more than the maximum of {int(max_contains)}",
            )
        )
    return outcome


def max_items(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, list) or len(instance) <= value:
        return None
    return ctx.fail("maxItems", f"{instance!r} has more than {int(value)} items")


def min_items(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, list) or len(instance) >= value:
        return None
    return ctx.fail("minItems", f"{instance!r} has fewer than {int(value)} items")


def unique_items(ctx: EvaluationContext, value: bool, instance: Any) -> Optional[ValidationOutcome]:
    if not value or not isinstance(instance, list):
        return None
    duplicate = first_duplicate(instance)
    if duplicate is None:
        return None
    first, second = duplicate
    return ctx.fail("uniqueItems", f"{instance!r} has non-unique elements (items {first} and {second} are equal)")
