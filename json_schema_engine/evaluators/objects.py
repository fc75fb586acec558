"""Object keyword evaluators. Non-objects are not applicable.

``properties``, ``patternProperties`` and ``additionalProperties`` mark the
members they apply to as evaluated; a member matched by a pattern is never
"additional".
"""

from typing import Any, Dict, List, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.schema_node import SchemaNode


def properties(ctx: EvaluationContext, value: Dict[str, SchemaNode], instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for name, schema in value.items():
        if name in instance:
            outcome.add_nested(ctx.descend(schema, instance[name], "properties", name, instance_token=name))
            outcome.evaluated_properties.add(name)
    return outcome


def pattern_properties(ctx: EvaluationContext, value: Dict[str, SchemaNode], instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for source, schema in value.items():
        regex = ctx.schema.pattern(source)
        for name, member in instance.items():
            if regex.search(name):
                outcome.add_nested(ctx.descend(schema, member, "patternProperties", source, instance_token=name))
                outcome.evaluated_properties.add(name)
    return outcome


def _additional_names(schema: SchemaNode, instance: Dict[str, Any]) -> List[str]:
    declared = schema.get("properties") or {}
    patterns = [schema.pattern(source) for source in (schema.get("patternProperties") or {})]
    return [
        name
        for name in instance
        if name not in declared and not any(regex.search(name) for regex in patterns)
    ]


def additional_properties(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    extras = _additional_names(ctx.schema, instance)
    if not extras:
        return None
    if value.boolean is False:
        listed = ", ".join(repr(name) for name in extras)
        verb = "was" if len(extras) == 1 else "were"
        return ctx.fail("additionalProperties", f"Additional properties are not allowed ({listed} {verb} unexpected)")

    outcome = ValidationOutcome()
    for name in extras:
        outcome.add_nested(ctx.descend(value, instance[name], "additionalProperties", instance_token=name))
    outcome.evaluated_properties.update(extras)
    return outcome


def property_names(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for name in instance:
        outcome.add_nested(ctx.descend(value, name, "propertyNames", instance_token=name))
    return outcome


def required(ctx: EvaluationContext, value: List[str], instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for name in value:
        if name not in instance:
            outcome.add(ctx.error("required", f"{name!r} is a required property"))
    return outcome


def max_properties(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict) or len(instance) <= value:
        return None
    return ctx.fail("maxProperties", f"{instance!r} has more than {int(value)} properties")


def min_properties(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict) or len(instance) >= value:
        return None
    return ctx.fail("minProperties", f"{instance!r} has fewer than {int(value)} properties")


def _missing_dependencies(ctx, keyword, trigger, names, instance, outcome) -> None:
    for name in names:
        if name not in instance:
            outcome.add(ctx.error(keyword, f"{name!r} is a dependency of {trigger!r}"))


def dependent_required(ctx: EvaluationContext, value: Dict[str, List[str]], instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for trigger, names in value.items():
        if trigger in instance:
            _missing_dependencies(ctx, "dependentRequired", trigger, names, instance, outcome)
    return outcome


def dependent_schemas(ctx: EvaluationContext, value: Dict[str, SchemaNode], instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for trigger, schema in value.items():
        if trigger in instance:
            outcome.add_in_place(ctx.descend(schema, instance, "dependentSchemas", trigger))
    return outcome


def dependencies(ctx: EvaluationContext, value: Dict[str, Any], instance: Any) -> Optional[ValidationOutcome]:
    """Draft-07 ``dependencies``: each entry is a property list or a schema."""
    if not isinstance(instance, dict):
        return None

    outcome = ValidationOutcome()
    for trigger, dependency in value.items():
        if trigger not in instance:
            continue
        if isinstance(dependency, SchemaNode):
            outcome.add_in_place(ctx.descend(dependency, instance, "dependencies", trigger))
        else:
            _missing_dependencies(ctx, "dependencies", trigger, dependency, instance, outcome)
    return outcome
