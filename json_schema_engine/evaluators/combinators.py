"""Boolean-logic applicators: ``allOf``, ``anyOf``, ``oneOf`` and ``not``.

Every branch is evaluated even once the result is known, because passing
branches contribute evaluated members to ``unevaluated*``.
"""

from itertools import chain
from typing import Any, List, Optional, Tuple

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.schema_node import SchemaNode


def _branches(ctx: EvaluationContext, keyword: str, schemas: Tuple[SchemaNode, ...], instance: Any) -> List[ValidationOutcome]:
    return [ctx.descend(schema, instance, keyword, index) for index, schema in enumerate(schemas)]


def all_of(ctx: EvaluationContext, value: Tuple[SchemaNode, ...], instance: Any) -> Optional[ValidationOutcome]:
    outcome = ValidationOutcome()
    for branch in _branches(ctx, "allOf", value, instance):
        outcome.add_in_place(branch)
    return outcome


def any_of(ctx: EvaluationContext, value: Tuple[SchemaNode, ...], instance: Any) -> Optional[ValidationOutcome]:
    branches = _branches(ctx, "anyOf", value, instance)
    passing = [branch for branch in branches if branch.valid]
    if not passing:
        causes = chain.from_iterable(branch.violations for branch in branches)
        return ctx.fail("anyOf", f"{instance!r} is not valid under any of the {len(value)} given schemas", causes=causes)

    outcome = ValidationOutcome()
    for branch in passing:
        outcome.add_in_place(branch)
    return outcome


def one_of(ctx: EvaluationContext, value: Tuple[SchemaNode, ...], instance: Any) -> Optional[ValidationOutcome]:
    branches = _branches(ctx, "oneOf", value, instance)
    passing = [index for index, branch in enumerate(branches) if branch.valid]

    if not passing:
        causes = chain.from_iterable(branch.violations for branch in branches)
        return ctx.fail("oneOf", f"{instance!r} is not valid under any of the {len(value)} given schemas", causes=causes)
    if len(passing) > 1:
        indices = ", ".join(str(index) for index in passing)
        return ctx.fail("oneOf", f"{instance!r} is valid under more than one of the given schemas (branches {indices})")

    outcome = ValidationOutcome()
    outcome.add_in_place(branches[passing[0]])
    return outcome


def not_(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    if not ctx.descend(value, instance, "not").valid:
        return None
    return ctx.fail("not", f"{instance!r} should not be valid under {value.to_json()!r}")
