"""``$ref`` and ``$recursiveRef``.

An unresolvable reference fails only the branch holding it; it is reported
as a violation, never raised.
"""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..exceptions import UnresolvableReferenceError
from ..resolver.reference_resolver import ResolvedReference


def _apply(ctx: EvaluationContext, keyword: str, target: ResolvedReference, instance: Any) -> ValidationOutcome:
    outcome = ValidationOutcome()
    outcome.add_in_place(ctx.descend(target.node, instance, keyword, base_uri=target.base_uri))
    return outcome


def ref(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    try:
        target = ctx.resolve(value)
    except UnresolvableReferenceError as exc:
        return ctx.fail("$ref", str(exc))
    return _apply(ctx, "$ref", target, instance)


def recursive_ref(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    try:
        target = ctx.resolve_recursive()
    except UnresolvableReferenceError as exc:
        return ctx.fail("$recursiveRef", str(exc))
    return _apply(ctx, "$recursiveRef", target, instance)
