"""String keyword evaluators. Lengths count code points."""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome


def max_length(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, str) or len(instance) <= value:
        return None
    return ctx.fail("maxLength", f"{instance!r} is longer than {int(value)} characters")


def min_length(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not isinstance(instance, str) or len(instance) >= value:
        return None
    return ctx.fail("minLength", f"{instance!r} is shorter than {int(value)} characters")


def pattern(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    # search, not match: the pattern is not implicitly anchored
    if not isinstance(instance, str) or ctx.schema.pattern(value).search(instance):
        return None
    return ctx.fail("pattern", f"{instance!r} does not match {value!r}")
