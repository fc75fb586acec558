"""Numeric keyword evaluators. Non-numbers (including booleans) are not applicable."""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..utils.json_types import is_multiple_of, is_number


def multiple_of(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not is_number(instance) or is_multiple_of(instance, value):
        return None
    return ctx.fail("multipleOf", f"{instance!r} is not a multiple of {value!r}")


def maximum(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not is_number(instance) or instance <= value:
        return None
    return ctx.fail("maximum", f"{instance!r} is greater than the maximum of {value!r}")


def exclusive_maximum(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not is_number(instance) or instance < value:
        return None
    return ctx.fail("exclusiveMaximum", f"{instance!r} is greater than or equal to the exclusive maximum of {value!r}")


def minimum(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not is_number(instance) or instance >= value:
        return None
    return ctx.fail("minimum", f"{instance!r} is less than the minimum of {value!r}")


def exclusive_minimum(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
    if not is_number(instance) or instance > value:
        return None
    return ctx.fail("exclusiveMinimum", f"{instance!r} is less than or equal to the exclusive minimum of {value!r}")
