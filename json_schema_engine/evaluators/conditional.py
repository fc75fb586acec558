"""``if`` / ``then`` / ``else``.

``then`` and ``else`` are only read through ``if``; on their own they do
nothing, and a missing branch never fails.
"""

from typing import Any, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..models.schema_node import SchemaNode


def if_(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    condition = ctx.descend(value, instance, "if")
    outcome = ValidationOutcome()

    if condition.valid:
        outcome.add_in_place(condition)
        branch_keyword = "then"
    else:
        branch_keyword = "else"

    branch = ctx.schema.get(branch_keyword)
    if branch is not None:
        outcome.add_in_place(ctx.descend(branch, instance, branch_keyword))
    return outcome
