"""Validation engine: evaluation context, outcomes and the public validator."""

from .outcome import Annotation, ValidationOutcome, Violation
from .context import EvaluationContext
from .validator import CompiledSchema, SchemaValidator, ValidationRun, compile_schema, validate

__all__ = [
    "Annotation",
    "CompiledSchema",
    "EvaluationContext",
    "SchemaValidator",
    "ValidationOutcome",
    "ValidationRun",
    "Violation",
    "compile_schema",
    "validate",
]
