from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..models.schema_node import SchemaNode
from ..resolver.reference_resolver import ResolvedReference
from ..utils import json_pointer
from .outcome import Annotation, ValidationOutcome, Violation

if TYPE_CHECKING:
    from ..config import ValidationOptions
    from ..formats.format_checkers import FormatRegistry
    from ..models.dialect import Dialect
    from .validator import ValidationRun

_SAME_INSTANCE = object()


class EvaluationContext:
    """Where a schema node is being applied: paths, base URI and the running call.

    ``outcome`` is the node's outcome under construction; keywords that run
    last (``unevaluated*``) read the members already evaluated from it.
    """

    __slots__ = ("run", "schema", "instance_path", "schema_path", "base_uri", "outcome")

    def __init__(
        self,
        run: "ValidationRun",
        schema: SchemaNode,
        instance_path: str,
        schema_path: str,
        base_uri: str,
        outcome: ValidationOutcome,
    ):
        self.run = run
        self.schema = schema
        self.instance_path = instance_path
        self.schema_path = schema_path
        self.base_uri = base_uri
        self.outcome = outcome

    @property
    def options(self) -> "ValidationOptions":
        return self.run.options

    @property
    def dialect(self) -> "Dialect":
        return self.run.dialect

    @property
    def formats(self) -> "FormatRegistry":
        return self.run.formats

    def keyword_path(self, *tokens: Union[str, int]) -> str:
        return json_pointer.join(self.schema_path, *tokens)

    def error(
        self,
        keyword: str,
        message: str,
        *,
        causes: Iterable[Violation] = (),
        instance_path: Optional[str] = None,
    ) -> Violation:
        return Violation(
            keyword=keyword,
            schema_path=self.keyword_path(keyword),
            instance_path=self.instance_path if instance_path is None else instance_path,
            message=message,
            causes=tuple(causes),
        )

    def fail(self, keyword: str, message: str, *, causes: Iterable[Violation] = ()) -> ValidationOutcome:
        return ValidationOutcome(violations=[self.error(keyword, message, causes=causes)])

    def annotation(self, keyword: str, value: Any) -> Annotation:
        return Annotation(
            keyword=keyword,
            schema_path=self.keyword_path(keyword),
            instance_path=self.instance_path,
            value=value,
        )

    def descend(
        self,
        schema: SchemaNode,
        instance: Any,
        *schema_tokens: Union[str, int],
        instance_token: Any = _SAME_INSTANCE,
        base_uri: Optional[str] = None,
    ) -> ValidationOutcome:
        """Apply ``schema`` to ``instance`` (a member when ``instance_token`` is given)."""
        instance_path = self.instance_path
        if instance_token is not _SAME_INSTANCE:
            instance_path = json_pointer.join(instance_path, instance_token)
        return self.run.evaluate(
            schema,
            instance,
            instance_path=instance_path,
            schema_path=self.keyword_path(*schema_tokens),
            base_uri=self.base_uri if base_uri is None else base_uri,
        )

    def resolve(self, ref: str) -> ResolvedReference:
        return self.run.resolver.resolve(ref, self.base_uri)

    def resolve_recursive(self) -> ResolvedReference:
        return self.run.resolver.resolve_recursive(self.base_uri, self.run.dynamic_scope)
