# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional, Set, Tuple

from ..config import ValidationOptions
from ..evaluators import DEFERRED_KEYWORDS, Evaluator, evaluators_for
from ..exceptions import SchemaTooDeepError
from ..formats.format_checkers import FormatRegistry
from ..models.dialect import Dialect, DialectSelection, select_dialect
from ..models.schema_node import SchemaNode, parse_schema
from ..resolver.loaders import ReferenceLoader
from ..resolver.reference_resolver import ReferenceResolver
from .context import EvaluationContext
from .outcome import ValidationOutcome, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledSchema:
    """A parsed schema with its resolution table; shared read-only between calls."""
    root: SchemaNode
    resolver: ReferenceResolver
    dialect: Dialect
    dialect_selection: DialectSelection
    formats: FormatRegistry


def compile_schema(
    raw: Any,
    options: Optional[ValidationOptions] = None,
    loader: Optional[ReferenceLoader] = None,
) -> CompiledSchema:
    """Parse ``raw`` and build its resolution table.

    Args:
        raw: Schema document (mapping, boolean or an already parsed node)
        options: Validation options; defaults are used when omitted
        loader: Source for documents referenced by URI but not embedded

    Raises:
        MalformedSchemaError: If a keyword value has the wrong shape
        SchemaTooDeepError: If the schema nests too deeply
        DialectError: If ``options.dialect`` names an unknown dialect
    """
    options = options or ValidationOptions()
    selection = select_dialect(options.dialect, raw)
    root = parse_schema(raw)
    resolver = ReferenceResolver(root, base_uri=options.base_uri, loader=loader, dialect=selection.dialect)
    if resolver.unresolved:
        logger.debug("%d references could not be resolved", len(resolver.unresolved))
    logger.debug("Compiled schema with dialect %s (from %s)", selection.dialect.value, selection.source)
    return CompiledSchema(
        root=root,
        resolver=resolver,
        dialect=selection.dialect,
        dialect_selection=selection,
        formats=FormatRegistry(options.formats),
    )


class ValidationRun:
    """State of one ``validate`` call: scope stack, depth and cycle tracking.

    A run is used by a single thread and discarded when the call returns.
    """

    def __init__(self, compiled: CompiledSchema, options: ValidationOptions):
        self.options = options
        self.resolver = compiled.resolver
        self.dialect = compiled.dialect
        self.formats = compiled.formats
        self.evaluators: Mapping[str, Evaluator] = evaluators_for(compiled.dialect)
        self.dynamic_scope: List[str] = []
        self._active: Set[Tuple[int, str]] = set()
        self._depth = 0

    def evaluate(
        self,
        schema: SchemaNode,
        instance: Any,
        *,
        instance_path: str = "",
        schema_path: str = "",
        base_uri: str = "",
    ) -> ValidationOutcome:
        if schema.is_boolean:
            if schema.boolean:
                return ValidationOutcome()
            return ValidationOutcome(
                violations=[
                    Violation(
                        keyword="false",
                        schema_path=schema_path,
                        instance_path=instance_path,
                        message=f"False schema does not allow {instance!r}",
                    )
                ]
            )

        key = (id(schema), instance_path)
        if key in self._active:
            raise SchemaTooDeepError(
                f"Reference cycle without progress at schema '{schema.pointer or '/'}' "
                f"and instance location '{instance_path or '/'}'"
            )
        if self._depth >= self.options.max_depth:
            raise SchemaTooDeepError(
                f"Evaluation exceeds the maximum depth of {self.options.max_depth} "
                f"at instance location '{instance_path or '/'}'"
            )

        base = self.resolver.base_uri_of(schema, base_uri)
        entered_resource = not self.dynamic_scope or self.dynamic_scope[-1] != base
        if entered_resource:
            self.dynamic_scope.append(base)
        self._active.add(key)
        self._depth += 1
        try:
            return self._evaluate_keywords(schema, instance, instance_path, schema_path, base)
        finally:
            self._depth -= 1
            self._active.discard(key)
            if entered_resource:
                self.dynamic_scope.pop()

    def _evaluate_keywords(
        self, schema: SchemaNode, instance: Any, instance_path: str, schema_path: str, base: str
    ) -> ValidationOutcome:
        outcome = ValidationOutcome()
        ctx = EvaluationContext(self, schema, instance_path, schema_path, base, outcome)

        if self.dialect.ref_overrides_siblings and "$ref" in schema:
            keywords = ["$ref"]
        else:
            keywords = [keyword for keyword in schema.keywords if keyword not in DEFERRED_KEYWORDS]
            keywords.extend(keyword for keyword in DEFERRED_KEYWORDS if keyword in schema)

        for keyword in keywords:
            evaluator = self.evaluators.get(keyword)
            if evaluator is not None:
                outcome.merge(evaluator(ctx, schema.keywords[keyword], instance))
        return outcome


class SchemaValidator:
    """Compile a schema once and validate any number of instances against it.

    The compiled schema is never modified, so one validator may be shared
    between threads; each call keeps its own scope stack and depth.
    """

    def __init__(
        self,
        schema: Any,
        options: Optional[ValidationOptions] = None,
        loader: Optional[ReferenceLoader] = None,
    ):
        self.options = options or ValidationOptions()
        self.compiled = compile_schema(schema, self.options, loader)

    @property
    def dialect(self) -> Dialect:
        return self.compiled.dialect

    @property
    def schema(self) -> SchemaNode:
        return self.compiled.root

    def validate(self, instance: Any) -> ValidationOutcome:
        """Validate ``instance``.

        Raises:
            SchemaTooDeepError: On a reference cycle without progress or when
                evaluation nests deeper than ``options.max_depth`` (or the
                interpreter stack) allows
        """
        run = ValidationRun(self.compiled, self.options)
        try:
            outcome = run.evaluate(self.compiled.root, instance, base_uri=self.compiled.resolver.root_base_uri)
        except RecursionError as exc:
            raise SchemaTooDeepError(
                f"Evaluation exceeds the interpreter recursion limit (max_depth is {self.options.max_depth})"
            ) from exc
        if not outcome.valid:
            # annotations of a failing schema are discarded
            outcome.annotations.clear()
        return outcome

    def is_valid(self, instance: Any) -> bool:
        return self.validate(instance).valid

    def iter_violations(self, instance: Any) -> Iterator[Violation]:
        """Yield every violation, with the causes of a violation following it."""
        pending = list(reversed(self.validate(instance).violations))
        while pending:
            violation = pending.pop()
            yield violation
            pending.extend(reversed(violation.causes))


def validate(schema: Any, instance: Any, options: Optional[ValidationOptions] = None) -> ValidationOutcome:
    """Validate ``instance`` against ``schema`` in one call."""
    return SchemaValidator(schema, options).validate(instance)
