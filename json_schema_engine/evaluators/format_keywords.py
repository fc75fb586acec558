"""``format``, the content keywords and the plain annotation keywords.

All of these record an annotation. ``format`` asserts only when
``assert_format`` is set; the content keywords only when ``assert_content``
is set.
"""

from typing import Any, Callable, Optional

from ..engine.context import EvaluationContext
from ..engine.outcome import ValidationOutcome
from ..formats.content import decoder_for, parser_for
from ..models.dialect import Dialect
from ..models.schema_node import SchemaNode

Evaluator = Callable[[EvaluationContext, Any, Any], Optional[ValidationOutcome]]


def _annotated(ctx: EvaluationContext, keyword: str, value: Any) -> ValidationOutcome:
    return ValidationOutcome(annotations=[ctx.annotation(keyword, value)])


def format_(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    if ctx.options.assert_format and not ctx.formats.conforms(value, instance):
        return ctx.fail("format", f"{instance!r} is not a {value!r}")
    return _annotated(ctx, "format", value)


def _decoded_bytes(ctx: EvaluationContext, instance: str) -> Optional[bytes]:
    """The raw content of ``instance``; None when its encoding does not decode."""
    encoding = ctx.schema.get("contentEncoding")
    decoder = decoder_for(encoding) if isinstance(encoding, str) else None
    if decoder is None:
        return instance.encode("utf-8")
    try:
        return decoder(instance)
    except ValueError:
        return None


def content_encoding(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    if ctx.options.assert_content and isinstance(instance, str):
        decoder = decoder_for(value)
        if decoder is not None:
            try:
                decoder(instance)
            except ValueError as exc:
                return ctx.fail("contentEncoding", f"{instance!r} is not {value}-encoded: {exc}")
    return _annotated(ctx, "contentEncoding", value)


def content_media_type(ctx: EvaluationContext, value: str, instance: Any) -> Optional[ValidationOutcome]:
    outcome = _annotated(ctx, "contentMediaType", value)
    if not ctx.options.assert_content or not isinstance(instance, str):
        return outcome

    parser = parser_for(value)
    data = _decoded_bytes(ctx, instance)
    # undecodable content is reported by contentEncoding
    if parser is None or data is None:
        return outcome
    try:
        document = parser(data)
    except ValueError as exc:
        return ctx.fail("contentMediaType", f"{instance!r} is not valid {value}: {exc}")

    content_schema = ctx.schema.get("contentSchema")
    if isinstance(content_schema, SchemaNode) and ctx.dialect is Dialect.DRAFT_2019_09:
        outcome.add_nested(ctx.descend(content_schema, document, "contentSchema"))
    return outcome


def content_schema(ctx: EvaluationContext, value: SchemaNode, instance: Any) -> Optional[ValidationOutcome]:
    # without contentMediaType there is nothing to describe
    if "contentMediaType" not in ctx.schema or not isinstance(instance, str):
        return None
    return _annotated(ctx, "contentSchema", value.to_json())


def annotate(keyword: str) -> Evaluator:
    """Evaluator that records the keyword value as an annotation and never fails."""

    def evaluator(ctx: EvaluationContext, value: Any, instance: Any) -> Optional[ValidationOutcome]:
        return _annotated(ctx, keyword, value)

    evaluator.__name__ = keyword
    return evaluator
