"""Schema data model: parsed schema nodes and dialects."""

from .dialect import DEFAULT_DIALECT, Dialect, parse_dialect, select_dialect
from .schema_node import SchemaNode, parse_schema

__all__ = [
    "DEFAULT_DIALECT",
    "Dialect",
    "SchemaNode",
    "parse_dialect",
    "parse_schema",
    "select_dialect",
]
