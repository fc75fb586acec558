"""Reference resolution: the resolution table and document loaders."""

from .loaders import ChainReferenceLoader, FileReferenceLoader, MappingReferenceLoader, ReferenceLoader, documents_by_id
from .reference_resolver import ReferenceResolver, ResolutionTable, ResolvedReference, canonicalize

__all__ = [
    "ChainReferenceLoader",
    "FileReferenceLoader",
    "MappingReferenceLoader",
    "ReferenceLoader",
    "ReferenceResolver",
    "ResolutionTable",
    "ResolvedReference",
    "canonicalize",
    "documents_by_id",
]
