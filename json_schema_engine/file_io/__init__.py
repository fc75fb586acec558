from .document_loader import DocumentLoader, LoadedDocument, document_loader, load_document
from .source_location import SourceLocation, format_source, lookup_source

__all__ = [
    "DocumentLoader",
    "LoadedDocument",
    "SourceLocation",
    "document_loader",
    "format_source",
    "load_document",
    "lookup_source",
]
