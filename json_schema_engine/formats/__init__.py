from .content import CONTENT_DECODERS, MEDIA_TYPE_PARSERS, decoder_for, parser_for
from .format_checkers import BUILTIN_FORMATS, FormatPredicate, FormatRegistry

__all__ = [
    "BUILTIN_FORMATS",
    "CONTENT_DECODERS",
    "MEDIA_TYPE_PARSERS",
    "FormatPredicate",
    "FormatRegistry",
    "decoder_for",
    "parser_for",
]
