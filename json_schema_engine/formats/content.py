"""Decoders for ``contentEncoding`` and parsers for ``contentMediaType``.

Both tables raise ``ValueError`` for content that does not decode or parse.
Names missing from a table are treated as unknown and never fail.
"""

import base64
import binascii
import json
import quopri
from typing import Any, Callable, Dict, Optional


def _seven_bit(text: str) -> bytes:
    if not text.isascii():
        raise ValueError("7bit content must be ASCII")
    return text.encode("ascii")


def _eight_bit(text: str) -> bytes:
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"content is not 8-bit: {exc}") from exc


def _quoted_printable(text: str) -> bytes:
    if not text.isascii():
        raise ValueError("quoted-printable content must be ASCII")
    return quopri.decodestring(text.encode("ascii"))


def _base16(text: str) -> bytes:
    try:
        return base64.b16decode(text, casefold=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base16 content: {exc}") from exc


def _base32(text: str) -> bytes:
    try:
        return base64.b32decode(text)
    except binascii.Error as exc:
        raise ValueError(f"invalid base32 content: {exc}") from exc


def _base64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 content: {exc}") from exc


CONTENT_DECODERS: Dict[str, Callable[[str], bytes]] = {
    "7bit": _seven_bit,
    "8bit": _eight_bit,
    "binary": _eight_bit,
    "quoted-printable": _quoted_printable,
    "base16": _base16,
    "base32": _base32,
    "base64": _base64,
}


def _parse_json(data: bytes) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"invalid JSON content: {exc}") from exc


MEDIA_TYPE_PARSERS: Dict[str, Callable[[bytes], Any]] = {
    "application/json": _parse_json,
}


def media_type_essence(media_type: str) -> str:
    """``"Application/JSON; charset=utf-8"`` -> ``"application/json"``."""
    return media_type.split(";", 1)[0].strip().lower()


def decoder_for(encoding: str) -> Optional[Callable[[str], bytes]]:
    return CONTENT_DECODERS.get(encoding.lower())


def parser_for(media_type: str) -> Optional[Callable[[bytes], Any]]:
    return MEDIA_TYPE_PARSERS.get(media_type_essence(media_type))
