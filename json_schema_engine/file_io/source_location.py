from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    instance_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    instance_path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Locate an instance path in a document's source map.

    Paths without an entry (e.g. a missing required property) fall back to the
    closest enclosing value that has one.
    """
    if not source_map or instance_path is None:
        return SourceLocation(file_path=file_path, instance_path=instance_path)

    path = instance_path
    while True:
        entry = source_map.get(path)
        if entry:
            return SourceLocation(
                file_path=file_path,
                instance_path=instance_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not path:
            return SourceLocation(file_path=file_path, instance_path=instance_path)
        path = path.rsplit("/", 1)[0]


def _format_file_path(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        # different drive on Windows
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        file_path = _format_file_path(loc.file_path)
        if loc.line is not None and loc.column is not None:
            parts.append(f"{file_path}:{loc.line}:{loc.column}")
        elif loc.line is not None:
            parts.append(f"{file_path}:{loc.line}")
        else:
            parts.append(file_path)

    if loc.instance_path is not None:
        parts.append(f"at {loc.instance_path or '/'}")

    return " ".join(parts)
