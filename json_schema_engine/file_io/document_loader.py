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

"""JSON/YAML document loader with caching and source locations."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..config import engine_config
from ..exceptions import DocumentLoadError
from ..utils import json_pointer

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]

JSON_SUFFIXES = (".json",)


class JsonCompatibleLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates and times as strings."""


JsonCompatibleLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class LoadedDocument:
    data: Any
    source_map: SourceMap = field(default_factory=dict)
    path: Optional[Path] = None


def build_source_map(content: str) -> SourceMap:
    """Build a mapping from JSON Pointers to 1-based line/column.

    This uses PyYAML's node tree (yaml.compose) so locations are available for
    both YAML and JSON documents without changing the parsed data.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=JsonCompatibleLoader)
    except yaml.YAMLError:
        # Location data is best-effort; parse errors are reported by the loader.
        return source_map

    if root is None:
        return source_map

    def _record(path: str, node) -> None:
        mark = getattr(node, "start_mark", None)
        if mark is None:
            return
        # PyYAML uses 0-based line/column
        source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

    def _walk(node, path: str) -> None:
        _record(path, node)
        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, json_pointer.join(path, str(key)))
        elif isinstance(node, yaml.nodes.SequenceNode):
            for index, item_node in enumerate(node.value):
                _walk(item_node, json_pointer.join(path, index))

    _walk(root, "")
    return source_map


def _ensure_json_compatible(value: Any, path: str = "") -> None:
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _ensure_json_compatible(item, json_pointer.join(path, index))
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise DocumentLoadError(f"Non-string mapping key {key!r} at '{path or '/'}'")
            _ensure_json_compatible(item, json_pointer.join(path, key))
        return
    raise DocumentLoadError(f"Value of type {type(value).__name__} at '{path or '/'}' is not JSON")


class DocumentLoader:
    """Loads JSON and YAML documents, optionally caching them per path."""

    def __init__(self, cache_enabled: bool = None, max_cache_size: int = None):
        """Initialize the loader.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
            max_cache_size: Cache bound. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else engine_config.cache_enabled
        self.max_cache_size = max_cache_size if max_cache_size is not None else engine_config.max_cache_size
        self._cache: Dict[Path, LoadedDocument] = {}

    def load(self, file_path: Union[str, Path]) -> LoadedDocument:
        """Load a document; ``.json`` files are parsed as JSON, anything else as YAML.

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Document not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        key = path.resolve()
        if self.cache_enabled and key in self._cache:
            logger.debug("Loading document from cache: %s", path)
            return self._cache[key]

        logger.debug("Loading document: %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

        document = self.load_from_string(content, as_json=path.suffix.lower() in JSON_SUFFIXES, path=path)

        if self.cache_enabled:
            if len(self._cache) >= self.max_cache_size:
                self._cache.pop(next(iter(self._cache)))
            self._cache[key] = document
        return document

    def load_from_string(self, content: str, *, as_json: bool = False, path: Optional[Path] = None) -> LoadedDocument:
        """Parse document text; an empty YAML document loads as ``None``."""
        where = path if path is not None else "<string>"
        if as_json:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as exc:
                raise DocumentLoadError(f"Invalid JSON in {where}: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
        else:
            try:
                data = yaml.load(content, Loader=JsonCompatibleLoader)
            except yaml.YAMLError as exc:
                raise DocumentLoadError(f"Failed to parse YAML {where}: {exc}") from exc
            _ensure_json_compatible(data)

        return LoadedDocument(data=data, source_map=build_source_map(content), path=path)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global loader instance
document_loader = DocumentLoader()


def load_document(file_path: Union[str, Path]) -> LoadedDocument:
    return document_loader.load(file_path)
