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

"""Reference loaders: how documents outside the root schema are obtained.

The engine never performs network I/O; callers inject a loader and the
resolver asks it once per unknown resource URI while building its table.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import urldefrag, urlparse
from urllib.request import url2pathname

from ..exceptions import DocumentLoadError
from ..file_io.document_loader import load_document

logger = logging.getLogger(__name__)


class ReferenceLoader(Protocol):
    def fetch(self, uri: str) -> Optional[Any]:
        """Return the document (raw JSON or a parsed node) for ``uri``, or None if not found."""
        ...


class MappingReferenceLoader:
    """Serves documents from an in-memory ``URI -> document`` mapping."""

    def __init__(self, documents: Mapping[str, Any]):
        self._documents = {urldefrag(uri)[0]: document for uri, document in documents.items()}

    def fetch(self, uri: str) -> Optional[Any]:
        return self._documents.get(urldefrag(uri)[0])


class FileReferenceLoader:
    """Serves ``file:`` URIs and relative paths from the local filesystem.

    Relative URIs (documents validated without an absolute base) are looked up
    under ``root_dir``. Any other scheme is reported as not found.
    """

    def __init__(self, root_dir: Optional[Path] = None):
        self.root_dir = Path(root_dir) if root_dir is not None else None

    def fetch(self, uri: str) -> Optional[Any]:
        path = self._path_for(uri)
        if path is None or not path.is_file():
            return None
        try:
            return load_document(path).data
        except DocumentLoadError as exc:
            logger.warning("Cannot load referenced document %s: %s", path, exc)
            return None

    def _path_for(self, uri: str) -> Optional[Path]:
        parsed = urlparse(urldefrag(uri)[0])
        if parsed.scheme == "file":
            return Path(url2pathname(parsed.path))
        if parsed.scheme == "" and parsed.netloc == "":
            if self.root_dir is None:
                return None
            return self.root_dir / url2pathname(parsed.path)
        logger.debug("Not fetching non-local reference '%s'", uri)
        return None


class ChainReferenceLoader:
    """Asks each loader in turn; the first document found wins."""

    def __init__(self, *loaders: ReferenceLoader):
        self.loaders = loaders

    def fetch(self, uri: str) -> Optional[Any]:
        for loader in self.loaders:
            document = loader.fetch(uri)
            if document is not None:
                return document
        return None


def documents_by_id(directory: Path, patterns=("*.json", "*.yaml", "*.yml")) -> Dict[str, Any]:
    """Load every schema document under ``directory`` keyed by its ``$id``.

    Documents without a string ``$id`` are keyed by their ``file:`` URI.
    """
    documents: Dict[str, Any] = {}
    for pattern in patterns:
        for path in sorted(Path(directory).rglob(pattern)):
            try:
                data = load_document(path).data
            except DocumentLoadError as exc:
                logger.warning("Skipping unreadable schema %s: %s", path, exc)
                continue
            schema_id = data.get("$id") if isinstance(data, dict) else None
            uri = schema_id if isinstance(schema_id, str) else path.resolve().as_uri()
            documents.setdefault(urldefrag(uri)[0], data)
    logger.debug("Loaded %d schema documents from %s", len(documents), directory)
    return documents
