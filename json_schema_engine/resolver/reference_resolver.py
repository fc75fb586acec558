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
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
from urllib.parse import unquote, urldefrag, urljoin

from ..exceptions import SchemaTooDeepError, UnresolvableReferenceError
from ..models.dialect import DEFAULT_DIALECT, Dialect
from ..models.schema_node import MAX_PARSE_DEPTH, SchemaNode, parse_schema
from ..utils import json_pointer
from .loaders import ReferenceLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedReference:
    """A schema node together with the base URI in effect at that node."""
    node: SchemaNode
    base_uri: str


def join_uri(base_uri: str, ref: str) -> str:
    # urljoin leaves fragment-only references alone for non-hierarchical
    # schemes (urn:), so those are appended to the base directly.
    if ref.startswith("#"):
        return urldefrag(base_uri)[0] + ref
    if not base_uri:
        return ref
    return urljoin(base_uri, ref)


def canonicalize(ref: str, base_uri: str) -> Tuple[str, str]:
    """Return ``(resource URI, unquoted fragment)`` for ``ref`` against ``base_uri``."""
    uri, fragment = urldefrag(join_uri(base_uri, ref))
    return uri, unquote(fragment)


class ResolutionTable:
    """Canonical URI (``base#fragment``) to schema node mapping."""

    def __init__(self):
        self._entries: Dict[str, ResolvedReference] = {}

    def register(self, uri: str, node: SchemaNode, base_uri: str) -> bool:
        existing = self._entries.get(uri)
        if existing is not None:
            if existing.node is not node:
                logger.warning("Duplicate schema identifier '%s' (%s); keeping the first", uri, node.pointer or "/")
            return False
        self._entries[uri] = ResolvedReference(node=node, base_uri=base_uri)
        return True

    def lookup(self, uri: str) -> Optional[ResolvedReference]:
        return self._entries.get(uri)

    def __contains__(self, uri: str) -> bool:
        return uri in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ReferenceResolver:
    """Builds the resolution table for a schema document and answers lookups.

    Construction walks the whole tree (and every document obtained through the
    loader), registering each node by pointer from every enclosing resource,
    by ``$id`` and by anchor, then resolves every static ``$ref`` once. After
    construction the resolver is read-only and may be shared between threads.

    Under draft-07 a schema object holding ``$ref`` is nothing but the
    reference, so its ``$id`` and ``$anchor`` are not indexed.
    """

    def __init__(
        self,
        root: SchemaNode,
        *,
        base_uri: str = "",
        loader: Optional[ReferenceLoader] = None,
        max_depth: int = MAX_PARSE_DEPTH,
        dialect: Dialect = DEFAULT_DIALECT,
    ):
        self.table = ResolutionTable()
        self.loader = loader
        self.dialect = dialect
        self.max_depth = max_depth
        self._bases: Dict[int, str] = {}
        self._resources: Dict[str, SchemaNode] = {}
        self._pending: List[Tuple[str, str]] = []
        self._unresolved: Dict[str, str] = {}
        self._fetched: Set[str] = set()

        self.root = root
        self.root_base_uri = self._index_document(root, base_uri)
        self._resolve_pending()
        logger.debug(
            "Indexed %d schema locations across %d resources", len(self.table), len(self._resources)
        )

    # ---- queries -------------------------------------------------------------

    def resolve(self, ref: str, base_uri: str) -> ResolvedReference:
        """Look up ``ref`` relative to ``base_uri``.

        Raises:
            UnresolvableReferenceError: If the table has no entry for it
        """
        uri, fragment = canonicalize(ref, base_uri)
        entry = self.table.lookup(f"{uri}#{fragment}")
        if entry is None:
            reason = self._unresolved.get(f"{uri}#{fragment}", "no matching schema")
            raise UnresolvableReferenceError(ref, base_uri, reason)
        return entry

    def resolve_recursive(self, base_uri: str, dynamic_scope: Iterable[str]) -> ResolvedReference:
        """Resolve ``$recursiveRef: "#"`` from ``base_uri``.

        The static target is the current resource root. When it declares
        ``$recursiveAnchor: true`` the outermost resource in ``dynamic_scope``
        (ordered outermost first) that also declares it is used instead.
        """
        initial = self.resolve("#", base_uri)
        if not _has_recursive_anchor(initial.node):
            return initial
        for scope_base in dynamic_scope:
            entry = self.table.lookup(f"{scope_base}#")
            if entry is not None and _has_recursive_anchor(entry.node):
                return entry
        return initial

    def base_uri_of(self, node: SchemaNode, default: str = "") -> str:
        return self._bases.get(id(node), default)

    @property
    def unresolved(self) -> Dict[str, str]:
        """References that could not be resolved while building the table."""
        return dict(self._unresolved)

    # ---- indexing ------------------------------------------------------------

    def _index_document(self, node: SchemaNode, base_uri: str) -> str:
        base = urldefrag(base_uri)[0]
        self._register_resource(base, node)
        self._index(node, base, [(base, "")], 0)
        return self._bases.get(id(node), base)

    def _register_resource(self, uri: str, node: SchemaNode) -> None:
        if uri not in self._resources:
            self._resources[uri] = node

    def _index(self, node: SchemaNode, base: str, locations: List[Tuple[str, str]], depth: int) -> None:
        if depth > self.max_depth:
            raise SchemaTooDeepError(f"Schema nesting exceeds {self.max_depth} levels at '{node.pointer or '/'}'")

        if not node.is_boolean:
            ref_only = self.dialect.ref_overrides_siblings and "$ref" in node
            node_id = None if ref_only else node.get("$id")
            if isinstance(node_id, str):
                uri, fragment = canonicalize(node_id, base)
                if not node_id.startswith("#"):
                    base = uri
                    self._register_resource(base, node)
                    locations = locations + [(base, "")]
                if fragment and not json_pointer.is_pointer(fragment):
                    # plain-name fragment: draft-07 style anchor
                    self.table.register(f"{base}#{fragment}", node, base)

            anchor = None if ref_only else node.get("$anchor")
            if isinstance(anchor, str):
                self.table.register(f"{base}#{anchor}", node, base)

            ref = node.get("$ref")
            if isinstance(ref, str):
                self._pending.append((ref, base))
            if "$recursiveRef" in node:
                self._pending.append(("#", base))

        self._bases[id(node)] = base
        for uri, pointer in locations:
            self.table.register(f"{uri}#{pointer}", node, base)

        for tokens, child in node.iter_subschemas():
            child_locations = [(uri, json_pointer.join(pointer, *tokens)) for uri, pointer in locations]
            self._index(child, base, child_locations, depth + 1)

    # ---- static reference resolution ----------------------------------------

    def _resolve_pending(self) -> None:
        while self._pending:
            ref, base = self._pending.pop()
            try:
                self._locate(ref, base)
            except UnresolvableReferenceError as exc:
                uri, fragment = canonicalize(ref, base)
                self._unresolved[f"{uri}#{fragment}"] = exc.reason
                logger.warning("%s", exc)

    def _locate(self, ref: str, base: str) -> ResolvedReference:
        uri, fragment = canonicalize(ref, base)
        key = f"{uri}#{fragment}"
        entry = self.table.lookup(key)
        if entry is not None:
            return entry

        if uri not in self._resources:
            self._fetch(uri)
            entry = self.table.lookup(key)
            if entry is not None:
                return entry
        if uri not in self._resources:
            raise UnresolvableReferenceError(ref, base, f"unknown resource '{uri}'")

        if json_pointer.is_pointer(fragment):
            return self._index_pointer_target(ref, base, uri, fragment)
        raise UnresolvableReferenceError(ref, base, f"no anchor named '{fragment}' in '{uri}'")

    def _fetch(self, uri: str) -> None:
        if self.loader is None or uri in self._fetched:
            return
        self._fetched.add(uri)

        document = self.loader.fetch(uri)
        if document is None:
            logger.debug("Reference loader has no document for '%s'", uri)
            return
        logger.debug("Indexing referenced document '%s'", uri)
        self._index_document(parse_schema(document, max_depth=self.max_depth), uri)

    def _index_pointer_target(self, ref: str, base: str, uri: str, fragment: str) -> ResolvedReference:
        """Follow a JSON Pointer that leaves the indexed schema tree.

        Pointers into unknown keywords (or other non-schema locations) are
        parsed on demand and indexed like any other subtree.
        """
        try:
            tokens = json_pointer.split(fragment)
        except ValueError as exc:
            raise UnresolvableReferenceError(ref, base, str(exc)) from exc

        root = self._resources[uri]
        current: Any = root
        ancestor_base = self._bases.get(id(root), uri)
        for token in tokens:
            if isinstance(current, SchemaNode):
                ancestor_base = self._bases.get(id(current), ancestor_base)
                if current.is_boolean or token not in current.keywords:
                    current = None
                else:
                    current = current.keywords[token]
            elif isinstance(current, (list, tuple)):
                index = int(token) if token.isdigit() else -1
                current = current[index] if 0 <= index < len(current) else None
            elif isinstance(current, dict):
                current = current.get(token)
            else:
                current = None
            if current is None:
                break

        if isinstance(current, SchemaNode):
            return ResolvedReference(node=current, base_uri=self._bases.get(id(current), ancestor_base))
        if isinstance(current, (dict, bool)):
            node = parse_schema(current, fragment, max_depth=self.max_depth)
            self._index(node, ancestor_base, [(uri, fragment)], 0)
            return self.table.lookup(f"{uri}#{fragment}")
        raise UnresolvableReferenceError(ref, base, f"pointer '{fragment}' does not designate a schema")


def _has_recursive_anchor(node: SchemaNode) -> bool:
    return not node.is_boolean and node.get("$recursiveAnchor") is True
