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

"""Dialect identifiers for the supported JSON Schema drafts.

A schema's dialect decides which keywords are evaluated:

  * **draft-07** - ``$ref`` takes over its schema object (sibling keywords are
    ignored), object dependencies use ``dependencies``.
  * **2019-09** - ``$ref`` is an applicator like any other keyword and the
    vocabulary adds ``dependentRequired``, ``dependentSchemas``,
    ``minContains``/``maxContains``, ``unevaluated*`` and ``$recursiveRef``.

The dialect is taken from the caller's options, else from the root ``$schema``,
else :data:`DEFAULT_DIALECT`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..exceptions import DialectError

logger = logging.getLogger(__name__)


class Dialect(str, Enum):
    DRAFT_07 = "draft-07"
    DRAFT_2019_09 = "2019-09"

    @property
    def ref_overrides_siblings(self) -> bool:
        return self is Dialect.DRAFT_07


DEFAULT_DIALECT = Dialect.DRAFT_2019_09

_SCHEMA_URI_RE = {
    Dialect.DRAFT_07: re.compile(r"^https?://json-schema\.org/draft-07/(hyper-)?schema#?$"),
    Dialect.DRAFT_2019_09: re.compile(r"^https?://json-schema\.org/draft/2019-09/(hyper-)?schema#?$"),
}

_ALIASES = {
    "draft-07": Dialect.DRAFT_07,
    "draft7": Dialect.DRAFT_07,
    "7": Dialect.DRAFT_07,
    "2019-09": Dialect.DRAFT_2019_09,
    "draft2019-09": Dialect.DRAFT_2019_09,
    "draft-2019-09": Dialect.DRAFT_2019_09,
}


def parse_dialect(raw: Union[str, Dialect]) -> Dialect:
    """Parse a dialect name such as ``draft-07`` or ``2019-09``.

    Raises:
        DialectError: If the name is not a supported dialect.
    """
    if isinstance(raw, Dialect):
        return raw
    if not isinstance(raw, str):
        raise DialectError(f"Dialect must be a string, got {type(raw).__name__}: {raw!r}")

    dialect = _ALIASES.get(raw.strip().lower())
    if dialect is None:
        raise DialectError(
            f"Unsupported dialect '{raw}'. Expected one of: "
            + ", ".join(d.value for d in Dialect)
        )
    return dialect


def dialect_from_schema_uri(uri: str) -> Optional[Dialect]:
    """Map a ``$schema`` value to a dialect; None if it is not a known meta-schema."""
    text = uri.strip()
    for dialect, pattern in _SCHEMA_URI_RE.items():
        if pattern.match(text):
            return dialect
    return None


@dataclass(frozen=True)
class DialectSelection:
    """Result of choosing the dialect for a schema document."""

    dialect: Dialect
    source: str  # "options", "$schema" or "default"
    message: str = ""


def select_dialect(requested: Optional[Union[str, Dialect]], root: Any) -> DialectSelection:
    """Choose the dialect for a root schema document (raw JSON or parsed node).

    Rules:
    * An explicitly requested dialect always wins.
    * Otherwise a recognised root ``$schema`` decides.
    * An unrecognised ``$schema`` falls back to :data:`DEFAULT_DIALECT`
      with a warning message.
    """
    if requested is not None:
        return DialectSelection(dialect=parse_dialect(requested), source="options")

    keywords = getattr(root, "keywords", root)
    schema_uri = keywords.get("$schema") if isinstance(keywords, dict) else None
    if not isinstance(schema_uri, str):
        return DialectSelection(dialect=DEFAULT_DIALECT, source="default")

    detected = dialect_from_schema_uri(schema_uri)
    if detected is not None:
        return DialectSelection(dialect=detected, source="$schema")

    message = (
        f"Unrecognised $schema '{schema_uri}'; "
        f"validating with dialect {DEFAULT_DIALECT.value}."
    )
    logger.warning(message)
    return DialectSelection(dialect=DEFAULT_DIALECT, source="default", message=message)
