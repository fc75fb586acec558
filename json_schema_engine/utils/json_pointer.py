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

"""JSON Pointer (RFC 6901) helpers."""

import re
from typing import List, Optional, Union

JsonPointer = str

_BAD_ESCAPE_RE = re.compile(r"~(?![01])")


def escape(token: Union[str, int]) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join(base: Optional[JsonPointer], *tokens: Union[str, int]) -> JsonPointer:
    """Append tokens to a pointer. An empty base denotes the document root."""
    path = base or ""
    for token in tokens:
        path = f"{path}/{escape(token)}"
    return path


def split(pointer: JsonPointer) -> List[str]:
    """Split a pointer into unescaped reference tokens.

    Raises:
        ValueError: If the pointer is neither empty nor starts with '/', or
            contains a '~' not followed by '0' or '1'.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer: {pointer!r}")
    if _BAD_ESCAPE_RE.search(pointer):
        raise ValueError(f"Invalid escape in JSON pointer: {pointer!r}")
    return [unescape(token) for token in pointer[1:].split("/")]


def is_pointer(fragment: str) -> bool:
    return fragment == "" or fragment.startswith("/")
