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

"""Predicates for the ``format`` keyword.

Each predicate receives a string and answers whether it conforms. Instances
that are not strings are never checked: ``format`` only constrains strings.
"""

import datetime
import ipaddress
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlsplit

from ..utils import json_pointer

logger = logging.getLogger(__name__)

FormatPredicate = Callable[[str], bool]

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-](\d{2}):(\d{2}))$")
_DURATION_RE = re.compile(
    r"^P(?!$)(?:\d+W|(?:\d+Y)?(?:\d+M)?(?:\d+D)?(?:T(?=\d)(?:\d+H)?(?:\d+M)?(?:\d+S)?)?)$"
)
_HOSTNAME_LABEL_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")
_IPV4_RE = re.compile(r"^\d{1,3}(?:\.\d{1,3}){3}$")
_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
_URI_FORBIDDEN_RE = re.compile(r"[\x00-\x20<>\"{}|\\^`\x7f]")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_LOCAL_PART_RE = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*$")
_RELATIVE_POINTER_RE = re.compile(r"^(0|[1-9][0-9]*)(#|/.*)?$", re.DOTALL)
_TEMPLATE_VARSPEC = r"(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})(?:\.?(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2}))*(?::[1-9][0-9]{0,3}|\*)?"
_TEMPLATE_EXPRESSION_RE = re.compile(rf"^[+#./;?&=,!@|]?{_TEMPLATE_VARSPEC}(?:,{_TEMPLATE_VARSPEC})*$")


# ---- dates and times ---------------------------------------------------------

def is_date(value: str) -> bool:
    match = _DATE_RE.match(value)
    if match is None:
        return False
    year, month, day = (int(group) for group in match.groups())
    try:
        datetime.date(year, month, day)
    except ValueError:
        return False
    return True


def is_time(value: str) -> bool:
    match = _TIME_RE.match(value)
    if match is None:
        return False
    hour, minute, second = int(match.group(1)), int(match.group(2)), int(match.group(3))
    if match.group(6) is not None:
        if int(match.group(6)) > 23 or int(match.group(7)) > 59:
            return False
    # a leap second is accepted wherever it is written
    if second == 60:
        second = 59
    try:
        datetime.time(hour, minute, second)
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    date_part, separator, time_part = value.partition("T")
    if not separator:
        date_part, separator, time_part = value.partition("t")
    return bool(separator) and is_date(date_part) and is_time(time_part)


def is_duration(value: str) -> bool:
    return _DURATION_RE.match(value) is not None


# ---- network names and addresses ---------------------------------------------

def is_hostname(value: str) -> bool:
    if not value or not value.isascii():
        return False
    name = value[:-1] if value.endswith(".") else value
    if not name or len(name) > 253:
        return False
    return all(_HOSTNAME_LABEL_RE.match(label) for label in name.split("."))


def is_idn_hostname(value: str) -> bool:
    try:
        encoded = value.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return is_hostname(encoded)


def is_ipv4(value: str) -> bool:
    if not _IPV4_RE.match(value):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    if not value.isascii() or "%" in value:
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def _is_domain(value: str, *, international: bool) -> bool:
    if value.startswith("[") and value.endswith("]"):
        literal = value[1:-1]
        if literal.lower().startswith("ipv6:"):
            return is_ipv6(literal[5:])
        return is_ipv4(literal)
    return is_idn_hostname(value) if international else is_hostname(value)


def _is_email(value: str, *, international: bool) -> bool:
    local, separator, domain = value.rpartition("@")
    if not separator or not local or not domain:
        return False
    if not international and not local.isascii():
        return False
    if local.startswith('"') and local.endswith('"') and len(local) >= 2:
        local_ok = "\n" not in local
    elif international:
        local_ok = not any(char in local for char in ' @"(),:;<>[\\]') and ".." not in local
        local_ok = local_ok and not local.startswith(".") and not local.endswith(".")
    else:
        local_ok = _LOCAL_PART_RE.match(local) is not None
    return local_ok and _is_domain(domain, international=international)


def is_email(value: str) -> bool:
    return _is_email(value, international=False)


def is_idn_email(value: str) -> bool:
    return _is_email(value, international=True)


# ---- URIs and IRIs -----------------------------------------------------------

def _is_uri_like(value: str, *, absolute: bool, international: bool) -> bool:
    if not international and not value.isascii():
        return False
    if _URI_FORBIDDEN_RE.search(value) or _BAD_PERCENT_RE.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if parts.scheme:
        # urlsplit lower-cases the scheme; check the original text
        scheme = value.split(":", 1)[0]
        if not _SCHEME_RE.match(scheme):
            return False
    elif absolute:
        return False
    return value.count("#") <= 1


def is_uri(value: str) -> bool:
    return _is_uri_like(value, absolute=True, international=False)


def is_uri_reference(value: str) -> bool:
    return _is_uri_like(value, absolute=False, international=False)


def is_iri(value: str) -> bool:
    return _is_uri_like(value, absolute=True, international=True)


def is_iri_reference(value: str) -> bool:
    return _is_uri_like(value, absolute=False, international=True)


def is_uri_template(value: str) -> bool:
    for piece in re.split(r"(\{[^{}]*\})", value):
        if piece.startswith("{") and piece.endswith("}"):
            if not _TEMPLATE_EXPRESSION_RE.match(piece[1:-1]):
                return False
        elif "{" in piece or "}" in piece or _URI_FORBIDDEN_RE.search(piece):
            return False
    return True


# ---- identifiers and pointers ------------------------------------------------

def is_uuid(value: str) -> bool:
    return _UUID_RE.match(value) is not None


def is_json_pointer(value: str) -> bool:
    if value == "":
        return True
    try:
        json_pointer.split(value)
    except ValueError:
        return False
    return True


def is_relative_json_pointer(value: str) -> bool:
    match = _RELATIVE_POINTER_RE.match(value)
    if match is None:
        return False
    suffix = match.group(2)
    return suffix is None or suffix == "#" or is_json_pointer(suffix)


def is_regex(value: str) -> bool:
    try:
        re.compile(value)
    except re.error:
        return False
    return True


BUILTIN_FORMATS: Mapping[str, FormatPredicate] = {
    "date-time": is_date_time,
    "date": is_date,
    "time": is_time,
    "duration": is_duration,
    "email": is_email,
    "idn-email": is_idn_email,
    "hostname": is_hostname,
    "idn-hostname": is_idn_hostname,
    "ipv4": is_ipv4,
    "ipv6": is_ipv6,
    "uri": is_uri,
    "uri-reference": is_uri_reference,
    "iri": is_iri,
    "iri-reference": is_iri_reference,
    "uuid": is_uuid,
    "uri-template": is_uri_template,
    "json-pointer": is_json_pointer,
    "relative-json-pointer": is_relative_json_pointer,
    "regex": is_regex,
}


class FormatRegistry:
    """Format name to predicate mapping.

    Unknown format names always conform, so schemas using vendor formats
    stay valid until a predicate is registered for them.
    """

    def __init__(self, predicates: Optional[Mapping[str, FormatPredicate]] = None):
        self._predicates: Dict[str, FormatPredicate] = dict(BUILTIN_FORMATS)
        if predicates:
            self._predicates.update(predicates)

    def register(self, name: str, predicate: FormatPredicate) -> None:
        if name in self._predicates:
            logger.debug("Overriding format predicate '%s'", name)
        self._predicates[name] = predicate

    def known(self, name: str) -> bool:
        return name in self._predicates

    def conforms(self, name: str, instance: Any) -> bool:
        if not isinstance(instance, str):
            return True
        predicate = self._predicates.get(name)
        if predicate is None:
            return True
        return bool(predicate(instance))
