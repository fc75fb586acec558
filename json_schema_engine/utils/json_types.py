from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Union

Number = Union[int, float]


class JsonType(str, Enum):
    """Closed discriminant over JSON instance values."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def of(cls, value: Any) -> "JsonType":
        """Classify a Python value. ``INTEGER`` is reported for ints only; see :func:`matches_type`.

        Raises:
            TypeError: If the value is not a JSON value.
        """
        if value is None:
            return cls.NULL
        # bool is a subclass of int and must be tested first
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, list):
            return cls.ARRAY
        if isinstance(value, dict):
            return cls.OBJECT
        raise TypeError(f"Not a JSON value: {type(value).__name__}")


TYPE_NAMES = frozenset(t.value for t in JsonType)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    """True for ints and for floats with a zero fractional part."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def matches_type(value: Any, type_name: str) -> bool:
    if type_name == "integer":
        return is_integer(value)
    if type_name == "number":
        return is_number(value)
    return JsonType.of(value).value == type_name


def json_type_name(value: Any) -> str:
    """Name used in messages; integral floats are still reported as numbers."""
    return JsonType.of(value).value


def json_equal(left: Any, right: Any) -> bool:
    """Structural JSON equality: ``1 == 1.0`` but ``True != 1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        if left.keys() != right.keys():
            return False
        return all(json_equal(value, right[key]) for key, value in left.items())
    return left is None and right is None


def contains_equal(values: Iterable[Any], candidate: Any) -> bool:
    return any(json_equal(value, candidate) for value in values)


def first_duplicate(items: list) -> Union[tuple, None]:
    """Return the first pair of indices holding equal items, or None."""
    for i, left in enumerate(items):
        for j in range(i + 1, len(items)):
            if json_equal(left, items[j]):
                return i, j
    return None


# Relative tolerance applied to the float quotient when exact decimal
# arithmetic cannot represent it.
MULTIPLE_OF_REL_EPSILON = 1e-12


def is_multiple_of(value: Number, divisor: Number) -> bool:
    """Check ``value`` is an integral multiple of ``divisor``.

    Ints use exact modulo. Floats are compared through their shortest decimal
    representation so that e.g. ``0.3`` is a multiple of ``0.1``. When the
    decimal quotient exceeds the working precision, the float quotient is used
    with :data:`MULTIPLE_OF_REL_EPSILON`; an infinite quotient never passes.
    """
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0

    try:
        remainder = Decimal(repr(value)) % Decimal(repr(divisor))
        return remainder == 0
    except InvalidOperation:
        pass

    try:
        quotient = value / divisor
    except OverflowError:
        return False
    if not math.isfinite(quotient):
        return False
    return abs(quotient - round(quotient)) <= MULTIPLE_OF_REL_EPSILON * abs(quotient)
