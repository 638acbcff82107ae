"""Check a single request value against a declared Swagger type.

Query and path values always arrive as strings, so numeric types are checked
on the text form of the value rather than its Python type.
"""

import math
from decimal import Decimal
import re
from typing import Any

from swagger_input_validator.schema.base import ParameterSpec

INTEGER_RE = re.compile(r"[+-]?([0-9]+|Infinity)")
FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]+)?|Infinity)")

FLOAT_FORMATS = ("float", "double")


def is_respecting_type(value: Any, spec: ParameterSpec) -> bool:
    """Return True if ``value`` conforms to the type declared by ``spec``."""
    declared = spec.effective_type
    if declared is None:
        return True

    if declared == "integer":
        return _matches(INTEGER_RE, value)
    if declared == "number":
        if spec.format in FLOAT_FORMATS:
            return _matches(FLOAT_RE, value)
        return _matches(INTEGER_RE, value)
    if declared == "array":
        return isinstance(value, (list, tuple))
    return runtime_kind(value) == declared


def runtime_kind(value: Any) -> str:
    """Name the Swagger kind of a decoded value."""
    if value is None:
        return "null"
    # bool before int: True is an int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _matches(regex: re.Pattern, value: Any) -> bool:
    text = _as_text(value)
    return text is not None and regex.fullmatch(text) is not None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        # positional notation: repr(0.00001) is "1e-05"
        return format(Decimal(repr(value)), "f")
    return None
