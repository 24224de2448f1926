"""
Value encodings shared by the payload builder and the signing engine.

The gateway recomputes the request hash from the submitted form values, so
every value must be rendered exactly as the reference JavaScript SDK renders
it (``String(value)`` and ``JSON.stringify``).
"""

from __future__ import annotations

import base64
import dataclasses
import json
import math
from decimal import Decimal
from typing import Any, Mapping

__all__ = [
    "b64encode_text",
    "compact_json",
    "stringify",
    "to_json_value",
]


def _format_js_number(value: float) -> str:
    """Render a float the way JavaScript's ``Number.prototype.toString`` does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits, as JavaScript does.
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_js_number(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def to_json_value(value: Any) -> Any:
    """
    Convert ``value`` into plain JSON types.

    Dataclasses become objects keyed in field order and integral floats lose
    their fractional part so ``100.0`` serializes as ``100``.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_json_value(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def compact_json(value: Any) -> str:
    return json.dumps(
        to_json_value(value),
        separators=(",", ":"),
        ensure_ascii=False,
    )


def b64encode_text(text: str) -> str:
    """Base64 (standard alphabet, padded) of the UTF-8 bytes of ``text``."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
