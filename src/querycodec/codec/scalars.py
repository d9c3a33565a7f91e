"""Tagged scalar helpers.

A tagged scalar is a one-character type tag followed by the value's text
rendering, percent-encoded as one unit. Renderings follow the browser's
``String(value)`` so strings produced here and by web clients agree.
"""

import inspect
import math
import re
from typing import Any, Callable, Union
from urllib.parse import quote, unquote

from querycodec.constants import URI_COMPONENT_SAFE, TypeTag
from querycodec.types import Undefined

__all__ = (
    "percent_encode",
    "percent_decode",
    "is_callable_value",
    "tag_for",
    "render_number",
    "render_scalar",
    "to_number",
)

_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_PREFIXED_INT = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INFINITY = re.compile(r"([+-]?)Infinity")


def percent_encode(text: str) -> str:
    """Percent-encode like ``encodeURIComponent`` (UTF-8)."""
    return quote(text, safe=URI_COMPONENT_SAFE)


def percent_decode(text: str) -> str:
    """Inverse of `percent_encode`. Malformed escapes are left as-is."""
    return unquote(text)


def is_callable_value(value: Any) -> bool:
    # Classes are callable but render as plain text
    return callable(value) and not inspect.isclass(value)


def tag_for(value: Any) -> str:
    """Return the one-character type tag for a scalar value."""
    if isinstance(value, Undefined):
        return TypeTag.UNDEFINED
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, (int, float)):
        return TypeTag.NUMBER
    if is_callable_value(value):
        return TypeTag.CALLABLE
    if value is None:
        return TypeTag.NULL
    return TypeTag.TEXT


def render_number(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    # Exponent form only below 1e-6 or from 1e21, written without padding zeros
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 0:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-power - 1)}{digits}"
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def render_scalar(value: Any, render_callable: Callable[[Callable[..., Any]], str]) -> str:
    """Render a scalar as plain text (before tagging and percent-encoding)."""
    if isinstance(value, Undefined):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return render_number(value)
    if value is None:
        return "null"
    if is_callable_value(value):
        return render_callable(value)
    return str(value)


def to_number(text: str) -> Union[int, float]:
    """Coerce text to a number the way ``Number(text)`` does.

    Blank text is 0, unparseable text is NaN. Decimal integers come back as
    ``int``; everything else numeric comes back as ``float``.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if _DECIMAL_INT.fullmatch(stripped):
        return int(stripped)
    if _DECIMAL.fullmatch(stripped):
        return float(stripped)
    if _PREFIXED_INT.fullmatch(stripped):
        return int(stripped, 0)
    infinity = _INFINITY.fullmatch(stripped)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    return math.nan
