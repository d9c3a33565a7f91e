"""Literal escaping for hand-built query expressions."""

from .base import BaseEscaper
from .odata import ODataLiteralEscaper, escape, odata_escaper, quote_literal

__all__ = (
    "BaseEscaper",
    "ODataLiteralEscaper",
    "odata_escaper",
    "escape",
    "quote_literal",
)
