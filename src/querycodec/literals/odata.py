"""OData string literal escaping.

Raw text interpolated into a hand-built ``$filter`` expression must survive
two layers: the OData literal syntax (quotes are doubled) and the URL the
expression travels in (reserved characters are percent-encoded).

Substitutions run in a fixed order. ``%`` is handled right after quote
doubling so the percent sequences emitted by later rules are never
re-escaped::

    >>> escape("100%25")
    '100%2525'
    >>> escape("O'Brien")
    "O''Brien"
"""

import math
import re
from typing import Any

from querycodec.codec.scalars import render_number
from querycodec.constants import ODATA_LITERAL_SUBSTITUTIONS, ODATA_WHITESPACE_REPLACEMENT

from .base import BaseEscaper

__all__ = (
    "ODataLiteralEscaper",
    "odata_escaper",
    "escape",
    "quote_literal",
)

# Browser whitespace: ASCII blanks, Unicode space separators, line and
# paragraph separators, and the byte order mark. Narrower than Python's `\s`,
# which also matches \x1c-\x1f and \x85.
_WHITESPACE = re.compile(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]")


class ODataLiteralEscaper(BaseEscaper):
    """Escape text for single-quoted OData string literals."""

    _SUBSTITUTIONS = ODATA_LITERAL_SUBSTITUTIONS

    def escape(self, text: str) -> str:
        for pattern, replacement in self._SUBSTITUTIONS:
            text = text.replace(pattern, replacement)
        return _WHITESPACE.sub(ODATA_WHITESPACE_REPLACEMENT, text)

    def literal(self, value: Any) -> str:
        """Render a Python value as an OData literal.

        Strings are escaped and quoted; None, booleans and numbers use their
        bare OData spelling (infinities are ``INF`` and ``-INF``). Anything
        else is quoted as its ``str()``.
        """
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and math.isinf(value):
            return "INF" if value > 0 else "-INF"
        if isinstance(value, (int, float)):
            return render_number(value)
        return self.quote(str(value))


odata_escaper = ODataLiteralEscaper()


def escape(text: str) -> str:
    """Escape `text` for the inside of a single-quoted OData literal."""
    return odata_escaper.escape(text)


def quote_literal(value: Any) -> str:
    """Render `value` as a complete OData literal (quotes included for text)."""
    return odata_escaper.literal(value)
