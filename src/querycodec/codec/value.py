"""Query value codec.

Turns arbitrarily nested values into one string suitable for a URL query
parameter, and back:

- sequences join their encoded elements with ``,``
- mappings join ``key=<encoded value>`` entries with ``&``
- scalars become tagged, percent-encoded text (see `scalars`)

Decoding inspects the *whole* string for ``,`` first, then ``=``, before any
scalar is decoded. Joins are not escaped relative to each other, so a
composite nested inside another composite does not round-trip::

    >>> codec = ValueCodec()
    >>> codec.encode({"a": [1, 2]})
    'a=n1,n2'
    >>> codec.decode("a=n1,n2")
    [{'a': 1}, 2]

Values round-trip when no composite sits inside another one. Pass
``nested_escaping=True`` to percent-encode every nested part once more; that
mode round-trips any nesting but is not wire-compatible with the default one
for nested values.
"""

from functools import lru_cache
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel

from querycodec.callables import load_callable_hook, render_callable
from querycodec.constants import (
    BOOLEAN_PRESENCE_IS_TRUE,
    ENTRY_SEPARATOR,
    KEY_VALUE_SEPARATOR,
    SEQUENCE_SEPARATOR,
    TypeTag,
)
from querycodec.exceptions import (
    CallableDecodeError,
    DepthLimitError,
    InvalidConfigError,
    QueryCodecError,
)
from querycodec.logger import get_logger
from querycodec.settings import QueryCodecSettings
from querycodec.settings import settings as api_settings
from querycodec.types import UNDEFINED, CallableHook, DecodedMapping, DecodedSequence

from .base import BaseCodec
from .scalars import percent_decode, percent_encode, render_scalar, tag_for, to_number

__all__ = (
    "ValueCodec",
    "default_codec",
    "encode",
    "decode",
)

logger = get_logger(__name__)


def _as_sequence(value: Any) -> Optional[List[Any]]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def _as_mapping(value: Any) -> Optional[Mapping[Any, Any]]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump()
    return None


class ValueCodec(BaseCodec):
    """Encode and decode query values.

    Args:
        nested_escaping: Percent-encode nested parts and keys so any nesting round-trips
        strict_booleans: Decode ``b`` tags to True only for the text ``true``
        callable_hook: Turns ``f``-tagged text into a callable; without one such
            text raises `CallableDecodeError`
        callable_renderer: Renders callables on encode (source text by default)
        max_depth: Maximum composite nesting; None for unbounded
    """

    def __init__(
        self,
        *,
        nested_escaping: bool = False,
        strict_booleans: bool = False,
        callable_hook: Optional[CallableHook] = None,
        callable_renderer: Callable[[Callable[..., Any]], str] = render_callable,
        max_depth: Optional[int] = None,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            raise InvalidConfigError("max_depth must be >= 0", config_key="max_depth", value=max_depth)
        self.nested_escaping = nested_escaping
        self.strict_booleans = strict_booleans
        self.callable_hook = callable_hook
        self.callable_renderer = callable_renderer
        self.max_depth = max_depth
        logger.debug(
            "ValueCodec created (nested_escaping=%s, strict_booleans=%s, callable_hook=%s, max_depth=%s)",
            nested_escaping,
            strict_booleans,
            callable_hook is not None,
            max_depth,
        )

    @classmethod
    def from_settings(cls, config: Optional[QueryCodecSettings] = None) -> "ValueCodec":
        """Build a codec from `QueryCodecSettings` (the global settings by default)."""
        config = config or api_settings
        return cls(
            nested_escaping=config.QUERY_NESTED_ESCAPING,
            strict_booleans=config.QUERY_STRICT_BOOLEANS,
            callable_hook=load_callable_hook(config.QUERY_CALLABLE_HOOK),
            max_depth=config.QUERY_MAX_DEPTH,
        )

    def __repr__(self) -> str:
        return (
            f"<ValueCodec nested_escaping={self.nested_escaping} "
            f"strict_booleans={self.strict_booleans} max_depth={self.max_depth}>"
        )

    # -------------------
    # Encoding
    # -------------------
    def encode(self, value: Any) -> str:
        """Encode a query value into one string."""
        return self._encode(value, 0)

    def _encode(self, value: Any, depth: int) -> str:
        self._check_depth(depth)

        items = _as_sequence(value)
        if items is not None:
            return SEQUENCE_SEPARATOR.join(self._encode_part(item, depth) for item in items)

        mapping = _as_mapping(value)
        if mapping is not None:
            return ENTRY_SEPARATOR.join(
                f"{self._encode_key(key)}{KEY_VALUE_SEPARATOR}{self._encode_part(item, depth)}"
                for key, item in mapping.items()
            )

        return percent_encode(tag_for(value) + render_scalar(value, self.callable_renderer))

    def _encode_part(self, value: Any, depth: int) -> str:
        encoded = self._encode(value, depth + 1)
        if self.nested_escaping:
            return percent_encode(encoded)
        return encoded

    def _encode_key(self, key: Any) -> str:
        if self.nested_escaping:
            return percent_encode(str(key))
        return str(key)

    # -------------------
    # Decoding
    # -------------------
    def decode(self, text: Any) -> Any:
        """Decode a string produced by `encode`. Non-string input passes through."""
        if not isinstance(text, str):
            return text
        return self._decode(text, 0)

    def _decode(self, text: str, depth: int) -> Any:
        self._check_depth(depth)

        if SEQUENCE_SEPARATOR in text:
            items: DecodedSequence = [self._decode_part(part, depth) for part in text.split(SEQUENCE_SEPARATOR)]
            return items

        if KEY_VALUE_SEPARATOR in text:
            result: DecodedMapping = {}
            for segment in text.split(ENTRY_SEPARATOR):
                name, sep, value = segment.partition(KEY_VALUE_SEPARATOR)
                if self.nested_escaping:
                    name = percent_decode(name)
                result[name] = self._decode_part(value, depth) if sep else UNDEFINED
            return result

        return self._decode_scalar(text)

    def _decode_part(self, text: str, depth: int) -> Any:
        if self.nested_escaping:
            text = percent_decode(text)
        return self._decode(text, depth + 1)

    def _decode_scalar(self, text: str) -> Any:
        tag = text[:1]
        payload = percent_decode(text[1:])

        if tag == TypeTag.UNDEFINED:
            return UNDEFINED
        if tag == TypeTag.BOOLEAN:
            return self._decode_boolean(payload)
        if tag == TypeTag.NUMBER:
            return to_number(payload)
        if tag == TypeTag.CALLABLE:
            return self._decode_callable(payload)
        if tag == TypeTag.NULL:
            return None
        return payload

    def _decode_boolean(self, payload: str) -> bool:
        if self.strict_booleans or not BOOLEAN_PRESENCE_IS_TRUE:
            return payload == "true"
        # Presence means true: "bfalse" decodes to True
        return bool(payload)

    def _decode_callable(self, payload: str) -> Callable[..., Any]:
        if self.callable_hook is None:
            raise CallableDecodeError("No callable hook configured", text=payload)
        try:
            fn = self.callable_hook(payload)
        except QueryCodecError:
            raise
        except Exception as exc:
            raise CallableDecodeError("Callable hook failed", text=payload, error=str(exc)) from exc
        if not callable(fn):
            raise CallableDecodeError("Callable hook returned a non-callable", text=payload)
        logger.debug("Decoded callable %r", payload)
        return fn

    def _check_depth(self, depth: int) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise DepthLimitError("Value nests deeper than max_depth", max_depth=self.max_depth)


@lru_cache(maxsize=None)
def default_codec() -> ValueCodec:
    """Return the process-wide codec built from settings.

    Built on first use; call ``default_codec.cache_clear()`` after changing settings.
    """
    return ValueCodec.from_settings()


def encode(value: Any) -> str:
    """Encode `value` with the default codec."""
    return default_codec().encode(value)


def decode(text: Any) -> Any:
    """Decode `text` with the default codec."""
    return default_codec().decode(text)
