"""
This __init__.py file makes the querycodec directory a Python package and
exposes the value codec, the literal escaper and their helpers for easy
access.
"""

from .codec import BaseCodec, ValueCodec, decode, default_codec, encode
from .literals import ODataLiteralEscaper, escape, quote_literal
from .querydsl import Q
from .sync import SyncInterceptor, collection_url, entity_url, unwrap_collection
from .types import UNDEFINED, QueryValue, Undefined

__version__ = "0.1.0"

__all__ = [
    "encode",
    "decode",
    "escape",
    "quote_literal",
    "BaseCodec",
    "ValueCodec",
    "default_codec",
    "ODataLiteralEscaper",
    "Q",
    "SyncInterceptor",
    "entity_url",
    "collection_url",
    "unwrap_collection",
    "UNDEFINED",
    "Undefined",
    "QueryValue",
]
