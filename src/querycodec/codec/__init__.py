from .base import BaseCodec
from .value import ValueCodec, decode, default_codec, encode

__all__ = (
    "BaseCodec",
    "ValueCodec",
    "default_codec",
    "encode",
    "decode",
)
