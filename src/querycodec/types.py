"""Type aliases for querycodec package.

This module provides the absent-value sentinel and the reusable type
definitions for values accepted by the codec.
"""

from typing import Any, Callable, Dict, List, Mapping, Sequence, Union


class Undefined:
    """Absent value, distinct from ``None`` (which encodes as null).

    There is exactly one instance, ``UNDEFINED``. It is falsy.
    """

    _instance = None

    def __new__(cls) -> "Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> "Undefined":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Undefined":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined()

# Scalar kinds the codec tags individually
Scalar = Union[None, Undefined, bool, int, float, str, Callable[..., Any]]

# Recursive query value - mappings and sequences nest arbitrarily
QueryValue = Union[Scalar, Sequence[Any], Mapping[str, Any]]

# Decoded composite shapes
DecodedSequence = List[Any]
DecodedMapping = Dict[str, Any]

# Hook turning `f`-tagged text back into a callable
CallableHook = Callable[[str], Callable[..., Any]]
