"""Base codec interface.

Defines the abstract contract every query value codec follows.
"""

from abc import ABC, abstractmethod
from typing import Any

__all__ = ("BaseCodec",)


class BaseCodec(ABC):
    """Abstract base class for query value codecs.

    Subclasses implement `encode` and `decode` to move structured values in
    and out of a single query-parameter string.
    """

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Convert a query value into one opaque string."""
        raise NotImplementedError

    @abstractmethod
    def decode(self, text: Any) -> Any:
        """Convert an encoded string back into a query value.

        Non-string input is returned unchanged.
        """
        raise NotImplementedError
