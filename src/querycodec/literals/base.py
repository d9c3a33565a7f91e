"""Base escaper interface."""

from abc import ABC, abstractmethod

__all__ = ("BaseEscaper",)


class BaseEscaper(ABC):
    """Abstract base class for literal escapers.

    Subclasses make raw text safe to place inside one quoted literal of a
    particular query syntax.
    """

    quote_char: str = "'"

    @abstractmethod
    def escape(self, text: str) -> str:
        """Return `text` escaped for use between quote characters."""
        raise NotImplementedError

    def quote(self, text: str) -> str:
        """Return `text` escaped and wrapped in quote characters."""
        return f"{self.quote_char}{self.escape(text)}{self.quote_char}"
