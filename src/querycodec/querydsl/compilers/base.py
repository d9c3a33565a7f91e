"""Base compiler interface.

Defines the abstract contract filter compilers follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

__all__ = ("BaseFilterCompiler",)


class BaseFilterCompiler(ABC):
    """Abstract base class for filter compilers.

    Subclasses implement `to_filter` to render a universal node (or a `Q`)
    as a query-language expression string.
    """

    @abstractmethod
    def to_filter(self, where: Any) -> str:
        """Convert a Q object or universal dict into a filter expression."""
        raise NotImplementedError

    @abstractmethod
    def compile_node(self, node: Dict[str, Any]) -> str:
        """Convert one universal dict node into a filter expression."""
        raise NotImplementedError
