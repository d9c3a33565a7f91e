"""OData filter compiler.

Transforms universal Q node dicts into OData ``$filter`` expressions.

OData supports:
- Comparison: eq, ne, gt, ge, lt, le
- Membership: in (OData 4.01)
- Logical: and, or, not
- Nested properties: ``address/city``

String values are escaped with the OData literal escaper, so raw user text
can be embedded safely in the expression and the URL that carries it.
"""

from typing import Any, Dict, List, Union

from querycodec.exceptions import InvalidFieldError
from querycodec.literals import quote_literal

from .base import BaseFilterCompiler
from .utils import normalize_where_input, property_path

__all__ = (
    "ODataFilterCompiler",
    "odata_filter",
)

_CONNECTORS = {"$and": " and ", "$or": " or "}


class ODataFilterCompiler(BaseFilterCompiler):
    """Compile universal query nodes into OData filter expressions."""

    # Operator mapping from universal to OData syntax
    _OP_MAP = {
        "$eq": "eq",
        "$ne": "ne",
        "$gt": "gt",
        "$gte": "ge",
        "$lt": "lt",
        "$lte": "le",
        "$in": "in",
    }

    def to_filter(self, where: Union[Dict[str, Any], Any]) -> str:
        """Convert Q object or universal dict to an OData filter string.

        Args:
            where: Q object or universal dict format

        Returns:
            OData boolean expression string
        """
        node = normalize_where_input(where)
        return self.compile_node(node)

    def compile_node(self, node: Dict[str, Any]) -> str:
        """Recursively transform node into an OData filter expression."""
        for connector, joiner in _CONNECTORS.items():
            if connector in node:
                return joiner.join(self._compile_child(child) for child in node[connector])
        if "$not" in node:
            return f"not ({self.compile_node(node['$not'])})"

        parts: List[str] = []
        for field, expr in node.items():
            for op, value in expr.items():
                parts.append(self._compile_comparison(field, op, value))
        return " and ".join(parts)

    def _compile_child(self, node: Dict[str, Any]) -> str:
        expr = self.compile_node(node)
        if self._is_compound(node):
            return f"({expr})"
        return expr

    @staticmethod
    def _is_compound(node: Dict[str, Any]) -> bool:
        if any(connector in node for connector in _CONNECTORS):
            return True
        if "$not" in node:
            return False
        return sum(len(expr) for expr in node.values()) > 1

    def _compile_comparison(self, field: str, op: str, value: Any) -> str:
        if op not in self._OP_MAP:
            raise InvalidFieldError(
                f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                field=field,
                operator=op,
            )
        path = property_path(field)
        if op == "$in":
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise InvalidFieldError("$in expects a list of values", field=field, value=value)
            items = ",".join(quote_literal(item) for item in value)
            return f"{path} in ({items})"
        return f"{path} {self._OP_MAP[op]} {quote_literal(value)}"


odata_filter = ODataFilterCompiler()
