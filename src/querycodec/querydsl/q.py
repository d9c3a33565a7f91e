"""Query DSL core utilities.

This module defines the `Q` class used to compose structured filter
expressions. A `Q` node turns into a universal dict representation, which
the compilers then render as an OData ``$filter`` string with every literal
escaped.

Typical usage:

- Build filters: `Q(age__ge=18) & Q(age__le=30)`
- Negate: `~Q(is_active=True)`
- Compile: `q.to_filter()` -> ``"age ge 18 and age le 30"``
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List

from querycodec.exceptions import InvalidFieldError


class Q:
    """Composable boolean query node.

    A `Q` instance holds leaf-level filters (e.g., `field__op=value`) or
    boolean combinations of child `Q` nodes using `$and` / `$or` connectors.

    - Use `&` to combine with logical AND.
    - Use `|` to combine with logical OR.
    - Use `~` to negate a node.

    Filter keys follow the `field__lookup` convention where lookup is one
    of: `eq`, `ne`, `gt`, `ge`, `lt`, `le`, `in` (`gte` / `lte` are accepted
    as aliases). Lookups other filter languages offer but OData comparisons
    do not (`between`, `contains`, `nin`, ...) raise `InvalidFieldError`.
    Any other trailing part, like every remaining `__` separator, addresses a
    nested property.
    """

    _OP_MAP = {
        "eq": "$eq",
        "ne": "$ne",
        "gt": "$gt",
        "ge": "$gte",
        "gte": "$gte",
        "lt": "$lt",
        "le": "$lte",
        "lte": "$lte",
        "in": "$in",
    }

    _UNSUPPORTED_LOOKUPS = frozenset(
        {
            "nin",
            "between",
            "range",
            "contains",
            "icontains",
            "startswith",
            "istartswith",
            "endswith",
            "iendswith",
            "exact",
            "iexact",
            "isnull",
            "exists",
            "regex",
            "iregex",
            "like",
            "ilike",
        }
    )

    def __init__(self, negate: bool = False, **filters: Any):
        """Initialize a `Q` node.

        - negate: whether this node is negated.
        - filters: leaf-level filters using `field__lookup=value` pairs.
        """
        self.filters: Dict[str, Any] = filters
        self.children: List["Q"] = []
        self.connector = "$and"
        self.negate = negate

    def __and__(self, other: "Q") -> "Q":
        """Return a new node representing logical AND of two nodes."""
        node = Q()
        node.connector = "$and"
        node.children = [self, other]
        return node

    def __or__(self, other: "Q") -> "Q":
        """Return a new node representing logical OR of two nodes."""
        node = Q()
        node.connector = "$or"
        node.children = [self, other]
        return node

    def __invert__(self) -> "Q":
        """Return a negated copy of this node (logical NOT)."""
        q = deepcopy(self)
        q.negate = not self.negate
        return q

    def __str__(self) -> str:
        return self.to_filter()

    def __repr__(self) -> str:
        return f"<Q: {self.to_dict()}>"

    # -------------------
    # Universal dict representation
    # -------------------
    def _leaf_to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert leaf filters to the universal dict form.

        Returns a mapping where keys are field names (dots for nested)
        and values are dicts of universal operators (e.g., `$eq`).
        """
        result: Dict[str, Dict[str, Any]] = {}
        for key, value in self.filters.items():
            field, op = key, "$eq"
            if "__" in key:
                # "info__lang__eq" -> field="info__lang", lookup="eq"
                head, lookup = key.rsplit("__", 1)
                if lookup in self._OP_MAP:
                    field, op = head, self._OP_MAP[lookup]
                elif lookup in self._UNSUPPORTED_LOOKUPS:
                    raise InvalidFieldError(
                        f"Lookup {lookup} is not supported. Supported: {', '.join(sorted(self._OP_MAP))}",
                        field=head,
                        lookup=lookup,
                    )
            result.setdefault(field.replace("__", "."), {})[op] = value
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return the universal dict representation of this node.

        - Leaves become `{field: {op: value}}` mappings.
        - Boolean combinations use `{"$and": [...]}`, `{"$or": [...]}`.
        - Negation wraps with `{"$not": node}`.
        """
        if self.children:
            node = {self.connector: [child.to_dict() for child in self.children]}
        else:
            node = self._leaf_to_dict()
        if self.negate:
            return {"$not": node}
        return node

    def to_filter(self) -> str:
        """Compile to an OData ``$filter`` expression."""
        from .compilers.odata import odata_filter

        return odata_filter.to_filter(self.to_dict())
