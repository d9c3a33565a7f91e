"""Compiler utility functions.

Provides helpers for normalizing filter input and rendering property paths.
"""

from typing import Any, Dict


def normalize_where_input(where: Any) -> Dict[str, Any]:
    """Normalize Q object or dict to universal dict format.

    Args:
        where: Q object (with .to_dict() method) or dict

    Returns:
        Universal dict format ready for compilation

    Raises:
        TypeError: If input is neither Q object nor dict
    """
    if hasattr(where, "to_dict") and callable(where.to_dict):
        return where.to_dict()
    elif isinstance(where, dict):
        return where
    else:
        raise TypeError(f"where parameter must be a Q object or dict, got {type(where).__name__}")


def property_path(name: str) -> str:
    """Render a dotted field name as an OData property path (``a.b`` -> ``a/b``)."""
    return name.replace(".", "/")
