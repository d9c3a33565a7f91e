"""Query DSL module.

Exports the `Q` class for building composable filter expressions. Compiled
OData representations are handled by the `compilers` subpackage.
"""

from .q import Q

__all__ = ("Q",)
