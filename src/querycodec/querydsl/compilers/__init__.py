from .base import BaseFilterCompiler
from .odata import ODataFilterCompiler, odata_filter

__all__ = (
    "BaseFilterCompiler",
    "ODataFilterCompiler",
    "odata_filter",
)
