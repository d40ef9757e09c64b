"""Kernel types – value objects shared across layers."""
from searchbase.kernel.types.fields import DataField, DataFieldSpec, MicStatus, QueryFormat, SortOption
from searchbase.kernel.types.options import ApplyOptions, StateOptions

__all__ = [
    "ApplyOptions",
    "DataField",
    "DataFieldSpec",
    "MicStatus",
    "QueryFormat",
    "SortOption",
    "StateOptions",
]
