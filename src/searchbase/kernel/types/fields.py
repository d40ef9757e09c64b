"""Kernel types – field, sort and mic value objects."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping, Sequence, Union

__all__ = [
    "DataField",
    "DataFieldSpec",
    "MicStatus",
    "QueryFormat",
    "SortOption",
]

QueryFormat = Literal["or", "and"]


class MicStatus(str, Enum):
    INACTIVE = "INACTIVE"
    STOPPED = "STOPPED"
    ACTIVE = "ACTIVE"
    DENIED = "DENIED"


@dataclass(frozen=True)
class DataField:
    """A searchable field with an optional relevance boost."""

    field: str
    weight: float | None = None

    @classmethod
    def coerce(cls, value: "DataField | Mapping[str, Any]") -> "DataField":
        if isinstance(value, DataField):
            return value
        return cls(field=value["field"], weight=value.get("weight"))

    def encode(self) -> str:
        """Render as ``field^weight``; a zero or missing weight is omitted."""
        if not self.weight:
            return self.field
        weight = self.weight
        if isinstance(weight, float) and weight.is_integer():
            weight = int(weight)
        return f"{self.field}^{weight}"


DataFieldSpec = Union[str, DataField, Mapping[str, Any], Sequence[Union[str, DataField, Mapping[str, Any]]]]


@dataclass(frozen=True)
class SortOption:
    """One entry of a sort dropdown: ``label`` shown, ``data_field`` sorted by."""

    data_field: str
    sort_by: str = "asc"
    label: str = ""

    @classmethod
    def coerce(cls, value: "SortOption | Mapping[str, Any]") -> "SortOption":
        if isinstance(value, SortOption):
            return value
        return cls(
            data_field=value.get("data_field", value.get("dataField", "")),
            sort_by=value.get("sort_by", value.get("sortBy", "asc")),
            label=value.get("label", ""),
        )
