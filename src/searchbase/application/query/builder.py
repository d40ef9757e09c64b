"""Application query – builds search engine request bodies.

All functions are pure: they read their arguments and return fresh dicts.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from searchbase.kernel.types import DataField, DataFieldSpec, QueryFormat, SortOption

__all__ = ["default_query", "generate_query_options", "normalize_fields", "should_query"]


def normalize_fields(data_fields: DataFieldSpec) -> list[str]:
    """Flatten a field spec into ``["title", "body^3", ...]``."""
    if isinstance(data_fields, (str, DataField, Mapping)):
        data_fields = [data_fields]
    fields: list[str] = []
    for data_field in data_fields:
        if isinstance(data_field, str):
            fields.append(data_field)
        else:
            fields.append(DataField.coerce(data_field).encode())
    return fields


def should_query(
    value: str,
    data_fields: DataFieldSpec,
    *,
    search_operators: bool = False,
    query_format: QueryFormat = "or",
    fuzziness: int | str = 0,
) -> dict[str, Any] | list[dict[str, Any]]:
    """Return the scoring clauses for *value*.

    With ``search_operators`` this is a single ``simple_query_string``
    body; otherwise two ``multi_match`` clauses meant for a bool ``should``.
    The ``phrase_prefix`` clause lifts exact and prefix matches.
    """
    fields = normalize_fields(data_fields)

    if search_operators:
        return {"query": value, "fields": fields, "default_operator": query_format}

    if query_format == "and":
        return [
            {"multi_match": {"query": value, "fields": fields, "type": "cross_fields", "operator": "and"}},
            {"multi_match": {"query": value, "fields": fields, "type": "phrase_prefix", "operator": "and"}},
        ]

    return [
        {
            "multi_match": {
                "query": value,
                "fields": fields,
                "type": "best_fields",
                "operator": "or",
                "fuzziness": fuzziness,
            }
        },
        {"multi_match": {"query": value, "fields": fields, "type": "phrase_prefix", "operator": "or"}},
    ]


def default_query(
    value: str | None,
    *,
    data_field: DataFieldSpec,
    search_operators: bool = False,
    query_format: QueryFormat = "or",
    fuzziness: int | str = 0,
    nested_field: str | None = None,
) -> dict[str, Any] | None:
    """Build the default query for *value*, or ``None`` to match everything."""
    if not value:
        return None

    clauses = should_query(
        value,
        data_field,
        search_operators=search_operators,
        query_format=query_format,
        fuzziness=fuzziness,
    )
    if search_operators:
        query: dict[str, Any] = {"simple_query_string": clauses}
    else:
        query = {"bool": {"should": clauses, "minimum_should_match": "1"}}

    if nested_field:
        query = {"nested": {"path": nested_field, "query": query}}
    return query


def generate_query_options(
    *,
    size: int | None = None,
    from_: int | None = None,
    include_fields: Sequence[str] | None = None,
    exclude_fields: Sequence[str] | None = None,
    sort_options: Sequence[SortOption | Mapping[str, Any]] | None = None,
    sort_by: str | None = None,
    sort_by_field: str | None = None,
) -> dict[str, Any]:
    """Everything in the request body except ``query``."""
    options: dict[str, Any] = {}
    if size is not None:
        options["size"] = size
    if from_ is not None:
        options["from"] = from_

    if include_fields is not None or exclude_fields is not None:
        source: dict[str, list[str]] = {}
        if include_fields is not None:
            source["includes"] = list(include_fields)
        if exclude_fields is not None:
            source["excludes"] = list(exclude_fields)
        options["_source"] = source

    # one sort clause only; the first sort option beats sort_by/sort_by_field
    if sort_options:
        first = SortOption.coerce(sort_options[0])
        options["sort"] = [{first.data_field: {"order": first.sort_by}}]
    elif sort_by and sort_by_field:
        options["sort"] = [{sort_by_field: {"order": sort_by}}]
    return options
