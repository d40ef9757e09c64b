"""Application results – ResultSet wrapper around raw engine responses."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

__all__ = ["ResultSet"]

_HIT_META_KEYS = ("_id", "_index", "_score")


def _normalize_hit(hit: Any) -> dict[str, Any] | None:
    if not isinstance(hit, Mapping):
        return None
    if "_source" not in hit:
        return dict(hit)
    source = hit.get("_source")
    record: dict[str, Any] = dict(source) if isinstance(source, Mapping) else {}
    for key in _HIT_META_KEYS:
        if key in hit:
            record[key] = hit[key]
    if hit.get("highlight"):
        record["highlight"] = hit["highlight"]
    return record


def _extract_total(hits: Mapping[str, Any], fallback: int) -> int:
    total = hits.get("total", fallback)
    if isinstance(total, Mapping):
        total = total.get("value", fallback)
    try:
        return int(total)
    except (TypeError, ValueError):
        return fallback


class ResultSet:
    """Stable view over a search response.

    Accepts either an engine response (``hits.hits``, ``hits.total``,
    ``took``, ``aggregations``) or a plain list of records supplied by the
    caller. Anything else yields an empty result.
    """

    def __init__(self, raw: Any = None) -> None:
        self.set_raw(raw)

    def set_raw(self, raw: Any) -> None:
        self._raw = raw
        self._data: list[dict[str, Any]] = []
        self._total = 0
        self._time = 0
        self._aggregations: dict[str, Any] | None = None
        self._timestamp: int | None = None

        if isinstance(raw, (list, tuple)):
            self._data = [r for r in (_normalize_hit(h) for h in raw) if r is not None]
            self._total = len(self._data)
            return
        if not isinstance(raw, Mapping):
            return

        hits = raw.get("hits")
        if isinstance(hits, Mapping):
            items = hits.get("hits")
            if isinstance(items, (list, tuple)):
                self._data = [r for r in (_normalize_hit(h) for h in items) if r is not None]
            self._total = _extract_total(hits, len(self._data))

        took = raw.get("took", 0)
        self._time = took if isinstance(took, (int, float)) else 0
        aggregations = raw.get("aggregations")
        if isinstance(aggregations, Mapping):
            self._aggregations = dict(aggregations)
        timestamp = raw.get("_timestamp")
        if isinstance(timestamp, int):
            self._timestamp = timestamp

    @property
    def raw(self) -> Any:
        return self._raw

    @property
    def data(self) -> list[dict[str, Any]]:
        return list(self._data)

    @property
    def total(self) -> int:
        return self._total

    @property
    def time(self) -> int | float:
        """Engine-reported elapsed time in milliseconds."""
        return self._time

    @property
    def aggregations(self) -> dict[str, Any] | None:
        return self._aggregations

    @property
    def timestamp(self) -> int | None:
        """Send time (ms since epoch) of the request that produced this result."""
        return self._timestamp

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(list(self._data))

    def __repr__(self) -> str:
        return f"ResultSet(total={self._total}, hits={len(self._data)})"
