"""Searchbase – named change callbacks."""
from __future__ import annotations

from typing import Any, Callable

__all__ = ["CALLBACK_CHANNELS", "ChangeCallbacks"]

#: channel -> constructor keyword of the callback
CALLBACK_CHANNELS: dict[str, str] = {
    "value": "on_value_change",
    "results": "on_results",
    "suggestions": "on_suggestions",
    "error": "on_error",
    "suggestions_error": "on_suggestions_error",
    "mic_status": "on_mic_status_change",
    "query": "on_query_change",
}

# error channels receive the previous value only
_PREV_ONLY = frozenset({"error", "suggestions_error"})


class ChangeCallbacks:
    """One optional callback per channel, invoked synchronously.

    Most channels are called as ``callback(prev, next)``; ``error`` and
    ``suggestions_error`` as ``callback(prev)``.
    """

    def __init__(self, **callbacks: Callable[..., Any] | None) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}
        by_keyword = {kw: channel for channel, kw in CALLBACK_CHANNELS.items()}
        for keyword, callback in callbacks.items():
            if keyword not in by_keyword:
                raise TypeError(f"Unknown callback {keyword!r}")
            if callback is not None:
                self._handlers[by_keyword[keyword]] = callback

    def emit(self, channel: str, prev: Any, next_: Any) -> None:
        callback = self._handlers.get(channel)
        if callback is None:
            return
        if channel in _PREV_ONLY:
            callback(prev)
        else:
            callback(prev, next_)
