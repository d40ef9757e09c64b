"""Searchbase – raw input event helpers."""
from __future__ import annotations

from typing import Any, Mapping

__all__ = ["get_control_value"]


def get_control_value(event: Any) -> Any:
    """Pull the current value out of an input event.

    Accepts the value itself, an object or mapping exposing
    ``target.value``, or one exposing ``value`` directly.
    """
    if event is None or isinstance(event, str):
        return event
    if isinstance(event, Mapping):
        target = event.get("target")
        if target is not None:
            return get_control_value(target)
        return event.get("value")
    target = getattr(event, "target", None)
    if target is not None:
        return get_control_value(target)
    return getattr(event, "value", event)
