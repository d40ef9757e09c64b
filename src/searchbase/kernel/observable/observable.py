"""Kernel observable – keyed synchronous pub/sub."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

__all__ = ["Listener", "Observable", "StateChange", "Subscription"]


@dataclass(frozen=True)
class StateChange:
    """Previous and next value of one property."""

    prev: Any
    next: Any


Listener = Callable[[Mapping[str, StateChange]], None]


class Subscription:
    """Handle returned by :meth:`Observable.subscribe`."""

    def __init__(self, observable: "Observable", listener: Listener, keys: frozenset[str] | None) -> None:
        self._observable = observable
        self.listener = listener
        self.keys = keys

    def matches(self, key: str) -> bool:
        return self.keys is None or key in self.keys

    def unsubscribe(self) -> None:
        self._observable._remove(self)

    def __repr__(self) -> str:
        keys = sorted(self.keys) if self.keys is not None else "*"
        return f"Subscription(listener={self.listener!r}, keys={keys})"


class Observable:
    """Delivers change maps to listeners, optionally filtered by key.

    Delivery is synchronous and in subscription order. Dispatch works on a
    snapshot of the registry, so a listener may subscribe, unsubscribe or
    publish again while being notified.

    Example::

        changes = Observable()
        changes.subscribe(print, "value")
        changes.next({"value": StateChange("a", "b")}, "value")
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, listener: Listener, keys: str | Iterable[str] | None = None) -> Subscription:
        if isinstance(keys, str):
            key_set: frozenset[str] | None = frozenset({keys})
        elif keys is None:
            key_set = None
        else:
            key_set = frozenset(keys)
        subscription = Subscription(self, listener, key_set)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, listener: Listener | Subscription | None = None) -> None:
        """Remove *listener* (every registration of it), a single handle, or everything."""
        if listener is None:
            self._subscriptions.clear()
        elif isinstance(listener, Subscription):
            self._remove(listener)
        else:
            self._subscriptions = [s for s in self._subscriptions if s.listener != listener]

    def next(self, changes: Mapping[str, StateChange], key: str) -> None:
        for subscription in list(self._subscriptions):
            if subscription.matches(key):
                subscription.listener(changes)

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
