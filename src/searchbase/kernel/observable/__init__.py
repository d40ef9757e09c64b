"""Kernel observable – state change pub/sub."""
from searchbase.kernel.observable.observable import Listener, Observable, StateChange, Subscription

__all__ = ["Listener", "Observable", "StateChange", "Subscription"]
