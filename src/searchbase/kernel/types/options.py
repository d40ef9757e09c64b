"""Kernel types – per-call apply options."""
from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ApplyOptions", "StateOptions"]


@dataclass(frozen=True)
class ApplyOptions:
    """Controls the side effects of a single setter call.

    ``trigger_query`` issues exactly one search request after the change;
    ``state_changes`` publishes the change to state subscribers. The two are
    independent.
    """

    trigger_query: bool = True
    state_changes: bool = True


@dataclass(frozen=True)
class StateOptions:
    """Options for calls that never re-trigger a query."""

    state_changes: bool = True

    def as_apply_options(self) -> ApplyOptions:
        return ApplyOptions(trigger_query=False, state_changes=self.state_changes)
