"""Application-layer errors – raised or recovered inside the search core."""

from __future__ import annotations

from typing import Any

from searchbase.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ValueChangeRejected(ApplicationError):
    """Raised by a ``before_value_change`` hook to veto a pending value.

    Any exception raised by the hook has the same effect; this class only
    gives hooks an explicit, self-describing way to say no.
    """

    default_code = "value_change_rejected"

    def __init__(
        self,
        value: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Value change to {value!r} rejected", **kwargs)
        self.value = value


__all__ = ["ApplicationError", "ValueChangeRejected"]
