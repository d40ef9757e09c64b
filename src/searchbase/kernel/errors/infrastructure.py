"""Infrastructure errors – search engine calls and platform integrations."""

from __future__ import annotations

from typing import Any

from searchbase.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure."""

    default_code = "infrastructure_error"


class ExternalServiceError(InfrastructureError):
    """An external service returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code


class SearchRequestError(ExternalServiceError):
    """A search request failed.

    Covers HTTP status >= 400, bodies carrying an ``error`` key, transport
    failures and undecodable payloads. ``body`` holds the decoded response
    (when there was one) and ``response`` the raw ``httpx.Response``.
    """

    default_code = "search_request_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        body: Any = None,
        response: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(service, message, status_code=status_code, **kwargs)
        self.body = body
        self.response = response

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["status_code"] = self.status_code
        if self.body is not None:
            base["body"] = self.body
        return base


class TransformHookError(SearchRequestError):
    """``transform_request`` or ``transform_response`` raised."""

    default_code = "transform_hook_error"

    def __init__(self, service: str, hook: str, cause: BaseException) -> None:
        super().__init__(service, f"{hook} rejected the request: {cause!r}", cause=cause)
        self.hook = hook


class VoiceSessionError(InfrastructureError):
    """The speech recognition session reported an error code."""

    default_code = "voice_session_error"

    def __init__(self, error_code: str, **kwargs: Any) -> None:
        super().__init__(f"Speech recognition failed with '{error_code}'", **kwargs)
        self.error_code = error_code


__all__ = [
    "ExternalServiceError",
    "InfrastructureError",
    "SearchRequestError",
    "TransformHookError",
    "VoiceSessionError",
]
