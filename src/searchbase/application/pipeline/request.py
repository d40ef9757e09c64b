"""Application pipeline – SearchRequest and RequestPipeline."""
from __future__ import annotations

import dataclasses
import json
import time
from typing import Any, Mapping

from searchbase.adapters.http import HttpxSearchClient
from searchbase.application.hooks import Hook, call_hook
from searchbase.kernel.errors import SearchRequestError, TransformHookError
from searchbase.observability.logging import Logger, SensitiveFieldsFilter, get_logger

__all__ = ["SEARCH_ID_HEADER", "SEARCH_QUERY_HEADER", "RequestPipeline", "SearchRequest"]

SEARCH_ID_HEADER = "X-Search-Id"
SEARCH_QUERY_HEADER = "X-Search-Query"

_REQUEST_FIELDS = frozenset({"method", "url", "headers", "body"})


@dataclasses.dataclass(frozen=True)
class SearchRequest:
    """The HTTP request handed to ``transform_request``."""

    url: str
    body: str
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    method: str = "POST"

    def merge(self, overrides: Mapping[str, Any]) -> "SearchRequest":
        """Copy with the recognised request fields of *overrides* applied."""
        changes = {k: v for k, v in overrides.items() if k in _REQUEST_FIELDS}
        if "body" in changes and not isinstance(changes["body"], (str, bytes)):
            changes["body"] = json.dumps(changes["body"])
        return dataclasses.replace(self, **changes)


def _decode_body(response: Any) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class RequestPipeline:
    """Sends one search request and returns the decoded body.

    Steps: serialise the body, attach standing and analytics headers, run
    ``transform_request``, POST to ``{url}/{index}/_search``, remember the
    ``X-Search-Id`` response header, reject status >= 400, decode, run
    ``transform_response`` and reject bodies carrying ``error``.

    There is no retry. Every failure surfaces as :class:`SearchRequestError`.
    """

    def __init__(
        self,
        url: str,
        index: str,
        http_client: HttpxSearchClient,
        *,
        transform_request: Hook[Any] | None = None,
        transform_response: Hook[Any] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.endpoint = f"{url.rstrip('/')}/{index}/_search"
        self.search_id: str | None = None
        self.transform_request = transform_request
        self.transform_response = transform_response
        self._http = http_client
        self._log = logger or get_logger(__name__)
        self._redactor = SensitiveFieldsFilter()

    def analytics_headers(self, value: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.search_id:
            headers[SEARCH_ID_HEADER] = self.search_id
        if value:
            headers[SEARCH_QUERY_HEADER] = value
        return headers

    async def execute(
        self,
        body: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        value: str | None = None,
    ) -> Any:
        request = SearchRequest(
            url=self.endpoint,
            body=json.dumps(body),
            headers={**(headers or {}), **self.analytics_headers(value)},
        )
        request = await self._apply_transform_request(request)

        timestamp = int(time.time() * 1000)
        self._log.debug(
            "searchbase.request",
            method=request.method,
            url=request.url,
            headers=self._redactor.redact(request.headers),
        )
        response = await self._http.request(
            request.method, request.url, headers=request.headers, content=request.body
        )
        self.search_id = response.headers.get(SEARCH_ID_HEADER) or None

        if response.status_code >= 400:
            raise SearchRequestError(
                request.url,
                f"HTTP {response.status_code} from {request.method} {request.url}",
                status_code=response.status_code,
                body=_decode_body(response),
                response=response,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise SearchRequestError(
                request.url,
                "Search response is not valid JSON",
                status_code=response.status_code,
                body=response.text,
                response=response,
                cause=exc,
            ) from exc

        data = await self._apply_transform_response(data)
        if isinstance(data, Mapping) and "error" in data:
            raise SearchRequestError(
                request.url,
                "Search response carries an error",
                status_code=response.status_code,
                body=data,
                response=response,
            )
        if isinstance(data, Mapping):
            return {**data, "_timestamp": timestamp, "_headers": dict(response.headers)}
        return data

    async def _apply_transform_request(self, request: SearchRequest) -> SearchRequest:
        if self.transform_request is None:
            return request
        try:
            transformed = await call_hook(self.transform_request, request)
        except Exception as exc:
            self._log.warning("searchbase.transform_request_rejected", error=repr(exc))
            raise TransformHookError(self.endpoint, "transform_request", exc) from exc
        if isinstance(transformed, SearchRequest):
            return transformed
        if isinstance(transformed, Mapping):
            return request.merge(transformed)
        return request

    async def _apply_transform_response(self, data: Any) -> Any:
        if self.transform_response is None:
            return data
        try:
            return await call_hook(self.transform_response, data)
        except Exception as exc:
            self._log.warning("searchbase.transform_response_rejected", error=repr(exc))
            raise TransformHookError(self.endpoint, "transform_response", exc) from exc
