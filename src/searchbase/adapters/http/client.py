"""HTTP adapter – HttpxSearchClient."""
from __future__ import annotations

from typing import Any, Mapping

import httpx

from searchbase.kernel.errors import SearchRequestError


class HttpxSearchClient:
    """Thin async httpx wrapper used by the request pipeline.

    Unlike a generic client it does not raise on HTTP status: the pipeline
    inspects status and body itself. Only transport failures are mapped to
    :class:`SearchRequestError`.

    Pass ``client`` to share an existing ``httpx.AsyncClient`` (it is then
    not closed by :meth:`aclose`); otherwise one is created from *kwargs*.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        *,
        client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, **kwargs)

    async def __aenter__(self) -> "HttpxSearchClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, url, headers=dict(headers or {}), content=content)
        except httpx.TimeoutException as exc:
            raise SearchRequestError(url, f"HTTP request timed out: {method} {url}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise SearchRequestError(url, str(exc) or repr(exc), cause=exc) from exc


__all__ = ["HttpxSearchClient"]
