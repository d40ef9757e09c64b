"""Searchbase – the headless search component core."""
from __future__ import annotations

import base64
import copy
import dataclasses
from typing import Any, Callable, Iterable, Mapping, Sequence

from searchbase.adapters.http import HttpxSearchClient
from searchbase.application.hooks import Hook, call_hook
from searchbase.application.pipeline import RequestPipeline
from searchbase.application.query import default_query, generate_query_options
from searchbase.application.results import ResultSet
from searchbase.application.searchbase.callbacks import ChangeCallbacks
from searchbase.application.searchbase.input import get_control_value
from searchbase.application.voice import (
    AUDIO_CAPTURE,
    NO_SPEECH,
    NOT_ALLOWED,
    RecognitionHandlers,
    RecognitionResult,
    RecognitionSession,
    SpeechRecognizer,
)
from searchbase.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SearchbaseSettings,
    SettingsFactory,
)
from searchbase.config.validation import MissingRequiredSettingError
from searchbase.kernel.errors import SearchRequestError, VoiceSessionError
from searchbase.kernel.observable import Listener, Observable, StateChange, Subscription
from searchbase.kernel.types import (
    ApplyOptions,
    DataFieldSpec,
    MicStatus,
    QueryFormat,
    SortOption,
    StateOptions,
)
from searchbase.observability.logging import Logger, get_logger

__all__ = ["Searchbase"]

_DEFAULT_OPTIONS = ApplyOptions()
_EXTERNAL_DATA_OPTIONS = ApplyOptions(trigger_query=False)
_MIC_OPTIONS = ApplyOptions(trigger_query=False)

# properties the generated queries are derived from
_QUERY_KEYS = frozenset({
    "value",
    "size",
    "from",
    "fuzziness",
    "include_fields",
    "exclude_fields",
    "sort_by",
    "sort_by_field",
    "sort_options",
    "nested_field",
    "data_field",
    "query_format",
    "search_operators",
})

_MATCH_ALL: dict[str, Any] = {"match_all": {}}


def _coerce_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number or default


class _ReadOnly:
    """Exposes ``obj._<name>``; writes must go through the setters."""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name
        self._attr = f"_{name}"

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self._attr)

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(f"'{self._name}' is read-only, use the matching set_* method")


class Searchbase:
    """State and query engine for one search component.

    Holds the component configuration, derives the search request body from
    it, runs requests through a :class:`RequestPipeline` and republishes
    every change to subscribers.

    Each setter accepts :class:`ApplyOptions`: ``trigger_query`` issues one
    request after the change and ``state_changes`` publishes
    ``{key: StateChange(prev, next)}`` to subscribers. Setters are
    coroutines because they may await a request or the
    ``before_value_change`` hook.

    Example::

        async with Searchbase(index="books", url="http://localhost:9200",
                              data_field=["title", {"field": "title.search", "weight": 3}]) as sb:
            sb.subscribe_to_state_changes(print, "results")
            await sb.set_value("harry")
    """

    index = _ReadOnly()
    url = _ReadOnly()
    credentials = _ReadOnly()
    headers = _ReadOnly()
    value = _ReadOnly()
    data_field = _ReadOnly()
    search_operators = _ReadOnly()
    query_format = _ReadOnly()
    fuzziness = _ReadOnly()
    nested_field = _ReadOnly()
    size = _ReadOnly()
    from_ = _ReadOnly()
    include_fields = _ReadOnly()
    exclude_fields = _ReadOnly()
    sort_by = _ReadOnly()
    sort_by_field = _ReadOnly()
    sort_options = _ReadOnly()
    results = _ReadOnly()
    suggestions = _ReadOnly()
    error = _ReadOnly()
    suggestions_error = _ReadOnly()
    mic_status = _ReadOnly()
    mic_session = _ReadOnly()

    def __init__(
        self,
        *,
        index: str,
        url: str,
        data_field: DataFieldSpec,
        credentials: str | None = None,
        headers: Mapping[str, str] | None = None,
        value: str | None = None,
        query: Mapping[str, Any] | None = None,
        suggestions_query: Mapping[str, Any] | None = None,
        results: Any = None,
        suggestions: Any = None,
        search_operators: bool = False,
        query_format: QueryFormat = "or",
        fuzziness: int | str = 0,
        nested_field: str | None = None,
        size: int | None = None,
        from_: int | None = None,
        include_fields: Sequence[str] | None = None,
        exclude_fields: Sequence[str] | None = None,
        sort_by: str | None = None,
        sort_by_field: str | None = None,
        sort_options: Sequence[SortOption | Mapping[str, Any]] | None = None,
        transform_request: Hook[Any] | None = None,
        transform_response: Hook[Any] | None = None,
        before_value_change: Hook[Any] | None = None,
        on_value_change: Callable[[Any, Any], Any] | None = None,
        on_results: Callable[[Any, Any], Any] | None = None,
        on_suggestions: Callable[[Any, Any], Any] | None = None,
        on_error: Callable[[Any], Any] | None = None,
        on_suggestions_error: Callable[[Any], Any] | None = None,
        on_mic_status_change: Callable[[Any, Any], Any] | None = None,
        on_query_change: Callable[[Any, Any], Any] | None = None,
        http_client: HttpxSearchClient | None = None,
        speech_recognizer: SpeechRecognizer | None = None,
        logger: Logger | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not index:
            raise MissingRequiredSettingError("index")
        if not url:
            raise MissingRequiredSettingError("url")
        if not data_field:
            raise MissingRequiredSettingError("data_field")

        self._index = index
        self._url = url
        self._credentials = credentials or ""
        self._data_field = data_field
        self._search_operators = bool(search_operators)
        self._query_format: QueryFormat = query_format or "or"
        self._fuzziness = fuzziness or 0
        self._nested_field = nested_field or ""
        self._size = _coerce_int(size, 10)
        self._from_ = _coerce_int(from_, 0)
        self._include_fields = list(include_fields) if include_fields is not None else ["*"]
        self._exclude_fields = list(exclude_fields) if exclude_fields is not None else []
        self._sort_by = sort_by or ""
        self._sort_by_field = sort_by_field or ""
        self._sort_options = [SortOption.coerce(o) for o in sort_options] if sort_options else None
        self._value = value or ""
        self._results = ResultSet(results)
        self._suggestions = ResultSet(suggestions)
        self._error: Any = None
        self._suggestions_error: Any = None
        self._mic_status = MicStatus.INACTIVE
        self._mic_session: RecognitionSession | None = None

        self.before_value_change = before_value_change
        self.state_changes = Observable()
        self._callbacks = ChangeCallbacks(
            on_value_change=on_value_change,
            on_results=on_results,
            on_suggestions=on_suggestions,
            on_error=on_error,
            on_suggestions_error=on_suggestions_error,
            on_mic_status_change=on_mic_status_change,
            on_query_change=on_query_change,
        )
        self._log = logger or get_logger(__name__, index=index)
        self._speech_recognizer = speech_recognizer
        self._owns_http_client = http_client is None
        self._http_client = http_client or HttpxSearchClient(timeout=timeout)
        self._pipeline = RequestPipeline(
            url,
            index,
            self._http_client,
            transform_request=transform_request,
            transform_response=transform_response,
            logger=self._log,
        )

        self._headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._credentials:
            token = base64.b64encode(self._credentials.encode()).decode()
            self._headers["Authorization"] = f"Basic {token}"
        if headers:
            self._headers.update(headers)

        self._query: dict[str, Any] | None = None
        self._query_override: Any = None
        self._query_options: dict[str, Any] = {}
        self._suggestions_query: dict[str, Any] | None = None
        self._suggestions_query_override: Any = None
        self._suggestions_query_options: dict[str, Any] = {}

        if query:
            self._assign_query_override(query)
            self._size = _coerce_int(self._query_options.get("size", self._size), 10)
            self._from_ = _coerce_int(self._query_options.get("from", self._from_), 0)
        if suggestions_query:
            self._assign_suggestions_query_override(suggestions_query)
        self._update_query()
        self._update_suggestions_query()

    # ------------------------------------------------------------------
    # construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(cls, settings: SearchbaseSettings, **overrides: Any) -> "Searchbase":
        """Build from a :class:`SearchbaseSettings`; keyword *overrides* win."""
        kwargs: dict[str, Any] = {
            "index": settings.index,
            "url": settings.url,
            "data_field": list(settings.data_field),
            "credentials": settings.credentials or None,
            "query_format": settings.query_format,
            "fuzziness": settings.fuzziness_value,
            "search_operators": settings.search_operators,
            "size": settings.size,
            "nested_field": settings.nested_field or None,
            "timeout": settings.timeout,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, env_file: str | None = None, **overrides: Any) -> "Searchbase":
        """Build from ``SEARCHBASE_*`` environment variables (or a ``.env`` file).

        Overrides naming a settings field are applied to the settings; the
        rest are passed to the constructor.
        """
        setting_names = {f.name for f in dataclasses.fields(SearchbaseSettings)}
        setting_overrides = {k: v for k, v in overrides.items() if k in setting_names}
        extra = {k: v for k, v in overrides.items() if k not in setting_names}
        loader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
        settings = SettingsFactory.create(SearchbaseSettings, [loader], setting_overrides)
        return cls.from_settings(settings, **extra)

    async def __aenter__(self) -> "Searchbase":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop any mic session, drop subscribers and close an owned HTTP client."""
        if self._mic_session is not None:
            self._mic_session.stop()
            self._mic_session = None
        self.state_changes.unsubscribe()
        if self._owns_http_client:
            await self._http_client.aclose()

    # ------------------------------------------------------------------
    # read-only views
    # ------------------------------------------------------------------

    @property
    def search_id(self) -> str | None:
        """Analytics session id returned by the last response."""
        return self._pipeline.search_id

    @property
    def mic_active(self) -> bool:
        return self._mic_status is MicStatus.ACTIVE

    @property
    def mic_inactive(self) -> bool:
        return self._mic_status is MicStatus.INACTIVE

    @property
    def mic_stopped(self) -> bool:
        return self._mic_status is MicStatus.STOPPED

    @property
    def mic_denied(self) -> bool:
        return self._mic_status is MicStatus.DENIED

    def get_query(self) -> dict[str, Any]:
        """Snapshot of the effective request body."""
        return copy.deepcopy(self._query)

    def get_suggestions_query(self) -> dict[str, Any]:
        return copy.deepcopy(self._suggestions_query)

    # ------------------------------------------------------------------
    # subscriptions
    # ------------------------------------------------------------------

    def subscribe_to_state_changes(
        self, listener: Listener, keys: str | Iterable[str] | None = None
    ) -> Subscription:
        return self.state_changes.subscribe(listener, keys)

    def unsubscribe_to_state_changes(self, listener: Listener | Subscription | None = None) -> None:
        self.state_changes.unsubscribe(listener)

    # ------------------------------------------------------------------
    # setters
    # ------------------------------------------------------------------

    async def set_headers(self, headers: Mapping[str, str], options: ApplyOptions | None = None) -> None:
        prev = self._headers
        self._headers = {**self._headers, **headers}
        await self._apply_options(options or _DEFAULT_OPTIONS, "headers", prev, self._headers)

    async def set_query(self, query: Mapping[str, Any] | None, options: ApplyOptions | None = None) -> None:
        """Override the query with ``{"query": <dsl>, **request_options}``.

        ``None`` removes the override. ``size`` and ``from`` found among the
        request options are synced back into the instance properties.
        """
        prev = self.get_query()
        self._assign_query_override(query)
        self._update_query()
        await self._sync_query_options(self._query_options)
        await self._apply_options(options or _DEFAULT_OPTIONS, "query", prev, self.get_query())

    async def set_suggestions_query(
        self, suggestions_query: Mapping[str, Any] | None, options: ApplyOptions | None = None
    ) -> None:
        prev = self.get_suggestions_query()
        self._assign_suggestions_query_override(suggestions_query)
        self._update_suggestions_query()
        await self._apply_options(
            options or _DEFAULT_OPTIONS, "suggestions_query", prev, self.get_suggestions_query()
        )

    async def set_size(self, size: int, options: ApplyOptions | None = None) -> None:
        await self._set("size", _coerce_int(size, 10), options)

    async def set_from(self, from_: int, options: ApplyOptions | None = None) -> None:
        await self._set("from_", _coerce_int(from_, 0), options, key="from")

    async def set_fuzziness(self, fuzziness: int | str, options: ApplyOptions | None = None) -> None:
        await self._set("fuzziness", fuzziness, options)

    async def set_include_fields(self, include_fields: Sequence[str], options: ApplyOptions | None = None) -> None:
        await self._set("include_fields", list(include_fields), options)

    async def set_exclude_fields(self, exclude_fields: Sequence[str], options: ApplyOptions | None = None) -> None:
        await self._set("exclude_fields", list(exclude_fields), options)

    async def set_sort_by(self, sort_by: str, options: ApplyOptions | None = None) -> None:
        await self._set("sort_by", sort_by, options)

    async def set_sort_by_field(self, sort_by_field: str, options: ApplyOptions | None = None) -> None:
        await self._set("sort_by_field", sort_by_field, options)

    async def set_sort_options(
        self, sort_options: Sequence[SortOption | Mapping[str, Any]] | None, options: ApplyOptions | None = None
    ) -> None:
        coerced = [SortOption.coerce(o) for o in sort_options] if sort_options else None
        await self._set("sort_options", coerced, options)

    async def set_nested_field(self, nested_field: str, options: ApplyOptions | None = None) -> None:
        await self._set("nested_field", nested_field, options)

    async def set_data_field(self, data_field: DataFieldSpec, options: ApplyOptions | None = None) -> None:
        await self._set("data_field", data_field, options)

    async def set_query_format(self, query_format: QueryFormat, options: ApplyOptions | None = None) -> None:
        await self._set("query_format", query_format, options)

    async def set_search_operators(self, search_operators: bool, options: ApplyOptions | None = None) -> None:
        await self._set("search_operators", bool(search_operators), options)

    async def set_results(self, results: Any, options: ApplyOptions | None = None) -> None:
        """Replace the results with externally supplied data (no request by default)."""
        if results is None:
            return
        result_set = results if isinstance(results, ResultSet) else ResultSet(results)
        await self._set("results", result_set, options or _EXTERNAL_DATA_OPTIONS)

    async def set_suggestions(self, suggestions: Any, options: ApplyOptions | None = None) -> None:
        if suggestions is None:
            return
        result_set = suggestions if isinstance(suggestions, ResultSet) else ResultSet(suggestions)
        await self._set("suggestions", result_set, options or _EXTERNAL_DATA_OPTIONS)

    async def set_value(self, value: str, options: ApplyOptions | None = None) -> None:
        """Set the input value.

        With a ``before_value_change`` hook the assignment waits for it: a
        returned string replaces *value*, ``None`` keeps it, and an exception
        drops the change (logged as a warning, never raised).
        """
        if self.before_value_change is not None:
            try:
                replacement = await call_hook(self.before_value_change, value)
            except Exception as exc:
                self._log.warning("searchbase.value_change_rejected", value=value, error=repr(exc))
                return
            if isinstance(replacement, str):
                value = replacement
        await self._set("value", value, options)

    async def on_change(self, event: Any) -> None:
        """Adapter for raw input events."""
        await self.set_value(get_control_value(event))

    # ------------------------------------------------------------------
    # requests
    # ------------------------------------------------------------------

    async def trigger_query(self, options: StateOptions | None = None) -> None:
        """Run the main query; failures land in ``error``, never raised."""
        apply = (options or StateOptions()).as_apply_options()
        try:
            raw = await self._pipeline.execute(self._query, headers=self._headers, value=self._value)
        except SearchRequestError as exc:
            self._log.error("searchbase.request_failed", error=exc.to_dict())
            await self._set("error", exc, apply)
            return
        await self._set("results", ResultSet(raw), apply)

    async def trigger_suggestions_query(self, options: StateOptions | None = None) -> None:
        apply = (options or StateOptions()).as_apply_options()
        try:
            raw = await self._pipeline.execute(
                self._suggestions_query, headers=self._headers, value=self._value
            )
        except SearchRequestError as exc:
            self._log.error("searchbase.suggestions_request_failed", error=exc.to_dict())
            await self._set("suggestions_error", exc, apply)
            return
        await self._set("suggestions", ResultSet(raw), apply)

    # ------------------------------------------------------------------
    # voice search
    # ------------------------------------------------------------------

    async def on_mic_click(
        self, session_options: Mapping[str, Any] | None = None, options: ApplyOptions | None = None
    ) -> None:
        """Start a recognition session, or stop the running one.

        No-op without a speech recognizer or once permission was denied.
        """
        options = options or _MIC_OPTIONS
        if self._speech_recognizer is None or self._mic_status is MicStatus.DENIED:
            return
        if self._mic_session is not None:
            await self._stop_mic(options)
            return

        session = self._speech_recognizer.create_session(
            {"continuous": True, "interim_results": True, **(session_options or {})}
        )
        self._mic_session = session

        async def handle_start() -> None:
            if self._mic_session is session:
                await self._set_mic_status(MicStatus.ACTIVE, options)

        async def handle_result(results: Sequence[RecognitionResult]) -> None:
            if self._mic_session is not session or not results:
                return
            first = results[0]
            if not first.is_final:
                return
            await self._stop_mic()
            transcript = first.transcript.strip()
            if transcript:
                await self.set_value(transcript)

        async def handle_error(error_code: str) -> None:
            if self._mic_session is not session:
                return
            self._log.error("searchbase.mic_error", error=VoiceSessionError(error_code).to_dict())
            if error_code in (NO_SPEECH, AUDIO_CAPTURE):
                self._release_mic_session()
                await self._set_mic_status(MicStatus.INACTIVE, options)
            elif error_code == NOT_ALLOWED:
                self._release_mic_session()
                await self._set_mic_status(MicStatus.DENIED, options)

        session.start(RecognitionHandlers(on_start=handle_start, on_result=handle_result, on_error=handle_error))

    async def _stop_mic(self, options: ApplyOptions = _MIC_OPTIONS) -> None:
        if self._mic_session is None:
            return
        self._release_mic_session()
        await self._set_mic_status(MicStatus.INACTIVE, options)

    def _release_mic_session(self) -> None:
        session, self._mic_session = self._mic_session, None
        if session is not None:
            session.stop()

    async def _set_mic_status(self, status: MicStatus, options: ApplyOptions = _MIC_OPTIONS) -> None:
        if status is self._mic_status:
            return
        await self._set("mic_status", status, options)

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    async def _set(self, attr: str, value: Any, options: ApplyOptions | None, *, key: str | None = None) -> None:
        name = f"_{attr}"
        prev = getattr(self, name)
        setattr(self, name, value)
        await self._apply_options(options or _DEFAULT_OPTIONS, key or attr, prev, value)

    async def _apply_options(self, options: ApplyOptions, key: str, prev: Any, next_: Any) -> None:
        if key != "query":
            self._callbacks.emit(key, prev, next_)
        if key in _QUERY_KEYS:
            self._update_query()
            self._update_suggestions_query()
        if options.state_changes:
            self._log.debug("searchbase.state_changed", key=key)
            self.state_changes.next({key: StateChange(prev, next_)}, key)
        if options.trigger_query:
            if key == "suggestions_query":
                await self.trigger_suggestions_query()
            else:
                await self.trigger_query()

    async def _sync_query_options(self, query_options: Mapping[str, Any]) -> None:
        sync = ApplyOptions(trigger_query=False, state_changes=True)
        if "size" in query_options:
            await self.set_size(query_options["size"], sync)
        if "from" in query_options:
            await self.set_from(query_options["from"], sync)

    def _assign_query_override(self, query: Mapping[str, Any] | None) -> None:
        options = copy.deepcopy(dict(query or {}))
        self._query_override = options.pop("query", None)
        self._query_options = options

    def _assign_suggestions_query_override(self, suggestions_query: Mapping[str, Any] | None) -> None:
        options = copy.deepcopy(dict(suggestions_query or {}))
        self._suggestions_query_override = options.pop("query", None)
        self._suggestions_query_options = options

    def _default_query(self) -> dict[str, Any] | None:
        return default_query(
            self._value,
            data_field=self._data_field,
            search_operators=self._search_operators,
            query_format=self._query_format,
            fuzziness=self._fuzziness,
            nested_field=self._nested_field,
        )

    def _update_query(self) -> None:
        # user override > default query > match_all; user options win per key
        query_options = generate_query_options(
            size=self._size,
            from_=self._from_,
            include_fields=self._include_fields,
            exclude_fields=self._exclude_fields,
            sort_options=self._sort_options,
            sort_by=self._sort_by,
            sort_by_field=self._sort_by_field,
        )
        query = self._query_override or self._default_query() or copy.deepcopy(_MATCH_ALL)
        prev = self._query
        self._query = {"query": query, **query_options, **copy.deepcopy(self._query_options)}
        if prev is not None and prev != self._query:
            self._callbacks.emit("query", copy.deepcopy(prev), self.get_query())

    def _update_suggestions_query(self) -> None:
        query_options = generate_query_options(size=10)
        query = self._suggestions_query_override or self._default_query() or copy.deepcopy(_MATCH_ALL)
        self._suggestions_query = {
            "query": query,
            **query_options,
            **copy.deepcopy(self._suggestions_query_options),
        }

    def __repr__(self) -> str:
        return f"Searchbase(index={self._index!r}, url={self._url!r}, value={self._value!r})"
