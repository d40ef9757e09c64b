"""Unit tests for in-memory test fakes."""

from __future__ import annotations

import asyncio

import pytest

from searchbase.application.voice import RecognitionHandlers, RecognitionResult, SpeechRecognizer
from searchbase.testing.fakes import FakeRecognitionSession, FakeSpeechRecognizer, RecordingCallbacks


class TestFakeSpeechRecognizer:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(FakeSpeechRecognizer(), SpeechRecognizer)

    def test_remembers_sessions(self) -> None:
        recognizer = FakeSpeechRecognizer()
        first = recognizer.create_session({"lang": "en"})
        second = recognizer.create_session({})
        assert recognizer.sessions == [first, second]
        assert recognizer.last_session is second
        assert first.options == {"lang": "en"}

    def test_emits_to_handlers(self) -> None:
        events: list[object] = []

        async def on_start() -> None:
            events.append("start")

        async def on_result(results: list[RecognitionResult]) -> None:
            events.append((results[0].transcript, results[0].is_final))

        async def on_error(code: str) -> None:
            events.append(code)

        session = FakeRecognitionSession({})
        session.start(RecognitionHandlers(on_start=on_start, on_result=on_result, on_error=on_error))

        async def run() -> None:
            await session.emit_start()
            await session.emit_result("hi", is_final=False)
            await session.emit_error("no-speech")

        asyncio.run(run())
        assert session.started
        assert events == ["start", ("hi", False), "no-speech"]

    def test_emit_before_start_fails(self) -> None:
        with pytest.raises(RuntimeError):
            asyncio.run(FakeRecognitionSession({}).emit_start())

    def test_stop_flag(self) -> None:
        session = FakeRecognitionSession({})
        session.stop()
        assert session.stopped


class TestRecordingCallbacks:
    def test_kwargs_cover_every_channel(self) -> None:
        kwargs = RecordingCallbacks().kwargs()
        assert set(kwargs) == {
            "on_value_change",
            "on_results",
            "on_suggestions",
            "on_error",
            "on_suggestions_error",
            "on_mic_status_change",
            "on_query_change",
        }

    def test_records_per_channel(self) -> None:
        recorder = RecordingCallbacks()
        kwargs = recorder.kwargs()
        kwargs["on_value_change"]("", "a")
        kwargs["on_error"](None)
        assert recorder.calls == [("value", ("", "a")), ("error", (None,))]
        assert recorder.for_channel("value") == [("", "a")]
        assert recorder.for_channel("results") == []
