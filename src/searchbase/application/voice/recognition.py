"""Application voice – speech recognition capability ports.

A platform adapter implements :class:`SpeechRecognizer`; the search core
only talks to these protocols. Handlers are coroutine functions because a
final transcript flows into the (async) value pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, Sequence, runtime_checkable

__all__ = [
    "AUDIO_CAPTURE",
    "NOT_ALLOWED",
    "NO_SPEECH",
    "RecognitionAlternative",
    "RecognitionHandlers",
    "RecognitionResult",
    "RecognitionSession",
    "SpeechRecognizer",
]

NO_SPEECH = "no-speech"
AUDIO_CAPTURE = "audio-capture"
NOT_ALLOWED = "not-allowed"


@dataclass(frozen=True)
class RecognitionAlternative:
    transcript: str
    confidence: float | None = None


@dataclass(frozen=True)
class RecognitionResult:
    """One recognised segment; ``alternatives[0]`` is the best guess."""

    alternatives: Sequence[RecognitionAlternative]
    is_final: bool = False

    @property
    def transcript(self) -> str:
        return self.alternatives[0].transcript if self.alternatives else ""


@dataclass(frozen=True)
class RecognitionHandlers:
    on_start: Callable[[], Awaitable[None]]
    on_result: Callable[[Sequence[RecognitionResult]], Awaitable[None]]
    on_error: Callable[[str], Awaitable[None]]


@runtime_checkable
class RecognitionSession(Protocol):
    def start(self, handlers: RecognitionHandlers) -> None: ...
    def stop(self) -> None: ...


@runtime_checkable
class SpeechRecognizer(Protocol):
    def create_session(self, options: dict[str, Any]) -> RecognitionSession: ...
