"""Application voice – speech-to-text integration ports."""
from searchbase.application.voice.recognition import (
    AUDIO_CAPTURE,
    NO_SPEECH,
    NOT_ALLOWED,
    RecognitionAlternative,
    RecognitionHandlers,
    RecognitionResult,
    RecognitionSession,
    SpeechRecognizer,
)

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
