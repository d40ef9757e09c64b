"""Testing fakes – in-memory doubles for searchbase ports."""
from searchbase.testing.fakes.callbacks import RecordingCallbacks
from searchbase.testing.fakes.speech import FakeRecognitionSession, FakeSpeechRecognizer

__all__ = ["FakeRecognitionSession", "FakeSpeechRecognizer", "RecordingCallbacks"]
