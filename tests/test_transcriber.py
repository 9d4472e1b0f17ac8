"""Tests for the ASRTranscriber wrapper with a stand-in model."""

from types import SimpleNamespace

import numpy as np
import pytest

from whispr.asr.transcriber import ASRTranscriber
from whispr.utils.exceptions import ASRError


class FakeWhisperModel:
    def __init__(self, texts=(), error=None):
        self.texts = texts
        self.error = error
        self.kwargs = None

    def transcribe(self, audio, **kwargs):
        if self.error is not None:
            raise self.error
        self.kwargs = kwargs
        segments = (SimpleNamespace(text=t) for t in self.texts)
        return segments, SimpleNamespace(language=kwargs.get("language"))


@pytest.fixture
def transcriber():
    asr = ASRTranscriber(model_name="tiny.en", device="cpu", compute_type="int8")
    return asr


class TestTranscribe:
    """Text assembly and error wrapping."""

    def test_joins_segments(self, transcriber):
        transcriber.model = FakeWhisperModel([" Hello", " there. ", "  "])
        text = transcriber.transcribe(np.zeros(16000, dtype=np.float32), 16000, "en")
        assert text == "Hello there."
        assert transcriber.model.kwargs["language"] == "en"
        assert transcriber.model.kwargs["beam_size"] == 1

    def test_rejects_other_rates(self, transcriber):
        transcriber.model = FakeWhisperModel(["x"])
        with pytest.raises(ASRError):
            transcriber.transcribe(np.zeros(100, dtype=np.float32), 48000, "en")

    def test_empty_audio_returns_empty_text(self, transcriber):
        assert transcriber.transcribe(np.zeros(0, dtype=np.float32), 16000, "en") == ""
        assert transcriber.model is None

    def test_engine_failure_is_wrapped(self, transcriber):
        transcriber.model = FakeWhisperModel(error=RuntimeError("boom"))
        with pytest.raises(ASRError, match="boom"):
            transcriber.transcribe(np.zeros(160, dtype=np.float32), 16000, "en")

    def test_model_missing_after_load_raises(self, transcriber, monkeypatch):
        monkeypatch.setattr(transcriber, "load_model", lambda: None)
        with pytest.raises(ASRError, match="not loaded"):
            transcriber.transcribe(np.zeros(160, dtype=np.float32), 16000, "en")

    def test_unload(self, transcriber):
        transcriber.model = FakeWhisperModel()
        transcriber.unload_model()
        assert transcriber.model is None

    def test_defaults_come_from_config(self):
        asr = ASRTranscriber()
        assert asr.model_name == "tiny.en"
        assert asr.device == "cpu"
