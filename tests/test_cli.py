"""Tests for the whispr command line."""

import pytest
from click.testing import CliRunner

from whispr import main as main_module
from whispr import pipeline as pipeline_module
from whispr.utils.exceptions import DeviceUnavailableError


class FakePipeline:
    text = "turn left at the lights"
    error = None
    calls = []

    def __init__(self, capturer=None, recognizer=None, target_rate=None):
        self.recognizer = recognizer

    def run(self, duration, language):
        FakePipeline.calls.append((duration, language, self.recognizer.model_name))
        if FakePipeline.error is not None:
            raise FakePipeline.error
        return FakePipeline.text


@pytest.fixture
def fake_pipeline(monkeypatch):
    FakePipeline.text = "turn left at the lights"
    FakePipeline.error = None
    FakePipeline.calls = []
    monkeypatch.setattr(pipeline_module, "Pipeline", FakePipeline)
    return FakePipeline


class TestRecordCommand:
    """Default command records and prints the transcript."""

    def test_prints_transcript(self, fake_pipeline):
        result = CliRunner().invoke(main_module.cli, ["-d", "3", "-l", "hr", "-m", "small"])
        assert result.exit_code == 0, result.output
        assert "Recording 3s of audio..." in result.output
        assert "turn left at the lights" in result.output
        assert fake_pipeline.calls == [(3, "hr", "small")]

    def test_defaults_from_config(self, fake_pipeline):
        result = CliRunner().invoke(main_module.cli, [])
        assert result.exit_code == 0, result.output
        assert fake_pipeline.calls == [(5, "en", "tiny.en")]

    def test_record_subcommand_accepts_options(self, fake_pipeline):
        result = CliRunner().invoke(main_module.cli, ["record", "-d", "3", "-l", "hr"])
        assert result.exit_code == 0, result.output
        assert "Recording 3s of audio..." in result.output
        assert fake_pipeline.calls == [(3, "hr", "tiny.en")]

    def test_subcommand_options_override_group(self, fake_pipeline):
        result = CliRunner().invoke(
            main_module.cli, ["-d", "2", "-m", "small", "record", "-d", "4"]
        )
        assert result.exit_code == 0, result.output
        assert fake_pipeline.calls == [(4, "en", "small")]

    def test_empty_transcript(self, fake_pipeline):
        fake_pipeline.text = ""
        result = CliRunner().invoke(main_module.cli, ["record"])
        assert result.exit_code == 0
        assert "(no speech detected)" in result.output

    def test_setup_error_exits_with_status_1(self, fake_pipeline):
        fake_pipeline.error = DeviceUnavailableError("no input device available")
        result = CliRunner().invoke(main_module.cli, [])
        assert result.exit_code == 1
        assert "no input device available" in result.output

    def test_rejects_non_positive_duration(self, fake_pipeline):
        result = CliRunner().invoke(main_module.cli, ["--duration", "0"])
        assert result.exit_code != 0
        assert fake_pipeline.calls == []


class TestDevicesCommand:
    """Device listing."""

    def test_lists_devices(self, monkeypatch):
        from whispr.audio import device_manager

        monkeypatch.setattr(
            device_manager,
            "list_input_devices",
            lambda: [
                {"index": 2, "name": "USB Mic", "channels": 1,
                 "default_samplerate": 44100.0, "is_default": True},
                {"index": 5, "name": "Line In", "channels": 2,
                 "default_samplerate": 48000.0, "is_default": False},
            ],
        )
        result = CliRunner().invoke(main_module.cli, ["devices"])
        assert result.exit_code == 0, result.output
        assert "* [2] USB Mic (1ch, 44100Hz)" in result.output
        assert "  [5] Line In (2ch, 48000Hz)" in result.output
