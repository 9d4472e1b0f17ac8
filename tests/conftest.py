"""Shared pytest configuration."""

import os
import sys
import types
from pathlib import Path

# Must be set before whispr.config.config_loader is first imported.
os.environ.setdefault("WHISPR_CONFIG", str(Path(__file__).parent / "config.test.yml"))


class PortAudioError(Exception):
    """Stand-in for sounddevice.PortAudioError."""


class CallbackFlags:
    """Stand-in for sounddevice.CallbackFlags; falsy when no flag is set."""

    def __init__(self, flags=""):
        self.flags = flags

    def __bool__(self):
        return bool(self.flags)

    def __str__(self):
        return self.flags


def _no_audio_stack(*args, **kwargs):
    raise PortAudioError("No audio stack in tests")


def _fake_sounddevice():
    module = types.ModuleType("sounddevice")
    module.PortAudioError = PortAudioError
    module.CallbackFlags = CallbackFlags
    module.InputStream = _no_audio_stack
    module.query_devices = _no_audio_stack
    module.default = types.SimpleNamespace(dtype=("int16", "int16"), device=(0, 0))
    return module


# The capture modules import sounddevice at import time, which needs the
# PortAudio shared library. Tests replace the whole audio stack instead.
sys.modules["sounddevice"] = _fake_sounddevice()
