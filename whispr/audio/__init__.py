"""Audio acquisition and conditioning.

This package turns microphone input into 16 kHz mono float32 audio:
- formats: sample encodings and the per-session CaptureConfig
- buffer: thread-safe buffer written by the stream callback
- device_manager: default device lookup and configuration negotiation
- capture: fixed-duration DeviceCapture
- normalizer: decoding and channel downmixing
- resampler: linear-interpolation rate conversion

``capture`` and ``device_manager`` need the PortAudio library and are not
imported here.
"""

from whispr.audio.formats import CaptureConfig, SampleEncoding
from whispr.audio.normalizer import normalize
from whispr.audio.resampler import resample

__all__ = ["CaptureConfig", "SampleEncoding", "normalize", "resample"]
