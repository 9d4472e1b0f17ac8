"""Capture, normalize, resample and recognize one utterance.

Stages run strictly one after another on the calling thread; the only
concurrency is the audio callback inside DeviceCapture.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from whispr.asr.transcriber import NATIVE_SAMPLE_RATE, Recognizer
from whispr.audio.formats import CaptureConfig
from whispr.audio.normalizer import normalize, signal_stats
from whispr.audio.resampler import resample
from whispr.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one run."""

    capture_config: CaptureConfig
    captured_samples: int
    resampled_samples: int
    text: str


class Pipeline:
    """Sequences DeviceCapture, normalization, resampling and recognition."""

    def __init__(
        self,
        capturer=None,
        recognizer: Optional[Recognizer] = None,
        target_rate: int = NATIVE_SAMPLE_RATE,
    ) -> None:
        """Initialize the pipeline.

        Args:
            capturer: Object with ``capture(duration)``. Defaults to DeviceCapture.
            recognizer: Speech recognizer. Defaults to ASRTranscriber.
            target_rate: Rate handed to the recognizer.
        """
        self._capturer = capturer
        self._recognizer = recognizer
        self.target_rate = target_rate

    @property
    def capturer(self):
        if self._capturer is None:
            from whispr.audio.capture import DeviceCapture

            self._capturer = DeviceCapture()
        return self._capturer

    @property
    def recognizer(self) -> Recognizer:
        if self._recognizer is None:
            from whispr.asr.transcriber import ASRTranscriber

            self._recognizer = ASRTranscriber()
        return self._recognizer

    def record(self, duration: float) -> tuple[CaptureConfig, np.ndarray]:
        """Capture ``duration`` seconds and condition it for the recognizer.

        Returns:
            The session's capture config and the signal at ``target_rate``.
        """
        capture_config, _mono, signal = self._record(duration)
        return capture_config, signal

    def _record(self, duration: float) -> tuple[CaptureConfig, np.ndarray, np.ndarray]:
        capture_config, raw = self.capturer.capture(duration)

        mono = normalize(
            raw, capture_config.channel_count, capture_config.sample_encoding
        )
        stats = signal_stats(mono, capture_config.sample_rate)
        logger.info(
            f"Audio: duration={stats['duration']:.2f}s, "
            f"RMS={stats['rms']:.4f}, peak={stats['peak']:.4f}"
        )
        if stats["is_silent"]:
            logger.warning("🟡 Very low signal level, possible silence or muted microphone")  # noqa: E501
        elif stats["clipped_ratio"] > 0.01:
            logger.warning(f"🟡 Clipping detected in {stats['clipped_ratio']:.1%} of samples")  # noqa: E501

        if capture_config.sample_rate == self.target_rate:
            return capture_config, mono, mono

        logger.info(f"Resampling from {capture_config.sample_rate}Hz to {self.target_rate}Hz")  # noqa: E501
        signal = resample(mono, capture_config.sample_rate, self.target_rate)
        return capture_config, mono, signal

    def run_detailed(self, duration: float, language: str) -> PipelineResult:
        """Record one utterance and transcribe it."""
        capture_config, mono, signal = self._record(duration)

        text = self.recognizer.transcribe(signal, self.target_rate, language).strip()
        return PipelineResult(
            capture_config=capture_config,
            captured_samples=mono.size,
            resampled_samples=signal.size,
            text=text,
        )

    def run(self, duration: float, language: str) -> str:
        """Record one utterance and return the recognized text."""
        return self.run_detailed(duration, language).text
