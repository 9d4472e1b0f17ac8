"""Fixed-duration microphone capture."""

import threading
from typing import Any, Optional, Tuple

import numpy as np
import sounddevice as sd

from whispr.audio.buffer import SampleBuffer
from whispr.audio.device_manager import negotiate_default_config
from whispr.audio.formats import CaptureConfig, encode_block
from whispr.config.config_loader import config
from whispr.utils.exceptions import (
    ConfigNegotiationError,
    DeviceUnavailableError,
    StreamRuntimeError,
)
from whispr.utils.logger import setup_logger

logger = setup_logger(__name__)


class DeviceCapture:
    """Records the default input device for a fixed duration.

    Each ``capture()`` call is one session: it negotiates the device's own
    configuration, streams encoded blocks into a fresh SampleBuffer on the
    PortAudio callback thread, and hands the buffer back once the stream
    is closed.
    """

    def __init__(
        self,
        sample_encoding: Optional[str] = None,
        buffer_size_limit: Optional[int] = None,
        lock_timeout: Optional[float] = None,
    ) -> None:
        """Initialize the capture helper.

        Args:
            sample_encoding: Encoding override, None for the host default.
            buffer_size_limit: Buffer limit in MB, 0 disables it.
            lock_timeout: Longest wait for the buffer lock in the callback.
        """
        self.sample_encoding = (
            sample_encoding
            if sample_encoding is not None
            else config.get("audio.sample_encoding")
        )
        limit_mb = (
            buffer_size_limit
            if buffer_size_limit is not None
            else config.get("audio.buffer_size_limit", 100)
        )
        self.max_bytes = int(limit_mb) * 1024 * 1024
        self.lock_timeout = (
            lock_timeout
            if lock_timeout is not None
            else config.get("audio.lock_timeout", 0.05)
        )

        self.stream_errors = 0
        self.last_stream_error: Optional[StreamRuntimeError] = None
        self._cancel_event = threading.Event()
        self._buffer: Optional[SampleBuffer] = None

    def negotiate_config(self) -> CaptureConfig:
        """Negotiate the session configuration with the default device."""
        return negotiate_default_config(self.sample_encoding)

    def cancel(self) -> None:
        """Stop an in-progress capture early."""
        self._cancel_event.set()
        if self._buffer is not None:
            self._buffer.stop()

    def capture(self, duration: float) -> Tuple[CaptureConfig, bytes]:
        """Record ``duration`` seconds from the default input device.

        Args:
            duration: Recording length in seconds.

        Returns:
            The negotiated configuration and the captured bytes.

        Raises:
            ValueError: If duration is not positive.
            DeviceUnavailableError: No default input device.
            ConfigNegotiationError: The device configuration is unusable
                or the stream could not be opened.
            UnsupportedEncodingError: Encoding outside int16/uint16/float32.
        """
        if duration <= 0:
            raise ValueError(f"Capture duration must be positive, got {duration}")

        capture_config = self.negotiate_config()
        logger.info(f"Recording {duration}s at {capture_config.describe()}")

        buffer = SampleBuffer(
            duration, max_bytes=self.max_bytes, lock_timeout=self.lock_timeout
        )
        self.stream_errors = 0
        self.last_stream_error = None
        self._cancel_event.clear()

        stream = self._open_stream(capture_config, buffer)
        self._buffer = buffer
        try:
            buffer.start()
            try:
                stream.start()
            except sd.PortAudioError as e:
                raise ConfigNegotiationError(
                    f"Could not start input stream: {e}"
                ) from e
            self._cancel_event.wait(duration)
            if self._cancel_event.is_set():
                logger.info(f"Capture cancelled after {buffer.elapsed:.2f}s")
        finally:
            buffer.stop()
            try:
                stream.stop()
            finally:
                stream.close()
            self._buffer = None

        data = buffer.take()
        if self.stream_errors:
            logger.warning(f"🟡 {self.stream_errors} stream errors during capture")
        logger.info(
            f"Captured {len(data) // capture_config.frame_width} frames "
            f"({len(data)} bytes)"
        )
        return capture_config, data

    def _open_stream(
        self, capture_config: CaptureConfig, buffer: SampleBuffer
    ) -> sd.InputStream:
        encoding = capture_config.sample_encoding

        def callback(
            indata: np.ndarray, frames: int, time_info: Any, status: sd.CallbackFlags
        ) -> None:
            if status:
                self.stream_errors += 1
                self.last_stream_error = StreamRuntimeError(
                    f"Audio stream status: {status}"
                )
                logger.warning(f"🟡 {self.last_stream_error}")
            buffer.append(encode_block(indata, encoding))

        try:
            return sd.InputStream(
                samplerate=capture_config.sample_rate,
                channels=capture_config.channel_count,
                dtype=encoding.stream_dtype,
                callback=callback,
            )
        except sd.PortAudioError as e:
            if "device unavailable" in str(e).lower():
                raise DeviceUnavailableError(f"Input device unavailable: {e}") from e
            raise ConfigNegotiationError(f"Could not open input stream: {e}") from e
        except ValueError as e:
            raise ConfigNegotiationError(f"Could not open input stream: {e}") from e
