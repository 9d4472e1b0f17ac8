"""Device discovery and capture configuration negotiation.

The pipeline never asks the device for a particular format. It takes the
default input device's own rate and channel count and the host's default
input dtype, and adapts downstream.
"""

from typing import Any, Optional

import sounddevice as sd

from whispr.audio.formats import CaptureConfig, SampleEncoding
from whispr.utils.exceptions import (
    ConfigNegotiationError,
    DeviceUnavailableError,
)
from whispr.utils.logger import setup_logger

logger = setup_logger(__name__)


def query_default_input_device() -> dict[str, Any]:
    """Return the host's default input device info.

    Raises:
        DeviceUnavailableError: If there is no usable default input device.
    """
    try:
        device_info = sd.query_devices(kind="input")
    except (sd.PortAudioError, ValueError) as e:
        raise DeviceUnavailableError(f"No input device available: {e}") from e

    if not device_info or device_info.get("max_input_channels", 0) < 1:
        raise DeviceUnavailableError("Default device has no input channels")

    return dict(device_info)


def default_input_encoding(override: Optional[str] = None) -> SampleEncoding:
    """Resolve the session encoding.

    Args:
        override: Encoding name from configuration, or None to use the
            host default input dtype.

    Raises:
        UnsupportedEncodingError: If the encoding is not supported.
    """
    dtype = override if override else sd.default.dtype[0]
    return SampleEncoding.from_dtype(dtype)


def negotiate_default_config(encoding_override: Optional[str] = None) -> CaptureConfig:
    """Build the capture configuration from the default input device.

    Args:
        encoding_override: Optional encoding name from configuration.

    Returns:
        Negotiated CaptureConfig.

    Raises:
        DeviceUnavailableError: No default input device.
        ConfigNegotiationError: Device reported no usable rate or channels.
        UnsupportedEncodingError: Encoding outside int16/uint16/float32.
    """
    device_info = query_default_input_device()

    try:
        sample_rate = int(device_info.get("default_samplerate") or 0)
        channels = int(device_info.get("max_input_channels") or 0)
    except (TypeError, ValueError) as e:
        raise ConfigNegotiationError(f"Unreadable device configuration: {e}") from e

    if sample_rate <= 0 or channels <= 0:
        raise ConfigNegotiationError(
            f"Device {device_info.get('name', '?')} reported "
            f"{sample_rate}Hz, {channels}ch"
        )

    encoding = default_input_encoding(encoding_override)
    capture_config = CaptureConfig(
        sample_rate=sample_rate, channel_count=channels, sample_encoding=encoding
    )

    logger.debug(
        f"Negotiated input device {device_info.get('name', '?')}: "
        f"{capture_config.describe()}"
    )
    return capture_config


def list_input_devices() -> list[dict[str, Any]]:
    """Get list of available audio input devices.

    Returns:
        List of device information dictionaries.
    """
    default_input = sd.default.device[0]
    devices = []
    for i, device in enumerate(sd.query_devices()):
        if device["max_input_channels"] > 0:
            devices.append(
                {
                    "index": i,
                    "name": device["name"],
                    "channels": device["max_input_channels"],
                    "default_samplerate": device["default_samplerate"],
                    "is_default": i == default_input,
                }
            )
    return devices
