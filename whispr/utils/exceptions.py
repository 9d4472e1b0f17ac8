"""Custom exception definitions for Whispr."""


class WhisprError(Exception):
    """Base exception class for Whispr errors."""

    pass


class ConfigurationError(WhisprError):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


class AudioDeviceError(WhisprError):
    """Raised when audio device configuration or operation fails."""

    pass


class DeviceUnavailableError(AudioDeviceError):
    """Raised when the host has no default input device."""

    pass


class ConfigNegotiationError(AudioDeviceError):
    """Raised when the input device does not report a usable configuration."""

    pass


class UnsupportedEncodingError(AudioDeviceError):
    """Raised when the negotiated sample encoding is not Int16, UInt16 or Float32."""

    pass


class StreamRuntimeError(AudioDeviceError):
    """Non-fatal error reported by the audio stack while a stream is running.

    Never raised out of a capture session; it is logged and capture continues.
    """

    pass


class ASRError(WhisprError):
    """Raised when speech recognition fails."""

    pass
