"""Sample encodings and per-session capture configuration."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from whispr.utils.exceptions import UnsupportedEncodingError

UINT16_OFFSET = 32768


class SampleEncoding(Enum):
    """Raw encodings a capture session may produce.

    Each value is ``(name, byte width, little-endian dtype, stream dtype)``.
    PortAudio has no unsigned 16-bit format, so UINT16 is captured as int16
    and re-biased to offset binary when the block is serialised.
    """

    INT16 = ("int16", 2, "<i2", "int16")
    UINT16 = ("uint16", 2, "<u2", "int16")
    FLOAT32 = ("float32", 4, "<f4", "float32")

    def __init__(self, label: str, width: int, wire_dtype: str, stream_dtype: str):
        self.label = label
        self.width = width
        self.wire_dtype = np.dtype(wire_dtype)
        self.stream_dtype = stream_dtype

    @classmethod
    def from_dtype(cls, dtype) -> "SampleEncoding":
        """Map a dtype name (or numpy dtype) to an encoding.

        Raises:
            UnsupportedEncodingError: For anything other than int16,
                uint16 or float32.
        """
        name = str(np.dtype(dtype)) if not isinstance(dtype, str) else dtype.lower()
        for member in cls:
            if member.label == name:
                return member
        raise UnsupportedEncodingError(f"Unsupported sample encoding: {dtype}")

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class CaptureConfig:
    """Configuration negotiated with the input device for one session."""

    sample_rate: int
    channel_count: int
    sample_encoding: SampleEncoding

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        if self.channel_count <= 0:
            raise ValueError(
                f"Channel count must be positive, got {self.channel_count}"
            )

    @property
    def frame_width(self) -> int:
        """Bytes per frame (one sample for every channel)."""
        return self.channel_count * self.sample_encoding.width

    def describe(self) -> str:
        return (
            f"{self.sample_rate}Hz, {self.channel_count}ch, {self.sample_encoding}"
        )


def encode_block(block: np.ndarray, encoding: SampleEncoding) -> bytes:
    """Serialise one block delivered by the stream callback.

    Args:
        block: Interleaved samples, shape ``(frames, channels)`` or flat.
        encoding: Session encoding.

    Returns:
        Little-endian bytes, ``encoding.width`` bytes per sample.
    """
    if encoding is SampleEncoding.UINT16 and block.dtype.kind == "i":
        block = block.astype(np.int32) + UINT16_OFFSET
    return np.ascontiguousarray(block, dtype=encoding.wire_dtype).tobytes()
