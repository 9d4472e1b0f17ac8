"""Decode raw captured bytes into a mono float32 signal."""

from typing import Any, Dict

import numpy as np

from whispr.audio.formats import UINT16_OFFSET, SampleEncoding

INT16_SCALE = 32767.0

SILENCE_RMS = 0.001
CLIP_LEVEL = 0.99


def decode_samples(raw: bytes, encoding: SampleEncoding) -> np.ndarray:
    """Decode interleaved samples to float32 without downmixing.

    Trailing bytes that do not form a whole sample are discarded.

    Args:
        raw: Little-endian encoded samples.
        encoding: Encoding the bytes were captured in.

    Returns:
        Flat float32 array, one value per encoded sample.
    """
    usable = len(raw) - len(raw) % encoding.width
    samples = np.frombuffer(raw, dtype=encoding.wire_dtype, count=usable // encoding.width)

    if encoding is SampleEncoding.INT16:
        return samples.astype(np.float32) / np.float32(INT16_SCALE)
    if encoding is SampleEncoding.UINT16:
        return (samples.astype(np.float32) - np.float32(UINT16_OFFSET)) / np.float32(
            UINT16_OFFSET
        )
    return samples.astype(np.float32)


def downmix(samples: np.ndarray, channel_count: int) -> np.ndarray:
    """Average interleaved channels into one.

    A trailing partial frame counts its missing channels as silence.

    Args:
        samples: Flat interleaved float32 samples.
        channel_count: Number of interleaved channels.

    Returns:
        Mono float32 signal.
    """
    if channel_count < 1:
        raise ValueError(f"Channel count must be positive, got {channel_count}")
    if channel_count == 1:
        return samples.astype(np.float32, copy=True)

    remainder = samples.size % channel_count
    if remainder:
        samples = np.concatenate(
            [samples, np.zeros(channel_count - remainder, dtype=np.float32)]
        )
    frames = samples.reshape(-1, channel_count)
    return (frames.sum(axis=1, dtype=np.float32) / np.float32(channel_count)).astype(
        np.float32
    )


def normalize(raw: bytes, channel_count: int, encoding: SampleEncoding) -> np.ndarray:
    """Decode raw capture bytes into a mono float32 signal.

    Args:
        raw: Bytes produced by the capture session.
        channel_count: Interleaved channels in ``raw``.
        encoding: Sample encoding of ``raw``.

    Returns:
        MonoFloatSignal, roughly within [-1.0, 1.0].
    """
    return downmix(decode_samples(raw, encoding), channel_count)


def signal_stats(signal: np.ndarray, sample_rate: int) -> Dict[str, Any]:
    """Summarise signal quality for logging.

    Args:
        signal: Mono float32 signal.
        sample_rate: Rate of ``signal`` in Hz.

    Returns:
        Dictionary with duration, rms, peak, clipped_ratio and is_silent.
    """
    if signal.size == 0:
        return {
            "duration": 0.0,
            "rms": 0.0,
            "peak": 0.0,
            "clipped_ratio": 0.0,
            "is_silent": True,
        }

    values = signal.astype(np.float64)
    rms = float(np.sqrt(np.mean(values**2)))
    peak = float(np.max(np.abs(values)))
    clipped = int(np.sum(np.abs(values) > CLIP_LEVEL))

    return {
        "duration": signal.size / sample_rate if sample_rate > 0 else 0.0,
        "rms": rms,
        "peak": peak,
        "clipped_ratio": clipped / signal.size,
        "is_silent": rms < SILENCE_RMS,
    }
