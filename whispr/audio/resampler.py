"""Linear-interpolation sample-rate conversion.

No anti-aliasing filter is applied. The recognizer tolerates the mild
artifacts, and output values are fixed by the algorithm below.
"""

import numpy as np


def output_length(input_length: int, source_rate: int, dest_rate: int) -> int:
    """Return ``ceil(input_length * dest_rate / source_rate)`` exactly."""
    return -(-input_length * dest_rate // source_rate)


def resample(signal, source_rate: int, dest_rate: int) -> np.ndarray:
    """Convert a mono signal from ``source_rate`` to ``dest_rate``.

    Args:
        signal: Mono samples.
        source_rate: Rate of ``signal`` in Hz.
        dest_rate: Desired rate in Hz.

    Returns:
        Resampled float32 signal. Empty when either rate is 0 or the
        input is empty; a copy of the input when the rates match.
    """
    samples = np.asarray(signal, dtype=np.float32).reshape(-1)

    if source_rate == 0 or dest_rate == 0 or samples.size == 0:
        return np.zeros(0, dtype=np.float32)
    if source_rate == dest_rate:
        return samples.copy()

    n_in = samples.size
    n_out = output_length(n_in, source_rate, dest_rate)

    # pos = n / ratio, with ratio = dest / source
    positions = np.arange(n_out, dtype=np.float64) * source_rate / dest_rate
    i0 = np.floor(positions).astype(np.int64)
    np.minimum(i0, n_in - 1, out=i0)
    i1 = np.minimum(i0 + 1, n_in - 1)
    frac = positions - i0

    values = samples.astype(np.float64)
    out = values[i0] * (1.0 - frac) + values[i1] * frac
    return out.astype(np.float32)
