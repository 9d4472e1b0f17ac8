"""Tests for sample encodings, CaptureConfig and block serialisation."""

import dataclasses
import struct

import numpy as np
import pytest

from whispr.audio.formats import CaptureConfig, SampleEncoding, encode_block
from whispr.utils.exceptions import UnsupportedEncodingError


class TestSampleEncoding:
    """Test dtype to encoding mapping."""

    @pytest.mark.parametrize(
        "dtype, expected",
        [
            ("int16", SampleEncoding.INT16),
            ("Int16", SampleEncoding.INT16),
            ("uint16", SampleEncoding.UINT16),
            ("float32", SampleEncoding.FLOAT32),
            (np.dtype("float32"), SampleEncoding.FLOAT32),
            (np.int16, SampleEncoding.INT16),
        ],
    )
    def test_supported_dtypes(self, dtype, expected):
        assert SampleEncoding.from_dtype(dtype) is expected

    @pytest.mark.parametrize("dtype", ["int24", "int32", "int8", "float64"])
    def test_unsupported_dtypes(self, dtype):
        with pytest.raises(UnsupportedEncodingError):
            SampleEncoding.from_dtype(dtype)

    def test_widths(self):
        assert SampleEncoding.INT16.width == 2
        assert SampleEncoding.UINT16.width == 2
        assert SampleEncoding.FLOAT32.width == 4

    def test_uint16_is_captured_as_int16(self):
        """PortAudio has no unsigned 16-bit format."""
        assert SampleEncoding.UINT16.stream_dtype == "int16"


class TestCaptureConfig:
    """Test the negotiated session configuration."""

    def test_frame_width(self):
        cfg = CaptureConfig(48000, 2, SampleEncoding.INT16)
        assert cfg.frame_width == 4

    def test_immutable(self):
        cfg = CaptureConfig(16000, 1, SampleEncoding.FLOAT32)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.sample_rate = 8000

    @pytest.mark.parametrize("rate, channels", [(0, 1), (16000, 0), (-1, 2)])
    def test_rejects_non_positive_values(self, rate, channels):
        with pytest.raises(ValueError):
            CaptureConfig(rate, channels, SampleEncoding.INT16)

    def test_describe(self):
        cfg = CaptureConfig(44100, 2, SampleEncoding.FLOAT32)
        assert cfg.describe() == "44100Hz, 2ch, float32"


class TestEncodeBlock:
    """Test serialisation of callback blocks."""

    def test_int16_little_endian_interleaved(self):
        block = np.array([[1, -1], [2, -2]], dtype=np.int16)
        assert encode_block(block, SampleEncoding.INT16) == struct.pack("<4h", 1, -1, 2, -2)

    def test_float32_little_endian(self):
        block = np.array([[0.5], [-0.25]], dtype=np.float32)
        assert encode_block(block, SampleEncoding.FLOAT32) == struct.pack("<2f", 0.5, -0.25)

    def test_uint16_rebiases_signed_samples(self):
        block = np.array([[-32768], [0], [32767]], dtype=np.int16)
        assert encode_block(block, SampleEncoding.UINT16) == struct.pack(
            "<3H", 0, 32768, 65535
        )

    def test_uint16_passes_unsigned_samples_through(self):
        block = np.array([[0], [65535]], dtype=np.uint16)
        assert encode_block(block, SampleEncoding.UINT16) == struct.pack("<2H", 0, 65535)

    def test_empty_block(self):
        block = np.zeros((0, 2), dtype=np.int16)
        assert encode_block(block, SampleEncoding.INT16) == b""
