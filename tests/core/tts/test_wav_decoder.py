"""Unit tests for core.tts.wav_decoder module."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from core.tts.interface import MalformedHeaderError, WavDecodeError
from core.tts.wav_decoder import (
    WAV_BITS_PER_SAMPLE,
    WAV_NUM_CHANNELS,
    WAV_SAMPLE_RATE,
    WAV_SAMPLES_OFFSET,
    WAV_SIZE_OF_SAMPLES,
    WavDecoder,
)

if TYPE_CHECKING:
    from tests.conftest import WavBuilder


def _write(tmp_path: Path, data: bytes) -> Path:
    path: Path = tmp_path / "out.wav"
    path.write_bytes(data)
    return path


def test_offset_table_matches_canonical_header() -> None:
    assert WAV_NUM_CHANNELS.offset == 22
    assert WAV_SAMPLE_RATE.offset == 24
    assert WAV_BITS_PER_SAMPLE.offset == 34
    assert WAV_SIZE_OF_SAMPLES.offset == 40
    assert WAV_SAMPLES_OFFSET == 44


def test_decode_stereo_16bit(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    payload: bytes = os.urandom(4000)
    path: Path = _write(tmp_path, wav_bytes(payload, bits=16, num_channels=2, sample_rate=22050))

    track = WavDecoder().decode(path)

    assert track.bits == 16
    assert track.num_channels == 2
    assert track.sample_rate == 22050
    assert track.num_frames == 1000
    assert len(track.samples) == 4000
    assert track.samples == payload


def test_decode_ignores_trailing_bytes(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    payload: bytes = bytes(range(200))
    path: Path = _write(tmp_path, wav_bytes(payload, bits=16, num_channels=1, size_of_samples=100) + b"LIST")

    track = WavDecoder().decode(path)

    assert track.num_frames == 50
    assert track.samples == payload[:100]


def test_decode_drops_partial_frame(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    # 7 bytes of 16-bit stereo data hold one complete frame
    path: Path = _write(tmp_path, wav_bytes(b"\x01" * 7, bits=16, num_channels=2))

    track = WavDecoder().decode(path)

    assert track.num_frames == 1
    assert len(track.samples) == 4


def test_decode_short_payload_raises(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    data: bytes = wav_bytes(b"\x00" * 4000, bits=16, num_channels=2, sample_rate=22050)
    path: Path = _write(tmp_path, data[: WAV_SAMPLES_OFFSET + 3999])

    with pytest.raises(MalformedHeaderError, match="sample"):
        WavDecoder().decode(path)


def test_decode_declared_size_larger_than_file_raises(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    path: Path = _write(tmp_path, wav_bytes(b"\x00" * 10, size_of_samples=1_000_000))

    with pytest.raises(MalformedHeaderError):
        WavDecoder().decode(path)


class RecordingStream(io.BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.read_sizes: list[int] = []

    def read(self, size: int | None = -1) -> bytes:
        self.read_sizes.append(-1 if size is None else size)
        return super().read(size)


def test_decode_maximum_declared_size_is_rejected_before_reading(wav_bytes: WavBuilder) -> None:
    stream = RecordingStream(wav_bytes(b"\x00" * 10, bits=8, num_channels=1, size_of_samples=0xFFFFFFFF))

    with pytest.raises(MalformedHeaderError, match="exceeds the 10 bytes"):
        WavDecoder().read_track(stream)

    assert max(stream.read_sizes) <= 4


def test_decode_maximum_declared_size_from_file(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    path: Path = _write(tmp_path, wav_bytes(b"\x00" * 10, bits=8, num_channels=1, size_of_samples=0xFFFFFFFF))

    with pytest.raises(MalformedHeaderError):
        WavDecoder().decode(path)


@pytest.mark.parametrize("length", [0, 10, 23, 35, 39, 43])
def test_decode_truncated_header_raises(tmp_path: Path, wav_bytes: WavBuilder, length: int) -> None:
    path: Path = _write(tmp_path, wav_bytes(b"\x00" * 8)[:length])

    with pytest.raises(MalformedHeaderError):
        WavDecoder().decode(path)


def test_decode_zero_channels_raises(tmp_path: Path, wav_bytes: WavBuilder) -> None:
    path: Path = _write(tmp_path, wav_bytes(b"\x00" * 8, num_channels=0))

    with pytest.raises(MalformedHeaderError, match="channel"):
        WavDecoder().decode(path)


@pytest.mark.parametrize("bits", [0, 4])
def test_decode_sample_width_below_one_byte_raises(tmp_path: Path, wav_bytes: WavBuilder, bits: int) -> None:
    path: Path = _write(tmp_path, wav_bytes(b"\x00" * 8, bits=bits))

    with pytest.raises(MalformedHeaderError, match="bits"):
        WavDecoder().decode(path)


def test_decode_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(WavDecodeError) as exc_info:
        WavDecoder().decode(tmp_path / "missing.wav")

    assert not isinstance(exc_info.value, MalformedHeaderError)


def test_read_track_from_stream(wav_bytes: WavBuilder) -> None:
    stream = io.BytesIO(wav_bytes(b"\x10\x20\x30", bits=8, num_channels=1, sample_rate=8000))

    track = WavDecoder().read_track(stream)

    assert track.bits == 8
    assert track.num_frames == 3
    assert track.samples == b"\x10\x20\x30"
