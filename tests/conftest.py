"""Shared fixtures: synthetic WAV files laid out the way open_jtalk writes them."""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Protocol

import pytest

if TYPE_CHECKING:
    from pathlib import Path


class WavBuilder(Protocol):
    def __call__(
        self,
        payload: bytes,
        *,
        bits: int = 16,
        num_channels: int = 1,
        sample_rate: int = 48000,
        size_of_samples: int | None = None,
    ) -> bytes: ...


def build_wav(
    payload: bytes,
    *,
    bits: int = 16,
    num_channels: int = 1,
    sample_rate: int = 48000,
    size_of_samples: int | None = None,
) -> bytes:
    """Return a canonical 44-byte-header PCM WAV image.

    size_of_samples overrides the data chunk size written in the header.
    """
    data_size: int = len(payload) if size_of_samples is None else size_of_samples
    block_align: int = num_channels * (bits // 8)
    header: bytes = b"".join(
        [
            b"RIFF",
            struct.pack("<I", min(36 + data_size, 0xFFFFFFFF)),
            b"WAVE",
            b"fmt ",
            struct.pack("<IHHIIHH", 16, 1, num_channels, sample_rate, sample_rate * block_align, block_align, bits),
            b"data",
            struct.pack("<I", data_size),
        ]
    )
    assert len(header) == 44
    return header + payload


@pytest.fixture
def wav_bytes() -> WavBuilder:
    return build_wav


@pytest.fixture
def voice_dir(tmp_path: Path) -> Path:
    """Directory with two fake voice files: male1.htsvoice and mei.htsvoice."""
    directory: Path = tmp_path / "voices"
    directory.mkdir()
    (directory / "male1.htsvoice").write_bytes(b"HTS")
    (directory / "mei.htsvoice").write_bytes(b"HTS")
    return directory
