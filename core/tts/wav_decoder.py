"""Decoder for the WAV files written by open_jtalk.

open_jtalk always writes a canonical 44-byte RIFF header followed by the PCM data,
so fields are read at fixed offsets instead of walking the chunk list.
"""

from __future__ import annotations

import os
import struct
from typing import TYPE_CHECKING, BinaryIO, Final, NamedTuple

from core.tts.interface import MalformedHeaderError, WavDecodeError
from models.audio_models import AudioTrack
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from pathlib import Path


__all__: list[str] = [
    "WAV_BITS_PER_SAMPLE",
    "WAV_NUM_CHANNELS",
    "WAV_SAMPLES_OFFSET",
    "WAV_SAMPLE_RATE",
    "WAV_SIZE_OF_SAMPLES",
    "WavDecoder",
    "WavField",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class WavField(NamedTuple):
    """Location of one little-endian header field."""

    name: str
    offset: int
    fmt: str


WAV_BITS_PER_SAMPLE: Final[WavField] = WavField("bits", 34, "<H")
WAV_NUM_CHANNELS: Final[WavField] = WavField("num_channels", 22, "<H")
WAV_SAMPLE_RATE: Final[WavField] = WavField("sample_rate", 24, "<I")
WAV_SIZE_OF_SAMPLES: Final[WavField] = WavField("size_of_samples", 40, "<I")
WAV_SAMPLES_OFFSET: Final[int] = 44


def _read_exact(fhdl: BinaryIO, offset: int, size: int, label: str) -> bytes:
    """Seek to offset and read exactly size bytes.

    Raises:
        MalformedHeaderError: If fewer than size bytes are available.
    """
    fhdl.seek(offset)
    data: bytes = fhdl.read(size)
    if len(data) != size:
        msg: str = f"failed to read {label}: expected {size} bytes at offset {offset}, got {len(data)}"
        raise MalformedHeaderError(msg)
    return data


def _read_field(fhdl: BinaryIO, field: WavField) -> int:
    data: bytes = _read_exact(fhdl, field.offset, struct.calcsize(field.fmt), field.name)
    (value,) = struct.unpack(field.fmt, data)
    logger.debug("read %s", field.name)
    return int(value)


class WavDecoder:
    """Read a WAV file written by open_jtalk into an AudioTrack."""

    def decode(self, path: Path) -> AudioTrack:
        """Decode the header fields and the sample payload.

        Args:
            path (Path): WAV file to read.

        Returns:
            AudioTrack: The decoded track.

        Raises:
            WavDecodeError: If the file cannot be opened.
            MalformedHeaderError: On a short read, a zero channel count, a sample width below 8 bits,
                or a declared payload larger than the file.
        """
        try:
            fhdl = path.open("rb")
        except OSError as err:
            msg: str = f"failed to open wav file '{path}': {err}"
            raise WavDecodeError(msg) from err

        with fhdl:
            logger.debug("opened wav file")
            return self.read_track(fhdl)

    def read_track(self, fhdl: BinaryIO) -> AudioTrack:
        """Decode an already opened WAV stream. See decode()."""
        bits: int = _read_field(fhdl, WAV_BITS_PER_SAMPLE)
        num_channels: int = _read_field(fhdl, WAV_NUM_CHANNELS)
        sample_rate: int = _read_field(fhdl, WAV_SAMPLE_RATE)
        size_of_samples: int = _read_field(fhdl, WAV_SIZE_OF_SAMPLES)

        msg: str
        if num_channels == 0:
            msg = "invalid channel count: 0"
            raise MalformedHeaderError(msg)
        bytes_per_sample: int = bits // 8
        if bytes_per_sample == 0:
            msg = f"invalid bits per sample: {bits}"
            raise MalformedHeaderError(msg)

        num_frames: int = size_of_samples // num_channels // bytes_per_sample
        logger.debug(
            "bits: %d num_channels: %d sample_rate: %d num_frames: %d",
            bits,
            num_channels,
            sample_rate,
            num_frames,
        )

        payload_size: int = num_frames * num_channels * bytes_per_sample
        available: int = fhdl.seek(0, os.SEEK_END) - WAV_SAMPLES_OFFSET
        if payload_size > available:
            msg = f"declared sample data of {payload_size} bytes exceeds the {max(available, 0)} bytes in the file"
            raise MalformedHeaderError(msg)

        samples: bytes = _read_exact(fhdl, WAV_SAMPLES_OFFSET, payload_size, "samples")
        logger.debug("read samples")

        return AudioTrack(
            bits=bits,
            num_channels=num_channels,
            sample_rate=sample_rate,
            num_frames=num_frames,
            samples=samples,
        )
