"""Data models for decoded audio handed to the playback sink."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

import numpy as np

__all__: list[str] = ["AudioFormat", "AudioTrack"]

# numpy sample types by bytes per sample. 8-bit WAV data is unsigned.
_SAMPLE_DTYPES: Final[dict[int, str]] = {
    1: "u1",
    2: "i2",
    4: "i4",
}


class AudioFormat(Enum):
    """Byte order of the samples in an AudioTrack."""

    LE = "little"
    BE = "big"


@dataclass
class AudioTrack:
    """Decoded PCM audio.

    Attributes:
        bits (int): Bits per sample.
        num_channels (int): Number of interleaved channels.
        sample_rate (int): Frames per second.
        num_frames (int): Number of frames in samples.
        samples (bytes): Interleaved raw sample data, exactly num_frames * num_channels * bits // 8 bytes.
    """

    bits: int
    num_channels: int
    sample_rate: int
    num_frames: int
    samples: bytes

    def __post_init__(self) -> None:
        expected: int = self.num_frames * self.num_channels * self.bytes_per_sample
        if len(self.samples) != expected:
            msg: str = f"Sample buffer holds {len(self.samples)} bytes, expected {expected}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return (
            f"<{self.__class__.__name__} bits: {self.bits}, num_channels: {self.num_channels}, "
            f"sample_rate: {self.sample_rate}, num_frames: {self.num_frames}>"
        )

    @property
    def bytes_per_sample(self) -> int:
        return self.bits // 8

    @property
    def duration(self) -> float:
        """Playback length in seconds."""
        if self.sample_rate <= 0:
            return 0.0
        return self.num_frames / self.sample_rate

    def to_array(self, audio_format: AudioFormat = AudioFormat.LE) -> np.ndarray[Any, Any]:
        """Interpret the sample buffer as a (frames, channels) array in native byte order.

        Args:
            audio_format (AudioFormat): Byte order of the stored samples.

        Returns:
            np.ndarray: Array of shape (num_frames, num_channels).

        Raises:
            ValueError: If the sample width has no numpy equivalent (e.g. 24-bit).
        """
        try:
            code: str = _SAMPLE_DTYPES[self.bytes_per_sample]
        except KeyError:
            msg: str = f"Unsupported sample width: {self.bits} bits"
            raise ValueError(msg) from None

        order: str = "<" if audio_format is AudioFormat.LE else ">"
        data = np.frombuffer(self.samples, dtype=np.dtype(order + code))
        return data.astype(data.dtype.newbyteorder("="), copy=False).reshape(self.num_frames, self.num_channels)
