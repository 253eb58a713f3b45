"""Playback sinks for decoded audio tracks."""

from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Final

import numpy as np
import pyaudio
import soundfile

from core.tts.interface import TTSExceptionError, TTSNotSupportedError
from models.audio_models import AudioFormat
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from models.audio_models import AudioTrack

__all__: list[str] = ["AudioOutput", "AudioOutputError", "PyAudioOutput", "WavFileOutput"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# bytes per sample -> pyaudio sample format
# 8-bit WAV data is unsigned
FORMAT_CONV: Final[dict[int, int]] = {
    1: pyaudio.paUInt8,
    2: pyaudio.paInt16,
    3: pyaudio.paInt24,
    4: pyaudio.paInt32,
}

# bits per sample -> soundfile subtype
SUBTYPE_CONV: Final[dict[int, str]] = {
    8: "PCM_U8",
    16: "PCM_16",
    32: "PCM_32",
}

# Frames handed to the output device per write
FRAMES_PER_BUFFER: Final[int] = 2048


class AudioOutputError(TTSExceptionError):
    """The audio track could not be played or written."""


class AudioOutput(ABC):
    """Sink receiving one decoded track per successful request."""

    @abstractmethod
    def play(self, track: AudioTrack, audio_format: AudioFormat) -> None:
        """Consume a track.

        Args:
            track (AudioTrack): Decoded audio.
            audio_format (AudioFormat): Byte order of track.samples.

        Raises:
            AudioOutputError: If the track could not be consumed.
            TTSNotSupportedError: If the sample format cannot be handled.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the sink (override if necessary)."""


class PyAudioOutput(AudioOutput):
    """Play tracks on the default output device with a blocking PyAudio stream.

    Supported sample widths: 8, 16, 24, 32 bit little-endian; 8, 16, 32 bit big-endian.
    """

    def __init__(self) -> None:
        self._pyaudio: pyaudio.PyAudio | None = None

    @property
    def pyaudio(self) -> pyaudio.PyAudio:
        """Gets the PyAudio instance, creating it on first use."""
        if self._pyaudio is None:
            self._pyaudio = pyaudio.PyAudio()
            logger.debug("PyAudio instance created")
        return self._pyaudio

    def play(self, track: AudioTrack, audio_format: AudioFormat) -> None:
        try:
            sample_format: int = FORMAT_CONV[track.bytes_per_sample]
        except KeyError:
            msg: str = f"Unsupported sample width: {track.bits} bits"
            raise TTSNotSupportedError(msg) from None

        samples: bytes = self._little_endian_samples(track, audio_format)
        logger.debug(
            "Audio properties - Channels: %s, Sampling rate: %s, Duration: %.2fs",
            track.num_channels,
            track.sample_rate,
            track.duration,
        )

        stream: pyaudio.Stream | None = None
        try:
            stream = self.pyaudio.open(
                format=sample_format,
                channels=track.num_channels,
                rate=track.sample_rate,
                output=True,
                frames_per_buffer=FRAMES_PER_BUFFER,
            )
            stream.write(samples)
        except OSError as err:
            msg = f"Audio output failed: {err}"
            raise AudioOutputError(msg) from err
        finally:
            if stream is not None:
                with contextlib.suppress(OSError):
                    stream.stop_stream()
                with contextlib.suppress(OSError):
                    stream.close()
        logger.debug("output finished")

    @staticmethod
    def _little_endian_samples(track: AudioTrack, audio_format: AudioFormat) -> bytes:
        if audio_format is AudioFormat.LE or track.bytes_per_sample == 1:
            return track.samples
        try:
            data: np.ndarray[Any, Any] = track.to_array(audio_format)
        except ValueError as err:
            raise TTSNotSupportedError(str(err)) from None
        return data.astype(data.dtype.newbyteorder("<")).tobytes()

    def close(self) -> None:
        """Releases the PyAudio resources."""
        if self._pyaudio is not None:
            self._pyaudio.terminate()
            self._pyaudio = None
            logger.info("PyAudio resources released")


class WavFileOutput(AudioOutput):
    """Write tracks to a WAV file instead of playing them.

    Each track overwrites the file, so the file holds the last request's audio.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath: Path = filepath

    def play(self, track: AudioTrack, audio_format: AudioFormat) -> None:
        try:
            subtype: str = SUBTYPE_CONV[track.bits]
        except KeyError:
            msg: str = f"Unsupported sample width: {track.bits} bits"
            raise TTSNotSupportedError(msg) from None

        data: np.ndarray[Any, Any] = track.to_array(audio_format)
        if track.bits == 8:
            # soundfile has no uint8 input; shift to signed 16-bit and let the subtype convert back
            data = (data.astype(np.int16) - 128) << 8

        try:
            soundfile.write(self.filepath, data, track.sample_rate, subtype=subtype, format="WAV")
        except (soundfile.LibsndfileError, soundfile.SoundFileRuntimeError, OSError) as err:
            msg = f"Could not write '{self.filepath}': {err}"
            raise AudioOutputError(msg) from err
        logger.info("Wrote %.2fs of audio to '%s'", track.duration, self.filepath)
