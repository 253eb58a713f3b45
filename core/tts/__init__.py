"""Open JTalk speech synthesis pipeline.

This package resolves voices, runs the open_jtalk engine, decodes its WAV output,
and hands the audio to a playback sink.
"""

from core.tts.audio_output import AudioOutput, AudioOutputError, PyAudioOutput, WavFileOutput
from core.tts.file_manager import TemporaryOutputFile
from core.tts.interface import (
    Interface,
    LaunchError,
    MalformedHeaderError,
    NoVoiceConfiguredError,
    NoVoiceResolvedError,
    SynthesisFailedError,
    TempFileError,
    TTSExceptionError,
    TTSFileError,
    TTSNotSupportedError,
    WavDecodeError,
)
from core.tts.module_host import LoggingModuleHost, ModuleHost
from core.tts.openjtalk import OpenJTalk
from core.tts.parameter_manager import ParameterManager
from core.tts.synthesizer import OpenJTalkInvoker
from core.tts.voice_catalog import VoiceCatalog, resolve_voice_path
from core.tts.wav_decoder import WavDecoder

__all__: list[str] = [
    "AudioOutput",
    "AudioOutputError",
    "Interface",
    "LaunchError",
    "LoggingModuleHost",
    "MalformedHeaderError",
    "ModuleHost",
    "NoVoiceConfiguredError",
    "NoVoiceResolvedError",
    "OpenJTalk",
    "OpenJTalkInvoker",
    "ParameterManager",
    "PyAudioOutput",
    "SynthesisFailedError",
    "TTSExceptionError",
    "TTSFileError",
    "TTSNotSupportedError",
    "TempFileError",
    "TemporaryOutputFile",
    "VoiceCatalog",
    "WavDecoder",
    "WavFileOutput",
    "resolve_voice_path",
]
