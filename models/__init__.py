"""Data models for the Open JTalk speech backend.

This package contains dataclass definitions for configuration, voice selection,
decoded audio, and regular expression patterns used throughout the application.
"""

from __future__ import annotations

from models.audio_models import AudioFormat, AudioTrack
from models.config_models import Config
from models.re_models import SSML_TAG_PATTERN, VOICE_PLACEHOLDER
from models.voice_models import MessageSettings, SynthesisVoice, VoiceState, VoiceTable, VoiceType

__all__: list[str] = [
    "SSML_TAG_PATTERN",
    "VOICE_PLACEHOLDER",
    "AudioFormat",
    "AudioTrack",
    "Config",
    "MessageSettings",
    "SynthesisVoice",
    "VoiceState",
    "VoiceTable",
    "VoiceType",
]
