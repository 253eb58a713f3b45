"""Configuration data models for the Open JTalk speech backend.

Each dataclass mirrors one section of the INI file. Field names are the INI keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

__all__: list[str] = [
    "DEFAULT_DICTIONARY_DIRECTORY",
    "DEFAULT_EXECUTE_PATH",
    "Config",
    "General",
    "OpenJTalk",
    "Voices",
]

DEFAULT_DICTIONARY_DIRECTORY: Final[str] = "/var/lib/mecab/dic/open-jtalk"
DEFAULT_EXECUTE_PATH: Final[str] = "open_jtalk"


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    TMP_DIR: str = ""


@dataclass
class OpenJTalk:
    EXECUTE_PATH: str = DEFAULT_EXECUTE_PATH
    DICTIONARY_DIRECTORY: str = DEFAULT_DICTIONARY_DIRECTORY
    VOICE_FILE_SEARCH_PATH: list[str] = field(default_factory=list)
    AUTO_DISCOVER: bool = False
    DISCOVER_LANGUAGE: str = "ja"


@dataclass
class Voices:
    ADD_VOICE: list[dict[str, str]] = field(default_factory=list)
    DEFAULT_LANGUAGE: str = "ja"
    DEFAULT_VOICE_TYPE: str = "MALE1"


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    OPENJTALK: OpenJTalk = field(default_factory=OpenJTalk)
    VOICES: Voices = field(default_factory=Voices)
