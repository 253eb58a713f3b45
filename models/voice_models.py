"""Data models for voice selection.

This module defines:
- VoiceType: Coarse voice categories a client can ask for.
- SynthesisVoice: A voice registered with the backend, as reported to the host.
- VoiceTable: Per-language mapping from voice type to voice identifier.
- MessageSettings: Per-request voice settings sent by the host.
- VoiceState: The voice currently selected by one backend instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = [
    "MessageSettings",
    "SynthesisVoice",
    "VoiceState",
    "VoiceTable",
    "VoiceType",
]


class VoiceType(StrEnum):
    """Coarse voice categories understood by speech-dispatcher clients."""

    MALE1 = "MALE1"
    MALE2 = "MALE2"
    MALE3 = "MALE3"
    FEMALE1 = "FEMALE1"
    FEMALE2 = "FEMALE2"
    FEMALE3 = "FEMALE3"
    CHILD_MALE = "CHILD_MALE"
    CHILD_FEMALE = "CHILD_FEMALE"

    @classmethod
    def parse(cls, value: str) -> VoiceType:
        """Convert a configuration or command-line string to a VoiceType.

        Args:
            value (str): Voice type name, case-insensitive (e.g. 'male1', 'CHILD_FEMALE').

        Returns:
            VoiceType: The matching voice type.

        Raises:
            ValueError: If the name is not a known voice type.
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            msg: str = f"Unknown voice type '{value}'. Expected one of: {', '.join(cls)}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class SynthesisVoice:
    """A voice registered with the backend.

    Attributes:
        name (str): Voice identifier, also the value substituted into search-path templates.
        language (str): Language code (e.g. 'ja').
        variant (str | None): Optional variant name. Always None for Open JTalk voices.
    """

    name: str
    language: str
    variant: str | None = None


@dataclass
class VoiceTable:
    """Voice identifiers registered for one language, keyed by voice type."""

    language: str
    voices: dict[VoiceType, str] = field(default_factory=dict)

    def get(self, voice_type: VoiceType) -> str | None:
        return self.voices.get(voice_type)


@dataclass
class MessageSettings:
    """Voice settings attached to a speech request.

    None means the host did not set the value.

    Attributes:
        language (str | None): Requested language code.
        voice_type (VoiceType | None): Requested coarse voice type.
        voice_name (str | None): Explicitly requested voice identifier.
    """

    language: str | None = None
    voice_type: VoiceType | None = None
    voice_name: str | None = None

    def copy(self) -> MessageSettings:
        return replace(self)


@dataclass
class VoiceState:
    """Voice currently selected by one backend instance.

    voice_path is None when nothing could be resolved; synthesis is impossible in that state.

    Attributes:
        language (str | None): Language the current identifier was derived for.
        voice_id (str | None): Current voice identifier.
        voice_path (Path | None): Resolved .htsvoice file for voice_id.
    """

    language: str | None = None
    voice_id: str | None = None
    voice_path: Path | None = None

    def __str__(self) -> str:
        return (
            f"<{self.__class__.__name__} language: {self.language}, voice_id: {self.voice_id}, "
            f"voice_path: {self.voice_path}>"
        )
