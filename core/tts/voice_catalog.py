"""Voice registry and voice file resolution.

VoiceCatalog answers "which voice identifier serves this language and voice type",
resolve_voice_path answers "where is the voice file for this identifier".
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from models.re_models import VOICE_PLACEHOLDER
from models.voice_models import SynthesisVoice, VoiceTable, VoiceType
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Sequence


__all__: list[str] = ["VoiceCatalog", "resolve_voice_path"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def resolve_voice_path(search_paths: Sequence[str], voice_id: str | None) -> Path | None:
    """Return the first existing voice file for a voice identifier.

    Every occurrence of the placeholder in a template is replaced by voice_id;
    templates are tried in order.

    Args:
        search_paths (Sequence[str]): Search-path templates in priority order.
        voice_id (str | None): Voice identifier. None never touches the filesystem.

    Returns:
        Path | None: Path of the first existing file, or None if none exists.
    """
    if voice_id is None:
        logger.debug("No voice identifier to resolve")
        return None

    for template in search_paths:
        candidate = Path(template.replace(VOICE_PLACEHOLDER, voice_id))
        if candidate.exists():
            logger.debug("Voice '%s' resolved to '%s'", voice_id, candidate)
            return candidate
        logger.debug("Voice file not found: '%s'", candidate)

    logger.debug("No voice file found for '%s'", voice_id)
    return None


class VoiceCatalog:
    """Voices registered with the backend.

    Voices are registered per language and voice type. Voices found by discovery
    have no type and can only be selected by name.
    """

    def __init__(self) -> None:
        self._tables: dict[str, VoiceTable] = {}
        self._voices: dict[str, SynthesisVoice] = {}

    def __len__(self) -> int:
        return len(self._voices)

    def add_voice(self, language: str, voice_type: VoiceType | None, name: str) -> None:
        """Register a voice.

        Registering a second voice for the same language and type replaces the first
        for type-based lookups; both stay selectable by name.

        Args:
            language (str): Language code.
            voice_type (VoiceType | None): Voice type served by this voice, or None.
            name (str): Voice identifier.
        """
        language = language.lower()
        self._voices.setdefault(name, SynthesisVoice(name=name, language=language))
        if voice_type is None:
            logger.debug("Registered voice '%s' (%s)", name, language)
            return

        table: VoiceTable = self._tables.setdefault(language, VoiceTable(language=language))
        if voice_type in table.voices:
            logger.warning(
                "Voice type %s for '%s' is redefined: '%s' -> '%s'", voice_type, language, table.voices[voice_type], name
            )
        table.voices[voice_type] = name
        logger.debug("Registered voice '%s' (%s, %s)", name, language, voice_type)

    def add_voices(self, entries: Iterable[dict[str, str]]) -> None:
        """Register voices from normalised ADD_VOICE configuration entries."""
        for entry in entries:
            self.add_voice(entry["lang"], VoiceType.parse(entry["type"]), entry["name"])

    def discover(self, search_paths: Sequence[str], language: str) -> list[str]:
        """Register every voice file that a search-path template can match.

        The placeholder is replaced by a wildcard and the file stem becomes the voice
        identifier. Already registered names are left alone.

        Args:
            search_paths (Sequence[str]): Search-path templates.
            language (str): Language the discovered voices are registered under.

        Returns:
            list[str]: Newly registered voice identifiers.
        """
        found: list[str] = []
        for template in search_paths:
            prefix, _, suffix = template.partition(VOICE_PLACEHOLDER)
            for voice_file in FileUtils.find_files(template.replace(VOICE_PLACEHOLDER, "*")):
                path_str = str(voice_file)
                # '~' or a repeated placeholder cannot be matched literally
                if not (path_str.startswith(prefix) and path_str.endswith(suffix)):
                    name: str = voice_file.stem
                else:
                    name = path_str[len(prefix) : len(path_str) - len(suffix)]
                if not name or "/" in name or name in self._voices:
                    continue
                self.add_voice(language, None, name)
                found.append(name)
        logger.info("Discovered %d voice(s)", len(found))
        return found

    def list_voices(self) -> list[SynthesisVoice]:
        return list(self._voices.values())

    def exists_voice(self, name: str | None) -> bool:
        return name is not None and name in self._voices

    def get_voice(self, language: str | None, voice_type: VoiceType | None) -> str | None:
        """Look up the voice identifier for a language and voice type.

        Falls back to the language's MALE1 voice, then its FEMALE1 voice, when the
        requested type has no voice.

        Args:
            language (str | None): Language code.
            voice_type (VoiceType | None): Requested voice type. None is treated as MALE1.

        Returns:
            str | None: Voice identifier, or None if the language has no typed voice.
        """
        if language is None:
            logger.debug("Can't determine voice, language is None")
            return None

        table: VoiceTable | None = self._tables.get(language.lower())
        if table is None:
            logger.debug("There are no voices in the table for language=%s", language)
            return None

        for candidate in (voice_type or VoiceType.MALE1, VoiceType.MALE1, VoiceType.FEMALE1):
            name: str | None = table.get(candidate)
            if name is not None:
                return name

        logger.warning("No voice available for language=%s", language)
        return None
