from __future__ import annotations

from typing import TYPE_CHECKING

from core.tts.voice_catalog import resolve_voice_path
from models.voice_models import MessageSettings, VoiceState, VoiceType
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from core.tts.voice_catalog import VoiceCatalog

__all__: list[str] = ["ParameterManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def _string_changed(old: str | None, new: str | None) -> bool:
    return old is None or new is None or old != new


class ParameterManager:
    """Keep the selected voice in step with the settings of incoming messages.

    Settings are applied lazily: a message only triggers work for the values that
    differ from the ones applied before it. Changes are applied in the fixed order
    language, voice type, voice name, so an explicit voice name selected in the same
    message wins over the type-based choice.
    """

    def __init__(self, catalog: VoiceCatalog, search_paths: Sequence[str], state: VoiceState | None = None) -> None:
        self.catalog: VoiceCatalog = catalog
        self.search_paths: tuple[str, ...] = tuple(search_paths)
        self.state: VoiceState = state if state is not None else VoiceState()
        self.settings: MessageSettings = MessageSettings()
        self._applied: MessageSettings = MessageSettings()

    def update(self, settings: MessageSettings) -> None:
        """Merge the values a message sets into the current settings. None keeps the current value."""
        for name in ("language", "voice_type", "voice_name"):
            value = getattr(settings, name)
            if value is not None:
                setattr(self.settings, name, value)

    def apply(self, settings: MessageSettings | None = None) -> VoiceState:
        """Apply pending setting changes and return the resulting voice state.

        Args:
            settings (MessageSettings | None): Settings attached to the message, if any.

        Returns:
            VoiceState: The state after the changes were applied.
        """
        if settings is not None:
            self.update(settings)

        old: MessageSettings = self._applied
        new: MessageSettings = self.settings

        if _string_changed(old.language, new.language) and new.language is not None:
            self.set_language(new.language)
        if old.voice_type != new.voice_type:
            self.set_voice_type(new.voice_type)
        if _string_changed(old.voice_name, new.voice_name) and new.voice_name is not None:
            self.set_synthesis_voice(new.voice_name)

        self._applied = new.copy()
        return self.state

    def set_language(self, language: str) -> None:
        """Select a language and re-derive the voice from the current voice type."""
        logger.debug("Setting language %s", language)
        self.state.language = language.lower()
        self.set_voice_type(self.settings.voice_type)

    def set_voice_type(self, voice_type: VoiceType | None) -> None:
        """Re-derive the voice identifier from the current language and the given type."""
        logger.debug("Setting voice type %s", voice_type)
        self.state.voice_id = self.catalog.get_voice(self.state.language, voice_type)
        if self.state.voice_id is None:
            logger.debug("Invalid voice type specified or no voice available!")
        self._update_voice_path()

    def set_synthesis_voice(self, name: str) -> None:
        """Select a voice by identifier. Unknown names leave the current voice unchanged."""
        logger.debug("Setting voice name %s", name)
        if not self.catalog.exists_voice(name):
            logger.warning("Voice '%s' is not registered; keeping '%s'", name, self.state.voice_id)
            return
        self.state.voice_id = name
        self._update_voice_path()

    def _update_voice_path(self) -> None:
        self.state.voice_path = resolve_voice_path(self.search_paths, self.state.voice_id)
        logger.debug("Voice state: %s", self.state)
