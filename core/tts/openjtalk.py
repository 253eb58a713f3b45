from __future__ import annotations

from typing import TYPE_CHECKING, Final

from core.tts.audio_output import AudioOutput, PyAudioOutput
from core.tts.file_manager import TemporaryOutputFile
from core.tts.interface import Interface, NoVoiceConfiguredError, NoVoiceResolvedError, TTSExceptionError
from core.tts.module_host import LoggingModuleHost, ModuleHost
from core.tts.parameter_manager import ParameterManager
from core.tts.synthesizer import OpenJTalkInvoker
from core.tts.voice_catalog import VoiceCatalog
from core.tts.wav_decoder import WavDecoder
from models.audio_models import AudioFormat
from models.voice_models import MessageSettings, VoiceType
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from models.config_models import Config
    from models.voice_models import SynthesisVoice, VoiceState


__all__: list[str] = ["OpenJTalk"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# open_jtalk writes native little-endian PCM
OUTPUT_FORMAT: Final[AudioFormat] = AudioFormat.LE


class OpenJTalk(Interface):
    """Speech backend speaking through the open_jtalk command.

    Each speak() call runs the whole pipeline synchronously: apply the message's
    voice settings, strip SSML, run open_jtalk into a temporary WAV file, decode
    it, and hand the track to the audio output. Every failure ends that request
    only; the backend stays ready for the next one.
    """

    def __init__(
        self,
        host: ModuleHost | None = None,
        audio_output: AudioOutput | None = None,
        *,
        invoker: OpenJTalkInvoker | None = None,
        decoder: WavDecoder | None = None,
        catalog: VoiceCatalog | None = None,
    ) -> None:
        logger.debug("%s initializing", self.__class__.__name__)
        self.host: ModuleHost = host if host is not None else LoggingModuleHost()
        self.audio_output: AudioOutput = audio_output if audio_output is not None else PyAudioOutput()
        self.invoker: OpenJTalkInvoker = invoker if invoker is not None else OpenJTalkInvoker()
        self.decoder: WavDecoder = decoder if decoder is not None else WavDecoder()
        self.catalog: VoiceCatalog = catalog if catalog is not None else VoiceCatalog()
        self.parameters: ParameterManager = ParameterManager(self.catalog, ())
        self.tmp_dir: Path | None = None

    @staticmethod
    def fetch_module_name() -> str:
        return "open_jtalk"

    @property
    def voice_state(self) -> VoiceState:
        return self.parameters.state

    def load(self, config: Config) -> None:
        """Apply the configuration and register voices.

        Args:
            config (Config): Loaded configuration.
        """
        openjtalk = config.OPENJTALK
        self.invoker.exec_path = openjtalk.EXECUTE_PATH
        self.invoker.dictionary_dir = FileUtils.resolve_path(openjtalk.DICTIONARY_DIRECTORY)
        logger.debug("DictionaryDirectory: %s", self.invoker.dictionary_dir)

        search_paths: list[str] = list(openjtalk.VOICE_FILE_SEARCH_PATH)
        logger.debug("VoiceFileSearchPath: %s", search_paths)

        self.catalog.add_voices(config.VOICES.ADD_VOICE)
        if openjtalk.AUTO_DISCOVER:
            self.catalog.discover(search_paths, openjtalk.DISCOVER_LANGUAGE)

        self.parameters = ParameterManager(self.catalog, search_paths)
        self.parameters.update(
            MessageSettings(
                language=config.VOICES.DEFAULT_LANGUAGE or None,
                voice_type=VoiceType.parse(config.VOICES.DEFAULT_VOICE_TYPE),
            )
        )

        if config.GENERAL.TMP_DIR:
            self.tmp_dir = FileUtils.resolve_path(config.GENERAL.TMP_DIR)

    def init(self) -> str:
        if not len(self.catalog):
            msg = (
                "The module does not have any voice configured, "
                "please add them in the configuration file, "
                "or install the required files"
            )
            raise NoVoiceConfiguredError(msg)
        logger.info("%s initialised with %d voice(s)", self.fetch_module_name(), len(self.catalog))
        return "ok!"

    def list_voices(self) -> list[SynthesisVoice]:
        return self.catalog.list_voices()

    def speak(self, data: str, settings: MessageSettings | None = None) -> bool:
        logger.debug("speaking '%s'", data)

        try:
            voice_path: Path = self._require_voice_path(settings)
        except NoVoiceResolvedError as err:
            logger.error("%s", err)
            self.host.speak_error()
            return False

        self.host.speak_ok()
        self.host.report_event_begin()
        try:
            self._synthesize_and_play(data, voice_path)
        except TTSExceptionError as err:
            logger.error("'%s': %s", self.fetch_module_name().upper(), err)
            return False
        except OSError as err:
            logger.error("An error occurred in the TTS process: %s", err)
            return False
        finally:
            self.host.report_event_end()
            logger.debug("done")
        return True

    def _require_voice_path(self, settings: MessageSettings | None) -> Path:
        """Apply the message settings and return the voice file to speak with.

        Raises:
            NoVoiceResolvedError: If the settings resolve to no existing voice file.
        """
        state: VoiceState = self.parameters.apply(settings)
        if state.voice_path is None:
            msg: str = f"No voice specified (language: {state.language}, voice: {state.voice_id})"
            raise NoVoiceResolvedError(msg)
        return state.voice_path

    def _synthesize_and_play(self, data: str, voice_path: Path) -> None:
        # open_jtalk does not understand SSML
        plain_data: str = StringUtils.strip_ssml(data)

        with TemporaryOutputFile(self.tmp_dir) as output:
            self.invoker.synthesize(plain_data, voice_path, output.path)
            track = self.decoder.decode(output.path)
            logger.debug("decoded %s", track)
            self.audio_output.play(track, OUTPUT_FORMAT)

    def close(self) -> bool:
        self.audio_output.close()
        return super().close()
