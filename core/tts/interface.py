from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config
    from models.voice_models import MessageSettings, SynthesisVoice


__all__: list[str] = [
    "Interface",
    "LaunchError",
    "MalformedHeaderError",
    "NoVoiceConfiguredError",
    "NoVoiceResolvedError",
    "SynthesisFailedError",
    "TTSExceptionError",
    "TTSFileError",
    "TTSNotSupportedError",
    "TempFileError",
    "WavDecodeError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TTSExceptionError(Exception):
    """Base class for exceptions raised by the speech backend.

    Every per-request failure derives from this class, so the orchestrator can
    report any of them to the host with a single handler.
    """


class NoVoiceConfiguredError(TTSExceptionError):
    """No voice is registered with the backend.

    Raised at initialisation time; the backend must not become active.
    """


class NoVoiceResolvedError(TTSExceptionError):
    """The current settings do not resolve to an existing voice file."""


class TTSFileError(TTSExceptionError):
    """Parent class of file operation related exceptions."""


class TempFileError(TTSFileError):
    """The temporary output file could not be created."""


class LaunchError(TTSExceptionError):
    """The synthesis engine process could not be started."""


class SynthesisFailedError(TTSExceptionError):
    """The synthesis engine process exited with a non-zero status."""


class WavDecodeError(TTSExceptionError):
    """The synthesised WAV file could not be read."""


class MalformedHeaderError(WavDecodeError):
    """A WAV header field or the sample payload is missing, short, or invalid."""


class TTSNotSupportedError(TTSExceptionError):
    """The requested operation is not supported by the backend."""


class Interface(ABC):
    """Base class for speech backend modules.

    Defines the operations the host service drives: load, init, list_voices,
    speak, pause, stop, and close. Concrete modules register themselves by name
    on subclassing so the command-line front end can select one.

    Attributes:
        _registered_modules (dict[str, type[Interface]]): Registered module classes by name.
    """

    _registered_modules: ClassVar[dict[str, type[Interface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.register_module(cls)

    @classmethod
    def register_module(cls, module_cls: type[Interface]) -> None:
        """Register a module class under its distinguished name."""
        name: str = module_cls.fetch_module_name()
        Interface._registered_modules[name] = module_cls
        logger.debug("Registered module: %s", name)

    @classmethod
    def get_registered(cls) -> dict[str, type[Interface]]:
        return Interface._registered_modules

    @classmethod
    def get_module(cls, name: str) -> type[Interface]:
        """Retrieve a registered module class by name.

        Raises:
            ValueError: If no module is registered under the name.
        """
        try:
            return Interface._registered_modules[name]
        except KeyError:
            msg: str = f"No such module registered: {name}"
            raise ValueError(msg) from None

    @staticmethod
    @abstractmethod
    def fetch_module_name() -> str:
        """Get the distinguished name of the module.

        Returns:
            str: The distinguished name of the module.
        """
        raise NotImplementedError

    @abstractmethod
    def load(self, config: Config) -> None:
        """Read the configuration and register the available voices."""
        raise NotImplementedError

    @abstractmethod
    def init(self) -> str:
        """Prepare the module for speaking.

        Returns:
            str: Status message for the host.

        Raises:
            NoVoiceConfiguredError: If the module has no voice to speak with.
        """
        raise NotImplementedError

    @abstractmethod
    def list_voices(self) -> list[SynthesisVoice]:
        raise NotImplementedError

    @abstractmethod
    def speak(self, data: str, settings: MessageSettings | None = None) -> bool:
        """Synthesise and play one message.

        Args:
            data (str): Text to speak, possibly SSML.
            settings (MessageSettings | None): Voice settings for this message. None keeps the previous ones.

        Returns:
            bool: True if the message was played, False otherwise.
        """
        raise NotImplementedError

    def pause(self) -> None:
        """Pausing is not supported by default.

        Raises:
            TTSNotSupportedError: Always.
        """
        logger.debug("pausing (not supported)")
        msg = f"{self.fetch_module_name()} does not support pausing"
        raise TTSNotSupportedError(msg)

    def stop(self) -> bool:
        """Stop request; speech already in progress is not interrupted."""
        logger.debug("stopping (not supported)")
        return True

    def close(self) -> bool:
        logger.info("%s module closing", self.fetch_module_name())
        return True
