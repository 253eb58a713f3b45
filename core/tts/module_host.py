"""Callbacks from the speech backend to the service hosting it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["LoggingModuleHost", "ModuleHost"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ModuleHost(ABC):
    """Notifications the backend sends while handling a speech request.

    speak_ok or speak_error answers the request itself; report_event_begin and
    report_event_end bracket the audio of an accepted request.
    """

    @abstractmethod
    def speak_ok(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def speak_error(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def report_event_begin(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def report_event_end(self) -> None:
        raise NotImplementedError


class LoggingModuleHost(ModuleHost):
    """Host used when the backend runs standalone; notifications only go to the log."""

    def speak_ok(self) -> None:
        logger.debug("speak request accepted")

    def speak_error(self) -> None:
        logger.error("speak request rejected")

    def report_event_begin(self) -> None:
        logger.debug("event begin")

    def report_event_end(self) -> None:
        logger.debug("event end")
