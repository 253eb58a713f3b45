from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Final

from core.tts.interface import LaunchError, SynthesisFailedError
from models.config_models import DEFAULT_DICTIONARY_DIRECTORY, DEFAULT_EXECUTE_PATH
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["OpenJTalkInvoker"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

TEXT_ENCODING: Final[str] = "utf-8"


class OpenJTalkInvoker:
    """Run the open_jtalk command for one piece of text.

    The process is started from an argument vector, never through a shell, so
    configuration values are passed to the engine verbatim.

    Attributes:
        exec_path (str): open_jtalk executable name or path.
        dictionary_dir (Path): Directory holding the Open JTalk MeCab dictionary.
    """

    def __init__(
        self,
        dictionary_dir: str | Path = DEFAULT_DICTIONARY_DIRECTORY,
        exec_path: str = DEFAULT_EXECUTE_PATH,
    ) -> None:
        self.exec_path: str = exec_path
        self.dictionary_dir: Path = Path(dictionary_dir)

    def build_command(self, voice_path: Path, output_path: Path) -> list[str]:
        return [
            self.exec_path,
            "-x",
            str(self.dictionary_dir),
            "-m",
            str(voice_path),
            "-ow",
            str(output_path),
        ]

    def synthesize(self, text: str, voice_path: Path, output_path: Path) -> Path:
        """Synthesise text into a WAV file.

        The whole text is written to the engine's standard input, which is then
        closed, and the call blocks until the engine exits.

        Args:
            text (str): Plain text to speak.
            voice_path (Path): .htsvoice file to speak with.
            output_path (Path): Existing file the engine overwrites with WAV data.

        Returns:
            Path: output_path, now holding the engine's output.

        Raises:
            LaunchError: If the process could not be started.
            SynthesisFailedError: If the text cannot be encoded or the process exited with a non-zero status.
        """
        try:
            data: bytes = text.encode(TEXT_ENCODING)
        except UnicodeEncodeError as err:
            msg: str = f"Text cannot be encoded as {TEXT_ENCODING}: {err}"
            raise SynthesisFailedError(msg) from err

        cmd: list[str] = self.build_command(voice_path, output_path)
        logger.debug("executing: %s", " ".join(cmd))

        try:
            process = subprocess.Popen(  # noqa: S603
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except OSError as err:
            msg = f"Failed to execute '{self.exec_path}': {err}"
            raise LaunchError(msg) from err

        _, stderr = process.communicate(input=data)

        if process.returncode != 0:
            detail: str = stderr.decode(TEXT_ENCODING, errors="replace").strip() if stderr else ""
            logger.debug("open_jtalk stderr: %s", detail)
            msg = f"open_jtalk exited with non-zero code {process.returncode}"
            if detail:
                msg = f"{msg}: {detail}"
            raise SynthesisFailedError(msg)

        logger.debug("output to %s", output_path)
        return output_path
