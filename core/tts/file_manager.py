"""Temporary output file handling for synthesis requests.

Each request writes its WAV data to a private file that must disappear when the
request ends, whatever the outcome.
"""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

from core.tts.interface import TempFileError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from types import TracebackType


__all__: list[str] = ["TemporaryOutputFile", "delete_file_with_retry"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

TEMP_FILE_PREFIX: Final[str] = "speechd-openjtalk-"
TEMP_FILE_SUFFIX: Final[str] = ".wav"


def delete_file_with_retry(file_path: Path, max_retries: int = 3, delay: float = 0.5) -> bool:
    """Delete a file, retrying on PermissionError.

    Args:
        file_path (Path): Path to the file to delete.
        max_retries (int): Maximum number of attempts.
        delay (float): Delay in seconds between attempts.

    Returns:
        bool: True if the file is gone, False otherwise.
    """
    for attempt in range(max_retries):
        try:
            file_path.unlink(missing_ok=True)
        except PermissionError as err:
            if attempt < max_retries - 1:
                logger.debug(
                    "PermissionError deleting '%s', retrying... (%d/%d)",
                    file_path,
                    attempt + 1,
                    max_retries,
                )
                time.sleep(delay)
            else:
                logger.warning("Failed to delete '%s' after %d attempts: %s", file_path, max_retries, err)
        except OSError as err:
            logger.error("Unexpected error deleting '%s': %s", file_path, err)
            return False
        else:
            logger.debug("Deleted audio file: '%s'", file_path)
            return True
    return False


class TemporaryOutputFile:
    """Uniquely named, owner-only file that is removed when the context exits.

    The file exists (empty) once the context is entered so that no other process
    can claim the name before the synthesis engine writes to it.

    Example:
        >>> with TemporaryOutputFile() as output:
        ...     invoker.synthesize(text, voice_path, output.path)
        ...     track = decoder.decode(output.path)
    """

    def __init__(self, directory: Path | None = None) -> None:
        self.directory: Path | None = directory
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            msg = "Temporary output file has not been created"
            raise RuntimeError(msg)
        return self._path

    def create(self) -> Path:
        """Create the file with mode 0600.

        Raises:
            TempFileError: If the file could not be created.
        """
        try:
            fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, suffix=TEMP_FILE_SUFFIX, dir=self.directory)
        except OSError as err:
            msg: str = f"Temporary .wav file creation failed: {err}"
            raise TempFileError(msg) from err
        # the engine reopens the file by name
        os.close(fd)
        self._path = Path(name)
        logger.debug("Created temporary file '%s'", self._path)
        return self._path

    def remove(self) -> None:
        if self._path is None:
            return
        delete_file_with_retry(self._path)
        self._path = None

    def __enter__(self) -> Self:
        self.create()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.remove()
