from __future__ import annotations

import glob
import os
from pathlib import Path

__all__: list[str] = ["FileUtils"]


class FileUtils:
    """Path helpers shared by the configuration loader and the voice catalog."""

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Convert a user-input path to an absolute path safely.

        Expands environment variables (e.g., $HOME), expands ~ to the home directory,
        and resolves relative paths based on the current working directory.

        Args:
            path (str | Path): The input path (e.g., "~/.cache/speech-dispatcher/openjtalk.log").
            strict (bool): Whether to raise an exception if the path does not exist. Defaults to False.

        Returns:
            Path: The converted absolute `Path` object.
        """
        expanded: str = os.path.expandvars(str(path))
        user_expanded: Path = Path(expanded).expanduser()

        if user_expanded.is_absolute():
            return user_expanded.resolve(strict=strict)
        return (Path.cwd() / user_expanded).resolve(strict=strict)

    @staticmethod
    def find_files(pattern: str) -> list[Path]:
        """Return the regular files matching a glob pattern, sorted by path.

        Args:
            pattern (str): Shell-style wildcard pattern, e.g. "/usr/share/hts-voice/*.htsvoice".

        Returns:
            list[Path]: Matching regular files. Directories are skipped.
        """
        return [Path(match) for match in sorted(glob.glob(os.path.expanduser(pattern))) if os.path.isfile(match)]
