from __future__ import annotations

from pathlib import Path

import pytest

from utils.file_utils import FileUtils


def test_resolve_path_relative_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert FileUtils.resolve_path("logs/openjtalk.log") == tmp_path.resolve() / "logs" / "openjtalk.log"


def test_resolve_path_expands_home_and_variables(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("VOICE_ROOT", str(tmp_path / "voices"))

    assert FileUtils.resolve_path("~/a.log") == tmp_path.resolve() / "a.log"
    assert FileUtils.resolve_path("$VOICE_ROOT/mei") == tmp_path.resolve() / "voices" / "mei"


def test_resolve_path_strict(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileUtils.resolve_path(tmp_path / "missing", strict=True)


def test_find_files_sorted_files_only(voice_dir: Path) -> None:
    (voice_dir / "dir.htsvoice").mkdir()

    found: list[Path] = FileUtils.find_files(f"{voice_dir}/*.htsvoice")

    assert found == [voice_dir / "male1.htsvoice", voice_dir / "mei.htsvoice"]


def test_find_files_no_match(tmp_path: Path) -> None:
    assert FileUtils.find_files(f"{tmp_path}/*.htsvoice") == []
