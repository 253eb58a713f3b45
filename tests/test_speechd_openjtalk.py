"""Tests for the speechd_openjtalk command-line front end."""

from __future__ import annotations

import io
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest
import soundfile

import speechd_openjtalk
from core.tts.synthesizer import OpenJTalkInvoker
from models.voice_models import VoiceType
from speechd_openjtalk import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main, parse_arguments
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from tests.conftest import WavBuilder


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(LoggerUtils, "_instance", None)
    monkeypatch.setattr(LoggerUtils, "_configured", False)
    logger_utils = LoggerUtils(use_null_console=True)
    yield
    for handler in list(logger_utils.root_logger.handlers):
        logger_utils.root_logger.removeHandler(handler)


def _write_ini(tmp_path: Path, voice_dir: Path, add_voice: str) -> Path:
    ini_path: Path = tmp_path / "openjtalk.ini"
    ini_path.write_text(
        dedent(
            f"""
            [OPENJTALK]
            VOICE_FILE_SEARCH_PATH = ["{voice_dir}/$VOICE.htsvoice"]

            [VOICES]
            ADD_VOICE = {add_voice}
            """
        ),
        encoding="utf-8",
    )
    return ini_path


@pytest.fixture
def ini_path(tmp_path: Path, voice_dir: Path) -> Path:
    return _write_ini(tmp_path, voice_dir, '[{"lang": "ja", "type": "MALE1", "name": "male1"}]')


@pytest.fixture
def fake_engine(monkeypatch: pytest.MonkeyPatch, wav_bytes: WavBuilder) -> list[str]:
    spoken: list[str] = []
    data: bytes = wav_bytes(b"\x01\x00\x02\x00\x03\x00", bits=16, num_channels=1, sample_rate=16000)

    def synthesize(self: OpenJTalkInvoker, text: str, voice_path: Path, output_path: Path) -> Path:
        spoken.append(text)
        output_path.write_bytes(data)
        return output_path

    monkeypatch.setattr(OpenJTalkInvoker, "synthesize", synthesize)
    return spoken


def test_parse_arguments() -> None:
    args = parse_arguments(["-t", "female1", "-n", "mei", "-l", "ja", "-o", "out.wav", "こんにちは", "世界"])

    assert args.voice_type is VoiceType.FEMALE1
    assert args.voice_name == "mei"
    assert args.language == "ja"
    assert args.output == "out.wav"
    assert args.text == ["こんにちは", "世界"]
    assert args.config == speechd_openjtalk.CFG_FILE


def test_parse_arguments_rejects_unknown_voice_type(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_arguments(["-t", "robot", "text"])

    assert exc_info.value.code == EXIT_USAGE
    assert "Unknown voice type" in capsys.readouterr().err


def test_main_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status: int = main(["-c", str(tmp_path / "missing.ini"), "text"])

    assert status == EXIT_USAGE
    assert "Failed to load configuration file" in capsys.readouterr().err


def test_main_unknown_module(ini_path: Path) -> None:
    assert main(["-c", str(ini_path), "--module", "espeak", "text"]) == EXIT_USAGE


def test_main_list_voices(ini_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status: int = main(["-c", str(ini_path), "-o", str(tmp_path / "unused.wav"), "--list-voices"])

    assert status == EXIT_OK
    assert capsys.readouterr().out == "male1\tja\tnone\n"


def test_main_without_voices(tmp_path: Path, voice_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    empty_ini: Path = _write_ini(tmp_path, voice_dir, "[]")

    status: int = main(["-c", str(empty_ini), "-o", str(tmp_path / "out.wav"), "text"])

    assert status == EXIT_FAILURE
    assert "does not have any voice configured" in capsys.readouterr().err


def test_main_speaks_into_wav_file(ini_path: Path, tmp_path: Path, fake_engine: list[str]) -> None:
    target: Path = tmp_path / "out.wav"

    status: int = main(["-c", str(ini_path), "-o", str(target), "<speak>こんにちは</speak>"])

    assert status == EXIT_OK
    assert fake_engine == ["こんにちは"]
    info = soundfile.info(str(target))
    assert info.samplerate == 16000
    assert info.frames == 3


def test_main_reads_standard_input(
    ini_path: Path, tmp_path: Path, fake_engine: list[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("標準入力\n"))

    status: int = main(["-c", str(ini_path), "-o", str(tmp_path / "out.wav")])

    assert status == EXIT_OK
    assert fake_engine == ["標準入力\n"]


def test_main_nothing_to_speak(ini_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("  \n"))

    assert main(["-c", str(ini_path), "-o", str(tmp_path / "out.wav")]) == EXIT_USAGE


def test_main_unresolvable_voice(ini_path: Path, tmp_path: Path, fake_engine: list[str]) -> None:
    status: int = main(["-c", str(ini_path), "-o", str(tmp_path / "out.wav"), "-l", "en", "hello"])

    assert status == EXIT_FAILURE
    assert fake_engine == []
