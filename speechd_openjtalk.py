"""Command-line front end for the Open JTalk speech backend.

Speaks the given text (or standard input) with the configured Open JTalk voices,
either through the default audio device or into a WAV file.

Example: python speechd_openjtalk.py --voice-type FEMALE1 "こんにちは"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from config.loader import ConfigLoader, ConfigLoaderError
from core.tts import Interface, NoVoiceConfiguredError, PyAudioOutput, WavFileOutput
from core.version import VERSION
from models.voice_models import MessageSettings, VoiceType
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Sequence

    from core.tts import AudioOutput
    from models.config_models import Config

CFG_FILE: Final[str] = "openjtalk.ini"
DEFAULT_MODULE: Final[str] = "open_jtalk"

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(EXIT_USAGE)


def _voice_type(value: str) -> VoiceType:
    try:
        return VoiceType.parse(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Speak Japanese text with Open JTalk",
        epilog='Example: python speechd_openjtalk.py --voice-type FEMALE1 "こんにちは"',
    )
    parser.add_argument("text", nargs="*", help="Text to speak (read from standard input when omitted)")
    parser.add_argument("-c", "--config", default=CFG_FILE, metavar="FILE", help="Configuration file")
    parser.add_argument("-l", "--language", metavar="LANG", help="Language code, e.g. 'ja'")
    parser.add_argument("-t", "--voice-type", type=_voice_type, metavar="TYPE", help="Voice type, e.g. MALE1")
    parser.add_argument("-n", "--voice", dest="voice_name", metavar="NAME", help="Voice name (overrides --voice-type)")
    parser.add_argument("-o", "--output", metavar="WAV", help="Write the audio to a WAV file instead of playing it")
    parser.add_argument("--list-voices", action="store_true", help="List the registered voices and exit")
    parser.add_argument("--module", default=DEFAULT_MODULE, help=argparse.SUPPRESS)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    return ConfigLoader(config_filename=args.config, script_name=script_name, debug=args.debug).config


def setup_logging(config: Config) -> None:
    log_file: str = str(FileUtils.resolve_path(config.GENERAL.LOG_FILE)) if config.GENERAL.LOG_FILE else ""
    logger_utils = LoggerUtils(log_file)
    logger_utils.set_level("DEBUG" if config.GENERAL.DEBUG else "INFO")


def create_output(args: argparse.Namespace) -> AudioOutput:
    if args.output:
        return WavFileOutput(FileUtils.resolve_path(args.output))
    return PyAudioOutput()


def read_text(args: argparse.Namespace) -> str:
    if args.text:
        return " ".join(args.text)
    return sys.stdin.read()


def main(argv: Sequence[str] | None = None) -> int:
    """Run load, init, speak and close on the selected module.

    Returns:
        int: Process exit status.
    """
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(config)

    try:
        module_cls: type[Interface] = Interface.get_module(args.module)
    except ValueError as err:
        print(f"\nError: {err}", file=sys.stderr)
        return EXIT_USAGE

    module = module_cls(audio_output=create_output(args))  # type: ignore[call-arg]
    try:
        module.load(config)
        if args.list_voices:
            for voice in module.list_voices():
                print(f"{voice.name}\t{voice.language}\t{voice.variant or 'none'}")
            return EXIT_OK

        try:
            print(module.init(), file=sys.stderr)
        except NoVoiceConfiguredError as err:
            print(f"\nError: {err}", file=sys.stderr)
            return EXIT_FAILURE

        text: str = read_text(args)
        if not text.strip():
            print("\nError: Nothing to speak.", file=sys.stderr)
            return EXIT_USAGE

        settings = MessageSettings(language=args.language, voice_type=args.voice_type, voice_name=args.voice_name)
        return EXIT_OK if module.speak(text, settings) else EXIT_FAILURE
    finally:
        module.close()


def run() -> NoReturn:
    try:
        status: int = main()
    except KeyboardInterrupt:
        print("\n\nCancelled by user.", file=sys.stderr)
        status = EXIT_FAILURE
    raise SystemExit(status)


if __name__ == "__main__":
    run()
