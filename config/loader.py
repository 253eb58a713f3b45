"""Configuration file loader and validator.

Handles reading, formatting, and validating settings from the INI configuration file.
Raises exceptions for any issues encountered during loading.
"""

from __future__ import annotations

import ast
import configparser
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from models.re_models import VOICE_PLACEHOLDER
from models.voice_models import VoiceType
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ADD_VOICE_KEYS: Final[frozenset[str]] = frozenset({"lang", "type", "name"})


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    Args:
        config_filename (str): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        debug (bool): Optional override forcing GENERAL.DEBUG on.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str,
        script_name: str,
        **args,
    ) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' or pass another file to '{script_name}' with --config."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser(interpolation=None)
        # Keys are matched against the dataclass field names, which are upper case.
        parser.optionxform = str.upper  # type: ignore[assignment,method-assign]

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._convert_settings(parser)
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Copy every defined INI value into the Config object, coerced to the field's type."""
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                formatted_value = formatter.apply_format(section, key)
                setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _validate_settings(self) -> None:
        """Validate search paths and voice definitions.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        msg: str
        self._validate_search_paths()

        voices = self.config.VOICES
        if not isinstance(voices.ADD_VOICE, list):
            msg = f"Unsupported type used for 'VOICES.ADD_VOICE': {type(voices.ADD_VOICE)}"
            raise ConfigTypeError(msg)
        voices.ADD_VOICE = [self._check_voice_entry(entry) for entry in voices.ADD_VOICE]
        voices.DEFAULT_LANGUAGE = voices.DEFAULT_LANGUAGE.strip().lower()
        self.config.OPENJTALK.DISCOVER_LANGUAGE = self.config.OPENJTALK.DISCOVER_LANGUAGE.strip().lower()
        try:
            voices.DEFAULT_VOICE_TYPE = VoiceType.parse(voices.DEFAULT_VOICE_TYPE).value
        except ValueError as err:
            msg = f"Invalid value for VOICES.DEFAULT_VOICE_TYPE: {err}"
            raise ConfigValueError(msg) from None

    def _validate_search_paths(self) -> None:
        """Every search-path template must be a string containing the voice placeholder.

        Raises:
            ConfigTypeError: If the setting is not a list of strings.
            ConfigValueError: If a template lacks the placeholder.
        """
        templates: Any = self.config.OPENJTALK.VOICE_FILE_SEARCH_PATH
        if isinstance(templates, str):
            templates = [templates]
        if not isinstance(templates, list) or not all(isinstance(t, str) for t in templates):
            msg: str = f"Unsupported type used for 'OPENJTALK.VOICE_FILE_SEARCH_PATH': {type(templates)}"
            raise ConfigTypeError(msg)

        for template in templates:
            if VOICE_PLACEHOLDER not in template:
                msg = f"Search path '{template}' does not contain '{VOICE_PLACEHOLDER}'"
                raise ConfigValueError(msg)
        if not templates:
            logger.warning("No VOICE_FILE_SEARCH_PATH is configured; no voice file can be found.")
        self.config.OPENJTALK.VOICE_FILE_SEARCH_PATH = templates

    def _check_voice_entry(self, entry: Any) -> dict[str, str]:
        """Normalise one ADD_VOICE entry.

        e.g. {"lang": "ja", "type": "MALE1", "name": "nitech_jp_atr503_m001"}

        Args:
            entry (Any): Dictionary literal from the INI file.

        Returns:
            dict[str, str]: Entry with the language lower-cased and the type upper-cased.

        Raises:
            ConfigTypeError: If the entry is not a dictionary of strings.
            ConfigValueError: If a key is missing or a value is invalid.
        """
        msg: str
        if not isinstance(entry, dict) or not all(isinstance(v, str) for v in entry.values()):
            msg = f"Invalid ADD_VOICE entry: {entry!r}"
            raise ConfigTypeError(msg)

        missing: set[str] = ADD_VOICE_KEYS - entry.keys()
        if missing:
            msg = f"ADD_VOICE entry {entry!r} is missing: {', '.join(sorted(missing))}"
            raise ConfigValueError(msg)

        lang: str = entry["lang"].strip().lower()
        name: str = entry["name"].strip()
        if not lang or not name:
            msg = f"ADD_VOICE entry {entry!r} has an empty language or name"
            raise ConfigValueError(msg)
        try:
            voice_type: VoiceType = VoiceType.parse(entry["type"])
        except ValueError as err:
            msg = f"Invalid ADD_VOICE entry {entry!r}: {err}"
            raise ConfigValueError(msg) from None

        return {"lang": lang, "type": voice_type.value, "name": name}


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, str, list, dict)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert INI value to the expected Python type based on the Config field type.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], Any]] = {
            bool: self.parse_as_boolean,
            str: self.parse_as_string,
        }

        formatter: Callable[[DataclassField[Any], DataclassField[Any]], Any] | None = formatters.get(
            type(getattr(getattr(self.config, section.name), key.name))
        )
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Return the INI string with one pair of surrounding quotes removed."""
        value: str = self.parser.get(section.name, key.name, raw=True).strip()
        for char in ("'", '"'):
            if len(value) >= 2 and value.startswith(char) and value.endswith(char):
                return value[1:-1]
        return value

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        return self.parser.getboolean(section.name, key.name)
