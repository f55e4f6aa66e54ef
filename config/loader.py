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
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from models.config_models import Config
from models.conversion_models import KEY_NORMALIZATIONS, LANGUAGE_TEMPLATES, OPERATION_MODES
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
    "validate_base_url",
    "validate_mode",
    "validate_threshold",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ALLOWED_URL_SCHEMES: tuple[str, ...] = ("http", "https")


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


def validate_mode(value: Any, field_name: str = "POLICY.MODE") -> str:
    """Return the operation mode if it is one of the supported modes.

    Raises:
        ConfigValueError: If the mode is unknown.
    """
    if value not in OPERATION_MODES:
        msg: str = f"'{field_name}' must be one of {', '.join(OPERATION_MODES)}: {value!r}"
        raise ConfigValueError(msg)
    return value


def validate_threshold(value: Any, field_name: str = "POLICY.CONFIDENCE_THRESHOLD") -> float:
    """Return the value as a float in [0.0, 1.0].

    Raises:
        ConfigTypeError: If the value is not a number.
        ConfigValueError: If the value is out of range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg: str = f"'{field_name}' must be a number: {value!r}"
        raise ConfigTypeError(msg)
    if not 0.0 <= value <= 1.0:
        msg = f"'{field_name}' must be between 0 and 1: {value}"
        raise ConfigValueError(msg)
    return float(value)


def validate_base_url(value: Any, field_name: str = "MODEL.BASE_URL") -> str:
    """Return the URL if it is an absolute http(s) URL.

    Raises:
        ConfigValueError: If the URL is malformed or uses another scheme.
    """
    parsed = urlparse(value) if isinstance(value, str) else None
    if parsed is None or parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        msg: str = f"'{field_name}' must be an http(s) URL: {value!r}"
        raise ConfigValueError(msg)
    return value


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    This class reads the configuration file, applies formatting rules, and validates settings.
    It raises exceptions for any issues encountered during the loading process.

    Args:
        config_filename (str): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        model (str | None): Optional override for the model identifier.
        url (str | None): Optional override for the model server base URL.
        mode (str | None): Optional override for the operation mode.
        threshold (float | None): Optional override for the confidence threshold.
        debug (bool): Enables debug logging when True.

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
                f"Please create '{config_filename}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._convert_settings(parser)
        self.apply_overrides(self.config, **args)
        self.validate(self.config)

    @staticmethod
    def apply_overrides(config: Config, **args) -> None:
        """Apply command-line argument overrides to a configuration."""
        if args.get("model") is not None:
            config.MODEL.MODEL = args["model"]
        if args.get("url") is not None:
            config.MODEL.BASE_URL = args["url"]
        if args.get("mode") is not None:
            config.POLICY.MODE = args["mode"]
        if args.get("threshold") is not None:
            config.POLICY.CONFIDENCE_THRESHOLD = args["threshold"]
        if args.get("debug", False):
            config.GENERAL.DEBUG = True

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Convert configuration settings from the parser to the Config object.

        Args:
            parser (ConfigParser): Parsed INI data.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Section '%s' not defined; using defaults", section.name)
                continue
            self._convert_section_field(parser, formatter, section)

    def _convert_section_field(
        self, parser: ConfigParser, formatter: _ConfigFormatter, section: DataclassField[Any]
    ) -> None:
        """Convert all fields in a configuration section.

        Args:
            parser (ConfigParser): Parsed INI data.
            formatter (_ConfigFormatter): Formatter used to coerce string values to typed values.
            section (Field[Any]): Target configuration section dataclass field.

        Raises:
            ConfigFormatError: If a value fails to format correctly.
        """
        for key in fields(getattr(self.config, section.name)):
            if not parser.has_option(section.name, key.name):
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue

            formatted_value = formatter.apply_format(section, key)
            setattr(getattr(self.config, section.name), key.name, formatted_value)

    @classmethod
    def validate(cls, config: Config) -> None:
        """Validate policy, model and conversion settings.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        validate_mode(config.POLICY.MODE)
        validate_threshold(config.POLICY.CONFIDENCE_THRESHOLD)
        validate_threshold(config.POLICY.SIMILARITY_THRESHOLD, "POLICY.SIMILARITY_THRESHOLD")
        if config.POLICY.KEY_NORMALIZATION not in KEY_NORMALIZATIONS:
            msg: str = (
                f"'POLICY.KEY_NORMALIZATION' must be one of {', '.join(KEY_NORMALIZATIONS)}: "
                f"{config.POLICY.KEY_NORMALIZATION!r}"
            )
            raise ConfigValueError(msg)

        validate_base_url(config.MODEL.BASE_URL)
        if not isinstance(config.MODEL.MODEL, str) or not config.MODEL.MODEL.strip():
            msg = "'MODEL.MODEL' must be a non-empty string"
            raise ConfigValueError(msg)
        for key_name in ("TIMEOUT", "PROBE_TIMEOUT"):
            if getattr(config.MODEL, key_name) <= 0:
                msg = f"'MODEL.{key_name}' must be positive: {getattr(config.MODEL, key_name)}"
                raise ConfigValueError(msg)

        cls._validate_languages(config)

    @staticmethod
    def _validate_languages(config: Config) -> None:
        """Check the source language and the two target languages.

        Raises:
            ConfigTypeError: If TARGET_LANGUAGES is not a list.
            ConfigValueError: If a language is unknown, a target equals the source or the count is not two.
        """
        source: str = config.CONVERSION.SOURCE_LANGUAGE
        targets: Any = config.CONVERSION.TARGET_LANGUAGES
        msg: str

        if source not in LANGUAGE_TEMPLATES:
            msg = f"Unsupported language for 'CONVERSION.SOURCE_LANGUAGE': {source!r}"
            raise ConfigValueError(msg)
        if not isinstance(targets, (list, tuple)):
            msg = f"Unsupported type used for 'CONVERSION.TARGET_LANGUAGES': {type(targets)}"
            raise ConfigTypeError(msg)
        if len(targets) != 2:  # noqa: PLR2004
            msg = f"'CONVERSION.TARGET_LANGUAGES' must name exactly two languages: {list(targets)}"
            raise ConfigValueError(msg)
        for target in targets:
            if target not in LANGUAGE_TEMPLATES:
                msg = f"Unsupported language for 'CONVERSION.TARGET_LANGUAGES': {target!r}"
                raise ConfigValueError(msg)
            if target == source:
                msg = f"Target language '{target}' is the same as the source language"
                raise ConfigValueError(msg)
        config.CONVERSION.TARGET_LANGUAGES = list(targets)


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str, list)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert INI value to the expected Python type based on the Config field type.

        Args:
            section (DataclassField[Any]): Configuration section field containing the key.
            key (DataclassField[Any]): Target field within the section.

        Returns:
            Any: Parsed value coerced to the type declared in the config dataclass.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[
            type[bool | int | float], Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float]
        ] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
        }

        default: Any = getattr(getattr(self.config, section.name), key.name)
        formatter: Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float] | None = formatters.get(
            type(default)
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
            value: Any = ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

        if not isinstance(value, type(default)):
            msg = f"Unsupported type used for '{section.name}.{key.name}': {type(value)}"
            raise ConfigTypeError(msg)
        return value

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        """Convert INI string to float."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return float(value)

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        """Convert INI string to integer."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return int(float(value))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        """Convert INI string to boolean."""
        return self.parser.getboolean(section.name, key.name)
