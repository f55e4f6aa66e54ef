from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
    validate_base_url,
    validate_threshold,
)
from models.config_models import Config


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "codeconvert.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_config_loader_reads_all_sections(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False
        STATE_FILE = "data/state.db"

        [MODEL]
        BASE_URL = "http://gpu-box:11434"
        MODEL = "codellama:13b"
        TIMEOUT = 60
        TEMPERATURE = 0.2

        [POLICY]
        MODE = "always-model"
        CONFIDENCE_THRESHOLD = 0.7
        KEY_NORMALIZATION = "aggressive"
        CACHE_TRUSTED_RULE_RESULTS = yes

        [CONVERSION]
        SOURCE_LANGUAGE = "javascript"
        TARGET_LANGUAGES = ["typescript", "csharp"]
        """,
    )

    config: Config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.STATE_FILE == "data/state.db"
    assert config.MODEL.BASE_URL == "http://gpu-box:11434"
    assert config.MODEL.MODEL == "codellama:13b"
    assert config.MODEL.TIMEOUT == 60.0
    assert config.MODEL.TEMPERATURE == 0.2
    assert config.MODEL.PROBE_TIMEOUT == 5.0
    assert config.POLICY.MODE == "always-model"
    assert config.POLICY.CONFIDENCE_THRESHOLD == 0.7
    assert config.POLICY.SIMILARITY_THRESHOLD == 0.8
    assert config.POLICY.KEY_NORMALIZATION == "aggressive"
    assert config.POLICY.CACHE_TRUSTED_RULE_RESULTS is True
    assert config.CONVERSION.SOURCE_LANGUAGE == "javascript"
    assert config.CONVERSION.TARGET_LANGUAGES == ["typescript", "csharp"]


def test_config_loader_missing_sections_use_defaults(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = True
        """,
    )

    config: Config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.DEBUG is True
    assert config.MODEL == Config().MODEL
    assert config.POLICY == Config().POLICY


def test_config_loader_overrides(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [POLICY]
        MODE = "adaptive"
        """,
    )

    loader = ConfigLoader(
        config_filename=str(ini_path),
        script_name="test",
        model="deepseek-coder:6.7b",
        url="https://models.example.com",
        mode="manual-only",
        threshold=0.5,
        debug=True,
    )

    assert loader.config.MODEL.MODEL == "deepseek-coder:6.7b"
    assert loader.config.MODEL.BASE_URL == "https://models.example.com"
    assert loader.config.POLICY.MODE == "manual-only"
    assert loader.config.POLICY.CONFIDENCE_THRESHOLD == 0.5
    assert loader.config.GENERAL.DEBUG is True


@pytest.mark.parametrize(
    ("section", "content", "error"),
    [
        ("POLICY", 'MODE = "sometimes"', ConfigValueError),
        ("POLICY", "CONFIDENCE_THRESHOLD = 1.5", ConfigValueError),
        ("POLICY", "SIMILARITY_THRESHOLD = abc", ConfigValueError),
        ("POLICY", 'KEY_NORMALIZATION = "loose"', ConfigValueError),
        ("POLICY", "CACHE_TRUSTED_RULE_RESULTS = maybe", ConfigValueError),
        ("MODEL", 'BASE_URL = "localhost:11434"', ConfigValueError),
        ("MODEL", 'MODEL = ""', ConfigValueError),
        ("MODEL", "TIMEOUT = 0", ConfigValueError),
        ("MODEL", "MODEL = codellama", ConfigValueError),
        ("MODEL", "MODEL = 42", ConfigTypeError),
        ("CONVERSION", 'SOURCE_LANGUAGE = "cobol"', ConfigValueError),
        ("CONVERSION", 'TARGET_LANGUAGES = "java"', ConfigTypeError),
        ("CONVERSION", 'TARGET_LANGUAGES = ["java"]', ConfigValueError),
        ("CONVERSION", 'TARGET_LANGUAGES = ["java", "typescript"]', ConfigValueError),
        ("CONVERSION", 'TARGET_LANGUAGES = ["java", "kotlin"]', ConfigValueError),
        ("CONVERSION", 'TARGET_LANGUAGES = ["java",', ConfigFormatError),
    ],
)
def test_invalid_values_raise(tmp_path: Path, section: str, content: str, error: type[Exception]) -> None:
    ini_path: Path = _write_ini(tmp_path, f"[{section}]\n{content}\n")

    with pytest.raises(error):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_unparsable_file_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "MODE = adaptive\n")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_validate_threshold_accepts_integers() -> None:
    assert validate_threshold(1) == 1.0
    with pytest.raises(ConfigTypeError):
        validate_threshold(True)


def test_validate_base_url() -> None:
    assert validate_base_url("http://localhost:11434") == "http://localhost:11434"
    with pytest.raises(ConfigValueError):
        validate_base_url(None)


def test_sample_configuration_file_is_valid() -> None:
    sample: Path = Path(__file__).resolve().parents[2] / "codeconvert.ini"

    config: Config = ConfigLoader(config_filename=str(sample), script_name="test").config

    assert config.POLICY.MODE == "adaptive"
    assert config.GENERAL.LOG_FILE == "codeconvert.log"
