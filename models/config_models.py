"""Configuration data models for codeconvert.

Each dataclass maps to one section of ``codeconvert.ini``; field names match the INI keys.
Defaults are the values used when a key (or the whole file) is absent.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Config",
    "Conversion",
    "General",
    "Model",
    "Policy",
]


@dataclass
class General:
    DEBUG: bool = False
    VERSION: str = ""
    SCRIPT_NAME: str = ""
    LOG_FILE: str = ""
    STATE_FILE: str = "codeconvert_state.db"


@dataclass
class Model:
    BASE_URL: str = "http://localhost:11434"
    MODEL: str = "llama3.2:latest"
    TIMEOUT: float = 180.0
    PROBE_TIMEOUT: float = 5.0
    MIN_RESPONSE_LENGTH: int = 10
    TEMPERATURE: float = 0.1
    TOP_P: float = 0.9


@dataclass
class Policy:
    MODE: str = "adaptive"
    CONFIDENCE_THRESHOLD: float = 0.8
    SIMILARITY_THRESHOLD: float = 0.8
    KEY_NORMALIZATION: str = "structural"
    CACHE_TRUSTED_RULE_RESULTS: bool = False


@dataclass
class Conversion:
    SOURCE_LANGUAGE: str = "typescript"
    TARGET_LANGUAGES: list[str] = field(default_factory=lambda: ["java", "python"])


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    MODEL: Model = field(default_factory=Model)
    POLICY: Policy = field(default_factory=Policy)
    CONVERSION: Conversion = field(default_factory=Conversion)
