"""Data models for codeconvert.

This package contains dataclass definitions for configuration, conversion requests and results,
learning state, model server payloads, and regular expression patterns used throughout the application.
"""

from __future__ import annotations

from models.config_models import Config
from models.conversion_models import (
    KEY_NORMALIZATIONS,
    LANGUAGE_TEMPLATES,
    OPERATION_MODES,
    ConversionOutput,
    ConversionRequest,
    ConversionResult,
    LanguageTemplate,
)
from models.learning_models import (
    ConfidenceStats,
    ConversionDifference,
    ConversionHistoryEntry,
    PersistedSettings,
    PersistedState,
)
from models.model_server_models import GenerateOptions, GenerateRequest, ModelInfo

__all__: list[str] = [
    "KEY_NORMALIZATIONS",
    "LANGUAGE_TEMPLATES",
    "OPERATION_MODES",
    "ConfidenceStats",
    "Config",
    "ConversionDifference",
    "ConversionHistoryEntry",
    "ConversionOutput",
    "ConversionRequest",
    "ConversionResult",
    "GenerateOptions",
    "GenerateRequest",
    "LanguageTemplate",
    "ModelInfo",
    "PersistedSettings",
    "PersistedState",
]
