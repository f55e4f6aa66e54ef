"""Models for adaptive learning state.

Confidence statistics, conversion history and the persisted state blob. The JSON layout
uses camelCase keys so that snapshots stay compatible with earlier saved data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from dataclasses_json import DataClassJsonMixin, LetterCase, config, dataclass_json

__all__: list[str] = [
    "INITIAL_CONFIDENCE",
    "ConfidenceStats",
    "ConversionDifference",
    "ConversionHistoryEntry",
    "PersistedSettings",
    "PersistedState",
]

INITIAL_CONFIDENCE: Final[float] = 0.3


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class ConfidenceStats(DataClassJsonMixin):
    """Running statistics behind the rule translator trust score.

    Attributes:
        total_conversions (int): Conversions whose outcome was recorded.
        manual_successes (int): Outcomes where the rule-based result was final.
        ai_corrections (int): Outcomes where the model result replaced the rule-based result.
        current_confidence (float): manual_successes / total_conversions, or the prior before any outcome.
    """

    total_conversions: int = 0
    manual_successes: int = 0
    ai_corrections: int = 0
    current_confidence: float = INITIAL_CONFIDENCE


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class ConversionDifference(DataClassJsonMixin):
    """Advisory difference found between rule-based and model output."""

    kind: str = field(metadata=config(field_name="type"))
    rule_lines: list[str] = field(default_factory=list)
    model_lines: list[str] = field(default_factory=list)
    improvement: str = ""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class ConversionHistoryEntry(DataClassJsonMixin):
    """Record of a model correction kept for later rule mining.

    Attributes:
        key (str): Unique entry identifier.
        source_code (str): Original source code.
        from_lang (str): Source language code.
        to_lang (str): Target language code.
        rule_result (str): Rule-based translation.
        ai_result (str): Model translation.
        detected_differences (list[ConversionDifference]): Heuristic differences.
        timestamp (float): Unix time of the conversion.
    """

    key: str
    source_code: str
    from_lang: str
    to_lang: str
    rule_result: str
    ai_result: str
    detected_differences: list[ConversionDifference] = field(default_factory=list)
    timestamp: float = 0.0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class PersistedSettings(DataClassJsonMixin):
    """Runtime settings changed from the configuration surface.

    None means "not overridden"; the INI configuration value applies.
    """

    mode: str | None = None
    confidence_threshold: float | None = None
    model: str | None = None
    base_url: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class PersistedState(DataClassJsonMixin):
    """Serialized blob written to the state storage.

    Attributes:
        stats (ConfidenceStats): Confidence statistics.
        patterns (list[list[str]]): Pattern cache as [key, text] pairs.
        history (list[ConversionHistoryEntry]): Most recent history entries.
        settings (PersistedSettings): Runtime setting overrides.
    """

    stats: ConfidenceStats = field(default_factory=ConfidenceStats)
    patterns: list[list[str]] = field(default_factory=list)
    history: list[ConversionHistoryEntry] = field(default_factory=list)
    settings: PersistedSettings = field(default_factory=PersistedSettings)
