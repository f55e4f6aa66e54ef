"""Models for conversion requests and results.

Defines the supported language table, conversion request/result dataclasses and the
operation mode identifiers shared by the policy engine and the configuration layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

__all__: list[str] = [
    "KEY_NORMALIZATIONS",
    "LANGUAGE_TEMPLATES",
    "OPERATION_MODES",
    "ConversionOutcome",
    "ConversionOutput",
    "ConversionRequest",
    "ConversionResult",
    "KeyNormalization",
    "LanguageTemplate",
    "OperationMode",
]

OperationMode: TypeAlias = Literal["adaptive", "always-model", "manual-only", "disabled"]

ConversionOutcome: TypeAlias = Literal[
    "identity",
    "manual_only",
    "cache_hit",
    "trusted_rule",
    "model_fallback",
    "rule_verified",
    "model_correction",
]

OPERATION_MODES: Final[tuple[str, ...]] = ("adaptive", "always-model", "manual-only", "disabled")

# How aggressively source code is abstracted before it becomes a pattern key
KeyNormalization: TypeAlias = Literal["structural", "aggressive"]

KEY_NORMALIZATIONS: Final[tuple[str, ...]] = ("structural", "aggressive")


@dataclass(frozen=True)
class LanguageTemplate:
    """Display and comment syntax of a supported language.

    Attributes:
        name (str): Human-readable language name.
        extension (str): Source file extension including the dot.
        comment (str): Line comment marker.
        block_comment (tuple[str, str]): Block comment opening and closing markers.
    """

    name: str
    extension: str
    comment: str
    block_comment: tuple[str, str]

    def comment_line(self, text: str) -> str:
        """Format text as a single line comment."""
        return f"{self.comment} {text}"


LANGUAGE_TEMPLATES: Final[dict[str, LanguageTemplate]] = {
    "typescript": LanguageTemplate("TypeScript", ".ts", "//", ("/*", "*/")),
    "javascript": LanguageTemplate("JavaScript", ".js", "//", ("/*", "*/")),
    "java": LanguageTemplate("Java", ".java", "//", ("/*", "*/")),
    "csharp": LanguageTemplate("C#", ".cs", "//", ("/*", "*/")),
    "python": LanguageTemplate("Python", ".py", "#", ('"""', '"""')),
    "cpp": LanguageTemplate("C++", ".cpp", "//", ("/*", "*/")),
    "go": LanguageTemplate("Go", ".go", "//", ("/*", "*/")),
    "rust": LanguageTemplate("Rust", ".rs", "//", ("/*", "*/")),
}


@dataclass(frozen=True)
class ConversionRequest:
    """A single source-to-target conversion request.

    Attributes:
        source_code (str): Code to convert.
        from_lang (str): Source language code (key of LANGUAGE_TEMPLATES).
        to_lang (str): Target language code (key of LANGUAGE_TEMPLATES).
    """

    source_code: str
    from_lang: str
    to_lang: str

    @property
    def is_identity(self) -> bool:
        """True when no translation is required."""
        return self.from_lang == self.to_lang


@dataclass
class ConversionResult:
    """Outcome of one request passing through the policy engine.

    Attributes:
        text (str): Final translated text.
        status (str): Human-readable trust message for the display surface.
        outcome (ConversionOutcome): Terminal state reached by the engine.
        pattern_key (str | None): Pattern key of the request, None when the cache was not consulted.
    """

    text: str
    status: str
    outcome: ConversionOutcome
    pattern_key: str | None = None


@dataclass
class ConversionOutput:
    """Two-target result handed to the display surface.

    Result texts are None when the conversion failed and prior output must be kept.
    """

    target1: str | None = None
    target2: str | None = None
    status: str = ""
    success: bool = False
    results: tuple[ConversionResult, ...] = ()
