"""Rule-based code translation.

This package provides deterministic, regex-driven translators registered per language pair
and a manager that falls back to a generic pass-through conversion.
"""

from core.rules.generic import GenericTranslator
from core.rules.interface import RuleTranslator, TableTranslator
from core.rules.manager import RuleTranslatorManager

__all__: list[str] = [
    "GenericTranslator",
    "RuleTranslator",
    "RuleTranslatorManager",
    "TableTranslator",
]
