"""Core conversion components for codeconvert.

This package contains the conversion front end, the adaptive policy engine, the rule-based
and model translators, the pattern cache and the learning state storage.
"""

from core.converter import CodeConverter
from core.errors import ConversionError, ModelUnavailableError, NoRuleAvailableError, ValidationFailedError
from core.state_storage import StateStorage
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "CodeConverter",
    "ConversionError",
    "ModelUnavailableError",
    "NoRuleAvailableError",
    "StateStorage",
    "ValidationFailedError",
]
