"""Exceptions raised while converting code.

None of these escape the policy engine: each one has a local recovery path
(rule-based fallback or the generic translator).
"""

from __future__ import annotations

__all__: list[str] = [
    "ConversionError",
    "ModelUnavailableError",
    "NoRuleAvailableError",
    "ValidationFailedError",
]


class ConversionError(Exception):
    """An error occurred during the conversion process."""


class ModelUnavailableError(ConversionError):
    """The model server could not produce a usable translation (network, timeout, status or empty response)."""


class ValidationFailedError(ConversionError):
    """A produced translation is empty, placeholder-only or contains nothing but comments."""


class NoRuleAvailableError(ConversionError):
    """No rewrite rule table exists for the requested language pair."""
