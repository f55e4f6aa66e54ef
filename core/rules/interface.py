"""Abstract base class for rule-based translators.

Translators register themselves per (source, target) language pair when their class is
defined; ``RuleTranslator.lookup`` resolves a pair to a translator class.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, TypeAlias

from core.errors import NoRuleAvailableError
from models.conversion_models import LANGUAGE_TEMPLATES
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from re import Match, Pattern

__all__: list[str] = ["RewriteRule", "RuleTranslator", "TableTranslator", "rule"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

Replacement: TypeAlias = "str | Callable[[Match[str]], str]"
RewriteRule: TypeAlias = "tuple[Pattern[str], Replacement]"


def rule(pattern: str, replacement: Replacement, flags: int = 0) -> RewriteRule:
    """Compile a single rewrite rule.

    Args:
        pattern (str): Regular expression to search for.
        replacement (Replacement): Replacement template or callable, as accepted by ``re.sub``.
        flags (int): ``re`` flags.

    Returns:
        RewriteRule: The compiled rule.
    """
    return re.compile(pattern, flags), replacement


class RuleTranslator(ABC):
    """Deterministic translator for one language pair.

    Subclasses set ``SOURCE`` and ``TARGET`` to language codes; defining such a subclass
    registers it. Subclasses leaving either empty are abstract helpers and are not registered.

    Attributes:
        registered (ClassVar[dict[tuple[str, str], type[RuleTranslator]]]): Registry keyed by language pair.
        SOURCE (ClassVar[str]): Source language code.
        TARGET (ClassVar[str]): Target language code.
    """

    registered: ClassVar[dict[tuple[str, str], type[RuleTranslator]]] = {}
    SOURCE: ClassVar[str] = ""
    TARGET: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.SOURCE or not cls.TARGET:
            return

        for lang in (cls.SOURCE, cls.TARGET):
            if lang not in LANGUAGE_TEMPLATES:
                msg: str = f"Unknown language code '{lang}' in {cls.__name__}"
                raise ValueError(msg)

        pair: tuple[str, str] = (cls.SOURCE, cls.TARGET)
        if pair in cls.registered:
            msg = f"A rule translator for '{cls.SOURCE}' -> '{cls.TARGET}' is already registered."
            raise ValueError(msg)
        cls.registered[pair] = cls

    @classmethod
    def lookup(cls, from_lang: str, to_lang: str) -> type[RuleTranslator]:
        """Return the translator class registered for a language pair.

        Raises:
            NoRuleAvailableError: If no translator is registered for the pair.
        """
        try:
            return cls.registered[(from_lang, to_lang)]
        except KeyError:
            msg: str = f"No rule table for '{from_lang}' -> '{to_lang}'"
            raise NoRuleAvailableError(msg) from None

    @abstractmethod
    def translate(self, code: str) -> str:
        """Translate source code. Must be pure and must not raise on any input."""
        raise NotImplementedError


class TableTranslator(RuleTranslator):
    """Translator driven by an ordered substitution table.

    ``PREPROCESS`` rules run first, then ``REWRITES``; the result is prefixed with ``HEADER``.

    Attributes:
        HEADER (ClassVar[str]): Text placed before the converted code (usually a comment block).
        PREPROCESS (ClassVar[tuple[RewriteRule, ...]]): Rules normalizing the input dialect.
        REWRITES (ClassVar[tuple[RewriteRule, ...]]): Main substitution table.
    """

    HEADER: ClassVar[str] = ""
    PREPROCESS: ClassVar[tuple[RewriteRule, ...]] = ()
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = ()

    def rewrite(self, code: str) -> str:
        """Apply the preprocessing and rewrite tables without adding the header."""
        converted: str = code
        for pattern, replacement in (*self.PREPROCESS, *self.REWRITES):
            converted = pattern.sub(replacement, converted)
        return converted

    def translate(self, code: str) -> str:
        return f"{self.HEADER}{self.rewrite(code)}"
