from __future__ import annotations

import re
from typing import TYPE_CHECKING

from core.errors import NoRuleAvailableError
from core.rules import engines  # noqa: F401
from core.rules.generic import GenericTranslator
from core.rules.interface import RuleTranslator
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["RuleTranslatorManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class RuleTranslatorManager:
    """Resolves language pairs to rule translators and runs them.

    ``translate`` is total: pairs without a rule table, and tables that fail on unusual
    input, fall back to the generic pass-through conversion.
    """

    def __init__(self) -> None:
        self._instances: dict[tuple[str, str], RuleTranslator] = {}
        logger.debug("Registered rule translators: %s", sorted(RuleTranslator.registered))

    def _get_instance(self, from_lang: str, to_lang: str) -> RuleTranslator:
        pair: tuple[str, str] = (from_lang, to_lang)
        instance: RuleTranslator | None = self._instances.get(pair)
        if instance is None:
            instance = RuleTranslator.lookup(from_lang, to_lang)()
            self._instances[pair] = instance
        return instance

    def translate(self, code: str, from_lang: str, to_lang: str) -> str:
        """Translate code with the rule table of the language pair.

        Args:
            code (str): Source code.
            from_lang (str): Source language code.
            to_lang (str): Target language code.

        Returns:
            str: Best-effort translation; the input itself when both languages are equal.
        """
        if from_lang == to_lang:
            return code

        try:
            return self._get_instance(from_lang, to_lang).translate(code)
        except NoRuleAvailableError as err:
            logger.debug("%s; using generic conversion", err)
        except (re.error, IndexError, ValueError) as err:
            logger.error("Rule table '%s' -> '%s' failed: %s; using generic conversion", from_lang, to_lang, err)
        return GenericTranslator(from_lang, to_lang).translate(code)
