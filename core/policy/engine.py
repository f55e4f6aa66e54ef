"""Conversion policy engine.

Decides per request whether the rule-based translation can be trusted on its own or
whether the model is consulted, reconciles the two results, and records the decision in
the pattern cache and the confidence statistics.

Request flow::

    CacheCheck --hit--> done
        | miss
    RuleOnly -> Decide --trust--> TrustRule
                  | use model
               InvokeModel --failure--> FallbackToRule
                  | success
               Reconcile (rule verified | model correction)

Every terminal state that changed the learning state persists it before returning.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Final

from core.cache.pattern_cache import generate_pattern_key
from core.errors import ModelUnavailableError, ValidationFailedError
from core.llm.response import validate_model_output
from core.policy.differences import find_conversion_differences
from core.policy.similarity import similarity
from core.state_storage import StateStorageError
from models.conversion_models import ConversionResult
from models.learning_models import ConversionDifference, ConversionHistoryEntry
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.llm.client import ModelTranslationClient
    from core.policy.state import PolicyEngineState
    from core.rules.manager import RuleTranslatorManager
    from core.state_storage import StateStorage
    from models.config_models import Config
    from models.conversion_models import ConversionRequest

__all__: list[str] = ["ConversionPolicyEngine", "PolicyStatus"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class PolicyStatus:
    """Human-readable status messages attached to every result."""

    IDENTITY: Final[str] = "Source and target languages are identical"
    MANUAL_ONLY: Final[str] = "Manual rules only"
    CACHE_HIT: Final[str] = "Used learned pattern (no AI needed)"
    TRUSTED_RULE: Final[str] = "High confidence - using manual conversion"
    MODEL_DISABLED: Final[str] = "AI disabled - using manual conversion"
    MODEL_UNAVAILABLE: Final[str] = "Model unavailable - using rule-based fallback"
    MODEL_REJECTED: Final[str] = "Model output rejected - using rule-based fallback"
    RULE_VERIFIED: Final[str] = "Manual conversion verified - pattern learned"
    MODEL_CORRECTION: Final[str] = "AI correction applied - new pattern learned"


class ConversionPolicyEngine:
    """Choose between the rule-based and the model translation of a request.

    The engine mutates ``state`` and nothing else. The operation mode and the confidence
    threshold are read from the configuration on every request, so a settings change
    applies to the next conversion.
    """

    def __init__(
        self,
        config: Config,
        state: PolicyEngineState,
        rules: RuleTranslatorManager,
        model: ModelTranslationClient,
        storage: StateStorage | None = None,
    ) -> None:
        self.config: Config = config
        self.state: PolicyEngineState = state
        self.rules: RuleTranslatorManager = rules
        self.model: ModelTranslationClient = model
        self.storage: StateStorage | None = storage

    @property
    def mode(self) -> str:
        return self.config.POLICY.MODE

    @property
    def confidence_threshold(self) -> float:
        return self.config.POLICY.CONFIDENCE_THRESHOLD

    @property
    def similarity_threshold(self) -> float:
        return self.config.POLICY.SIMILARITY_THRESHOLD

    def should_use_model(self, key: str) -> bool:
        """Decide whether the model is consulted for an uncached request."""
        if self.mode == "always-model":
            return True
        if self.mode != "adaptive":
            return False
        return self.state.confidence.confidence < self.confidence_threshold and key not in self.state.patterns

    def persist(self) -> None:
        """Write the learning state. Storage failures are logged and never interrupt a conversion."""
        if self.storage is None:
            return
        try:
            self.storage.save(self.state.to_persisted())
        except StateStorageError as err:
            logger.error("Failed to persist learning state: %s", err)

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        """Translate one request according to the current policy.

        Args:
            request (ConversionRequest): Code and language pair.

        Returns:
            ConversionResult: Final text, status message and the terminal state reached.
        """
        if request.is_identity:
            return ConversionResult(text=request.source_code, status=PolicyStatus.IDENTITY, outcome="identity")

        if self.mode == "manual-only":
            text: str = self.rules.translate(request.source_code, request.from_lang, request.to_lang)
            return ConversionResult(text=text, status=PolicyStatus.MANUAL_ONLY, outcome="manual_only")

        key: str = generate_pattern_key(
            request.source_code, request.from_lang, request.to_lang, self.config.POLICY.KEY_NORMALIZATION
        )
        cached: str | None = self.state.patterns.get(key)
        if cached is not None:
            logger.info("Learned pattern hit: %s", StringUtils.preview(key))
            return ConversionResult(text=cached, status=PolicyStatus.CACHE_HIT, outcome="cache_hit", pattern_key=key)

        rule_result: str = self.rules.translate(request.source_code, request.from_lang, request.to_lang)

        if not self.should_use_model(key):
            return self._trust_rule(key, rule_result)

        try:
            model_result: str = await self.model.translate(request.source_code, request.from_lang, request.to_lang)
            validate_model_output(model_result, request.to_lang)
        except ModelUnavailableError as err:
            logger.warning("Model translation failed: %s", err)
            return self._fallback_to_rule(key, rule_result, PolicyStatus.MODEL_UNAVAILABLE)
        except ValidationFailedError as err:
            logger.warning("Model translation rejected: %s", err)
            return self._fallback_to_rule(key, rule_result, PolicyStatus.MODEL_REJECTED)

        return self._reconcile(request, key, rule_result, model_result)

    def _trust_rule(self, key: str, rule_result: str) -> ConversionResult:
        self.state.confidence.record_outcome(used_rule_as_final=True)
        if self.config.POLICY.CACHE_TRUSTED_RULE_RESULTS:
            self.state.patterns.put(key, rule_result)
        self.persist()

        status: str = PolicyStatus.TRUSTED_RULE if self.mode == "adaptive" else PolicyStatus.MODEL_DISABLED
        return ConversionResult(text=rule_result, status=status, outcome="trusted_rule", pattern_key=key)

    def _fallback_to_rule(self, key: str, rule_result: str, status: str) -> ConversionResult:
        self.state.patterns.put(key, rule_result)
        self.state.confidence.record_outcome(used_rule_as_final=True)
        self.persist()
        return ConversionResult(text=rule_result, status=status, outcome="model_fallback", pattern_key=key)

    def _reconcile(
        self, request: ConversionRequest, key: str, rule_result: str, model_result: str
    ) -> ConversionResult:
        score: float = similarity(rule_result, model_result)
        logger.info("Rule/model similarity %.2f (threshold %.2f)", score, self.similarity_threshold)

        if score > self.similarity_threshold:
            self.state.patterns.put(key, rule_result)
            self.state.confidence.record_outcome(used_rule_as_final=True)
            self.persist()
            return ConversionResult(
                text=rule_result, status=PolicyStatus.RULE_VERIFIED, outcome="rule_verified", pattern_key=key
            )

        self.state.patterns.put(key, model_result)
        self.state.confidence.record_outcome(used_rule_as_final=False)

        differences: list[ConversionDifference] = find_conversion_differences(rule_result, model_result)
        if differences:
            self.state.history.append(
                ConversionHistoryEntry(
                    key=f"{request.from_lang}_{request.to_lang}_{time.time_ns()}",
                    source_code=request.source_code,
                    from_lang=request.from_lang,
                    to_lang=request.to_lang,
                    rule_result=rule_result,
                    ai_result=model_result,
                    detected_differences=differences,
                    timestamp=time.time(),
                )
            )
            logger.debug("Recorded %d differences for rule improvement", len(differences))

        self.persist()
        return ConversionResult(
            text=model_result, status=PolicyStatus.MODEL_CORRECTION, outcome="model_correction", pattern_key=key
        )
