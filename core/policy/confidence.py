from __future__ import annotations

from typing import TYPE_CHECKING

from models.learning_models import INITIAL_CONFIDENCE, ConfidenceStats
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["ConfidenceTracker"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ConfidenceTracker:
    """Running estimate of how often the rule-based translation is good enough on its own.

    The confidence is the share of conversions whose final output was the rule-based
    result. Until the first conversion it holds the prior ``INITIAL_CONFIDENCE``.
    """

    def __init__(self, stats: ConfidenceStats | None = None) -> None:
        """Track the given statistics, recomputing a stored confidence that disagrees with its counters."""
        self.stats: ConfidenceStats = stats if stats is not None else ConfidenceStats()
        stored: float = self.stats.current_confidence
        self._recompute()
        if self.stats.current_confidence != stored:
            logger.warning(
                "Stored confidence %r does not match the statistics; using %.2f", stored, self.stats.current_confidence
            )

    @property
    def confidence(self) -> float:
        return self.stats.current_confidence

    def record_outcome(self, used_rule_as_final: bool) -> None:
        """Count one finished conversion and recompute the confidence.

        Args:
            used_rule_as_final (bool): True when the rule-based result was returned.
        """
        self.stats.total_conversions += 1
        if used_rule_as_final:
            self.stats.manual_successes += 1
        else:
            self.stats.ai_corrections += 1

        self._recompute()
        logger.debug(
            "Confidence %.2f after %d conversions (%d manual, %d AI)",
            self.stats.current_confidence,
            self.stats.total_conversions,
            self.stats.manual_successes,
            self.stats.ai_corrections,
        )

    def _recompute(self) -> None:
        if self.stats.total_conversions <= 0:
            self.stats.current_confidence = INITIAL_CONFIDENCE
            return
        ratio: float = self.stats.manual_successes / self.stats.total_conversions
        self.stats.current_confidence = min(1.0, max(0.0, ratio))

    def reset(self) -> None:
        """Restore the initial statistics in place."""
        self.stats.total_conversions = 0
        self.stats.manual_successes = 0
        self.stats.ai_corrections = 0
        self.stats.current_confidence = INITIAL_CONFIDENCE
