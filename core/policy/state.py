from __future__ import annotations

from dataclasses import dataclass, field

from core.cache.inflight_manager import InFlightGuard
from core.cache.pattern_cache import PatternCache
from core.policy.confidence import ConfidenceTracker
from core.policy.history import ConversionHistory
from models.learning_models import PersistedSettings, PersistedState

__all__: list[str] = ["PolicyEngineState"]


@dataclass
class PolicyEngineState:
    """Mutable learning state shared by reference with the policy engine.

    The engine is the only writer of ``confidence``, ``patterns`` and ``history``. The
    state carries no lock: a deployment with several concurrent workers must serialize
    access itself. Within one process the ``guard`` ensures a single conversion runs at a time.

    Attributes:
        confidence (ConfidenceTracker): Confidence statistics.
        patterns (PatternCache): Learned conversion patterns.
        history (ConversionHistory): Recent model corrections.
        settings (PersistedSettings): Runtime setting overrides.
        guard (InFlightGuard): Request-in-flight guard.
    """

    confidence: ConfidenceTracker = field(default_factory=ConfidenceTracker)
    patterns: PatternCache = field(default_factory=PatternCache)
    history: ConversionHistory = field(default_factory=ConversionHistory)
    settings: PersistedSettings = field(default_factory=PersistedSettings)
    guard: InFlightGuard = field(default_factory=InFlightGuard)

    @classmethod
    def from_persisted(cls, persisted: PersistedState) -> PolicyEngineState:
        """Build the live state from a stored snapshot."""
        return cls(
            confidence=ConfidenceTracker(persisted.stats),
            patterns=PatternCache(persisted.patterns),
            history=ConversionHistory(persisted.history),
            settings=persisted.settings,
        )

    def to_persisted(self) -> PersistedState:
        """Snapshot of the state; only the most recent history entries are included."""
        return PersistedState(
            stats=self.confidence.stats,
            patterns=self.patterns.to_pairs(),
            history=self.history.recent(),
            settings=self.settings,
        )

    def reset_learning(self) -> None:
        """Wipe statistics, patterns and history. Settings are kept."""
        self.confidence.reset()
        self.patterns.clear()
        self.history.clear()
