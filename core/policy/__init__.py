"""Adaptive policy deciding between rule-based and model translations."""

from core.policy.confidence import ConfidenceTracker
from core.policy.engine import ConversionPolicyEngine, PolicyStatus
from core.policy.history import ConversionHistory
from core.policy.similarity import similarity
from core.policy.state import PolicyEngineState

__all__: list[str] = [
    "ConfidenceTracker",
    "ConversionHistory",
    "ConversionPolicyEngine",
    "PolicyEngineState",
    "PolicyStatus",
    "similarity",
]
