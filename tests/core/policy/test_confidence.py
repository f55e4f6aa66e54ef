from __future__ import annotations

import random

import pytest

from core.policy.confidence import ConfidenceTracker
from core.policy.state import PolicyEngineState
from models.learning_models import INITIAL_CONFIDENCE, ConfidenceStats, PersistedState


def test_initial_confidence_is_prior() -> None:
    tracker = ConfidenceTracker()

    assert tracker.confidence == INITIAL_CONFIDENCE == 0.3
    assert tracker.stats.total_conversions == 0


def test_record_rule_outcome() -> None:
    tracker = ConfidenceTracker()

    tracker.record_outcome(used_rule_as_final=True)

    assert tracker.stats == ConfidenceStats(
        total_conversions=1, manual_successes=1, ai_corrections=0, current_confidence=1.0
    )


def test_record_model_outcome() -> None:
    tracker = ConfidenceTracker()

    tracker.record_outcome(used_rule_as_final=True)
    tracker.record_outcome(used_rule_as_final=False)

    assert tracker.stats.total_conversions == 2
    assert tracker.stats.ai_corrections == 1
    assert tracker.confidence == pytest.approx(0.5)


def test_confidence_stays_in_range_for_any_sequence() -> None:
    rng = random.Random(1234)
    tracker = ConfidenceTracker()

    for _ in range(500):
        tracker.record_outcome(used_rule_as_final=rng.random() < 0.5)
        stats: ConfidenceStats = tracker.stats
        assert 0.0 <= stats.current_confidence <= 1.0
        assert stats.total_conversions == stats.manual_successes + stats.ai_corrections
        assert stats.current_confidence == pytest.approx(stats.manual_successes / stats.total_conversions)


def test_reset_restores_defaults_in_place() -> None:
    stats = ConfidenceStats()
    tracker = ConfidenceTracker(stats)
    tracker.record_outcome(used_rule_as_final=False)

    tracker.reset()

    assert tracker.stats is stats
    assert stats == ConfidenceStats()


@pytest.mark.parametrize(
    ("stats", "expected"),
    [
        (ConfidenceStats(total_conversions=4, manual_successes=1, ai_corrections=3, current_confidence=0.95), 0.25),
        (ConfidenceStats(total_conversions=2, manual_successes=5, ai_corrections=0, current_confidence=1.0), 1.0),
        (ConfidenceStats(total_conversions=0, manual_successes=0, ai_corrections=0, current_confidence=7.5), 0.3),
    ],
)
def test_stored_confidence_is_recomputed_from_counters(stats: ConfidenceStats, expected: float) -> None:
    tracker = ConfidenceTracker(stats)

    assert tracker.confidence == pytest.approx(expected)
    assert tracker.stats is stats


def test_state_from_snapshot_trusts_counters_not_stored_confidence() -> None:
    persisted = PersistedState(
        stats=ConfidenceStats(total_conversions=10, manual_successes=2, ai_corrections=8, current_confidence=0.99)
    )

    state = PolicyEngineState.from_persisted(persisted)

    assert state.confidence.confidence == pytest.approx(0.2)
