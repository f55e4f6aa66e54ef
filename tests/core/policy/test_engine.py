from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.cache.pattern_cache import generate_pattern_key
from core.errors import ModelUnavailableError
from core.llm.client import ModelTranslationClient
from core.policy.confidence import ConfidenceTracker
from core.policy.engine import ConversionPolicyEngine, PolicyStatus
from core.policy.state import PolicyEngineState
from core.rules.manager import RuleTranslatorManager
from core.state_storage import StateStorage, StateStorageError
from models.config_models import Config
from models.conversion_models import ConversionRequest, ConversionResult
from models.learning_models import ConfidenceStats

SOURCE = "let x = 5"
REQUEST = ConversionRequest(SOURCE, "typescript", "java")
KEY: str = generate_pattern_key(SOURCE, "typescript", "java")


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def state() -> PolicyEngineState:
    return PolicyEngineState()


@pytest.fixture
def rules() -> MagicMock:
    mock = MagicMock(spec=RuleTranslatorManager)
    mock.translate.return_value = "a b c d"
    return mock


@pytest.fixture
def model() -> MagicMock:
    mock = MagicMock(spec=ModelTranslationClient)
    mock.translate = AsyncMock(return_value="a b x y")
    return mock


@pytest.fixture
def storage() -> MagicMock:
    return MagicMock(spec=StateStorage)


@pytest.fixture
def engine(
    config: Config, state: PolicyEngineState, rules: MagicMock, model: MagicMock, storage: MagicMock
) -> ConversionPolicyEngine:
    return ConversionPolicyEngine(config, state, rules, model, storage)


def _trusted_state() -> PolicyEngineState:
    stats = ConfidenceStats(total_conversions=10, manual_successes=9, ai_corrections=1, current_confidence=0.9)
    return PolicyEngineState(confidence=ConfidenceTracker(stats))


@pytest.mark.asyncio
async def test_identity_returns_source_without_mutation(
    engine: ConversionPolicyEngine, state: PolicyEngineState, rules: MagicMock, storage: MagicMock
) -> None:
    result: ConversionResult = await engine.convert(ConversionRequest(SOURCE, "java", "java"))

    assert result.text == SOURCE
    assert result.status == PolicyStatus.IDENTITY
    assert result.outcome == "identity"
    assert state.confidence.stats == ConfidenceStats()
    assert len(state.patterns) == 0
    rules.translate.assert_not_called()
    storage.save.assert_not_called()


@pytest.mark.asyncio
async def test_manual_only_uses_rules_and_skips_learning(
    config: Config, state: PolicyEngineState, model: MagicMock, storage: MagicMock
) -> None:
    config.POLICY.MODE = "manual-only"
    rules = RuleTranslatorManager()
    engine = ConversionPolicyEngine(config, state, rules, model, storage)

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == RuleTranslatorManager().translate(SOURCE, "typescript", "java")
    assert result.status == PolicyStatus.MANUAL_ONLY
    model.translate.assert_not_awaited()
    assert state.confidence.stats.total_conversions == 0
    assert len(state.patterns) == 0
    storage.save.assert_not_called()


@pytest.mark.asyncio
async def test_adaptive_low_confidence_consults_model(engine: ConversionPolicyEngine, model: MagicMock) -> None:
    await engine.convert(REQUEST)

    model.translate.assert_awaited_once_with(SOURCE, "typescript", "java")


@pytest.mark.asyncio
async def test_model_timeout_falls_back_to_rule(
    engine: ConversionPolicyEngine, state: PolicyEngineState, model: MagicMock, storage: MagicMock
) -> None:
    model.translate.side_effect = ModelUnavailableError("Model request timed out after 180.0 seconds")

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == "a b c d"
    assert result.status == PolicyStatus.MODEL_UNAVAILABLE
    assert result.outcome == "model_fallback"
    assert state.patterns.get(KEY) == "a b c d"
    assert state.confidence.stats.manual_successes == 1
    assert state.confidence.stats.total_conversions == 1
    storage.save.assert_called_once()


@pytest.mark.asyncio
async def test_rejected_model_output_falls_back_to_rule(
    engine: ConversionPolicyEngine, state: PolicyEngineState, model: MagicMock
) -> None:
    model.translate.return_value = "// TODO\n..."

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == "a b c d"
    assert result.status == PolicyStatus.MODEL_REJECTED
    assert state.patterns.get(KEY) == "a b c d"
    assert state.confidence.stats.manual_successes == 1


@pytest.mark.asyncio
async def test_low_similarity_applies_model_correction(
    engine: ConversionPolicyEngine, state: PolicyEngineState, storage: MagicMock
) -> None:
    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == "a b x y"
    assert result.status == PolicyStatus.MODEL_CORRECTION
    assert result.pattern_key == KEY
    assert state.patterns.get(KEY) == "a b x y"
    assert state.confidence.stats.ai_corrections == 1
    assert state.confidence.confidence == 0.0
    # no imports or annotations added, so nothing worth keeping in history
    assert len(state.history) == 0
    storage.save.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("rule_text", "model_text", "expected_outcome"),
    [
        ("a b c d e", "a b c d f", "model_correction"),
        ("a b c d e f", "a b c d e g", "rule_verified"),
    ],
)
async def test_similarity_threshold_is_strict(
    engine: ConversionPolicyEngine,
    rules: MagicMock,
    model: MagicMock,
    rule_text: str,
    model_text: str,
    expected_outcome: str,
) -> None:
    rules.translate.return_value = rule_text
    model.translate.return_value = model_text

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.outcome == expected_outcome


@pytest.mark.asyncio
async def test_high_similarity_verifies_rule(
    engine: ConversionPolicyEngine, state: PolicyEngineState, rules: MagicMock, model: MagicMock
) -> None:
    rules.translate.return_value = "int x = 5;"
    model.translate.return_value = "int  x = 5;\n"

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == "int x = 5;"
    assert result.status == PolicyStatus.RULE_VERIFIED
    assert state.patterns.get(KEY) == "int x = 5;"
    assert state.confidence.stats.manual_successes == 1


@pytest.mark.asyncio
async def test_model_correction_records_history(
    engine: ConversionPolicyEngine, state: PolicyEngineState, rules: MagicMock, model: MagicMock
) -> None:
    rules.translate.return_value = "x = 5"
    model.translate.return_value = "import os\n\nx: int = 5\ny = os.sep"
    request = ConversionRequest(SOURCE, "typescript", "python")

    await engine.convert(request)

    entries = state.history.entries
    assert len(entries) == 1
    assert entries[0].key.startswith("typescript_python_")
    assert entries[0].rule_result == "x = 5"
    assert [diff.kind for diff in entries[0].detected_differences] == ["missing_imports", "better_typing"]


@pytest.mark.asyncio
async def test_cache_hit_skips_rules_and_model(
    engine: ConversionPolicyEngine, state: PolicyEngineState, rules: MagicMock, model: MagicMock, storage: MagicMock
) -> None:
    first: ConversionResult = await engine.convert(REQUEST)
    stats_after_first = ConfidenceStats.from_dict(state.confidence.stats.to_dict())

    second: ConversionResult = await engine.convert(REQUEST)
    third: ConversionResult = await engine.convert(ConversionRequest("let x = 42", "typescript", "java"))

    assert second.text == third.text == first.text
    assert second.status == PolicyStatus.CACHE_HIT
    assert model.translate.await_count == 1
    assert rules.translate.call_count == 1
    assert state.confidence.stats == stats_after_first
    assert storage.save.call_count == 1


@pytest.mark.asyncio
async def test_disabled_mode_trusts_rule_without_caching(
    config: Config, engine: ConversionPolicyEngine, state: PolicyEngineState, model: MagicMock
) -> None:
    config.POLICY.MODE = "disabled"

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.text == "a b c d"
    assert result.status == PolicyStatus.MODEL_DISABLED
    assert result.outcome == "trusted_rule"
    model.translate.assert_not_awaited()
    assert len(state.patterns) == 0
    assert state.confidence.stats.manual_successes == 1


@pytest.mark.asyncio
async def test_trusted_rule_is_cached_when_enabled(
    config: Config, engine: ConversionPolicyEngine, state: PolicyEngineState
) -> None:
    config.POLICY.MODE = "disabled"
    config.POLICY.CACHE_TRUSTED_RULE_RESULTS = True

    await engine.convert(REQUEST)

    assert state.patterns.get(KEY) == "a b c d"


@pytest.mark.asyncio
async def test_high_confidence_trusts_rule(
    config: Config, rules: MagicMock, model: MagicMock, storage: MagicMock
) -> None:
    state = _trusted_state()
    engine = ConversionPolicyEngine(config, state, rules, model, storage)

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.status == PolicyStatus.TRUSTED_RULE
    model.translate.assert_not_awaited()
    assert state.confidence.stats.total_conversions == 11
    storage.save.assert_called_once()


@pytest.mark.asyncio
async def test_always_model_ignores_confidence(
    config: Config, rules: MagicMock, model: MagicMock, storage: MagicMock
) -> None:
    config.POLICY.MODE = "always-model"
    engine = ConversionPolicyEngine(config, _trusted_state(), rules, model, storage)

    await engine.convert(REQUEST)

    model.translate.assert_awaited_once()


@pytest.mark.asyncio
async def test_threshold_change_applies_to_next_request(
    config: Config, rules: MagicMock, model: MagicMock, storage: MagicMock
) -> None:
    engine = ConversionPolicyEngine(config, _trusted_state(), rules, model, storage)
    config.POLICY.CONFIDENCE_THRESHOLD = 0.95

    await engine.convert(REQUEST)

    model.translate.assert_awaited_once()


def test_should_use_model_false_for_known_pattern(engine: ConversionPolicyEngine, state: PolicyEngineState) -> None:
    assert engine.should_use_model(KEY) is True

    state.patterns.put(KEY, "int x = 5;")

    assert engine.should_use_model(KEY) is False


@pytest.mark.asyncio
async def test_storage_failure_does_not_interrupt_conversion(
    engine: ConversionPolicyEngine, state: PolicyEngineState, storage: MagicMock
) -> None:
    storage.save.side_effect = StateStorageError("disk full")

    result: ConversionResult = await engine.convert(REQUEST)

    assert result.status == PolicyStatus.MODEL_CORRECTION
    assert state.patterns.get(KEY) == "a b x y"
