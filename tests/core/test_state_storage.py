from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.state_storage import StateStorage, StateStorageError
from models.learning_models import (
    ConfidenceStats,
    ConversionDifference,
    ConversionHistoryEntry,
    PersistedSettings,
    PersistedState,
)

if TYPE_CHECKING:
    from pathlib import Path


def _state() -> PersistedState:
    return PersistedState(
        stats=ConfidenceStats(total_conversions=4, manual_successes=3, ai_corrections=1, current_confidence=0.75),
        patterns=[["typescript->java:KEYWORD x = NUMBER", "int x = 5;"]],
        history=[
            ConversionHistoryEntry(
                key="typescript_python_1",
                source_code="let x = 5",
                from_lang="typescript",
                to_lang="python",
                rule_result="x = 5",
                ai_result="x: int = 5",
                detected_differences=[ConversionDifference(kind="better_typing", model_lines=[": int"])],
                timestamp=1.5,
            )
        ],
        settings=PersistedSettings(mode="always-model", confidence_threshold=0.6),
    )


def test_state_storage_load_empty(tmp_path: Path) -> None:
    storage = StateStorage(tmp_path / "state.db")
    with storage:
        state: PersistedState = storage.load()
    assert state == PersistedState()


def test_state_storage_save_and_load(tmp_path: Path) -> None:
    db_path = tmp_path / "nested" / "state.db"
    with StateStorage(db_path) as storage:
        storage.save(_state())

    with StateStorage(db_path) as storage:
        loaded: PersistedState = storage.load()

    assert loaded == _state()


def test_state_storage_uses_camel_case_layout(tmp_path: Path) -> None:
    with StateStorage(tmp_path / "state.db") as storage:
        storage.save(_state())
        value: str = storage.connection.execute("SELECT value FROM state").fetchone()["value"]

    assert '"totalConversions": 4' in value
    assert '"aiResult": "x: int = 5"' in value
    assert '"type": "better_typing"' in value


def test_state_storage_partial_data_is_merged_over_defaults(tmp_path: Path) -> None:
    with StateStorage(tmp_path / "state.db") as storage:
        storage.connection.execute(
            "INSERT INTO state (key, value, updated_at) VALUES (?, ?, ?)",
            ("learning_state", '{"stats": {"totalConversions": 2, "manualSuccesses": 2}}', 0.0),
        )
        loaded: PersistedState = storage.load()

    assert loaded.stats.total_conversions == 2
    assert loaded.stats.current_confidence == 0.3
    assert loaded.patterns == []
    assert loaded.settings == PersistedSettings()


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"stats": 5}'])
def test_state_storage_malformed_data_yields_defaults(tmp_path: Path, raw: str) -> None:
    with StateStorage(tmp_path / "state.db") as storage:
        storage.connection.execute(
            "INSERT INTO state (key, value, updated_at) VALUES (?, ?, ?)", ("learning_state", raw, 0.0)
        )
        loaded: PersistedState = storage.load()

    assert loaded == PersistedState()


def test_state_storage_clear(tmp_path: Path) -> None:
    with StateStorage(tmp_path / "state.db") as storage:
        storage.save(_state())
        storage.clear()
        loaded: PersistedState = storage.load()
    assert loaded == PersistedState()


def test_state_storage_opens_lazily(tmp_path: Path) -> None:
    storage = StateStorage(tmp_path / "state.db")
    try:
        storage.save(_state())
        assert storage.load().stats.total_conversions == 4
    finally:
        storage.close()


def test_state_storage_rejects_empty_path() -> None:
    with pytest.raises(StateStorageError):
        StateStorage("  ")


def test_state_storage_unopenable_path_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    storage = StateStorage(blocker / "state.db")
    with pytest.raises(StateStorageError):
        storage.save(PersistedState())
