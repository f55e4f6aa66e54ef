from __future__ import annotations

from core.policy.differences import find_conversion_differences
from core.policy.history import ConversionHistory
from models.learning_models import ConversionDifference, ConversionHistoryEntry


def _entry(index: int) -> ConversionHistoryEntry:
    return ConversionHistoryEntry(
        key=f"typescript_java_{index}",
        source_code=f"let x = {index}",
        from_lang="typescript",
        to_lang="java",
        rule_result="rule",
        ai_result="model",
        timestamp=float(index),
    )


def test_append_below_limit_keeps_everything() -> None:
    history = ConversionHistory()

    for index in range(100):
        history.append(_entry(index))

    assert len(history) == 100


def test_101st_append_keeps_50_most_recent() -> None:
    history = ConversionHistory(_entry(index) for index in range(100))

    history.append(_entry(100))

    assert len(history) == 50
    assert [entry.key for entry in history] == [f"typescript_java_{index}" for index in range(51, 101)]


def test_recent_returns_persisted_window() -> None:
    history = ConversionHistory(_entry(index) for index in range(30))

    recent: list[ConversionHistoryEntry] = history.recent()

    assert len(recent) == ConversionHistory.PERSISTED_ENTRIES == 20
    assert recent[-1].key == "typescript_java_29"
    assert history.recent(0) == []


def test_differences_detect_imports_and_typing() -> None:
    rule = "x = 5\ndef f(a):\n    return a"
    model = "from typing import Any\nimport os\n\nx: int = 5\ndef f(a: Any) -> Any:\n    return a"

    differences: list[ConversionDifference] = find_conversion_differences(rule, model)

    assert [diff.kind for diff in differences] == ["missing_imports", "better_typing"]
    assert differences[0].model_lines == ["from typing import Any", "import os"]
    assert differences[0].improvement == "AI added necessary imports"
    assert differences[1].improvement == "AI improved type annotations"


def test_differences_empty_when_model_adds_nothing() -> None:
    assert find_conversion_differences("int x = 5;", "int y = 5;") == []


def test_difference_serializes_kind_as_type() -> None:
    difference = ConversionDifference(kind="better_typing", rule_lines=[], model_lines=[": int"], improvement="x")

    data = difference.to_dict()

    assert data["type"] == "better_typing"
    assert data["modelLines"] == [": int"]
    assert ConversionDifference.from_dict(data) == difference
