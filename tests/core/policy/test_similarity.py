from __future__ import annotations

import pytest

from core.policy.similarity import similarity


def test_identical_after_normalization() -> None:
    assert similarity("int  x = 5;", "INT x\n=   5;") == 1.0


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("int x = 5;", "int y = 6;"),
        ("a a a b", "a b b"),
        ("public class A {", "class A { }"),
        ("", "something"),
    ],
)
def test_symmetric(a: str, b: str) -> None:
    assert similarity(a, b) == similarity(b, a)


@pytest.mark.parametrize("text", ["", "int x = 5;", "x x x"])
def test_reflexive(text: str) -> None:
    assert similarity(text, text) == 1.0


def test_shared_token_ratio_uses_longer_text() -> None:
    # shared: a, b ; longer side has 4 tokens
    assert similarity("a b c d", "a b") == 0.5


def test_repeated_tokens_counted_once_per_match() -> None:
    assert similarity("a a a b", "a b b") == 0.5


def test_disjoint_texts() -> None:
    assert similarity("alpha beta", "gamma delta") == 0.0


def test_empty_against_text() -> None:
    assert similarity("   ", "x") == 0.0


def test_range() -> None:
    assert 0.0 <= similarity("if (a) { b(); }", "if a: b()") <= 1.0
