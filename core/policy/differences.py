"""Detect what a model correction added over the rule-based translation."""

from __future__ import annotations

from models.learning_models import ConversionDifference
from models.re_models import IMPORT_LINE_PATTERN, TYPE_ANNOTATION_PATTERN

__all__: list[str] = ["find_conversion_differences"]


def _import_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if IMPORT_LINE_PATTERN.match(line)]


def find_conversion_differences(rule_result: str, model_result: str) -> list[ConversionDifference]:
    """Compare a rule-based and a model translation of the same input.

    Two kinds of improvement are recognized: the model emitting more import statements
    (``missing_imports``) and the model emitting more type annotations (``better_typing``).

    Args:
        rule_result (str): Output of the rule-based translator.
        model_result (str): Output of the model.

    Returns:
        list[ConversionDifference]: Detected differences, possibly empty.
    """
    differences: list[ConversionDifference] = []

    rule_imports: list[str] = _import_lines(rule_result)
    model_imports: list[str] = _import_lines(model_result)
    if len(model_imports) > len(rule_imports):
        differences.append(
            ConversionDifference(
                kind="missing_imports",
                rule_lines=rule_imports,
                model_lines=model_imports,
                improvement="AI added necessary imports",
            )
        )

    rule_types: list[str] = TYPE_ANNOTATION_PATTERN.findall(rule_result)
    model_types: list[str] = TYPE_ANNOTATION_PATTERN.findall(model_result)
    if len(model_types) > len(rule_types):
        differences.append(
            ConversionDifference(
                kind="better_typing",
                rule_lines=rule_types,
                model_lines=model_types,
                improvement="AI improved type annotations",
            )
        )

    return differences
