"""Regular expressions shared by the pattern cache, model response cleanup and difference detection."""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

__all__: list[str] = [
    "CODE_FENCE_CLOSE_PATTERN",
    "CODE_FENCE_OPEN_PATTERN",
    "EXPLANATION_MARKER_PATTERN",
    "IDENTIFIER_PATTERN",
    "IMPORT_LINE_PATTERN",
    "KEYWORD_PATTERN",
    "NUMBER_LITERAL_PATTERN",
    "PLACEHOLDER_LINE_PATTERN",
    "STRING_LITERAL_PATTERN",
    "TYPE_ANNOTATION_PATTERN",
    "WHITESPACE_PATTERN",
]

WHITESPACE_PATTERN: Final[Pattern[str]] = re.compile(r"\s+")

# Single, double and backtick quoted literals, non-greedy, no escapes across lines
# Example: "hello", 'x', `tpl ${a}`
STRING_LITERAL_PATTERN: Final[Pattern[str]] = re.compile(r"\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'|`[^`]*`")

# Integer, decimal and hex literals not glued to an identifier
# Example: 5, 3.14, 0xFF, 10L
NUMBER_LITERAL_PATTERN: Final[Pattern[str]] = re.compile(r"\b(?:0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?)[lLfFdDmMuU]?\b")

IDENTIFIER_PATTERN: Final[Pattern[str]] = re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*\b")

# Declaration keywords and primitive/builtin type names of the supported languages
KEYWORD_PATTERN: Final[Pattern[str]] = re.compile(
    r"\b(?:"
    r"let|const|var|val|final|static|public|private|protected|internal|readonly|"
    r"function|func|fn|def|class|interface|struct|enum|impl|trait|type|new|return|"
    r"number|string|String|str|boolean|bool|int|long|float|double|char|void|any|"
    r"Integer|Boolean|Double|auto|mut|None|null|undefined|nil|true|false|True|False"
    r")\b"
)

# Markdown code fences at line start / end
CODE_FENCE_OPEN_PATTERN: Final[Pattern[str]] = re.compile(r"^```[\w+#-]*\n?", re.MULTILINE)
CODE_FENCE_CLOSE_PATTERN: Final[Pattern[str]] = re.compile(r"\n?```[ \t]*$", re.MULTILINE)

# Unindented lines that introduce natural-language commentary after the code (use with match())
# Example: "Explanation: ...", "**Note:** ...", "This code converts ..."
EXPLANATION_MARKER_PATTERN: Final[Pattern[str]] = re.compile(
    r"(?:\*\*)?(?:explanation|notes?)\s*(?:\*\*)?\s*:|this code\b", re.IGNORECASE
)

# Lines that carry no real code
# Example: "...", "// TODO", "# your code here", "pass"
PLACEHOLDER_LINE_PATTERN: Final[Pattern[str]] = re.compile(
    r"^\s*(?:(?://|#|/\*+|\*)\s*)?"
    r"(?:\.\.\.|…|todo\b.*|(?:your |the )?code (?:goes )?here\.?|pass|\{\s*\})?"
    r"\s*(?:\*/)?\s*$",
    re.IGNORECASE,
)

# Import-like statements of the supported languages
IMPORT_LINE_PATTERN: Final[Pattern[str]] = re.compile(r"^\s*(?:import |using |#include|from )")

# Type annotation occurrences such as ": int" or ": string"
TYPE_ANNOTATION_PATTERN: Final[Pattern[str]] = re.compile(r":\s*\w+")
