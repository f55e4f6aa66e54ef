"""Rewrite tables for Python sources.

Python has no braces, so block openers (lines ending with ``:``) become ``{``; closing braces
are not synthesized and the output needs manual review.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from core.rules.interface import TableTranslator, rule

if TYPE_CHECKING:
    from core.rules.interface import RewriteRule

__all__: list[str] = ["PythonToCSharp", "PythonToJava", "PythonToTypeScript"]


class PythonToJava(TableTranslator):
    """Python to Java; top-level code is wrapped in a ``ConvertedClass``."""

    SOURCE: ClassVar[str] = "python"
    TARGET: ClassVar[str] = "java"
    HEADER: ClassVar[str] = "// Converted from Python to Java\nimport java.util.*;\n\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"\bdef\s+(\w+)\s*\(self,?\s*", r"public void \1("),
        rule(r"\bdef\s+(\w+)\s*\(", r"public void \1("),
        rule(r"\bclass\s+(\w+):", r"public class \1 {"),
        rule(r"print\(([^)]+)\)", r"System.out.println(\1);"),
        rule(r"\bself\.", "this."),
        rule(r"\bTrue\b", "true"),
        rule(r"\bFalse\b", "false"),
        rule(r"\bNone\b", "null"),
        rule(r":[ \t]*$", " {", re.MULTILINE),
    )

    def translate(self, code: str) -> str:
        converted: str = self.rewrite(code)
        body: str = "\n".join(f"    {line}" if line.strip() else line for line in converted.splitlines())
        return f"{self.HEADER}public class ConvertedClass {{\n{body}\n}}"


class PythonToTypeScript(TableTranslator):
    SOURCE: ClassVar[str] = "python"
    TARGET: ClassVar[str] = "typescript"
    HEADER: ClassVar[str] = "// Converted from Python to TypeScript\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"\bdef\s+(\w+)\s*\(self,?\s*", r"\1("),
        rule(r"\bdef\s+(\w+)\s*\(", r"function \1("),
        rule(r"\bclass\s+(\w+):", r"class \1 {"),
        rule(r"print\(([^)]+)\)", r"console.log(\1);"),
        rule(r"\bself\.", "this."),
        rule(r"\bTrue\b", "true"),
        rule(r"\bFalse\b", "false"),
        rule(r"\bNone\b", "null"),
        rule(r":[ \t]*$", " {", re.MULTILINE),
    )


class PythonToCSharp(TableTranslator):
    SOURCE: ClassVar[str] = "python"
    TARGET: ClassVar[str] = "csharp"
    HEADER: ClassVar[str] = "// Converted from Python to C#\nusing System;\n\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"\bdef\s+(\w+)\s*\(self,?\s*", r"public void \1("),
        rule(r"\bdef\s+(\w+)\s*\(", r"public void \1("),
        rule(r"\bclass\s+(\w+):", r"public class \1 {"),
        rule(r"print\(([^)]+)\)", r"Console.WriteLine(\1);"),
        rule(r"\bself\.", "this."),
        rule(r"\bTrue\b", "true"),
        rule(r"\bFalse\b", "false"),
        rule(r"\bNone\b", "null"),
        rule(r":[ \t]*$", " {", re.MULTILINE),
    )
