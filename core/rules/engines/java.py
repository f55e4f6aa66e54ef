"""Rewrite tables for Java and C# sources.

C# to Python first maps C# type names onto their Java spelling and then reuses the Java table.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from core.rules.interface import TableTranslator, rule

if TYPE_CHECKING:
    from core.rules.interface import RewriteRule

__all__: list[str] = [
    "CSharpToJava",
    "CSharpToPython",
    "CSharpToTypeScript",
    "JavaToCSharp",
    "JavaToPython",
    "JavaToTypeScript",
]


class JavaToTypeScript(TableTranslator):
    SOURCE: ClassVar[str] = "java"
    TARGET: ClassVar[str] = "typescript"
    HEADER: ClassVar[str] = "// Converted from Java to TypeScript\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"public\s+class\s+(\w+)", r"class \1"),
        rule(r"public\s+(?:static\s+)?(\w+)\s+(\w+)\s*\(", r"\2("),
        rule(r"private\s+(\w+)\s+(\w+);", r"private \2: \1;"),
        rule(r"System\.out\.println\(", "console.log("),
        rule(r"\b(?:int|long|double|float)\b", "number"),
        rule(r"\bString\b", "string"),
    )


class JavaToCSharp(TableTranslator):
    SOURCE: ClassVar[str] = "java"
    TARGET: ClassVar[str] = "csharp"
    HEADER: ClassVar[str] = "// Converted from Java to C#\nusing System;\n\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"^\s*import\s+[\w.*]+;[ \t]*\n?", "", re.MULTILINE),
        rule(r"System\.out\.println", "Console.WriteLine"),
        rule(r"\bString\b", "string"),
        rule(r"\bboolean\b", "bool"),
        rule(r"\.length\(\)", ".Length"),
        rule(r"\.equals\(", ".Equals("),
    )


class JavaToPython(TableTranslator):
    SOURCE: ClassVar[str] = "java"
    TARGET: ClassVar[str] = "python"
    HEADER: ClassVar[str] = "# Converted from Java to Python\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"public\s+class\s+(\w+)\s*\{", r"class \1:"),
        rule(r"public\s+(?:static\s+)?(\w+)\s+(\w+)\s*\(\s*\)", r"    def \2(self)"),
        rule(r"public\s+(?:static\s+)?(\w+)\s+(\w+)\s*\(", r"    def \2(self, "),
        rule(r"private\s+(\w+)\s+(\w+);", r"        # \2: \1"),
        rule(r"System\.out\.println\(([^)]+)\);", r"print(\1)"),
        rule(r"Console\.WriteLine\(([^)]+)\);", r"print(\1)"),
        rule(r"\bthis\.", "self."),
        rule(r"\btrue\b", "True"),
        rule(r"\bfalse\b", "False"),
        rule(r"\bnull\b", "None"),
        rule(r"[ \t]*\{[ \t]*$", ":", re.MULTILINE),
        rule(r"^[ \t]*\}[ \t]*(?:\n|$)", "", re.MULTILINE),
        rule(r";[ \t]*$", "", re.MULTILINE),
    )


class CSharpToJava(TableTranslator):
    SOURCE: ClassVar[str] = "csharp"
    TARGET: ClassVar[str] = "java"
    HEADER: ClassVar[str] = "// Converted from C# to Java\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"using\s+System;", "import java.util.*;"),
        rule(r"Console\.WriteLine", "System.out.println"),
        rule(r"\bstring\b", "String"),
        rule(r"\bbool\b", "boolean"),
        rule(r"\.Length\b", ".length()"),
    )


class CSharpToTypeScript(TableTranslator):
    SOURCE: ClassVar[str] = "csharp"
    TARGET: ClassVar[str] = "typescript"
    HEADER: ClassVar[str] = "// Converted from C# to TypeScript\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"^\s*using\s+[\w.]+;[ \t]*\n?", "", re.MULTILINE),
        rule(r"public\s+class\s+(\w+)", r"class \1"),
        rule(r"public\s+(?:static\s+)?(\w+)\s+(\w+)\s*\(", r"\2("),
        rule(r"private\s+(\w+)\s+(\w+);", r"private \2: \1;"),
        rule(r"Console\.WriteLine\(", "console.log("),
        rule(r"\bbool\b", "boolean"),
        rule(r"\b(?:int|long|double|float|decimal)\b", "number"),
    )


class CSharpToPython(JavaToPython):
    SOURCE: ClassVar[str] = "csharp"
    HEADER: ClassVar[str] = "# Converted from C# to Python\n"
    PREPROCESS: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"^\s*using\s+[\w.]+;[ \t]*\n?", "", re.MULTILINE),
        rule(r"\bstring\b", "String"),
        rule(r"\bbool\b", "boolean"),
    )
