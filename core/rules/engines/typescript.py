"""Rewrite tables for TypeScript and JavaScript sources.

JavaScript tables reuse the TypeScript ones after turning ``var`` into ``let``.
C++, Go and Rust targets have no table and use the generic conversion.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Final

from core.rules.interface import TableTranslator, rule

if TYPE_CHECKING:
    from re import Match

    from core.rules.interface import RewriteRule

__all__: list[str] = [
    "JavaScriptToCSharp",
    "JavaScriptToJava",
    "JavaScriptToPython",
    "JavaScriptToTypeScript",
    "TypeScriptToCSharp",
    "TypeScriptToJava",
    "TypeScriptToPython",
]

JAVA_TYPES: Final[dict[str, str]] = {"number": "int", "string": "String", "boolean": "boolean", "void": "void"}
CSHARP_TYPES: Final[dict[str, str]] = {"number": "int", "string": "string", "boolean": "bool", "void": "void"}
PYTHON_TYPES: Final[dict[str, str]] = {"number": "int", "string": "str", "boolean": "bool", "void": "None"}

_PARAM_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\w+)\s*:\s*(\w+)")
_MEMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\w+)\??\s*:\s*(\w+)(\[\])?\s*;")
_VAR_TO_LET: Final[RewriteRule] = rule(r"\bvar\s+", "let ")


def _convert_params(params: str, types: dict[str, str]) -> str:
    """Turn ``a: number, b: string`` into ``int a, String b`` style parameters."""
    if not params.strip():
        return ""

    converted: list[str] = []
    for param in params.split(","):
        trimmed: str = param.strip()
        match: Match[str] | None = _PARAM_PATTERN.match(trimmed)
        if match:
            name, type_name = match.groups()
            converted.append(f"{types.get(type_name, type_name)} {name}")
        else:
            converted.append(trimmed)
    return ", ".join(converted)


def _members(body: str, types: dict[str, str], template: str, list_template: str) -> list[str]:
    lines: list[str] = []
    for name, type_name, is_array in _MEMBER_PATTERN.findall(body):
        mapped: str = types.get(type_name, type_name)
        lines.append((list_template if is_array else template).format(name=name, type=mapped))
    return lines


def _java_function(match: Match[str]) -> str:
    name, params, return_type = match.groups()
    return f"public static {JAVA_TYPES.get(return_type, return_type)} {name}({_convert_params(params, JAVA_TYPES)}) {{"


def _java_interface(match: Match[str]) -> str:
    name, body = match.groups()
    members: list[str] = _members(body, JAVA_TYPES, "    private {type} {name};", "    private List<{type}> {name};")
    return "\n".join([f"public class {name} {{", *members, "}"])


def _csharp_function(match: Match[str]) -> str:
    name, params, return_type = match.groups()
    return (
        f"public static {CSHARP_TYPES.get(return_type, return_type)} {name}"
        f"({_convert_params(params, CSHARP_TYPES)})\n{{"
    )


def _csharp_interface(match: Match[str]) -> str:
    name, body = match.groups()
    members: list[str] = _members(
        body, CSHARP_TYPES, "    public {type} {name} {{ get; set; }}", "    public List<{type}> {name} {{ get; set; }}"
    )
    return "\n".join([f"public class {name}", "{", *members, "}"])


def _python_interface(match: Match[str]) -> str:
    name, body = match.groups()
    members: list[str] = _members(body, PYTHON_TYPES, "    {name}: {type}", "    {name}: List[{type}]")
    return "\n".join(["@dataclass", f"class {name}:", *(members or ["    pass"])])


_FUNCTION_SIGNATURE: Final[str] = r"function\s+(\w+)\s*\(([^)]*)\)\s*:\s*(\w+)\s*\{"
_INTERFACE_BLOCK: Final[str] = r"interface\s+(\w+)\s*\{([^}]*)\}"
_FIND_CALL: Final[str] = r"this\.(\w+)\.find\((\w+)\s*=>\s*([^)]+)\)"


class TypeScriptToJava(TableTranslator):
    SOURCE: ClassVar[str] = "typescript"
    TARGET: ClassVar[str] = "java"
    HEADER: ClassVar[str] = "// Converted from TypeScript to Java\n\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(_FUNCTION_SIGNATURE, _java_function),
        rule(_INTERFACE_BLOCK, _java_interface, re.DOTALL),
        rule(r"(\w+)\s*:\s*number\b", r"\1: int"),
        rule(r"(\w+)\s*:\s*string\b", r"\1: String"),
        rule(r"(\w+)\s*:\s*boolean\b", r"\1: boolean"),
        rule(r"\bconst\s+(\w+)\s*=\s*", r"final int \1 = "),
        rule(r"\blet\s+(\w+)\s*=\s*0\b", r"int \1 = 0"),
        rule(r"\blet\s+(\w+)\s*=\s*", r"int \1 = "),
        rule(r"Math\.floor\(", "(int) Math.floor("),
        rule(r"===([^=])", r" == \1"),
        rule(r"(?<!public )\bclass\s+(\w+)\s*\{", r"public class \1 {"),
        rule(r"private\s+(\w+):\s*(\w+)\[\]\s*=\s*\[\];", r"private List<\2> \1 = new ArrayList<>();"),
        rule(r"(\w+)\(([^)]*)\):\s*void", r"public void \1(\2)"),
        rule(r"(\w+)\(([^)]*)\):\s*(\w+)", r"public \3 \1(\2)"),
        rule(r"(\w+)\s*\|\s*undefined", r"\1"),
        rule(r"this\.(\w+)\.push\(([^)]+)\);", r"this.\1.add(\2);"),
        rule(_FIND_CALL, r"this.\1.stream().filter(\2 -> \3).findFirst().orElse(null)"),
        rule(r"\.\.\.", ""),
    )


class TypeScriptToCSharp(TableTranslator):
    SOURCE: ClassVar[str] = "typescript"
    TARGET: ClassVar[str] = "csharp"
    HEADER: ClassVar[str] = "// Converted from TypeScript to C#\nusing System;\n\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(_FUNCTION_SIGNATURE, _csharp_function),
        rule(_INTERFACE_BLOCK, _csharp_interface, re.DOTALL),
        rule(r"(\w+)\s*:\s*number\b", r"\1: int"),
        rule(r"(\w+)\s*:\s*string\b", r"\1: string"),
        rule(r"(\w+)\s*:\s*boolean\b", r"\1: bool"),
        rule(r"\b(?:const|let)\s+(\w+)\s*=\s*", r"var \1 = "),
        rule(r"\.toString\(\)", ".ToString()"),
        rule(r"Math\.floor\(", "(int)Math.Floor("),
        rule(r"===([^=])", r" == \1"),
        rule(r"(?<!public )\bclass\s+(\w+)\s*\{", "public class \\1\n{"),
        rule(r"private\s+(\w+):\s*(\w+)\[\]\s*=\s*\[\];", r"private List<\2> \1 = new List<\2>();"),
        rule(r"(\w+)\(([^)]*)\):\s*void", r"public void \1(\2)"),
        rule(r"(\w+)\(([^)]*)\):\s*(\w+)", r"public \3 \1(\2)"),
        rule(r"(\w+)\s*\|\s*undefined", r"\1?"),
        rule(r"this\.(\w+)\.push\(([^)]+)\);", r"this.\1.Add(\2);"),
        rule(_FIND_CALL, r"this.\1.FirstOrDefault(\2 => \3)"),
        rule(r"\.\.\.", ""),
    )


class TypeScriptToPython(TableTranslator):
    SOURCE: ClassVar[str] = "typescript"
    TARGET: ClassVar[str] = "python"
    HEADER: ClassVar[str] = (
        "# Converted from TypeScript to Python\n"
        "from typing import List, Optional\n"
        "from dataclasses import dataclass\n\n"
    )
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(_INTERFACE_BLOCK, _python_interface, re.DOTALL),
        rule(r"\bclass\s+(\w+)\s*\{", r"class \1:"),
        rule(r"private\s+(\w+):\s*(\w+)\[\]\s*=\s*\[\];", "def __init__(self):\n        self.\\1: List[\\2] = []"),
        rule(r"function\s+(\w+)\s*\(([^)]*)\)\s*:\s*void", r"def \1(\2)"),
        rule(r"function\s+(\w+)\s*\(([^)]*)\)\s*:\s*(\w+)", r"def \1(\2) -> \3"),
        rule(r"function\s+(\w+)\s*\(", r"def \1("),
        rule(r"(\w+)\(([^)]*)\):\s*void", r"def \1(self, \2)"),
        rule(r"(\w+)\(([^)]*)\):\s*(\w+)", r"def \1(self, \2) -> \3"),
        rule(r"\(self, \)", "(self)"),
        rule(r":\s*number\b", ": int"),
        rule(r":\s*string\b", ": str"),
        rule(r":\s*boolean\b", ": bool"),
        rule(r"-> number\b", "-> int"),
        rule(r"-> string\b", "-> str"),
        rule(r"-> boolean\b", "-> bool"),
        rule(r"(\w+)\s*\|\s*undefined", r"Optional[\1]"),
        rule(r"this\.(\w+)\.push\(([^)]+)\);", r"self.\1.append(\2)"),
        rule(_FIND_CALL, r"next((\2 for \2 in self.\1 if \3), None)"),
        rule(r"this\.", "self."),
        rule(r"===", "=="),
        rule(r"!==", "!="),
        rule(r"&&", "and"),
        rule(r"\|\|", "or"),
        rule(r"\btrue\b", "True"),
        rule(r"\bfalse\b", "False"),
        rule(r"\bnull\b", "None"),
        rule(r"console\.log\(", "print("),
        rule(r"[ \t]*\{[ \t]*$", ":", re.MULTILINE),
        rule(r"^[ \t]*\}[ \t]*(?:\n|$)", "", re.MULTILINE),
        rule(r";[ \t]*$", "", re.MULTILINE),
        rule(r"\b(?:let|const)\s+", ""),
    )


class JavaScriptToJava(TypeScriptToJava):
    SOURCE: ClassVar[str] = "javascript"
    HEADER: ClassVar[str] = "// Converted from JavaScript to Java\n\n"
    PREPROCESS: ClassVar[tuple[RewriteRule, ...]] = (_VAR_TO_LET,)


class JavaScriptToCSharp(TypeScriptToCSharp):
    SOURCE: ClassVar[str] = "javascript"
    HEADER: ClassVar[str] = "// Converted from JavaScript to C#\nusing System;\n\n"
    PREPROCESS: ClassVar[tuple[RewriteRule, ...]] = (_VAR_TO_LET,)


class JavaScriptToPython(TypeScriptToPython):
    SOURCE: ClassVar[str] = "javascript"
    HEADER: ClassVar[str] = "# Converted from JavaScript to Python\n\n"
    PREPROCESS: ClassVar[tuple[RewriteRule, ...]] = (_VAR_TO_LET,)


class JavaScriptToTypeScript(TableTranslator):
    SOURCE: ClassVar[str] = "javascript"
    TARGET: ClassVar[str] = "typescript"
    HEADER: ClassVar[str] = "// Converted from JavaScript to TypeScript\n"
    REWRITES: ClassVar[tuple[RewriteRule, ...]] = (
        rule(r"function\s+(\w+)\s*\(", r"function \1("),
        rule(r"\bfunction (\w+)\(([^)]*)\)\s*\{", r"function \1(\2): any {"),
        rule(r"\b(let|const)\s+(\w+)\s*=", r"\1 \2: any ="),
        rule(r"\bvar\s+(\w+)\s*=", r"let \1: any ="),
    )
