"""Rule tables per source language.

Importing this package registers every table with ``RuleTranslator``.
"""

from core.rules.engines.java import (
    CSharpToJava,
    CSharpToPython,
    CSharpToTypeScript,
    JavaToCSharp,
    JavaToPython,
    JavaToTypeScript,
)
from core.rules.engines.python import PythonToCSharp, PythonToJava, PythonToTypeScript
from core.rules.engines.typescript import (
    JavaScriptToCSharp,
    JavaScriptToJava,
    JavaScriptToPython,
    JavaScriptToTypeScript,
    TypeScriptToCSharp,
    TypeScriptToJava,
    TypeScriptToPython,
)

__all__: list[str] = [
    "CSharpToJava",
    "CSharpToPython",
    "CSharpToTypeScript",
    "JavaScriptToCSharp",
    "JavaScriptToJava",
    "JavaScriptToPython",
    "JavaScriptToTypeScript",
    "JavaToCSharp",
    "JavaToPython",
    "JavaToTypeScript",
    "PythonToCSharp",
    "PythonToJava",
    "PythonToTypeScript",
    "TypeScriptToCSharp",
    "TypeScriptToJava",
    "TypeScriptToPython",
]
