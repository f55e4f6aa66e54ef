from __future__ import annotations

from typing import TYPE_CHECKING

from models.conversion_models import LANGUAGE_TEMPLATES

if TYPE_CHECKING:
    from models.conversion_models import LanguageTemplate

__all__: list[str] = ["build_prompt", "build_stop_sequences", "display_name"]

PROMPT_TEMPLATE: str = """Convert the following {source} code to {target}.

Requirements:
1. Maintain the same functionality and logic
2. Use proper {target} syntax and conventions
3. Include necessary imports/using statements
4. Add appropriate type annotations if the target language supports them
5. Follow the target language's naming conventions
6. Only return the converted code, no explanations

Source {source} code:
```{from_lang}
{code}
```

Converted {target} code:"""


def display_name(lang: str) -> str:
    """Return the human-readable name of a language code, or the code itself."""
    template: LanguageTemplate | None = LANGUAGE_TEMPLATES.get(lang)
    return template.name if template else lang


def build_prompt(code: str, from_lang: str, to_lang: str) -> str:
    """Build the instruction prompt sent to the model server."""
    return PROMPT_TEMPLATE.format(
        source=display_name(from_lang),
        target=display_name(to_lang),
        from_lang=from_lang,
        code=code,
    )


def build_stop_sequences(to_lang: str) -> list[str]:
    """Stop sequences that end generation at the closing code fence."""
    return ["```", f"```{to_lang}", f"```{display_name(to_lang).lower()}"]
