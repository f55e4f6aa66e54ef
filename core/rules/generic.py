from __future__ import annotations

from models.conversion_models import LANGUAGE_TEMPLATES, LanguageTemplate

__all__: list[str] = ["GenericTranslator"]


class GenericTranslator:
    """Pass-through translator used when no rule table exists for a language pair.

    The source is returned unchanged below a header written in the target language's
    comment syntax. Unknown language codes fall back to ``//`` comments and the raw code name.
    """

    def __init__(self, from_lang: str, to_lang: str) -> None:
        self.from_lang: str = from_lang
        self.to_lang: str = to_lang

    @staticmethod
    def _template(lang: str) -> LanguageTemplate:
        return LANGUAGE_TEMPLATES.get(lang) or LanguageTemplate(lang, "", "//", ("/*", "*/"))

    def translate(self, code: str) -> str:
        source: LanguageTemplate = self._template(self.from_lang)
        target: LanguageTemplate = self._template(self.to_lang)
        header: str = "\n".join(
            [
                target.comment_line(f"Converted from {source.name} to {target.name}"),
                target.comment_line("Note: This is a basic conversion. Manual review required."),
            ]
        )
        return f"{header}\n\n{code}"
