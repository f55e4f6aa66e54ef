"""Post-processing and validation of model output.

``clean_model_response`` turns free-form model text into a code block with a provenance
comment; ``validate_model_output`` rejects results that contain no actual code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from core.errors import ValidationFailedError
from models.conversion_models import LANGUAGE_TEMPLATES
from models.re_models import (
    CODE_FENCE_CLOSE_PATTERN,
    CODE_FENCE_OPEN_PATTERN,
    EXPLANATION_MARKER_PATTERN,
    PLACEHOLDER_LINE_PATTERN,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.conversion_models import LanguageTemplate

__all__: list[str] = ["MODEL_HEADER_SUFFIX", "clean_model_response", "extract_code", "validate_model_output"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MODEL_HEADER_SUFFIX: Final[str] = "using Ollama AI"
# consecutive blank lines after code has started that end the code block
PARAGRAPH_BREAK_LIMIT: Final[int] = 2


def extract_code(response: str) -> str:
    """Strip fences and trailing commentary from a model response.

    Leading blank lines are dropped. Extraction stops at the first line that starts an
    explanation (``Explanation:``, ``Note:``, ``This code ...``) or at a second consecutive
    blank line once code has started.

    Args:
        response (str): Raw ``response`` text of the model server.

    Returns:
        str: The extracted code, stripped. May be empty.
    """
    cleaned: str = CODE_FENCE_OPEN_PATTERN.sub("", response.strip())
    cleaned = CODE_FENCE_CLOSE_PATTERN.sub("", cleaned)

    code_lines: list[str] = []
    blank_run: int = 0
    for line in cleaned.split("\n"):
        if EXPLANATION_MARKER_PATTERN.match(line):
            break
        if not line.strip():
            if not code_lines:
                continue
            blank_run += 1
            if blank_run >= PARAGRAPH_BREAK_LIMIT:
                break
        else:
            blank_run = 0
        code_lines.append(line)

    return "\n".join(code_lines).strip()


def clean_model_response(response: str, to_lang: str) -> str:
    """Extract the code of a model response and prepend a provenance comment.

    Args:
        response (str): Raw model output.
        to_lang (str): Target language code.

    Returns:
        str: Cleaned code. The comment is omitted for unknown languages or empty code.
    """
    code: str = extract_code(response)
    template: LanguageTemplate | None = LANGUAGE_TEMPLATES.get(to_lang)
    if template is None or not code:
        return code
    return f"{template.comment_line(f'Converted to {template.name} {MODEL_HEADER_SUFFIX}')}\n\n{code}"


def _is_comment_line(line: str, template: LanguageTemplate | None) -> bool:
    stripped: str = line.strip()
    comment: str = template.comment if template is not None else "//"
    block_comment: tuple[str, str] = template.block_comment if template is not None else ("/*", "*/")
    if stripped.startswith((comment, *block_comment)):
        return True
    # " * text" continues a /* */ block; "*p = 5;" is a dereference
    return block_comment == ("/*", "*/") and (stripped == "*" or stripped.startswith("* "))


def validate_model_output(text: str, to_lang: str) -> str:
    """Check that a model translation carries a code body.

    Args:
        text (str): Cleaned model output.
        to_lang (str): Target language code.

    Returns:
        str: The unchanged text when valid.

    Raises:
        ValidationFailedError: If the text is empty, placeholder-only or consists of comments only.
    """
    if not text or not text.strip():
        msg = "Model output is empty"
        raise ValidationFailedError(msg)

    template: LanguageTemplate | None = LANGUAGE_TEMPLATES.get(to_lang)
    code_lines: list[str] = [
        line
        for line in text.splitlines()
        if line.strip() and not PLACEHOLDER_LINE_PATTERN.match(line) and not _is_comment_line(line, template)
    ]
    if not code_lines:
        msg = "Model output contains no code (placeholders or comments only)"
        raise ValidationFailedError(msg)

    logger.debug("Model output accepted with %d code lines", len(code_lines))
    return text
