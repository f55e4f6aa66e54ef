"""Model translation through a locally hosted LLM server."""

from core.llm.client import ModelTranslationClient
from core.llm.response import clean_model_response, extract_code, validate_model_output

__all__: list[str] = [
    "ModelTranslationClient",
    "clean_model_response",
    "extract_code",
    "validate_model_output",
]
