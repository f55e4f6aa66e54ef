"""Client for a locally hosted, Ollama-compatible model server.

Sends one ``/api/generate`` request per translation and turns every failure mode into
``ModelUnavailableError``. The call never retries; the timeout is the only deadline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from core.errors import ModelUnavailableError
from core.llm.prompt import build_prompt, build_stop_sequences
from core.llm.response import clean_model_response, extract_code
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp
from models.model_server_models import GenerateOptions, GenerateRequest, ModelInfo
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = ["ModelTranslationClient"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ModelTranslationClient:
    """Translate code through the model server's generate endpoint.

    Server settings are read from ``config.MODEL`` on every request, so a changed base
    URL or model applies to the next call.

    Attributes:
        DEFAULT_MODELS (ClassVar[tuple[str, ...]]): Suggested models when the server lists none.
    """

    DEFAULT_MODELS: ClassVar[tuple[str, ...]] = (
        "codellama:7b",
        "codellama:13b",
        "codellama:34b",
        "deepseek-coder:6.7b",
        "deepseek-coder:33b",
        "codegemma:7b",
        "llama3:8b",
        "llama3:70b",
    )

    def __init__(self, config: Config, http: AsyncHttp | None = None) -> None:
        """Initialize the client from the ``[MODEL]`` configuration section.

        Args:
            config (Config): Application configuration.
            http (AsyncHttp | None): HTTP client to use. A new one is created when omitted.
        """
        self.config: Config = config
        self._http: AsyncHttp = http if http is not None else AsyncHttp()

    @property
    def base_url(self) -> str:
        return self.config.MODEL.BASE_URL

    @property
    def model(self) -> str:
        return self.config.MODEL.MODEL

    @property
    def timeout(self) -> float:
        return self.config.MODEL.TIMEOUT

    def _endpoint(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/api/{path}"

    async def translate(self, code: str, from_lang: str, to_lang: str) -> str:
        """Translate code with the model and return the cleaned result.

        Args:
            code (str): Source code.
            from_lang (str): Source language code.
            to_lang (str): Target language code.

        Returns:
            str: Cleaned translation prefixed with a provenance comment.

        Raises:
            ModelUnavailableError: On network failure, timeout, error status, or an empty or too short response.
        """
        request = GenerateRequest(
            model=self.model,
            prompt=build_prompt(code, from_lang, to_lang),
            stream=False,
            options=GenerateOptions(
                temperature=self.config.MODEL.TEMPERATURE,
                top_p=self.config.MODEL.TOP_P,
                stop=build_stop_sequences(to_lang),
            ),
        )
        logger.info("Requesting model translation '%s' -> '%s' with '%s'", from_lang, to_lang, self.model)

        try:
            data: Any = await self._http.post(
                url=self._endpoint("generate"),
                data=request.to_dict(),
                total_timeout=self.timeout,
            )
        except AsyncCommTimeoutError as err:
            msg: str = f"Model request timed out after {self.timeout:.0f} seconds"
            raise ModelUnavailableError(msg) from err
        except AsyncCommError as err:
            msg = f"Model server error: {err}"
            raise ModelUnavailableError(msg) from err

        raw: str = data.get("response", "") if isinstance(data, dict) else ""
        if not isinstance(raw, str):
            raw = ""
        code_only: str = extract_code(raw)
        if len(code_only) < self.config.MODEL.MIN_RESPONSE_LENGTH:
            msg = f"Model response too short ({len(code_only)} characters)"
            raise ModelUnavailableError(msg)

        return clean_model_response(raw, to_lang)

    async def is_available(self) -> bool:
        """Probe the model server; True when ``/api/tags`` answers with a success status."""
        try:
            await self._http.get(url=self._endpoint("tags"), total_timeout=self.config.MODEL.PROBE_TIMEOUT)
        except AsyncCommError as err:
            logger.info("Model server unavailable at '%s': %s", self.base_url, err)
            return False
        return True

    async def list_models(self) -> list[ModelInfo]:
        """Return the models installed on the server, or an empty list on any failure."""
        try:
            data: Any = await self._http.get(
                url=self._endpoint("tags"),
                total_timeout=self.config.MODEL.PROBE_TIMEOUT,
            )
        except AsyncCommError as err:
            logger.info("Could not list models: %s", err)
            return []

        if not isinstance(data, dict) or not isinstance(data.get("models"), list):
            return []
        return [ModelInfo.from_dict(item) for item in data["models"] if isinstance(item, dict) and item.get("name")]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._http.close()
