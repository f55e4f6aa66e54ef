"""Conversion front end.

``CodeConverter`` owns the learning state, the rule translators, the model client and
the policy engine. It converts one source into two target languages per request and
exposes the runtime settings of the configuration surface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from config.loader import ConfigLoaderError, validate_base_url, validate_mode, validate_threshold
from core.llm.client import ModelTranslationClient
from core.policy.engine import ConversionPolicyEngine
from core.policy.state import PolicyEngineState
from core.rules.manager import RuleTranslatorManager
from core.state_storage import StateStorageError
from models.conversion_models import ConversionOutput, ConversionRequest
from models.learning_models import PersistedState
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.state_storage import StateStorage
    from handlers.async_comm import AsyncHttp
    from models.config_models import Config
    from models.conversion_models import ConversionResult
    from models.model_server_models import ModelInfo

__all__: list[str] = ["CodeConverter", "ConverterStatus", "ModelStatus"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ConverterStatus:
    """Status messages of the conversion front end."""

    EMPTY_SOURCE = "Please enter some code to convert"
    FAILED = "Conversion failed. Please try again."
    LEARNING_RESET = "Learning data has been reset"


class ModelStatus:
    """Summary of the model server state for the display surface."""

    def __init__(self, available: bool, base_url: str, model: str, models: list[ModelInfo]) -> None:
        self.available: bool = available
        self.base_url: str = base_url
        self.model: str = model
        self.models: list[ModelInfo] = models

    @property
    def message(self) -> str:
        if not self.available:
            return f"Model server not reachable at {self.base_url}"
        return f"Connected to {self.base_url} ({len(self.models)} models installed)"

    @property
    def model_names(self) -> list[str]:
        """Installed model names, or the suggested defaults when the server lists none."""
        if self.models:
            return [info.name for info in self.models]
        return list(ModelTranslationClient.DEFAULT_MODELS)


class CodeConverter:
    """Convert code into two target languages under the adaptive policy.

    The configuration object is the live source of the operation mode, threshold, model
    and base URL. Persisted runtime settings are applied on top of it at construction.
    """

    def __init__(
        self,
        config: Config,
        *,
        storage: StateStorage | None = None,
        http: AsyncHttp | None = None,
        model_client: ModelTranslationClient | None = None,
        rules: RuleTranslatorManager | None = None,
    ) -> None:
        """Load the learning state and build the collaborators.

        Args:
            config (Config): Application configuration.
            storage (StateStorage | None): Learning state storage. State is kept in memory only when omitted.
            http (AsyncHttp | None): HTTP client for the default model client.
            model_client (ModelTranslationClient | None): Model client to use instead of the default one.
            rules (RuleTranslatorManager | None): Rule translators to use instead of the default ones.
        """
        self.config: Config = config
        self.storage: StateStorage | None = storage
        persisted: PersistedState = storage.load() if storage is not None else PersistedState()
        self.state: PolicyEngineState = PolicyEngineState.from_persisted(persisted)
        self._apply_persisted_settings()

        self.rules: RuleTranslatorManager = rules if rules is not None else RuleTranslatorManager()
        self.model_client: ModelTranslationClient = (
            model_client if model_client is not None else ModelTranslationClient(config, http)
        )
        self.engine: ConversionPolicyEngine = ConversionPolicyEngine(
            config, self.state, self.rules, self.model_client, storage
        )
        logger.debug(
            "%s ready (mode=%s, confidence=%.2f, %d patterns)",
            self.__class__.__name__,
            self.config.POLICY.MODE,
            self.state.confidence.confidence,
            len(self.state.patterns),
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    def _apply_persisted_settings(self) -> None:
        """Copy stored setting overrides onto the configuration, skipping invalid ones."""
        settings = self.state.settings
        appliers: list[tuple[str, Any, Any]] = [
            ("mode", settings.mode, lambda v: setattr(self.config.POLICY, "MODE", validate_mode(v))),
            (
                "confidence_threshold",
                settings.confidence_threshold,
                lambda v: setattr(self.config.POLICY, "CONFIDENCE_THRESHOLD", validate_threshold(v)),
            ),
            ("base_url", settings.base_url, lambda v: setattr(self.config.MODEL, "BASE_URL", validate_base_url(v))),
            ("model", settings.model, self._set_model),
        ]
        for name, value, apply in appliers:
            if value is None:
                continue
            try:
                apply(value)
            except (ConfigLoaderError, ValueError) as err:
                logger.warning("Ignoring stored setting '%s': %s", name, err)
                setattr(settings, name, None)

    def _set_model(self, value: Any) -> None:
        if not isinstance(value, str) or not value.strip():
            msg: str = f"Model identifier must be a non-empty string: {value!r}"
            raise ValueError(msg)
        self.config.MODEL.MODEL = value.strip()

    def _save_state(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save(self.state.to_persisted())
        except StateStorageError as err:
            logger.error("Failed to persist settings: %s", err)

    async def convert(
        self, source_code: str, from_lang: str, to_lang1: str, to_lang2: str
    ) -> ConversionOutput | None:
        """Convert the source into two target languages.

        Args:
            source_code (str): Code to convert.
            from_lang (str): Source language code.
            to_lang1 (str): First target language code.
            to_lang2 (str): Second target language code.

        Returns:
            ConversionOutput | None: Both translations with a combined status, or None when a
            conversion is already in progress.
        """
        if not StringUtils.ensure_str(source_code).strip():
            return ConversionOutput(status=ConverterStatus.EMPTY_SOURCE)

        if not await self.state.guard.try_acquire():
            return None

        try:
            first: ConversionResult = await self.engine.convert(ConversionRequest(source_code, from_lang, to_lang1))
            second: ConversionResult = await self.engine.convert(ConversionRequest(source_code, from_lang, to_lang2))
        except Exception as err:  # noqa: BLE001
            logger.error("Conversion failed: %s", err)
            return ConversionOutput(status=ConverterStatus.FAILED)
        finally:
            await self.state.guard.release()

        status: str = first.status if first.status == second.status else f"{first.status} | {second.status}"
        logger.info("Converted %s -> %s, %s: %s", from_lang, to_lang1, to_lang2, status)
        return ConversionOutput(
            target1=first.text,
            target2=second.text,
            status=status,
            success=True,
            results=(first, second),
        )

    def update_mode(self, mode: str) -> None:
        """Change the operation mode.

        Raises:
            ConfigValueError: If the mode is unknown.
        """
        self.config.POLICY.MODE = validate_mode(mode)
        self.state.settings.mode = mode
        self._save_state()

    def update_confidence_threshold(self, threshold: float) -> None:
        """Change the confidence threshold.

        Raises:
            ConfigTypeError: If the value is not a number.
            ConfigValueError: If the value is outside [0, 1].
        """
        value: float = validate_threshold(threshold)
        self.config.POLICY.CONFIDENCE_THRESHOLD = value
        self.state.settings.confidence_threshold = value
        self._save_state()

    def update_model(self, model: str) -> None:
        """Change the model identifier.

        Raises:
            ValueError: If the identifier is empty.
        """
        self._set_model(model)
        self.state.settings.model = self.config.MODEL.MODEL
        self._save_state()

    def update_base_url(self, base_url: str) -> None:
        """Change the model server base URL.

        Raises:
            ConfigValueError: If the URL is not an http(s) URL.
        """
        self.config.MODEL.BASE_URL = validate_base_url(base_url)
        self.state.settings.base_url = base_url
        self._save_state()

    def reset_learning_data(self) -> str:
        """Wipe statistics, learned patterns and history; settings are kept."""
        self.state.reset_learning()
        if self.storage is not None:
            try:
                self.storage.clear()
            except StateStorageError as err:
                logger.error("Failed to delete stored learning state: %s", err)
        self._save_state()
        logger.info("Learning data reset")
        return ConverterStatus.LEARNING_RESET

    async def check_model_status(self) -> ModelStatus:
        """Probe the model server and list its models."""
        available: bool = await self.model_client.is_available()
        models: list[ModelInfo] = await self.model_client.list_models() if available else []
        return ModelStatus(available, self.model_client.base_url, self.model_client.model, models)

    async def close(self) -> None:
        """Release the HTTP session and the storage connection."""
        await self.model_client.close()
        if self.storage is not None:
            self.storage.close()
