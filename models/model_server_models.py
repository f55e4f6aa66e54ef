"""Models for the model server (Ollama-compatible) REST API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin, dataclass_json

__all__: list[str] = ["GenerateOptions", "GenerateRequest", "ModelInfo"]


@dataclass_json
@dataclass
class GenerateOptions(DataClassJsonMixin):
    """Sampling options of a generate request."""

    temperature: float = 0.1
    top_p: float = 0.9
    stop: list[str] = field(default_factory=list)


@dataclass_json
@dataclass
class GenerateRequest(DataClassJsonMixin):
    """Body of ``POST /api/generate``."""

    model: str
    prompt: str
    stream: bool = False
    options: GenerateOptions = field(default_factory=GenerateOptions)


@dataclass_json
@dataclass
class ModelInfo(DataClassJsonMixin):
    """One entry of the ``GET /api/tags`` model list.

    Attributes:
        name (str): Model identifier, e.g. ``codellama:7b``.
        size (int): Model size in bytes, 0 when unknown.
    """

    name: str
    size: int = 0

    @property
    def label(self) -> str:
        """Display label with the size in GiB when known."""
        if self.size <= 0:
            return self.name
        return f"{self.name} ({self.size / 1024**3:.1f}GB)"
