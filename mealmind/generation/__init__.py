"""Generation backend base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ValidationError

if TYPE_CHECKING:
    from ..config import MealMindConfig

UNAVAILABLE_MESSAGE = "Сервис временно недоступен"
MISSING_KEY_MESSAGE = (
    "API ключ не настроен. "
    "Добавьте ключ в файл настроек или в переменную окружения."
)


def read_image(path: str) -> bytes:
    """Load a photo to attach to a request.

    Raises:
        ValidationError: The file is missing or unreadable.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ValidationError(f"Не удалось прочитать изображение: {path}") from e


class GenerationBackend(ABC):
    """Abstract text generator backed by a hosted LLM."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        image_paths: list[str] | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str:
        """Send ``prompt`` (plus optional images) and return the reply text.

        Raises ConfigurationError before any network call when no
        credential is configured, ValidationError when an image cannot be
        read, TransportError when the call fails and
        GenerationParseError when the reply is empty.
        """
        ...


def create_backend(config: MealMindConfig) -> GenerationBackend:
    """Create a generation backend based on configuration."""
    backend_name = config.generation.backend

    match backend_name:
        case "gemini":
            from .gemini import GeminiBackend

            return GeminiBackend(
                api_key=config.generation.gemini.api_key,
                model=config.generation.gemini.model,
            )
        case "claude":
            from .claude import ClaudeBackend

            return ClaudeBackend(
                api_key=config.generation.claude.api_key,
                model=config.generation.claude.model,
            )
        case _:
            raise ValueError(
                f"Неизвестный сервис генерации: {backend_name!r} "
                f"(выберите gemini или claude)"
            )
