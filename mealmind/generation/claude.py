"""Claude API generation backend."""

from __future__ import annotations

import base64
import logging
import mimetypes

from ..errors import ConfigurationError, GenerationParseError, TransportError
from . import MISSING_KEY_MESSAGE, UNAVAILABLE_MESSAGE, GenerationBackend, read_image

logger = logging.getLogger(__name__)


class ClaudeBackend(GenerationBackend):
    """Generate text (and read fridge photos) with Claude."""

    def __init__(
        self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929"
    ) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(
        self,
        prompt: str,
        *,
        image_paths: list[str] | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str:
        if not self._api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        content: list[dict] = []
        for path in image_paths or []:
            data = read_image(path)
            media_type = mimetypes.guess_type(path)[0] or "image/jpeg"
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": base64.standard_b64encode(data).decode(),
                    },
                }
            )
        content.append({"type": "text", "text": prompt})

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": content}],
            )
        except Exception as e:
            logger.warning("Claude request failed: %s", e)
            raise TransportError(str(e) or UNAVAILABLE_MESSAGE) from e

        text = "".join(
            getattr(block, "text", "") for block in response.content
        )
        if not text.strip():
            raise GenerationParseError("Пустой ответ от API")
        return text
