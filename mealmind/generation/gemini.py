"""Gemini API generation backend."""

from __future__ import annotations

import logging
import mimetypes

from ..errors import ConfigurationError, GenerationParseError, TransportError
from . import MISSING_KEY_MESSAGE, UNAVAILABLE_MESSAGE, GenerationBackend, read_image

logger = logging.getLogger(__name__)


class GeminiBackend(GenerationBackend):
    """Generate text (and read fridge photos) with Google Gemini."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
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
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        parts: list = [prompt]
        for path in image_paths or []:
            data = read_image(path)
            mime_type = mimetypes.guess_type(path)[0] or "image/jpeg"
            parts.append({"mime_type": mime_type, "data": data})

        try:
            response = await model.generate_content_async(
                parts,
                generation_config={
                    "temperature": temperature,
                    "max_output_tokens": max_tokens,
                },
            )
        except Exception as e:
            logger.warning("Gemini request failed: %s", e)
            raise TransportError(str(e) or UNAVAILABLE_MESSAGE) from e

        try:
            text = response.text
        except ValueError:
            # Raised by the SDK when the candidate has no text parts
            text = ""
        if not text or not text.strip():
            raise GenerationParseError("Пустой ответ от API")
        return text
