"""
Gemini access for structured (JSON-schema constrained) generation.

The rest of the pipeline only sees `StructuredGenerator`: given an
instruction, a response schema and optionally a document payload, return
the raw JSON text produced by the model.
"""
import logging
from typing import Optional, Protocol

from ..config import get_settings
from .document_renderer import DocumentPayload, ImagePayload, TextPayload
from .errors import AiUnavailableError

logger = logging.getLogger(__name__)
settings = get_settings()

# Lazy initialization of Gemini client
_genai_client = None


def get_genai_client():
    """Get the Gemini client, initializing lazily if needed."""
    global _genai_client
    if _genai_client is None:
        from google import genai
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set - resume parsing disabled")
            return None
        _genai_client = genai.Client(api_key=settings.gemini_api_key)
    return _genai_client


class StructuredGenerator(Protocol):
    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        payload: Optional[DocumentPayload] = None,
    ) -> str:
        ...


class GeminiGenerator:
    """StructuredGenerator backed by the google-genai async client."""

    def __init__(self, client=None, model: Optional[str] = None, temperature: float = 0.1):
        self._client = client
        self.model = model or settings.gemini_model
        self.temperature = temperature

    @property
    def client(self):
        if self._client is None:
            self._client = get_genai_client()
        if self._client is None:
            raise AiUnavailableError("Gemini API not configured. Please set GEMINI_API_KEY.")
        return self._client

    def _build_contents(self, prompt: str, payload: Optional[DocumentPayload]) -> list:
        from google.genai import types

        contents = []
        if isinstance(payload, ImagePayload):
            contents.append(types.Part.from_bytes(data=payload.data, mime_type=payload.mime_type))
        elif isinstance(payload, TextPayload):
            contents.append(types.Part.from_text(text=payload.text))
        contents.append(types.Part.from_text(text=prompt))
        return contents

    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        payload: Optional[DocumentPayload] = None,
    ) -> str:
        from google.genai import types

        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=self._build_contents(prompt, payload),
            config=types.GenerateContentConfig(
                temperature=self.temperature,
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return (response.text or "").strip()
