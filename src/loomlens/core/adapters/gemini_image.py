"""Gemini image adapter.

Wraps the Google Gen AI SDK for image synthesis and instruction-based editing.
The same model identifier is used for every call; it defaults to
``gemini-2.5-flash-image`` and can be overridden with LOOMLENS_IMAGE_MODEL_ID.

The client is created lazily on the first call so a missing API key only
fails generation, not application start-up.
"""

import logging

from google import genai
from google.genai import errors, types

from loomlens.core.config import LoomLensConfig
from loomlens.core.images import RESPONSE_MIME_TYPE, ImageAttachment, detect_mime_type
from loomlens.core.model_adapters import (
    ImageAdapterBase,
    MissingCredentialsError,
    ServiceError,
    SynthesisRequest,
    adapter_registry,
)

logger = logging.getLogger(__name__)


class GeminiImageAdapter(ImageAdapterBase):
    """Image adapter backed by the Gemini image model."""

    name = "Gemini-Image"
    description = "Image generation and editing with Gemini"
    version = "1.0.0"

    def __init__(self, config: LoomLensConfig) -> None:
        super().__init__(config)
        self.model_id = config.image_model_id
        self._client: genai.Client | None = None

    def ensure_ready(self) -> None:
        self._get_client()

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.config.has_api_key:
                raise MissingCredentialsError("API Key is missing")
            self._client = genai.Client(api_key=self.config.api_key)
            logger.info(f"Gemini client initialized: model={self.model_id}")
        return self._client

    def _build_parts(self, request: SynthesisRequest) -> list[types.Part]:
        parts: list[types.Part] = []
        for item in request.ordered_parts():
            if isinstance(item, ImageAttachment):
                parts.append(types.Part.from_bytes(data=item.data, mime_type=item.mime_type))
            else:
                parts.append(types.Part.from_text(text=item))
        return parts

    def synthesize(self, request: SynthesisRequest) -> list[ImageAttachment]:
        client = self._get_client()
        contents = [types.Content(role="user", parts=self._build_parts(request))]

        try:
            response = client.models.generate_content(
                model=self.model_id,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
        except errors.APIError as e:
            logger.error(f"Gemini request failed: {e}")
            raise ServiceError(f"Image service request failed: {e}") from e

        images = self._extract_images(response)
        logger.info(f"Gemini returned {len(images)} image(s)")
        return images

    @staticmethod
    def _extract_images(response: types.GenerateContentResponse) -> list[ImageAttachment]:
        """Collect every inline image from the first candidate."""
        if not response.candidates:
            return []

        candidate = response.candidates[0]
        if candidate.content is None or candidate.content.parts is None:
            return []

        images = []
        for part in candidate.content.parts:
            if part.inline_data and part.inline_data.data:
                images.append(
                    ImageAttachment(
                        mime_type=part.inline_data.mime_type
                        or detect_mime_type(part.inline_data.data, default=RESPONSE_MIME_TYPE),
                        data=part.inline_data.data,
                    )
                )
            elif part.text:
                logger.debug(f"Gemini text response: {part.text}")
        return images


adapter_registry.register(GeminiImageAdapter)
