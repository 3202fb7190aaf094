"""Image service adapter implementations."""

from .gemini_image import GeminiImageAdapter

__all__ = ["GeminiImageAdapter"]
