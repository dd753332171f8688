"""
Image generation provider adapters.
Every adapter shares the ImageProvider.generate contract.
"""

from typing import Dict

from .base import GenerationOptions, ImageProvider
from .openai_provider import OpenAIImageProvider
from .stability_provider import StabilityImageProvider


def build_providers(settings) -> Dict[str, ImageProvider]:
    """Instantiate every known provider from settings, configured or not."""
    timeout = settings.IMAGE_PROVIDER_TIMEOUT_SECONDS
    return {
        StabilityImageProvider.name: StabilityImageProvider(
            api_key=settings.STABILITY_API_KEY,
            api_url=settings.STABILITY_API_URL,
            model=settings.STABILITY_MODEL,
            cfg_scale=settings.STABILITY_CFG_SCALE,
            aspect_ratio=settings.STABILITY_ASPECT_RATIO,
            style_preset=settings.STABILITY_STYLE_PRESET,
            timeout=timeout,
        ),
        OpenAIImageProvider.name: OpenAIImageProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_IMAGE_MODEL,
            size=settings.OPENAI_IMAGE_SIZE,
            timeout=timeout,
        ),
    }


__all__ = [
    "GenerationOptions",
    "ImageProvider",
    "OpenAIImageProvider",
    "StabilityImageProvider",
    "build_providers",
]
