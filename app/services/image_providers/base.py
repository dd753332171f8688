from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerationOptions:
    """Per-call knobs. None means "use the provider's configured default"."""
    model: Optional[str] = None
    cfg_scale: Optional[float] = None
    aspect_ratio: Optional[str] = None
    output_format: str = "png"
    style_preset: Optional[str] = None
    seed: Optional[int] = None


class ImageProvider(ABC):
    """
    One external text-to-image service.

    generate() issues exactly one request and returns the decoded image
    bytes, or raises ProviderError. Retrying is the caller's job.
    """

    name: str = ""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @property
    @abstractmethod
    def missing_setting(self) -> str:
        """Name of the setting that must be present for this provider."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        negative_prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> bytes:
        ...
