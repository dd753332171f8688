from typing import Optional

import httpx

from app.core.exceptions import ProviderError
from app.services.image_providers.base import GenerationOptions, ImageProvider
import logging

logger = logging.getLogger(__name__)


class StabilityImageProvider(ImageProvider):
    """
    Stability AI Stable Image (SD3) adapter.

    Sends a single multipart/form-data POST and returns the binary image body.
    """

    name = "stability"

    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str = "sd3.5-large",
        cfg_scale: float = 7.0,
        aspect_ratio: str = "1:1",
        style_preset: str = "",
        timeout: float = 90.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.cfg_scale = cfg_scale
        self.aspect_ratio = aspect_ratio
        self.style_preset = style_preset
        self.timeout = timeout
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def missing_setting(self) -> str:
        return "STABILITY_API_KEY"

    def _build_form(self, prompt: str, negative_prompt: str, options: GenerationOptions) -> dict:
        cfg_scale = options.cfg_scale if options.cfg_scale is not None else self.cfg_scale
        form = {
            "prompt": prompt,
            "negative_prompt": negative_prompt,
            "model": options.model or self.model,
            "output_format": options.output_format or "png",
            "cfg_scale": str(cfg_scale),
            "aspect_ratio": options.aspect_ratio or self.aspect_ratio,
        }
        style_preset = options.style_preset or self.style_preset
        if style_preset:
            form["style_preset"] = style_preset
        if options.seed is not None:
            form["seed"] = str(options.seed)
        return form

    async def _post(self, client: httpx.AsyncClient, form: dict) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "image/*",
        }
        # Each field is sent as its own multipart part without a filename
        files = {key: (None, value) for key, value in form.items()}
        return await client.post(self.api_url, headers=headers, files=files, timeout=self.timeout)

    async def generate(
        self,
        prompt: str,
        negative_prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> bytes:
        options = options or GenerationOptions()
        form = self._build_form(prompt, negative_prompt, options)

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, form)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, form)
        except httpx.TimeoutException:
            raise ProviderError(
                f"Stability request timed out after {self.timeout:.0f}s", provider=self.name
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Stability request failed: {e}", provider=self.name)

        if not response.is_success:
            logger.warning(f"Stability returned {response.status_code}: {response.text[:300]}")
            raise ProviderError(
                response.text or "Stability API error",
                provider=self.name,
                status=response.status_code,
            )

        content = response.content
        if not content:
            raise ProviderError("Stability returned an empty image body", provider=self.name)

        logger.info(f"Stability image received: {len(content)} bytes")
        return content
