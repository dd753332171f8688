import base64
import binascii
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from app.core.exceptions import ProviderError
from app.services.image_providers.base import GenerationOptions, ImageProvider
import logging

logger = logging.getLogger(__name__)


class OpenAIImageProvider(ImageProvider):
    """
    OpenAI Images adapter.

    The Images API has no negative prompt field, so the denylist is appended
    to the prompt as an "Avoid:" clause. The image comes back as base64.
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-image-1",
        size: str = "1024x1024",
        timeout: float = 90.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.size = size
        self.timeout = timeout
        self._http_client = http_client
        self._client = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def missing_setting(self) -> str:
        return "OPENAI_API_KEY"

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            kwargs = {"api_key": self.api_key, "timeout": self.timeout, "max_retries": 0}
            if self._http_client is not None:
                kwargs["http_client"] = self._http_client
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    @staticmethod
    def compose_prompt(prompt: str, negative_prompt: str) -> str:
        if not negative_prompt:
            return prompt
        return f"{prompt}. Avoid: {negative_prompt}"

    async def generate(
        self,
        prompt: str,
        negative_prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> bytes:
        options = options or GenerationOptions()
        model = options.model or self.model
        params = {
            "model": model,
            "prompt": self.compose_prompt(prompt, negative_prompt),
            "size": self.size,
            "n": 1,
        }
        # gpt-image models always answer with base64; dall-e needs asking
        if model.startswith("dall-e"):
            params["response_format"] = "b64_json"

        try:
            result = await self.client.images.generate(**params)
        except openai.APIStatusError as e:
            logger.warning(f"OpenAI images returned {e.status_code}: {e.response.text[:300]}")
            raise ProviderError(
                e.response.text or str(e), provider=self.name, status=e.status_code
            )
        except openai.APITimeoutError:
            raise ProviderError(
                f"OpenAI image request timed out after {self.timeout:.0f}s", provider=self.name
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI image request failed: {e}", provider=self.name)

        if not result.data or not result.data[0].b64_json:
            raise ProviderError("OpenAI returned no image data", provider=self.name)

        try:
            content = base64.b64decode(result.data[0].b64_json)
        except (binascii.Error, ValueError) as e:
            raise ProviderError(f"OpenAI returned undecodable image data: {e}", provider=self.name)

        logger.info(f"OpenAI image received: {len(content)} bytes")
        return content
