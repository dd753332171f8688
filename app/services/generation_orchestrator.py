"""
Preview generation across image providers.

Slot A goes to the primary provider, slots B/C to the secondary when one is
configured. All slots run concurrently; every failed slot then gets one
sequential retry on the primary provider. The request only fails when no
slot produced an image.
"""
import asyncio
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from app.core.exceptions import ConfigurationError, GenerationFailedError, ProviderError
from app.schemas.generation import MAX_PREVIEW_COUNT, GenerateRequest
from app.services.image_providers import GenerationOptions, ImageProvider
from app.services.prompt_builder import Prompt, build_prompt, scene_pool
from app.utils.render_keys import make_job_id
import logging

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    images: List[bytes]
    job_id: str
    failed_slots: List[int] = field(default_factory=list)


def clamp_preview_count(count) -> int:
    try:
        count = int(count)
    except (TypeError, ValueError):
        count = MAX_PREVIEW_COUNT
    return max(1, min(count, MAX_PREVIEW_COUNT))


class GenerationOrchestrator:
    def __init__(
        self,
        providers: Dict[str, ImageProvider],
        primary: str,
        secondary: Optional[str] = None,
        rng: Optional[random.Random] = None,
        options: Optional[GenerationOptions] = None,
    ):
        self.providers = providers
        self.primary_name = (primary or "").strip().lower()
        self.secondary_name = (secondary or "").strip().lower()
        self.rng = rng or random.Random()
        self.options = options

    def _primary(self) -> ImageProvider:
        provider = self.providers.get(self.primary_name)
        if provider is None:
            raise ConfigurationError(f"Unknown image provider: {self.primary_name or '(none)'}")
        if not provider.is_configured:
            raise ConfigurationError(f"Missing {provider.missing_setting}")
        return provider

    def _secondary(self) -> Optional[ImageProvider]:
        if not self.secondary_name:
            return None
        if self.secondary_name == self.primary_name:
            logger.warning(f"Secondary provider '{self.secondary_name}' is the primary provider, using primary only")
            return None
        provider = self.providers.get(self.secondary_name)
        if provider is None:
            logger.warning(f"Unknown secondary image provider '{self.secondary_name}', using primary only")
            return None
        if not provider.is_configured:
            logger.warning(f"Secondary provider '{self.secondary_name}' not configured ({provider.missing_setting}), using primary only")
            return None
        return provider

    def build_slot_prompts(self, request: GenerateRequest, count: int) -> List[Prompt]:
        """One prompt per slot, each with a different scene when the pool allows."""
        pool = scene_pool(request.country, request.theme)
        self.rng.shuffle(pool)
        return [
            build_prompt(request.country, request.theme, request.time_of_day, scene=pool[slot % len(pool)])
            for slot in range(count)
        ]

    async def _attempt(self, provider: ImageProvider, prompt: Prompt, slot: int, job_id: str) -> bytes:
        logger.info(f"[{job_id}] slot {slot} -> {provider.name}")
        return await provider.generate(prompt.prompt, prompt.negative_prompt, self.options)

    async def generate_previews(self, request: GenerateRequest) -> GenerationResult:
        primary = self._primary()
        secondary = self._secondary()

        count = clamp_preview_count(request.preview_count)
        job_id = make_job_id()
        prompts = self.build_slot_prompts(request, count)

        assignments = [primary if slot == 0 or secondary is None else secondary for slot in range(count)]
        logger.info(
            f"[{job_id}] generating {count} preview(s) for country={request.country!r} "
            f"theme={request.theme!r} via {[p.name for p in assignments]}"
        )

        settled = await asyncio.gather(
            *(self._attempt(provider, prompts[slot], slot, job_id) for slot, provider in enumerate(assignments)),
            return_exceptions=True,
        )

        results: List[Optional[bytes]] = [None] * count
        first_error: Optional[BaseException] = None
        for slot, outcome in enumerate(settled):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.warning(f"[{job_id}] slot {slot} failed on {assignments[slot].name}: {outcome}")
                if first_error is None:
                    first_error = outcome
            else:
                results[slot] = outcome

        # One sequential fallback per failed slot, always on the primary provider
        for slot in range(count):
            if results[slot] is not None:
                continue
            try:
                results[slot] = await self._attempt(primary, prompts[slot], slot, job_id)
                logger.info(f"[{job_id}] slot {slot} recovered on fallback {primary.name}")
            except Exception as e:
                logger.warning(f"[{job_id}] slot {slot} fallback failed on {primary.name}: {e}")

        images = [image for image in results if image is not None]
        failed_slots = [slot for slot, image in enumerate(results) if image is None]

        if not images:
            message = _error_message(first_error) or "Image generation failed"
            logger.error(f"[{job_id}] all {count} slot(s) failed: {message}")
            raise GenerationFailedError(message)

        if failed_slots:
            logger.warning(f"[{job_id}] partial result: {len(images)}/{count} previews, failed slots {failed_slots}")
        else:
            logger.info(f"[{job_id}] {len(images)} preview(s) ready")

        return GenerationResult(images=images, job_id=job_id, failed_slots=failed_slots)


def _error_message(error: Optional[BaseException]) -> str:
    if error is None:
        return ""
    if isinstance(error, ProviderError):
        return error.message
    return str(error)
