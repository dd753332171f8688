"""
Process-wide service wiring.

Built once at start-up from Settings and kept on app.state; routes receive
it through get_app_context, so tests can swap in fakes with
app.dependency_overrides.
"""
from dataclasses import dataclass
from typing import Dict

from fastapi import Request

from app.core.config import Settings
from app.services.generation_orchestrator import GenerationOrchestrator
from app.services.image_providers import ImageProvider, build_providers
from app.services.render_storage_service import RenderStorageService
from app.core.logging_config import logger


@dataclass
class AppContext:
    settings: Settings
    providers: Dict[str, ImageProvider]
    orchestrator: GenerationOrchestrator
    render_storage: RenderStorageService


def build_app_context(settings: Settings) -> AppContext:
    providers = build_providers(settings)
    orchestrator = GenerationOrchestrator(
        providers=providers,
        primary=settings.PRIMARY_IMAGE_PROVIDER,
        secondary=settings.SECONDARY_IMAGE_PROVIDER,
    )
    render_storage = RenderStorageService(settings)

    configured = [name for name, provider in providers.items() if provider.is_configured]
    logger.info(
        f"App context ready: primary={settings.PRIMARY_IMAGE_PROVIDER}, "
        f"secondary={settings.SECONDARY_IMAGE_PROVIDER or '-'}, configured providers={configured}"
    )
    return AppContext(
        settings=settings,
        providers=providers,
        orchestrator=orchestrator,
        render_storage=render_storage,
    )


def get_app_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        from app.core.config import settings
        context = build_app_context(settings)
        request.app.state.context = context
    return context
