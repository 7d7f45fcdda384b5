"""Configuration and status endpoints."""

from fastapi import APIRouter, Depends

from villager_gen.api.deps import get_context
from villager_gen.api.models import ConfigStatus
from villager_gen.context import AppContext

router = APIRouter()


@router.get("/config", response_model=ConfigStatus)
def get_config(ctx: AppContext = Depends(get_context)):
    """Get current configuration status."""
    settings = ctx.settings
    timing = ctx.controller.timing
    return ConfigStatus(
        catalog_path=str(settings.catalog_path) if settings.catalog_path else None,
        default_clothing=settings.default_clothing,
        seed_used=ctx.seed_used,
        shuffle_frames=timing.shuffle_frames,
        shuffle_base_delay_ms=timing.shuffle_base_delay_ms,
        shuffle_max_delay_ms=timing.shuffle_max_delay_ms,
        death_speed=timing.death_speed,
        spawn_speed=timing.spawn_speed,
    )
