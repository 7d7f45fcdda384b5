"""Catalog and one-off generation endpoints."""

from fastapi import APIRouter, Depends, Query

from villager_gen.api.deps import get_context, get_roll_generator
from villager_gen.api.models import CatalogSummary, CategorySummary, ConfigurationOut
from villager_gen.context import AppContext
from villager_gen.generator.config_generator import ConfigGenerator, category_odds

router = APIRouter()


@router.get("/catalog", response_model=CatalogSummary)
def get_catalog(ctx: AppContext = Depends(get_context)):
    """Form categories with their weights and effective odds."""
    buckets = ctx.generator.forms_by_category
    weights = ctx.generator.weights
    odds = category_odds(buckets, weights)

    categories = [
        CategorySummary(
            category=category,
            weight=weights.get(category),
            odds=odds.get(category, 0.0),
            forms=[entry.id for entry in buckets.bucket(category)],
        )
        for category in sorted(set(buckets) | set(weights))
    ]
    return CatalogSummary(
        categories=categories,
        form_count=buckets.entry_count,
        clothing=sorted(ctx.catalog.clothing),
        general_color_sets=len(ctx.catalog.general_color_sets),
        animations=ctx.catalog.animations,
    )


@router.get("/roll", response_model=list[ConfigurationOut])
async def roll(
    count: int = Query(default=1, ge=1, le=64),
    ctx: AppContext = Depends(get_context),
    generator: ConfigGenerator = Depends(get_roll_generator),
):
    """Generate configurations without touching the running sequence or its seed."""
    return [
        ConfigurationOut.from_config(config, ctx.catalog)
        for config in generator.generate_multiple(count)
    ]
