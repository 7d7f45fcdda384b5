"""API request/response models."""

from pydantic import BaseModel, Field

from villager_gen.catalog.schemas import FollowerCatalog
from villager_gen.generator.config_generator import Configuration


class ConfigStatus(BaseModel):
    """Current configuration status."""

    catalog_path: str | None
    default_clothing: str
    seed_used: int | None
    shuffle_frames: int
    shuffle_base_delay_ms: float
    shuffle_max_delay_ms: float
    death_speed: float
    spawn_speed: float


class CategorySummary(BaseModel):
    category: int
    weight: float | None
    odds: float = Field(..., description="Probability of the category being drawn")
    forms: list[str] = Field(default_factory=list)


class CatalogSummary(BaseModel):
    categories: list[CategorySummary]
    form_count: int
    clothing: list[str]
    general_color_sets: int
    animations: dict[str, float]


class ConfigurationOut(BaseModel):
    """A configuration with its display fields resolved."""

    form_id: str
    form_name: str
    form_variant_index: int
    form_variant: str
    form_color_index: int
    clothing_id: str
    clothing_variant_index: int
    clothing_color_index: int

    @classmethod
    def from_config(cls, config: Configuration, catalog: FollowerCatalog) -> "ConfigurationOut":
        form = catalog.forms[config.form_id]
        return cls(
            form_id=config.form_id,
            form_name=form.display_name,
            form_variant_index=config.form_variant_index,
            form_variant=form.variants[config.form_variant_index],
            form_color_index=config.form_color_index,
            clothing_id=config.clothing_id,
            clothing_variant_index=config.clothing_variant_index,
            clothing_color_index=config.clothing_color_index,
        )


class RerollResponse(BaseModel):
    accepted: bool = Field(..., description="False when a cycle was already running")
    phase: str


class SequenceStateOut(BaseModel):
    phase: str
    step: int
    total: int
    busy: bool
    label: str
    config: ConfigurationOut | None = None
    cycles_completed: int
    animation: str
