"""Pydantic models for the follower catalog document.

Pydantic validates shape once at load time (required fields, value ranges,
non-empty variant lists). Code downstream of the loader can rely on every
field being present.
"""

from pydantic import BaseModel, Field, field_validator, model_validator


class RGBA8(BaseModel):
    """An 8-bit-per-channel color."""

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    model_config = {"frozen": True}

    def as_floats(self) -> tuple[float, float, float, float]:
        """Normalized (0-1) channels, the form renderers consume."""
        return (self.r / 255, self.g / 255, self.b / 255, self.a / 255)


class ColorTarget(BaseModel):
    """One color applied to a group of render slots."""

    color: RGBA8
    slots: list[str] = Field(default_factory=list, description="Slot names to tint")

    model_config = {"frozen": True}


# A color set is an ordered palette of slot-group colors
ColorSet = list[ColorTarget]


class OptionEntry(BaseModel):
    """A selectable form or clothing item."""

    id: str = Field(default="", description="Entry identifier (the catalog key)")
    name: str | None = Field(None, description="Display name")
    category: int = Field(default=0, ge=0, description="Rarity tier (higher = rarer)")
    variants: list[str] = Field(..., min_length=1, description="Skin names, in order")
    sets: list[ColorSet] = Field(default_factory=list, description="Entry-specific color sets")
    can_be_tinted: bool = Field(default=False, alias="canBeTinted")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("category", mode="before")
    @classmethod
    def null_category(cls, v):
        """Documents written by hand use null for 'no category'."""
        return 0 if v is None else v

    @field_validator("sets", mode="before")
    @classmethod
    def null_sets(cls, v):
        return [] if v is None else v

    @property
    def display_name(self) -> str:
        return self.name or self.id


class FollowerCatalog(BaseModel):
    """The full catalog: forms, clothing, shared palettes and animation timings."""

    forms: dict[str, OptionEntry]
    clothing: dict[str, OptionEntry]
    general_color_sets: list[ColorSet] = Field(
        default_factory=list, alias="generalColorSets"
    )
    animations: dict[str, float] = Field(
        default_factory=dict, description="Skeleton animation durations in seconds"
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def copy_keys_to_ids(cls, data):
        """Entries are keyed by id in the document; mirror the key into each entry."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for table in ("forms", "clothing"):
            entries = data.get(table)
            if isinstance(entries, dict):
                data[table] = {
                    key: {**value, "id": key} if isinstance(value, dict) else value
                    for key, value in entries.items()
                }
        return data

    @field_validator("animations")
    @classmethod
    def non_negative_durations(cls, v: dict[str, float]) -> dict[str, float]:
        for name, duration in v.items():
            if duration < 0:
                raise ValueError(f"Animation {name!r} has negative duration {duration}")
        return v

    def form_label(self, form_id: str) -> str:
        """Display label for a form id, falling back to the id itself."""
        entry = self.forms.get(form_id)
        return entry.display_name if entry else form_id

    def form_color_pool(self, form_id: str) -> list[ColorSet]:
        """Form-specific palettes followed by the shared general palettes."""
        return [*self.forms[form_id].sets, *self.general_color_sets]
