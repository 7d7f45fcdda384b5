"""Catalog schema and category index."""

from villager_gen.catalog.index import CatalogIndex
from villager_gen.catalog.schemas import (
    RGBA8,
    ColorSet,
    ColorTarget,
    FollowerCatalog,
    OptionEntry,
)

__all__ = [
    "RGBA8",
    "CatalogIndex",
    "ColorSet",
    "ColorTarget",
    "FollowerCatalog",
    "OptionEntry",
]
