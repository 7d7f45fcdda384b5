"""Random villager configuration generation."""

from villager_gen.generator.config_generator import (
    ConfigGenerator,
    Configuration,
    category_odds,
    weighted_random_category,
)
from villager_gen.generator.random_source import RandomSource, SeededRandomSource

__all__ = [
    "ConfigGenerator",
    "Configuration",
    "RandomSource",
    "SeededRandomSource",
    "category_odds",
    "weighted_random_category",
]
