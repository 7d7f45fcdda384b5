"""Weighted random villager configuration generator.

Forms are chosen in two stages: a category is picked by cumulative-weight
roulette over the categories that actually have entries, then an entry is
picked uniformly inside that category. Variant and color set indices are
drawn uniformly afterwards.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from villager_gen.catalog.index import CatalogIndex
from villager_gen.catalog.schemas import FollowerCatalog, OptionEntry
from villager_gen.constants import DEFAULT_CLOTHING_ID, FORM_WEIGHTS
from villager_gen.errors import CatalogEmpty
from villager_gen.generator.random_source import RandomSource, SeededRandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Configuration:
    """A complete villager appearance.

    Indices are valid for the entries they refer to at construction time.
    ``form_color_index`` spans the form's own color sets followed by the
    catalog's general color sets.
    """

    form_id: str
    form_variant_index: int
    form_color_index: int
    clothing_id: str
    clothing_variant_index: int = 0
    clothing_color_index: int = 0


def random_item(items: tuple[OptionEntry, ...] | list[OptionEntry], rng: RandomSource) -> OptionEntry:
    return items[rng.next_int(len(items))]


def weighted_random_category(
    buckets: Mapping[int, tuple[OptionEntry, ...]],
    weights: Mapping[int, float],
    rng: RandomSource,
) -> OptionEntry:
    """Select an entry using weighted category selection.

    Only categories that are both weighted and non-empty take part. When none
    do, the draw falls back to a uniform pick over every entry so incomplete
    weight metadata never prevents generation.
    """
    total_weight = 0.0
    available: list[tuple[int, float]] = []
    for category, weight in weights.items():
        if buckets.get(category):
            total_weight += weight
            available.append((category, weight))

    if total_weight == 0:
        everything = [entry for items in buckets.values() for entry in items]
        if not everything:
            raise CatalogEmpty("No option entries to select from")
        return random_item(everything, rng)

    remaining = rng.next_float() * total_weight
    for category, weight in available:
        remaining -= weight
        if remaining <= 0:
            return random_item(buckets[category], rng)

    # Float rounding can leave a sliver of weight unconsumed
    return random_item(buckets[available[0][0]], rng)


def category_odds(
    buckets: Mapping[int, tuple[OptionEntry, ...]],
    weights: Mapping[int, float],
) -> dict[int, float]:
    """Probability of drawing each category, matching weighted_random_category."""
    available = {c: w for c, w in weights.items() if buckets.get(c)}
    total = sum(available.values())
    if total == 0:
        count = sum(len(items) for items in buckets.values())
        if not count:
            return {}
        return {c: len(items) / count for c, items in buckets.items()}
    return {c: w / total for c, w in available.items()}


class ConfigGenerator:
    """Produces random configurations from a catalog.

    Pure apart from the random source: the catalog and index are read-only
    after construction.
    """

    def __init__(
        self,
        catalog: FollowerCatalog,
        random_source: RandomSource | None = None,
        weights: Mapping[int, float] = FORM_WEIGHTS,
        default_clothing_id: str = DEFAULT_CLOTHING_ID,
    ):
        self.catalog = catalog
        self.rng = random_source if random_source is not None else SeededRandomSource()
        self.weights = dict(weights)
        self.default_clothing_id = default_clothing_id
        self.forms_by_category = CatalogIndex.from_table(catalog.forms)

        if self.forms_by_category.entry_count == 0:
            raise CatalogEmpty("Catalog contains no forms")

        unweighted = [c for c in self.forms_by_category if c not in self.weights]
        if unweighted:
            logger.warning(
                "Form categories %s have no weight and will only be drawn by the uniform fallback",
                sorted(unweighted),
            )

    def pick_form(self) -> OptionEntry:
        return weighted_random_category(self.forms_by_category, self.weights, self.rng)

    def generate(self) -> Configuration:
        """Generate a random villager configuration."""
        form = self.pick_form()

        # Form color set (form-specific + general)
        total_color_sets = len(form.sets) + len(self.catalog.general_color_sets)

        return Configuration(
            form_id=form.id,
            form_variant_index=self.rng.next_int(len(form.variants)),
            form_color_index=self.rng.next_int(total_color_sets) if total_color_sets else 0,
            clothing_id=self.default_clothing_id,
            clothing_variant_index=0,
            clothing_color_index=0,
        )

    def generate_multiple(self, count: int) -> list[Configuration]:
        """Generate ``count`` independent configurations (for the shuffle phase)."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.generate() for _ in range(count)]

    def label_for(self, config: Configuration) -> str:
        """Display label for a configuration's form."""
        return self.catalog.form_label(config.form_id)
