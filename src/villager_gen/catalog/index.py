"""Category index over option entries."""

from collections.abc import Iterable, Iterator, Mapping

from villager_gen.catalog.schemas import OptionEntry


class CatalogIndex(Mapping[int, tuple[OptionEntry, ...]]):
    """Option entries grouped by category, built once and read-only afterwards.

    Every entry lands in exactly one bucket: the one matching its
    ``category`` field. Entries keep their table order within a bucket and
    buckets exist only for categories that have entries.
    """

    def __init__(self, entries: Iterable[OptionEntry]):
        grouped: dict[int, list[OptionEntry]] = {}
        for entry in entries:
            grouped.setdefault(entry.category, []).append(entry)
        self._buckets: dict[int, tuple[OptionEntry, ...]] = {
            category: tuple(items) for category, items in grouped.items()
        }

    @classmethod
    def from_table(cls, table: Mapping[str, OptionEntry]) -> "CatalogIndex":
        """Index a mapping of id -> entry (the catalog's ``forms`` or ``clothing``)."""
        return cls(table.values())

    def __getitem__(self, category: int) -> tuple[OptionEntry, ...]:
        return self._buckets[category]

    def __iter__(self) -> Iterator[int]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def bucket(self, category: int) -> tuple[OptionEntry, ...]:
        """Entries in a category; empty when the category has none."""
        return self._buckets.get(category, ())

    def all_entries(self) -> list[OptionEntry]:
        """Every entry, flattened in bucket order."""
        return [entry for items in self._buckets.values() for entry in items]

    @property
    def entry_count(self) -> int:
        return sum(len(items) for items in self._buckets.values())
