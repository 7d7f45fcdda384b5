"""Error taxonomy for villager-gen.

Startup errors are fatal and surfaced once. Per-cycle degradations
(missing animations, unavailable audio) are absorbed by the renderer and
sound layers and never reach the sequence controller.
"""


class VillagerGenError(Exception):
    """Base class for all villager-gen errors."""


class StartupLoadError(VillagerGenError):
    """Catalog or renderer assets failed to load. Fatal, no retry."""


class CatalogEmpty(StartupLoadError):
    """The catalog holds no selectable form entries."""


class DegradedAnimation(VillagerGenError):
    """No candidate animation exists for the current form."""

    def __init__(self, kind: str, candidates: tuple[str, ...] | list[str]):
        self.kind = kind
        self.candidates = tuple(candidates)
        super().__init__(f"No {kind} animation found (tried: {', '.join(self.candidates)})")


class AudioUnavailable(VillagerGenError):
    """Sound subsystem is missing or blocked."""
