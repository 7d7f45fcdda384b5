"""Collaborator capabilities consumed by the sequence controller."""

from typing import Protocol

from villager_gen.catalog.schemas import FollowerCatalog
from villager_gen.generator.config_generator import Configuration


class Renderer(Protocol):
    def apply_config(self, config: Configuration, catalog: FollowerCatalog) -> None:
        """Synchronously show ``config``: skins, slot colors, setup pose."""
        ...

    def play_death(self, speed_factor: float) -> float:
        """Start a death animation; return its unscaled duration, or 0 when none exists."""
        ...

    def play_spawn_in(self, speed_factor: float) -> float:
        """Start a spawn animation; return its unscaled duration, or 0 (and idle) when none exists."""
        ...

    def reset_to_idle(self) -> None: ...

    def start(self) -> None:
        """Begin the per-frame render loop."""
        ...


class SoundPlayer(Protocol):
    """Fire-and-forget phase cues."""

    def play_death(self) -> None: ...

    def play_spawn(self) -> None: ...

    def play_click(self) -> None: ...

    def play_shuffle_step(self) -> None: ...

    def play_land(self) -> None: ...
