"""Explicit wiring of catalog, generator, renderer, sound and controller.

One AppContext is built at startup and handed to whatever drives the
sequence (CLI command, API app, tests).
"""

import logging
from dataclasses import dataclass

from villager_gen.catalog.schemas import FollowerCatalog
from villager_gen.config import Settings
from villager_gen.constants import FORM_WEIGHTS
from villager_gen.data.loader import load_catalog, require_clothing
from villager_gen.generator.config_generator import ConfigGenerator
from villager_gen.generator.random_source import RandomSource, SeededRandomSource
from villager_gen.render.headless import HeadlessRenderer
from villager_gen.render.protocols import SoundPlayer
from villager_gen.render.sound import CueSoundPlayer, SilentSoundPlayer, SoundOutput
from villager_gen.sequence.controller import SequenceController
from villager_gen.sequence.scheduler import AsyncioScheduler, Scheduler
from villager_gen.sequence.timing import SequenceTiming

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything one running villager creator needs."""

    settings: Settings
    catalog: FollowerCatalog
    random_source: RandomSource
    generator: ConfigGenerator
    renderer: HeadlessRenderer
    sound: SoundPlayer
    controller: SequenceController

    @property
    def seed_used(self) -> int | None:
        return getattr(self.random_source, "seed_used", None)


def build_sound_player(settings: Settings, output: SoundOutput | None = None) -> SoundPlayer:
    """Cue player when a sounds directory and an output exist, otherwise silence."""
    if output is None or not settings.sounds_dir.is_dir():
        logger.info("Sound disabled (sounds dir %s, output %s)", settings.sounds_dir, output)
        return SilentSoundPlayer()
    return CueSoundPlayer(settings.sounds_dir, settings.cue_volumes(), output)


def build_context(
    settings: Settings,
    *,
    catalog: FollowerCatalog | None = None,
    random_source: RandomSource | None = None,
    scheduler: Scheduler | None = None,
    sound: SoundPlayer | None = None,
    sound_output: SoundOutput | None = None,
) -> AppContext:
    """Build the context; raises StartupLoadError when the catalog cannot be used."""
    if catalog is None:
        catalog = load_catalog(settings.catalog_path)
    require_clothing(catalog, settings.default_clothing)

    if random_source is None:
        random_source = SeededRandomSource(settings.random_seed)

    generator = ConfigGenerator(
        catalog,
        random_source,
        weights=FORM_WEIGHTS,
        default_clothing_id=settings.default_clothing,
    )
    renderer = HeadlessRenderer.for_catalog(catalog)
    if sound is None:
        sound = build_sound_player(settings, sound_output)

    controller = SequenceController(
        generator,
        renderer,
        sound,
        scheduler=scheduler or AsyncioScheduler(),
        timing=SequenceTiming.from_settings(settings),
    )
    return AppContext(
        settings=settings,
        catalog=catalog,
        random_source=random_source,
        generator=generator,
        renderer=renderer,
        sound=sound,
        controller=controller,
    )
