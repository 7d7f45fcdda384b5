"""In-memory renderer.

Tracks what a skeletal renderer would show (combined skin, tinted slots,
current animation track) without drawing anything. Used by the CLI, the
HTTP API and tests.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from villager_gen.catalog.schemas import RGBA8, ColorSet, FollowerCatalog
from villager_gen.constants import DEATH_ANIMATIONS, IDLE_ANIMATION, SPAWN_ANIMATIONS
from villager_gen.errors import DegradedAnimation
from villager_gen.generator.config_generator import Configuration

logger = logging.getLogger(__name__)


@dataclass
class TrackState:
    """The animation currently playing on the main track."""

    name: str
    duration: float
    loop: bool
    time_scale: float = 1.0
    time: float = 0.0

    @property
    def complete(self) -> bool:
        return not self.loop and self.time >= self.duration

    def advance(self, delta: float) -> None:
        self.time += delta * self.time_scale
        if self.loop:
            if self.duration > 0:
                self.time %= self.duration
        else:
            self.time = min(self.time, self.duration)


class HeadlessRenderer:
    """Renderer that keeps skeleton state in memory."""

    FRAME_INTERVAL = 1 / 60

    def __init__(self, animations: Mapping[str, float], slots: Iterable[str] | None = None):
        self.animations = dict(animations)
        # None = accept every slot name
        self.known_slots = set(slots) if slots is not None else None

        self.skin: tuple[str, ...] = ()
        self.slot_colors: dict[str, RGBA8] = {}
        self.current_config: Configuration | None = None
        self.apply_count = 0
        self.frames_rendered = 0
        self.track = TrackState(IDLE_ANIMATION, self.animations.get(IDLE_ANIMATION, 0.0), loop=True)
        self._task: asyncio.Task | None = None

    @classmethod
    def for_catalog(cls, catalog: FollowerCatalog) -> "HeadlessRenderer":
        return cls(catalog.animations)

    # --- Configuration ---

    def apply_config(self, config: Configuration, catalog: FollowerCatalog) -> None:
        form = catalog.forms[config.form_id]
        clothing = catalog.clothing[config.clothing_id]

        form_variant = form.variants[config.form_variant_index % len(form.variants)]
        clothing_variant = clothing.variants[config.clothing_variant_index % len(clothing.variants)]
        self.skin = (form_variant, clothing_variant)

        # Setup pose: slot colors go back to the skin's own
        self.slot_colors = {}

        if form.can_be_tinted:
            pool = catalog.form_color_pool(config.form_id)
            if pool:
                self._apply_colors(pool[config.form_color_index % len(pool)])

        if clothing.sets:
            self._apply_colors(clothing.sets[config.clothing_color_index % len(clothing.sets)])

        self.current_config = config
        self.apply_count += 1

    def _apply_colors(self, color_set: ColorSet) -> None:
        for target in color_set:
            for slot in target.slots:
                if self.known_slots is not None and slot not in self.known_slots:
                    continue
                self.slot_colors[slot] = target.color

    # --- Animations ---

    def find_animation(self, kind: str, candidates: Iterable[str]) -> str:
        """First candidate the skeleton has; DegradedAnimation when none match."""
        candidates = tuple(candidates)
        for name in candidates:
            if name in self.animations:
                return name
        raise DegradedAnimation(kind, candidates)

    def _set_track(self, name: str, loop: bool, time_scale: float = 1.0) -> None:
        self.track = TrackState(name, self.animations.get(name, 0.0), loop=loop, time_scale=time_scale)

    def play_death(self, speed_factor: float) -> float:
        try:
            name = self.find_animation("death", DEATH_ANIMATIONS)
        except DegradedAnimation as e:
            logger.warning("%s", e)
            return 0.0
        self._set_track(name, loop=False, time_scale=speed_factor)
        return self.animations[name]

    def play_spawn_in(self, speed_factor: float) -> float:
        try:
            name = self.find_animation("spawn", SPAWN_ANIMATIONS)
        except DegradedAnimation as e:
            logger.warning("%s", e)
            self.reset_to_idle()
            return 0.0
        self._set_track(name, loop=False, time_scale=speed_factor)
        return self.animations[name]

    def reset_to_idle(self) -> None:
        self._set_track(IDLE_ANIMATION, loop=True)

    @property
    def is_idle(self) -> bool:
        return self.track.name == IDLE_ANIMATION and self.track.loop

    # --- Frame loop ---

    def update(self, delta: float) -> None:
        """Advance one frame by ``delta`` seconds."""
        self.track.advance(delta)
        self.frames_rendered += 1

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._render_loop())

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _render_loop(self) -> None:
        loop = asyncio.get_running_loop()
        last = loop.time()
        while True:
            await asyncio.sleep(self.FRAME_INTERVAL)
            now = loop.time()
            self.update(now - last)
            last = now
