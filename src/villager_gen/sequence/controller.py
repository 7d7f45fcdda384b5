"""Reroll sequence controller.

Drives one reroll cycle as a strictly ordered state machine:

    idle -> death -> spawn -> shuffle(0..N-1) -> settling -> idle

Each phase runs its side effects (renderer, sound, label) and returns how
long to stay in it; the controller suspends on the scheduler for that long
and then advances with ``next_phase``. A busy flag admits at most one cycle
at a time: triggers that arrive mid-cycle are dropped, not queued.
"""

import asyncio
import logging
from collections.abc import Callable

from villager_gen.generator.config_generator import ConfigGenerator, Configuration
from villager_gen.render.protocols import Renderer, SoundPlayer
from villager_gen.render.sound import BestEffortSoundPlayer
from villager_gen.sequence.phases import IDLE, PhaseState, SequencePhase, next_phase
from villager_gen.sequence.scheduler import AsyncioScheduler, Scheduler
from villager_gen.sequence.timing import SequenceTiming, shuffle_delay

logger = logging.getLogger(__name__)

PhaseListener = Callable[[PhaseState], None]
LabelListener = Callable[[str], None]


class SequenceController:
    """Orchestrates death, spawn, shuffle and settle for each accepted reroll."""

    def __init__(
        self,
        generator: ConfigGenerator,
        renderer: Renderer,
        sound: SoundPlayer,
        scheduler: Scheduler | None = None,
        timing: SequenceTiming | None = None,
    ):
        self.generator = generator
        self.catalog = generator.catalog
        self.renderer = renderer
        self.sound = sound if isinstance(sound, BestEffortSoundPlayer) else BestEffortSoundPlayer(sound)
        self.scheduler = scheduler or AsyncioScheduler()
        self.timing = timing or SequenceTiming()

        self._state = IDLE
        self._busy = False
        self._shuffle_batch: list[Configuration] = []
        self._current: Configuration | None = None
        self._label = ""
        self._phase_listeners: list[PhaseListener] = []
        self._label_listeners: list[LabelListener] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self.cycles_completed = 0

    # --- Introspection ---

    @property
    def state(self) -> PhaseState:
        return self._state

    @property
    def phase(self) -> SequencePhase:
        return self._state.phase

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def current_config(self) -> Configuration | None:
        return self._current

    @property
    def label(self) -> str:
        return self._label

    def add_listener(self, listener: PhaseListener) -> None:
        """Call ``listener`` with every phase entered, including the final idle."""
        self._phase_listeners.append(listener)

    def remove_listener(self, listener: PhaseListener) -> None:
        if listener in self._phase_listeners:
            self._phase_listeners.remove(listener)

    def add_label_listener(self, listener: LabelListener) -> None:
        self._label_listeners.append(listener)

    # --- Triggers ---

    def show_initial(self) -> Configuration:
        """Show a first villager without running a cycle."""
        config = self.generator.generate()
        self._apply(config)
        return config

    def trigger(self) -> "asyncio.Task[None] | None":
        """Start a cycle on the running loop; None when a cycle is already in flight.

        Raises RuntimeError without touching the guard when no loop is running.
        """
        loop = asyncio.get_running_loop()
        if not self._begin():
            return None
        task = loop.create_task(self._run_cycle())
        self._tasks.add(task)
        task.add_done_callback(self._cycle_done)
        return task

    @property
    def pending_cycles(self) -> int:
        return len(self._tasks)

    def _cycle_done(self, task: "asyncio.Task[None]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Reroll cycle cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reroll cycle failed", exc_info=exc)

    async def reroll(self) -> bool:
        """Run a full cycle; False when a cycle is already in flight."""
        if not self._begin():
            return False
        await self._run_cycle()
        return True

    def _begin(self) -> bool:
        if self._busy:
            logger.debug("Reroll ignored, cycle in progress (%s)", self._state)
            return False
        self._busy = True
        self.sound.play_click()
        self._set_state(PhaseState(SequencePhase.DEATH))
        return True

    # --- Cycle ---

    async def _run_cycle(self) -> None:
        state = self._state
        try:
            while state.phase is not SequencePhase.IDLE:
                seconds = self._run_phase(state)
                if seconds > 0:
                    await self.scheduler.sleep(seconds)
                state = next_phase(state, self.timing.shuffle_frames)
                self._set_state(state)
        except BaseException:
            # Never leave the guard set behind a failed cycle
            self._busy = False
            self._set_state(IDLE)
            raise

    def _run_phase(self, state: PhaseState) -> float:
        """Run the side effects of ``state``; return seconds to remain in it."""
        if state.phase is SequencePhase.DEATH:
            self.sound.play_death()
            duration = self.renderer.play_death(self.timing.death_speed)
            return duration / self.timing.death_speed if duration > 0 else 0.0

        if state.phase is SequencePhase.SPAWN:
            self._apply(self.generator.generate())
            self.sound.play_spawn()
            duration = self.renderer.play_spawn_in(self.timing.spawn_speed)
            return duration / self.timing.spawn_speed if duration > 0 else 0.0

        if state.phase is SequencePhase.SHUFFLE:
            if state.step == 0:
                self._shuffle_batch = self.generator.generate_multiple(state.total)
            self._apply(self._shuffle_batch[state.step])
            if not state.is_final_shuffle_step:
                self.sound.play_shuffle_step()
            delay_ms = shuffle_delay(
                state.step,
                state.total,
                self.timing.shuffle_base_delay_ms,
                self.timing.shuffle_max_delay_ms,
            )
            return delay_ms / 1000

        if state.phase is SequencePhase.SETTLING:
            self.sound.play_land()
            self.renderer.reset_to_idle()
            self._shuffle_batch = []
            self._busy = False
            self.cycles_completed += 1
            return 0.0

        return 0.0

    def _apply(self, config: Configuration) -> None:
        self.renderer.apply_config(config, self.catalog)
        self._current = config
        self._label = self.generator.label_for(config)
        for listener in list(self._label_listeners):
            try:
                listener(self._label)
            except Exception:
                logger.exception("Label listener failed")

    def _set_state(self, state: PhaseState) -> None:
        self._state = state
        logger.debug("Phase -> %s", state)
        for listener in list(self._phase_listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Phase listener failed on %s", state)
