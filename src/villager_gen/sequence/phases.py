"""Reroll sequence phases and the transition function."""

from dataclasses import dataclass
from enum import Enum


class SequencePhase(str, Enum):
    IDLE = "idle"
    DEATH = "death"
    SPAWN = "spawn"
    SHUFFLE = "shuffle"
    SETTLING = "settling"


@dataclass(frozen=True)
class PhaseState:
    """The active phase. ``step``/``total`` are only meaningful for SHUFFLE."""

    phase: SequencePhase
    step: int = 0
    total: int = 0

    @property
    def is_final_shuffle_step(self) -> bool:
        return self.phase is SequencePhase.SHUFFLE and self.step == self.total - 1

    def __str__(self) -> str:
        if self.phase is SequencePhase.SHUFFLE:
            return f"shuffle({self.step + 1}/{self.total})"
        return self.phase.value


IDLE = PhaseState(SequencePhase.IDLE)


def next_phase(state: PhaseState, shuffle_frames: int) -> PhaseState:
    """Advance one step through idle -> death -> spawn -> shuffle(N) -> settling -> idle."""
    if state.phase is SequencePhase.IDLE:
        return PhaseState(SequencePhase.DEATH)
    if state.phase is SequencePhase.DEATH:
        return PhaseState(SequencePhase.SPAWN)
    if state.phase is SequencePhase.SPAWN:
        return PhaseState(SequencePhase.SHUFFLE, 0, shuffle_frames)
    if state.phase is SequencePhase.SHUFFLE:
        if state.step < state.total - 1:
            return PhaseState(SequencePhase.SHUFFLE, state.step + 1, state.total)
        return PhaseState(SequencePhase.SETTLING)
    return IDLE
