"""Reroll sequencing: phases, timing and the controller."""

from villager_gen.sequence.controller import SequenceController
from villager_gen.sequence.phases import PhaseState, SequencePhase, next_phase
from villager_gen.sequence.scheduler import AsyncioScheduler, InstantScheduler, Scheduler
from villager_gen.sequence.timing import SequenceTiming, ease_out_quad, shuffle_delay

__all__ = [
    "AsyncioScheduler",
    "InstantScheduler",
    "PhaseState",
    "Scheduler",
    "SequenceController",
    "SequencePhase",
    "SequenceTiming",
    "ease_out_quad",
    "next_phase",
    "shuffle_delay",
]
