"""Renderer and sound collaborators."""

from villager_gen.render.headless import HeadlessRenderer, TrackState
from villager_gen.render.protocols import Renderer, SoundPlayer
from villager_gen.render.sound import BestEffortSoundPlayer, CueSoundPlayer, SilentSoundPlayer

__all__ = [
    "BestEffortSoundPlayer",
    "CueSoundPlayer",
    "HeadlessRenderer",
    "Renderer",
    "SilentSoundPlayer",
    "SoundPlayer",
    "TrackState",
]
