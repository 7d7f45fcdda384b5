"""Phase sound cues.

Playback is best-effort: a missing file or a blocked output never holds up
the visual sequence.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from villager_gen.constants import DEFAULT_CUE_VOLUME
from villager_gen.errors import AudioUnavailable

logger = logging.getLogger(__name__)

# Receives the resolved sound file and its volume (0-1)
SoundOutput = Callable[[Path, float], None]


class CueSoundPlayer:
    """Resolves cues to ``<sounds_dir>/<cue>.wav`` and hands them to an output."""

    def __init__(
        self,
        sounds_dir: Path,
        volumes: Mapping[str, float] | None = None,
        output: SoundOutput | None = None,
    ):
        self.sounds_dir = Path(sounds_dir)
        self.volumes = dict(volumes or {})
        self.output = output

    def cue_path(self, cue: str) -> Path:
        return self.sounds_dir / f"{cue}.wav"

    def _play(self, cue: str) -> None:
        if self.output is None:
            raise AudioUnavailable("No audio output configured")
        path = self.cue_path(cue)
        if not path.is_file():
            raise AudioUnavailable(f"Sound file not found: {path}")
        self.output(path, self.volumes.get(cue, DEFAULT_CUE_VOLUME))

    def play_death(self) -> None:
        self._play("death")

    def play_spawn(self) -> None:
        self._play("spawn")

    def play_click(self) -> None:
        self._play("click")

    def play_shuffle_step(self) -> None:
        self._play("shuffle")

    def play_land(self) -> None:
        self._play("land")


class SilentSoundPlayer:
    """No audio at all (headless runs without a sounds directory)."""

    def play_death(self) -> None:
        pass

    def play_spawn(self) -> None:
        pass

    def play_click(self) -> None:
        pass

    def play_shuffle_step(self) -> None:
        pass

    def play_land(self) -> None:
        pass


class BestEffortSoundPlayer:
    """Wraps a sound player and swallows its failures.

    The first failure per cue is logged as a warning, repeats at debug level.
    """

    def __init__(self, inner):
        self.inner = inner
        self._warned: set[str] = set()

    def _safe(self, cue: str, play: Callable[[], None]) -> None:
        try:
            play()
        except Exception as e:
            if cue in self._warned:
                logger.debug("Sound cue %s skipped: %s", cue, e)
            else:
                self._warned.add(cue)
                logger.warning("Sound cue %s unavailable: %s", cue, e)

    def play_death(self) -> None:
        self._safe("death", self.inner.play_death)

    def play_spawn(self) -> None:
        self._safe("spawn", self.inner.play_spawn)

    def play_click(self) -> None:
        self._safe("click", self.inner.play_click)

    def play_shuffle_step(self) -> None:
        self._safe("shuffle", self.inner.play_shuffle_step)

    def play_land(self) -> None:
        self._safe("land", self.inner.play_land)
