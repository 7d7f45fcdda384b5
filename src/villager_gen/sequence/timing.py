"""Timing for the reroll sequence."""

from dataclasses import dataclass

from villager_gen import constants


def ease_out_quad(p: float) -> float:
    """Quadratic ease-out, p in [0, 1]."""
    return p * (2 - p)


def shuffle_delay(step: int, total: int, base_ms: float, max_ms: float) -> float:
    """Delay in milliseconds after shuffle frame ``step`` of ``total``.

    Grows from ``base_ms`` on the first frame to ``max_ms`` on the last, so
    the shuffle slows down as it settles. A single-frame shuffle has no
    progress to ease over and waits ``max_ms``.
    """
    if total <= 1:
        return max_ms
    progress = step / (total - 1)
    return base_ms + (max_ms - base_ms) * ease_out_quad(progress)


@dataclass(frozen=True)
class SequenceTiming:
    """Timing knobs for one reroll cycle."""

    shuffle_frames: int = constants.SHUFFLE_FRAMES
    shuffle_base_delay_ms: float = constants.SHUFFLE_BASE_DELAY_MS
    shuffle_max_delay_ms: float = constants.SHUFFLE_MAX_DELAY_MS
    death_speed: float = constants.DEATH_SPEED
    spawn_speed: float = constants.SPAWN_SPEED

    def __post_init__(self):
        if self.shuffle_frames < 1:
            raise ValueError(f"shuffle_frames must be >= 1, got {self.shuffle_frames}")
        if not 0 <= self.shuffle_base_delay_ms <= self.shuffle_max_delay_ms:
            raise ValueError(
                "Shuffle delays must satisfy 0 <= base <= max, got "
                f"base={self.shuffle_base_delay_ms}, max={self.shuffle_max_delay_ms}"
            )
        if self.death_speed <= 0 or self.spawn_speed <= 0:
            raise ValueError("Animation speeds must be positive")

    @classmethod
    def from_settings(cls, settings) -> "SequenceTiming":
        return cls(
            shuffle_frames=settings.shuffle_frames,
            shuffle_base_delay_ms=settings.shuffle_base_delay_ms,
            shuffle_max_delay_ms=settings.shuffle_max_delay_ms,
            death_speed=settings.death_speed,
            spawn_speed=settings.spawn_speed,
        )

    def shuffle_delays(self) -> list[float]:
        """The full delay curve, in milliseconds."""
        return [
            shuffle_delay(i, self.shuffle_frames, self.shuffle_base_delay_ms, self.shuffle_max_delay_ms)
            for i in range(self.shuffle_frames)
        ]
