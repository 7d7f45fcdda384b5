"""Configuration and environment loading."""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from villager_gen import constants

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data
    catalog_path: Path | None = Field(default=None, alias="CATALOG_PATH")
    default_clothing: str = Field(
        default=constants.DEFAULT_CLOTHING_ID, alias="DEFAULT_CLOTHING"
    )
    random_seed: int | None = Field(default=None, alias="RANDOM_SEED")

    # Shuffle phase
    shuffle_frames: int = Field(default=constants.SHUFFLE_FRAMES, ge=1, alias="SHUFFLE_FRAMES")
    shuffle_base_delay_ms: float = Field(
        default=constants.SHUFFLE_BASE_DELAY_MS, ge=0, alias="SHUFFLE_BASE_DELAY_MS"
    )
    shuffle_max_delay_ms: float = Field(
        default=constants.SHUFFLE_MAX_DELAY_MS, ge=0, alias="SHUFFLE_MAX_DELAY_MS"
    )

    # Animation playback speeds
    death_speed: float = Field(default=constants.DEATH_SPEED, gt=0, alias="DEATH_SPEED")
    spawn_speed: float = Field(default=constants.SPAWN_SPEED, gt=0, alias="SPAWN_SPEED")

    # Sound
    sounds_dir: Path = Field(default=Path("./sounds"), alias="SOUNDS_DIR")
    death_volume: float = Field(default=0.5, ge=0, le=1, alias="DEATH_VOLUME")
    spawn_volume: float = Field(default=0.6, ge=0, le=1, alias="SPAWN_VOLUME")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", alias="LOG_LEVEL"
    )

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @model_validator(mode="after")
    def check_delay_order(self) -> "Settings":
        if self.shuffle_max_delay_ms < self.shuffle_base_delay_ms:
            raise ValueError(
                f"SHUFFLE_MAX_DELAY_MS ({self.shuffle_max_delay_ms}) must be >= "
                f"SHUFFLE_BASE_DELAY_MS ({self.shuffle_base_delay_ms})"
            )
        return self

    def cue_volumes(self) -> dict[str, float]:
        """Per-cue playback volume; cues without an explicit setting use the default."""
        volumes = {cue: constants.DEFAULT_CUE_VOLUME for cue in constants.SOUND_CUES}
        volumes["death"] = self.death_volume
        volumes["spawn"] = self.spawn_volume
        return volumes


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
