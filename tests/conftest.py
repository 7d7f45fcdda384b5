"""Shared fixtures: a small catalog and scripted collaborators."""

import asyncio

import pytest

from villager_gen.catalog.schemas import FollowerCatalog
from villager_gen.data import loader
from villager_gen.generator.config_generator import ConfigGenerator
from villager_gen.generator.random_source import SeededRandomSource
from villager_gen.render.headless import HeadlessRenderer
from villager_gen.sequence.controller import SequenceController
from villager_gen.sequence.timing import SequenceTiming

WHITE = {"r": 255, "g": 255, "b": 255}
BLACK = {"r": 0, "g": 0, "b": 0}
RED = {"r": 160, "g": 48, "b": 32}
ORANGE = {"r": 214, "g": 110, "b": 52}


def catalog_document() -> dict:
    """Forms only in categories 0 and 2; category 1 is weighted but empty."""
    return {
        "forms": {
            "Deer": {
                "name": "Deer",
                "category": 0,
                "variants": ["Deer", "Deer_2"],
                "sets": [[{"color": ORANGE, "slots": ["HEAD_SKIN_TOP"]}]],
                "canBeTinted": True,
            },
            "Pig": {"category": 0, "variants": ["Pig"], "canBeTinted": True},
            "Squid": {"name": "Squid", "category": 2, "variants": ["Squid"], "canBeTinted": False},
        },
        "clothing": {
            "Default_Clothing": {
                "variants": ["Clothes/Default"],
                "sets": [[{"color": RED, "slots": ["ROBES_TOP", "ROBES_BTM"]}]],
            },
        },
        "generalColorSets": [
            [{"color": WHITE, "slots": ["HEAD_SKIN_TOP", "HEAD_SKIN_BTM"]}],
            [{"color": BLACK, "slots": ["HEAD_SKIN_TOP", "HEAD_SKIN_BTM"]}],
        ],
        "animations": {"idle": 2.0, "die": 1.8, "spawn-in": 1.2},
    }


class ScriptedRandomSource:
    """RandomSource returning pre-scripted draws, in order."""

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def next_float(self) -> float:
        return self.floats.pop(0)

    def next_int(self, bound: int) -> int:
        value = self.ints.pop(0)
        assert 0 <= value < bound, f"scripted int {value} outside [0, {bound})"
        return value


class RecordingRenderer(HeadlessRenderer):
    """HeadlessRenderer that logs every call it receives."""

    def __init__(self, animations):
        super().__init__(animations)
        self.calls: list[tuple] = []

    def apply_config(self, config, catalog):
        self.calls.append(("apply", config))
        super().apply_config(config, catalog)

    def play_death(self, speed_factor):
        self.calls.append(("death", speed_factor))
        return super().play_death(speed_factor)

    def play_spawn_in(self, speed_factor):
        self.calls.append(("spawn", speed_factor))
        return super().play_spawn_in(speed_factor)

    def reset_to_idle(self):
        self.calls.append(("idle",))
        super().reset_to_idle()

    @property
    def applied(self) -> list:
        return [call[1] for call in self.calls if call[0] == "apply"]


class RecordingSound:
    def __init__(self):
        self.cues: list[str] = []

    def play_death(self):
        self.cues.append("death")

    def play_spawn(self):
        self.cues.append("spawn")

    def play_click(self):
        self.cues.append("click")

    def play_shuffle_step(self):
        self.cues.append("shuffle")

    def play_land(self):
        self.cues.append("land")


class RecordingScheduler:
    """Records requested suspensions without waiting; ``on_sleep`` runs inside each one."""

    def __init__(self, on_sleep=None):
        self.sleeps: list[float] = []
        self.on_sleep = on_sleep

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(seconds)
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _clear_catalog_cache():
    """Clear the bundled catalog cache before each test."""
    loader._BUNDLED_CATALOG = None
    yield
    loader._BUNDLED_CATALOG = None


@pytest.fixture
def catalog() -> FollowerCatalog:
    return FollowerCatalog.model_validate(catalog_document())


@pytest.fixture
def generator(catalog) -> ConfigGenerator:
    return ConfigGenerator(catalog, SeededRandomSource(seed=1234))


@pytest.fixture
def renderer(catalog) -> RecordingRenderer:
    return RecordingRenderer(catalog.animations)


@pytest.fixture
def sound() -> RecordingSound:
    return RecordingSound()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def controller(generator, renderer, sound, scheduler) -> SequenceController:
    return SequenceController(generator, renderer, sound, scheduler, SequenceTiming())
