"""Tests for the reroll sequence controller."""

import asyncio
import logging

import pytest

from conftest import RecordingRenderer, RecordingScheduler
from villager_gen.sequence.controller import SequenceController
from villager_gen.sequence.phases import PhaseState, SequencePhase
from villager_gen.sequence.timing import SequenceTiming, shuffle_delay


def record_phases(controller: SequenceController) -> list[PhaseState]:
    seen: list[PhaseState] = []
    controller.add_listener(seen.append)
    return seen


class TestRerollCycle:
    """End-to-end cycle against recording collaborators."""

    def test_phase_order(self, controller):
        seen = record_phases(controller)
        assert asyncio.run(controller.reroll()) is True

        assert [s.phase for s in seen] == (
            [SequencePhase.DEATH, SequencePhase.SPAWN]
            + [SequencePhase.SHUFFLE] * 8
            + [SequencePhase.SETTLING, SequencePhase.IDLE]
        )
        shuffle = [s for s in seen if s.phase is SequencePhase.SHUFFLE]
        assert [(s.step, s.total) for s in shuffle] == [(i, 8) for i in range(8)]

    def test_renderer_calls(self, controller, renderer):
        asyncio.run(controller.reroll())

        kinds = [call[0] for call in renderer.calls]
        assert kinds == ["death", "apply", "spawn"] + ["apply"] * 8 + ["idle"]
        assert renderer.calls[0] == ("death", 1.2)
        assert renderer.calls[2] == ("spawn", 1.5)
        assert renderer.is_idle

    def test_ends_idle_and_not_busy(self, controller):
        asyncio.run(controller.reroll())
        assert controller.phase is SequencePhase.IDLE
        assert controller.busy is False
        assert controller.cycles_completed == 1

    def test_suspensions(self, controller, scheduler):
        asyncio.run(controller.reroll())

        expected = [1.8 / 1.2, 1.2 / 1.5] + [shuffle_delay(i, 8, 50, 200) / 1000 for i in range(8)]
        assert scheduler.sleeps == pytest.approx(expected)

    def test_sound_cues(self, controller, sound):
        asyncio.run(controller.reroll())
        assert sound.cues == ["click", "death", "spawn"] + ["shuffle"] * 7 + ["land"]

    def test_shuffle_batch_generated_up_front(self, controller, generator, renderer, monkeypatch):
        batches = []
        original = generator.generate_multiple

        def spy(count):
            batch = original(count)
            batches.append(batch)
            return batch

        monkeypatch.setattr(generator, "generate_multiple", spy)
        asyncio.run(controller.reroll())

        assert len(batches) == 1
        assert len(batches[0]) == 8
        # Applied in generation order, after the spawn configuration
        assert renderer.applied[1:] == batches[0]

    def test_label_tracks_last_applied(self, controller, renderer, catalog):
        labels = []
        controller.add_label_listener(labels.append)
        asyncio.run(controller.reroll())

        assert len(labels) == 9
        assert controller.label == catalog.form_label(renderer.current_config.form_id)
        assert controller.current_config == renderer.current_config
        assert labels[-1] == controller.label

    def test_trigger_returns_task(self, controller):
        async def scenario():
            task = controller.trigger()
            assert task is not None
            assert controller.busy
            await task

        asyncio.run(scenario())
        assert controller.cycles_completed == 1

    def test_consecutive_cycles(self, controller):
        async def scenario():
            assert await controller.reroll()
            assert await controller.reroll()

        asyncio.run(scenario())
        assert controller.cycles_completed == 2

    def test_show_initial(self, controller, renderer):
        config = controller.show_initial()
        assert renderer.applied == [config]
        assert controller.label
        assert controller.phase is SequencePhase.IDLE


class TestBusyGuard:
    """Triggers during a running cycle are dropped."""

    def test_triggers_during_cycle_rejected(self, generator, renderer, sound):
        rejected = []
        phases_at_trigger = []

        def retrigger(_seconds):
            phases_at_trigger.append(controller.phase)
            rejected.append(controller.trigger())

        scheduler = RecordingScheduler(on_sleep=retrigger)
        controller = SequenceController(generator, renderer, sound, scheduler, SequenceTiming())
        seen = record_phases(controller)

        asyncio.run(controller.reroll())

        assert SequencePhase.DEATH in phases_at_trigger
        assert SequencePhase.SHUFFLE in phases_at_trigger
        assert rejected and all(task is None for task in rejected)
        assert [s.phase for s in seen].count(SequencePhase.SETTLING) == 1
        assert [s.phase for s in seen].count(SequencePhase.IDLE) == 1
        assert controller.cycles_completed == 1
        # Only the accepted trigger clicked
        assert sound.cues.count("click") == 1

    def test_reroll_while_busy_returns_false(self, controller):
        async def scenario():
            task = controller.trigger()
            second = await controller.reroll()
            await task
            return second

        assert asyncio.run(scenario()) is False
        assert controller.cycles_completed == 1

    def test_trigger_without_loop_leaves_guard_clear(self, controller, sound):
        with pytest.raises(RuntimeError):
            controller.trigger()

        assert controller.busy is False
        assert controller.phase is SequencePhase.IDLE
        assert sound.cues == []
        assert asyncio.run(controller.reroll()) is True


class TestDegenerateAndDegraded:
    def test_single_shuffle_frame(self, generator, renderer, sound, scheduler):
        controller = SequenceController(
            generator, renderer, sound, scheduler, SequenceTiming(shuffle_frames=1)
        )
        seen = record_phases(controller)
        asyncio.run(controller.reroll())

        assert [s.phase for s in seen] == [
            SequencePhase.DEATH,
            SequencePhase.SPAWN,
            SequencePhase.SHUFFLE,
            SequencePhase.SETTLING,
            SequencePhase.IDLE,
        ]
        # spawn + one shuffle frame
        assert len(renderer.applied) == 2
        assert scheduler.sleeps[-1] == pytest.approx(0.2)
        assert "shuffle" not in sound.cues

    def test_missing_animations_skip_waits(self, generator, sound, scheduler):
        renderer = RecordingRenderer({})
        controller = SequenceController(generator, renderer, sound, scheduler, SequenceTiming())
        asyncio.run(controller.reroll())

        # Only the shuffle frames suspend
        assert len(scheduler.sleeps) == 8
        assert controller.cycles_completed == 1
        assert renderer.is_idle

    def test_sound_failures_swallowed(self, generator, renderer, scheduler):
        class BrokenSound:
            def __getattr__(self, name):
                def fail():
                    raise OSError("audio device blocked")
                return fail

        controller = SequenceController(generator, renderer, BrokenSound(), scheduler, SequenceTiming())
        assert asyncio.run(controller.reroll()) is True
        assert controller.cycles_completed == 1

    def test_listener_errors_do_not_interrupt(self, controller):
        def explode(_state):
            raise RuntimeError("listener bug")

        controller.add_listener(explode)
        assert asyncio.run(controller.reroll()) is True
        assert controller.phase is SequencePhase.IDLE

    def test_renderer_failure_releases_guard(self, controller, renderer, monkeypatch):
        def broken(config, catalog):
            raise KeyError(config.form_id)

        monkeypatch.setattr(renderer, "apply_config", broken)
        with pytest.raises(KeyError):
            asyncio.run(controller.reroll())

        assert controller.busy is False
        assert controller.phase is SequencePhase.IDLE

    def test_triggered_cycle_is_held_and_failure_logged(self, controller, renderer, monkeypatch, caplog):
        def broken(config, catalog):
            raise KeyError(config.form_id)

        monkeypatch.setattr(renderer, "apply_config", broken)

        async def scenario():
            assert controller.trigger() is not None
            assert controller.pending_cycles == 1
            while controller.pending_cycles:
                await asyncio.sleep(0)

        with caplog.at_level(logging.ERROR, logger="villager_gen.sequence.controller"):
            asyncio.run(scenario())

        assert "Reroll cycle failed" in caplog.text
        assert controller.busy is False
        assert controller.phase is SequencePhase.IDLE

    def test_finished_cycle_released(self, controller):
        async def scenario():
            controller.trigger()
            while controller.pending_cycles:
                await asyncio.sleep(0)

        asyncio.run(scenario())
        assert controller.cycles_completed == 1
