"""Fan-out of sequence events to SSE subscribers."""

import asyncio
import logging
from typing import Any

from villager_gen.sequence.controller import SequenceController
from villager_gen.sequence.phases import PhaseState

logger = logging.getLogger(__name__)

# Slow subscribers drop events beyond this backlog
MAX_BACKLOG = 256


class PhaseBroadcaster:
    """Publishes phase and label changes of one controller to any number of queues."""

    def __init__(self, controller: SequenceController):
        self.controller = controller
        self._queues: set[asyncio.Queue] = set()
        controller.add_listener(self.on_phase)
        controller.add_label_listener(self.on_label)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=MAX_BACKLOG)
        self._queues.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._queues.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    def on_phase(self, state: PhaseState) -> None:
        self.publish({
            "event": "phase",
            "phase": state.phase.value,
            "step": state.step,
            "total": state.total,
            "busy": self.controller.busy,
        })

    def on_label(self, label: str) -> None:
        self.publish({"event": "label", "label": label, "phase": self.controller.phase.value})

    def publish(self, data: dict[str, Any]) -> None:
        for queue in list(self._queues):
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                logger.warning("Dropping %s event for a slow subscriber", data["event"])
