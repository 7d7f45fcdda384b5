"""Reroll trigger, sequence state and the SSE phase stream."""

import asyncio
import json

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from villager_gen.api.deps import get_broadcaster, get_context
from villager_gen.api.models import ConfigurationOut, RerollResponse, SequenceStateOut
from villager_gen.api.services import PhaseBroadcaster
from villager_gen.context import AppContext

router = APIRouter()


@router.post("/reroll", response_model=RerollResponse)
async def reroll(ctx: AppContext = Depends(get_context)):
    """Start a reroll cycle. Requests during a running cycle are dropped."""
    task = ctx.controller.trigger()
    return RerollResponse(accepted=task is not None, phase=ctx.controller.phase.value)


@router.get("/state", response_model=SequenceStateOut)
def get_state(ctx: AppContext = Depends(get_context)):
    controller = ctx.controller
    state = controller.state
    config = controller.current_config
    return SequenceStateOut(
        phase=state.phase.value,
        step=state.step,
        total=state.total,
        busy=controller.busy,
        label=controller.label,
        config=ConfigurationOut.from_config(config, ctx.catalog) if config else None,
        cycles_completed=controller.cycles_completed,
        animation=ctx.renderer.track.name,
    )


@router.get("/events")
async def events(broadcaster: PhaseBroadcaster = Depends(get_broadcaster)):
    """Stream phase and label changes as server-sent events."""
    queue = broadcaster.subscribe()

    async def event_generator():
        try:
            while True:
                try:
                    data = await asyncio.wait_for(queue.get(), timeout=30)
                    yield {"event": data["event"], "data": json.dumps(data)}
                except asyncio.TimeoutError:
                    yield {"event": "ping", "data": "{}"}
        finally:
            broadcaster.unsubscribe(queue)

    return EventSourceResponse(event_generator())
