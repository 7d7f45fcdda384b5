"""Dependency injection for FastAPI routes."""

from fastapi import Request

from villager_gen.api.services import PhaseBroadcaster
from villager_gen.context import AppContext
from villager_gen.generator.config_generator import ConfigGenerator


def get_context(request: Request) -> AppContext:
    """The AppContext built at startup."""
    return request.app.state.context


def get_broadcaster(request: Request) -> PhaseBroadcaster:
    return request.app.state.broadcaster


def get_roll_generator(request: Request) -> ConfigGenerator:
    """Generator for one-off rolls, separate from the one driving the sequence."""
    return request.app.state.roll_generator
