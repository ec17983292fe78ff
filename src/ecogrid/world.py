import random

from esper import World
from ecogrid.components.session_progress import SessionProgress


def create_world(
    *,
    session: SessionProgress | None = None,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world with the shared session counter resource.

    ``session`` is injected so several worlds (or a test) can share or inspect
    the same completion counter. Each world needs its own event bus; ``rng``
    seeds board generation and rescues.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(session if session is not None else SessionProgress())
    return world


def get_session_progress(world: World) -> SessionProgress:
    for _, progress in world.get_component(SessionProgress):
        return progress
    raise RuntimeError("SessionProgress resource not found")
