import math

from esper import World

from ecogrid.components.animation_blink import BlinkAnimation
from ecogrid.components.animation_slide import SlideAnimation
from ecogrid.components.duration import Duration
from ecogrid.constants import ANIM_BLINK, ANIM_SLIDE, BLINK_DURATION, SLIDE_DURATION
from ecogrid.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus


class AnimationSystem:
    """Drives timing of slide and blink animations; each one is its own entity."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        slide_duration: float = SLIDE_DURATION,
        blink_duration: float = BLINK_DURATION,
    ):
        self.world = world
        self.event_bus = event_bus
        self.slide_duration = slide_duration
        self.blink_duration = blink_duration
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind')
        board_entity = kwargs.get('board_entity')
        items = list(kwargs.get('items', []))
        if board_entity is None:
            return
        if kind == ANIM_SLIDE:
            self.world.create_entity(
                SlideAnimation(board_entity=board_entity, moves=items),
                Duration(self.slide_duration),
            )
        elif kind == ANIM_BLINK:
            self.world.create_entity(
                BlinkAnimation(board_entity=board_entity, positions=items),
                Duration(self.blink_duration),
            )

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        finished = []
        for ent, (slide, duration) in list(self.world.get_components(SlideAnimation, Duration)):
            duration.elapsed += dt
            slide.progress = min(1.0, duration.elapsed / duration.value) if duration.value > 0 else 1.0
            if duration.done:
                finished.append((ent, ANIM_SLIDE, slide.board_entity, slide.moves))
        for ent, (blink, duration) in list(self.world.get_components(BlinkAnimation, Duration)):
            duration.elapsed += dt
            # Blink twice every second.
            blink.lit = math.floor(duration.elapsed * 4) % 2 == 0
            if duration.done:
                finished.append((ent, ANIM_BLINK, blink.board_entity, blink.positions))
        # Delete before emitting: completion handlers may start the next animation.
        for ent, _, _, _ in finished:
            self.world.delete_entity(ent, immediate=True)
        for _, kind, board_entity, items in finished:
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, board_entity=board_entity, kind=kind, items=items)

    def active_count(self) -> int:
        return len(list(self.world.get_component(SlideAnimation))) + len(list(self.world.get_component(BlinkAnimation)))
