import math

from esper import World

from appleten.components.clear_burst import ClearBurst, Particle
from appleten.constants import (
    FALLING_APPLE_LIFETIME,
    PARTICLE_LIFETIME,
    PARTICLE_SPREAD_PX,
    PARTICLES_PER_APPLE,
)
from appleten.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_APPLES_CLEARED,
    EVENT_BOARD_GENERATED,
    EVENT_TICK,
    EventBus,
)


class AnimationSystem:
    """Spawns a ClearBurst per cleared apple and ages them on every tick."""

    def __init__(self, world: World, event_bus: EventBus, *, particles_per_apple: int = PARTICLES_PER_APPLE):
        self.world = world
        self.event_bus = event_bus
        self.particles_per_apple = particles_per_apple
        event_bus.subscribe(EVENT_APPLES_CLEARED, self.on_apples_cleared)
        event_bus.subscribe(EVENT_BOARD_GENERATED, self.on_board_generated)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _particles(self) -> list[Particle]:
        rng = getattr(self.world, "random", None)
        particles = []
        for i in range(self.particles_per_apple):
            angle = 2 * math.pi * i / self.particles_per_apple
            distance = PARTICLE_SPREAD_PX
            if rng is not None:
                angle += rng.uniform(-0.3, 0.3)
                distance *= rng.uniform(0.5, 1.0)
            particles.append(Particle(dx=math.cos(angle) * distance, dy=math.sin(angle) * distance))
        return particles

    def on_apples_cleared(self, sender, **kwargs):
        for apple in kwargs.get('cleared') or []:
            self.world.create_entity(
                ClearBurst(
                    pos=(apple.row, apple.col),
                    value=apple.value,
                    drift=apple.drift,
                    particles=self._particles(),
                    particle_lifetime=PARTICLE_LIFETIME,
                    fall_lifetime=FALLING_APPLE_LIFETIME,
                )
            )

    def on_board_generated(self, sender, **kwargs):
        # A fresh board drops any bursts left from the previous one.
        for ent, _ in list(self.world.get_component(ClearBurst)):
            self.world.delete_entity(ent, immediate=True)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1 / 60)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        finished = []
        for ent, burst in self.world.get_component(ClearBurst):
            burst.elapsed += dt
            if burst.finished:
                finished.append(ent)
        for ent in finished:
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind="clear_burst", entity=ent)
