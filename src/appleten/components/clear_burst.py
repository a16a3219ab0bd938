from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class Particle:
    dx: float
    dy: float


@dataclass(slots=True)
class ClearBurst:
    """Short-lived visual for one cleared apple: a particle ring and a falling digit."""
    pos: Tuple[int, int]
    value: int
    drift: int = 0
    particles: List[Particle] = field(default_factory=list)
    elapsed: float = 0.0
    particle_lifetime: float = 1.2
    fall_lifetime: float = 1.4

    @property
    def particle_progress(self) -> float:
        return min(1.0, self.elapsed / self.particle_lifetime) if self.particle_lifetime > 0 else 1.0

    @property
    def fall_progress(self) -> float:
        return min(1.0, self.elapsed / self.fall_lifetime) if self.fall_lifetime > 0 else 1.0

    @property
    def finished(self) -> bool:
        return self.elapsed >= max(self.particle_lifetime, self.fall_lifetime)
