from dataclasses import dataclass


@dataclass(slots=True)
class Lives:
    current: int
    max_lives: int
    last_refill_ms: int = 0

    def clamp(self) -> None:
        if self.current < 0:
            self.current = 0
        if self.current > self.max_lives:
            self.current = self.max_lives

    @property
    def is_full(self) -> bool:
        return self.current >= self.max_lives

    @property
    def is_empty(self) -> bool:
        return self.current <= 0
