from dataclasses import dataclass


@dataclass(slots=True)
class Countdown:
    remaining_ms: int
    max_ms: int

    def clamp(self) -> None:
        if self.remaining_ms < 0:
            self.remaining_ms = 0
        if self.remaining_ms > self.max_ms:
            self.remaining_ms = self.max_ms

    def add(self, amount_ms: int) -> None:
        self.remaining_ms += amount_ms
        self.clamp()

    def reset(self) -> None:
        self.remaining_ms = self.max_ms

    @property
    def expired(self) -> bool:
        return self.remaining_ms <= 0

    @property
    def percent(self) -> float:
        if self.max_ms <= 0:
            return 0.0
        return 100.0 * self.remaining_ms / self.max_ms
