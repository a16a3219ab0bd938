from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    value: int = 0

    def add(self, amount: int) -> None:
        self.value = max(0, self.value + amount)
