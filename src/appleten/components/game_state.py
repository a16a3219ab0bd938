"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level modes that gate which systems react to input and ticks."""
    HOME = auto()
    PLAYING = auto()
    PAUSED = auto()
    AD_CHOICE = auto()
    AD_PLAYING = auto()
    TIMED_OUT = auto()
    CLEARED = auto()


class AdMode(Enum):
    RECHARGE = "recharge"
    REVIVE = "revive"


@dataclass
class GameState:
    """Singleton component storing the session mode and ad-flow bookkeeping."""
    mode: GameMode = GameMode.PLAYING
    ad_mode: Optional[AdMode] = None
    pending_restart: bool = False
    time_over: bool = False
    # Mode to return to after a recharge prompt that had no pending restart.
    resume_mode: Optional[GameMode] = None
