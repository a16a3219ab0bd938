"""Entry point for the Apple Ten puzzle.

Sets up the ECS world, event bus, systems and the Arcade window.

Environment:
    APPLETEN_LOG_LEVEL   logging level name (default INFO)
    APPLETEN_DIFFICULTY  preset name: easy, normal, hard, classic
    APPLETEN_CONFIG      optional JSON file with difficulty overrides
    APPLETEN_SAVE_PATH   life counter store (default data/lives.json)
"""
import logging
import os
from pathlib import Path

from arcade import Window, run, set_background_color, color

from appleten.config import load_difficulty
from appleten.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from appleten.events.bus import (
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_TICK,
    EventBus,
)
from appleten.components.game_state import GameMode
from appleten.systems.ad_playback_system import AdPlaybackSystem
from appleten.systems.animation import AnimationSystem
from appleten.systems.clear_system import ClearSystem
from appleten.systems.countdown_system import CountdownSystem
from appleten.systems.input import InputSystem
from appleten.systems.life_system import LifeSystem
from appleten.systems.render import RenderSystem
from appleten.systems.selection_system import SelectionSystem
from appleten.systems.session_flow_system import SessionFlowSystem
from appleten.utils.storage import JsonFileStore
from appleten.world import create_world

logger = logging.getLogger(__name__)


def _default_save_path() -> Path:
    return Path(__file__).resolve().parents[1] / "data" / "lives.json"


class AppleTenWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Apple Ten", resizable=True)
        self.set_update_rate(1/60)
        config = load_difficulty(os.environ.get("APPLETEN_CONFIG"), preset=os.environ.get("APPLETEN_DIFFICULTY"))
        save_path = Path(os.environ.get("APPLETEN_SAVE_PATH") or _default_save_path())
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, config, initial_mode=GameMode.HOME)

        # Session systems
        self.life_system = LifeSystem(self.world, self.event_bus, store=JsonFileStore(save_path))
        self.session_flow_system = SessionFlowSystem(self.world, self.event_bus)
        self.countdown_system = CountdownSystem(self.world, self.event_bus)
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.clear_system = ClearSystem(self.world, self.event_bus)
        self.ad_playback_system = AdPlaybackSystem(self.world, self.event_bus)

        # Presentation systems
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(
            self.world,
            self.event_bus,
            self,
            time_to_next_refill=self.life_system.time_to_next_refill,
        )
        self.input_system = InputSystem(self.event_bus, self, self.world)

        set_background_color(color.DARK_SLATE_GRAY)
        logger.info("Window ready (%dx%d board, save file %s)", config.board_width, config.board_height, save_path)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_DRAG, x=x, y=y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.input_system.handle_key_press(symbol, modifiers)


def main():
    logging.basicConfig(
        level=os.environ.get("APPLETEN_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    window = AppleTenWindow()
    run()


if __name__ == "__main__":
    main()
