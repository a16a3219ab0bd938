from esper import World

from appleten.events.bus import EVENT_TICK, EventBus
from appleten.rendering.board_renderer import BoardRenderer
from appleten.rendering.context import RenderContext, build_render_context
from appleten.rendering.hud_renderer import HudRenderer
from appleten.rendering.modal_renderer import ModalRenderer
from appleten.components.game_state import GameMode
from appleten.utils.game_state import get_game_state

PADDING = 4


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window, *, time_to_next_refill=None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self._time = 0.0
        self._render_ctx: RenderContext | None = None
        self._board_renderer = BoardRenderer(padding=PADDING)
        self._hud_renderer = HudRenderer(time_to_next_refill=time_to_next_refill)
        self._modal_renderer = ModalRenderer()

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            self._time += float(dt)
        except (TypeError, ValueError):
            self._time += 1/60

    def get_action_at_point(self, x: float, y: float) -> str | None:
        return self._modal_renderer.action_at_point(x, y)

    def refresh_layout(self):
        """Rebuild the clickable button layout for the current mode."""
        state = get_game_state(self.world)
        self._modal_renderer.update_layout(state, self.window.width, self.window.height)
        return state

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: if no active Arcade window (unit tests), skip draw calls but still build layout cache.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        state = self.refresh_layout()
        ctx = build_render_context(self.world, self.window.width, self.window.height)
        self._render_ctx = ctx
        if headless:
            return
        if state is None or state.mode != GameMode.HOME:
            self._board_renderer.render(arcade, ctx)
            self._hud_renderer.render(arcade, ctx)
        self._modal_renderer.render(arcade, ctx, state)
