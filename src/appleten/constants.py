BOARD_WIDTH = 10
BOARD_HEIGHT = 14
# Earlier builds shipped a taller board.
CLASSIC_BOARD_HEIGHT = 17

MAX_TIME_MS = 100_000
TICK_QUANTUM_MS = 10
CLEAR_TIME_BONUS_MS = 2_000
REVIVE_BONUS_MS = 60_000
SUCCESS_SCORE_THRESHOLD = 100

MAX_LIVES = 5
REFILL_INTERVAL_MS = 10 * 60 * 1000
STORAGE_TTL_DAYS = 365
LIVES_KEY = "lives"
LAST_REFILL_KEY = "lastRefill"

PAIR_WEIGHT = 50
TRIPLE_WEIGHT = 30
QUAD_WEIGHT = 20
MAX_GENERATION_ATTEMPTS = 1000

# Presentation
WINDOW_WIDTH = 540
WINDOW_HEIGHT = 900
BOTTOM_MARGIN = 90
HUD_HEIGHT = 110
# Board may not exceed these fractions of the window.
BOARD_MAX_WIDTH_PCT = 0.95
BOARD_MAX_HEIGHT_PCT = 0.80
MIN_TILE_SIZE = 16

PARTICLES_PER_APPLE = 8
PARTICLE_SPREAD_PX = 80.0
PARTICLE_LIFETIME = 1.2
FALLING_APPLE_LIFETIME = 1.4

# Gauge thresholds in percent of max time.
GAUGE_GREEN_ABOVE = 50.0
GAUGE_YELLOW_ABOVE = 20.0

# Mouse buttons / keys (arcade values, kept here to avoid importing arcade in systems).
MOUSE_BUTTON_LEFT = 1
KEY_ENTER = 65293
KEY_RETURN = 13
KEY_ESCAPE = 65307
KEY_BACKSPACE = 65288
KEY_SPACE = 32
KEY_L = 108
KEY_M = 109
KEY_R = 114
