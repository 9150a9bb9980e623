# --- Maze size ---
MIN_DIMENSION = 5
MAX_DIMENSION = 155
# Upper bound used when the "lucky" coin lands heads.
LUCKY_MAX_DIMENSION = 35

# --- Generation ---
MAX_GENERATION_ATTEMPTS = 16

# --- Input ---
TRIGGER_WORD = "cc"

# --- Presentation (advisory, consumed by hosts) ---
WINDOW_SIZE = 600
WALL_COLOR = "black"
OPEN_COLOR = "white"
PLAYER_COLOR = "blue"
EXIT_COLOR = "red"
PATH_COLOR = "green"
