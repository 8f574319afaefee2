import os

# Logical playfield (internal resolution, independent of window scaling)
WIDTH, HEIGHT = 480, 720
FPS = 60

# Road
ROAD_LEFT = int(WIDTH * 0.13)
ROAD_RIGHT = int(WIDTH * 0.87)
LANE_COUNT = 3

# Player car
PLAYER_WIDTH = 48
PLAYER_HEIGHT = 88
PLAYER_Y = HEIGHT - 140
PLAYER_VX = 6
PLAYER_MARGIN = 6

# Traffic and fuel
OBSTACLE_WIDTH = 44
OBSTACLE_HEIGHT = 88
OBSTACLE_SPAWN_JITTER = 80
OBSTACLE_BASE_SPEED = 2.0
OBSTACLE_SPEED_JITTER = 2.0
PICKUP_SIZE = 28
PICKUP_SPAWN_JITTER = 60
PICKUP_BASE_SPEED = 2.0
SPEED_DIFFICULTY_FACTOR = 0.6
PICKUP_PROBABILITY = 0.25
OBSTACLE_PALETTE = (
    (239, 68, 68),
    (244, 63, 94),
    (249, 115, 22),
    (124, 58, 237),
    (239, 123, 255),
)

# Spawn cadence (frames between spawn ticks)
BASE_CADENCE = 100
MIN_CADENCE = 30
CADENCE_SLOPE = 6

# Difficulty curve
DIFFICULTY_PERIOD = 600
DIFFICULTY_STEP = 0.15
SCROLL_DIFFICULTY_FACTOR = 0.25
MIN_SPEED_MULTIPLIER = 0.9

# Scoring
PICKUP_BONUS = 15
PICKUP_RELIEF = 0.08
PASS_BONUS = 2
PASS_LINE = 100
DESPAWN_LINE = 200
SCORE_PER_TICK = 0.1
SCORE_DIFFICULTY_FACTOR = 0.05

# Colors
COLOR_GRASS = (11, 102, 35)
COLOR_ROAD = (43, 43, 43)
COLOR_LANE_LINE = (255, 255, 255)
COLOR_BORDER = (17, 24, 39)
COLOR_PLAYER = (14, 165, 164)
COLOR_WINDOW = (11, 18, 36)
COLOR_WHEEL = (17, 17, 17)
COLOR_PICKUP = (16, 185, 129)
COLOR_PICKUP_MARK = (0, 102, 51)
COLOR_TEXT = (240, 240, 240)
COLOR_PANEL = (15, 23, 42)
COLOR_BUTTON = (55, 65, 81)
COLOR_BUTTON_HELD = (107, 114, 128)

# Lane marker dashes
DASH_LENGTH = 20
DASH_GAP = 18
DASH_SCROLL = 5

HIGH_SCORE_FILENAME = "highscore.json"


def high_score_path():
    home = os.environ.get("DRIVE_MAD_HOME") or os.path.expanduser("~/.drive-mad")
    return os.path.join(home, HIGH_SCORE_FILENAME)


def log_level():
    return os.environ.get("DRIVE_MAD_LOG_LEVEL", "INFO").upper()


def autopilot_enabled():
    return os.environ.get("DRIVE_MAD_AUTOPILOT", "").strip().lower() in ("1", "true", "yes", "on")
