"""
Configuration settings for the Playfield harness.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Window settings
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
FPS = int(os.getenv("PLAYFIELD_FPS", "60"))
PLAYFIELD_VERSION = "0.3.0"
DEFAULT_TITLE = f"Playfield v{PLAYFIELD_VERSION}"

# Seconds the caller waits for the UI thread to build a surface
CREATE_TIMEOUT = float(os.getenv("PLAYFIELD_CREATE_TIMEOUT", "10.0"))

# Colors
COLOR_BACKGROUND = (255, 255, 255)
COLOR_FOREGROUND = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_RED = (220, 20, 60)
COLOR_GREEN = (50, 205, 50)
COLOR_BLUE = (70, 130, 180)
COLOR_GOLD = (255, 215, 0)

# View settings
ZOOM_MIN = 0.1
ZOOM_MAX = 20.0
ZOOM_STEP = 1.1
PAN_STEP_PX = 20.0

# Determinism
SIM_SEED = int(os.getenv("PLAYFIELD_SEED", "4711337"))
# When on, every tick advances the world by exactly 1/FPS seconds instead of wall-clock delta.
FIXED_TIMESTEP = _env_flag("PLAYFIELD_FIXED_TIMESTEP", False)

# Logging
LOG_LEVEL = os.getenv("PLAYFIELD_LOG_LEVEL", "INFO").upper()
