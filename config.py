"""
Configuration settings for Pixel Fields.
"""
import os
from dotenv import load_dotenv

load_dotenv()

PROTOTYPE_VERSION = "2.0.0"
GAME_TITLE = f"Pixel Fields (v{PROTOTYPE_VERSION})"

# Loop pacing
FPS = 30
REEVALUATE_INTERVAL_MS = 2500  # day rollover + plot refresh + save request
AUTO_PROGRESS_INTERVAL_MS = 1500  # sprinkler auto-harvest
SAVE_DEBOUNCE_MS = 500

# Calendar
SEASON_LENGTH_DAYS = 7

# Starting state
START_COINS = 5
START_SEEDS = {"potato": 10, "carrot": 2, "corn": 0, "pumpkin": 0}
START_PLOTS = 10
DEFAULT_CROP = "potato"

# Seed sub-stream domains (XORed with the day seed)
MARKET_STREAM_XOR = 0xA5A5A5A5
WEATHER_STREAM_XOR = 0xC0FFEE
QUEST_STREAM_XOR = 0xBEEF
PRICE_HISTORY_XOR = 0x1234

# Market
PRICE_MIN = 1
PRICE_MAX = 10
PRICE_HISTORY_POINTS = 24

# Persisted schema
SAVE_VERSION = 2
SAVE_PATH = os.getenv("FARM_SAVE_PATH", os.path.join(".pixel_fields", "save.json"))

# Logging / audio
LOG_LEVEL = os.getenv("FARM_LOG_LEVEL", "INFO").upper()
AUDIO_ENABLED = os.getenv("FARM_AUDIO", "1").strip().lower() not in ("0", "false", "off", "no")
