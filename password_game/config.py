"""
Single place for game constants and runtime settings.

Game rules are fixed constants. Runtime settings (log level, color source,
hint service credentials) come from the environment, with a local .env
loaded first for dev convenience.
"""

import logging
import os
from typing import Final, List

from dotenv import load_dotenv

from .types import Color, Difficulty

# 1) Load env vars from .env if present
load_dotenv()

# 2) Game rules
CODE_LENGTH: Final[int] = 4
MAX_TURNS: Final[int] = 10

NORMAL_PALETTE: Final[List[Color]] = [
    Color.RED,
    Color.GREEN,
    Color.BLUE,
    Color.YELLOW,
    Color.PURPLE,
    Color.ORANGE,
]
HARD_PALETTE: Final[List[Color]] = NORMAL_PALETTE + [Color.CYAN, Color.PINK]

DEFAULT_DIFFICULTY: Final[Difficulty] = "normal"

# 3) Runtime settings
APP_ENV = os.getenv("APP_ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# "local" -> secrets module, "random_org" -> random.org with local fallback
COLOR_SOURCE = os.getenv("COLOR_SOURCE", "local")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


HINT_TIMEOUT_SECONDS = _float_env("HINT_TIMEOUT_SECONDS", 10.0)


def normalize_difficulty(value: str) -> Difficulty:
    """Anything other than "hard" plays as "normal"."""
    if value == "hard":
        return "hard"
    return "normal"


def palette_for(difficulty: str) -> List[Color]:
    if normalize_difficulty(difficulty) == "hard":
        return list(HARD_PALETTE)
    return list(NORMAL_PALETTE)


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Console logging for the app. Unknown level names fall back to INFO."""
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
