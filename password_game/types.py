"""
Labels for clarity.
"""

from enum import Enum
from typing import List, Literal, Optional


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    CYAN = "cyan"
    PINK = "pink"


class FeedbackType(str, Enum):
    EXACT = "EXACT"      # black peg: right color, right place
    PARTIAL = "PARTIAL"  # white peg: right color, wrong place
    NONE = "NONE"


class GameStatus(str, Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


Difficulty = Literal["normal", "hard"]
PegColor = Optional[Color]  # empty draft slot -> None
Code = List[Color]
Draft = List[PegColor]
Feedback = List[FeedbackType]
