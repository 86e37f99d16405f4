"""
Where secret colors come from.

Every source picks palette entries uniformly, one independent draw per slot,
with repetition allowed:
- SecureColorSource: Python's secrets module (default)
- SeededColorSource: random.Random(seed), for deterministic secrets
- RandomOrgColorSource: random.org over HTTP with a clear fallback. If
  anything goes wrong (no internet, timeout, bad response) we use the secure
  local source so the game still starts.
"""

import logging
import random
from secrets import randbelow
from typing import List, Optional, Protocol, Sequence

import requests

from .types import Color

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"


class ColorSource(Protocol):
    def draw(self, palette: Sequence[Color], length: int) -> List[Color]:
        ...


class SecureColorSource:
    def draw(self, palette: Sequence[Color], length: int) -> List[Color]:
        return [palette[randbelow(len(palette))] for _ in range(length)]


class SeededColorSource:
    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def draw(self, palette: Sequence[Color], length: int) -> List[Color]:
        return [palette[self._rng.randrange(len(palette))] for _ in range(length)]


class RandomOrgColorSource:
    def __init__(
        self,
        timeout_seconds: float = 3.0,
        fallback: Optional[ColorSource] = None,
    ) -> None:
        # keep network quick; if it takes too long, we will just fallback
        self.timeout_seconds = timeout_seconds
        self.fallback = fallback or SecureColorSource()

    def draw(self, palette: Sequence[Color], length: int) -> List[Color]:
        try:
            indices = self._fetch_indices(length, len(palette))
        except (requests.RequestException, ValueError) as exc:
            logger.warning("random.org unavailable (%s); using local randomness", exc)
            return self.fallback.draw(palette, length)
        return [palette[i] for i in indices]

    def _fetch_indices(self, count: int, palette_size: int) -> List[int]:
        params = {
            "num": count,              # how many numbers we want
            "min": 0,                  # smallest palette index
            "max": palette_size - 1,   # largest palette index
            "col": 1,                  # one number per line
            "base": 10,
            "format": "plain",
            "rnd": "new",
        }
        response = requests.get(RANDOM_URL, params=params, timeout=self.timeout_seconds)
        response.raise_for_status()

        # The body looks like:
        #   0\n3\n1\n2\n
        indices = [int(line.strip()) for line in response.text.splitlines() if line.strip()]

        if len(indices) != count:
            raise ValueError(f"random.org returned {len(indices)} values, expected {count}.")
        for value in indices:
            if value < 0 or value >= palette_size:
                raise ValueError(f"random.org number {value} out of range 0..{palette_size - 1}.")
        return indices


def make_color_source(name: str) -> ColorSource:
    """Pick a source by its configuration name; unknown names get the secure local one."""
    if name == "random_org":
        return RandomOrgColorSource()
    return SecureColorSource()
