"""
Advisory hints.

A hint provider reads the guess history (and the secret, so it can steer the
player) and answers with a short sentence. Providers never raise: on any
failure they hand back a friendly fallback string. They also never touch the
game; HintAdvisor runs them in the background against a snapshot.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Protocol, Sequence

import requests

from .config import CODE_LENGTH, GEMINI_API_KEY, GEMINI_MODEL, HINT_TIMEOUT_SECONDS, MAX_TURNS
from .session import GameSession, GuessRecord
from .types import Color, FeedbackType, GameStatus

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

EMPTY_HINT = "Could not generate a hint right now."
FAILED_HINT = "The hint assistant is thinking too hard... try again later."
OPENING_HINT = "Start by guessing two pairs of colors to rule out possibilities quickly."
SOLVED_HINT = "You cracked the code. Start a new game to play again."
GAME_OVER_HINT = "This game is over. Start a new game to get hints."


class HintProvider(Protocol):
    def get_hint(self, guesses: Sequence[GuessRecord], secret: Sequence[Color]) -> str:
        ...


def describe_history(guesses: Sequence[GuessRecord]) -> str:
    """
    One line per attempt, e.g.
      Attempt 1: colors [red, blue, red, red] -> result [black (right color, right place), ...]
    """
    lines = []
    for number, guess in enumerate(guesses, start=1):
        colors = ", ".join(color.value for color in guess.colors)
        pegs = []
        for peg in guess.feedback:
            if peg == FeedbackType.EXACT:
                pegs.append("black (right color, right place)")
            elif peg == FeedbackType.PARTIAL:
                pegs.append("white (right color, wrong place)")
        result = ", ".join(pegs) or "no hits"
        lines.append(f"Attempt {number}: colors [{colors}] -> result [{result}]")
    return "\n".join(lines)


def reveals_secret(text: str, secret: Sequence[Color]) -> bool:
    """True if the hint spells out the whole secret in order."""
    lowered = text.lower()
    names = [color.value for color in secret]
    for separator in (", ", ",", " ", " - ", "-"):
        if separator.join(names) in lowered:
            return True
    return False


class OfflineHintProvider:
    """Rule-based hint from the latest feedback. No network."""

    def get_hint(self, guesses: Sequence[GuessRecord], secret: Sequence[Color]) -> str:
        if not guesses:
            return OPENING_HINT

        last = guesses[-1]
        exact, partial = last.exact, last.partial
        turns_left = MAX_TURNS - len(guesses)

        if exact == CODE_LENGTH:
            return SOLVED_HINT
        if turns_left <= 0:
            return GAME_OVER_HINT
        if exact + partial == 0:
            used = ", ".join(sorted({color.value for color in last.colors}))
            return f"None of {used} are in the code. Drop them and try new colors."
        if exact + partial == CODE_LENGTH:
            return "You have every color already. Only the order is wrong, so shuffle positions."
        if exact == 0:
            return "Some colors are right but all in the wrong place. Move them to new positions."
        if turns_left <= 2:
            return f"Only {turns_left} turn(s) left. Keep the {exact} color(s) that are in place and change the rest."
        return f"{exact} color(s) already sit in the right place. Change one slot at a time to find which."


class GeminiHintProvider:
    """Asks Gemini for a short hint through its REST API."""

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        timeout_seconds: float = HINT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds

    def is_enabled(self) -> bool:
        return bool(self.api_key)

    def get_hint(self, guesses: Sequence[GuessRecord], secret: Sequence[Color]) -> str:
        if not self.api_key:
            return EMPTY_HINT
        try:
            text = self._generate(_build_prompt(guesses, secret))
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            logger.warning("Hint request failed: %s", exc)
            return FAILED_HINT

        if not text:
            return EMPTY_HINT
        if reveals_secret(text, secret):
            logger.warning("Hint discarded: it spelled out the secret")
            return EMPTY_HINT
        return text

    def _generate(self, prompt: str) -> str:
        payload = {
            "systemInstruction": {
                "parts": [{"text": "You are a logic game assistant. Be concise and direct."}],
            },
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.7},
        }
        response = requests.post(
            GEMINI_URL.format(model=self.model),
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected response body from Gemini")
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0]["content"].get("parts") or []
        return "".join(part.get("text", "") for part in parts).strip()


def _build_prompt(guesses: Sequence[GuessRecord], secret: Sequence[Color]) -> str:
    secret_text = ", ".join(color.value for color in secret)
    return (
        "You are an expert at the game Mastermind.\n"
        f"The secret code (which the player does NOT know) is: {secret_text}.\n\n"
        "Here is the player's history so far:\n"
        f"{describe_history(guesses)}\n\n"
        "Analyze the logic and give one short, useful hint (2 sentences max) for the next move.\n"
        "Do NOT reveal the secret code explicitly.\n"
        "If the player is far off, suggest ruling out colors or trying new positions.\n"
        "If the player is close, subtly point at which color may be in the right or wrong place."
    )


def default_provider() -> HintProvider:
    """Gemini when an API key is configured, the offline rules otherwise."""
    gemini = GeminiHintProvider()
    if gemini.is_enabled():
        return gemini
    return OfflineHintProvider()


class HintAdvisor:
    """
    Runs a provider off the caller's thread.
    The session is snapshotted at call time, so guesses submitted while the
    hint is in flight neither block on it nor change what it sees.
    """

    def __init__(self, provider: Optional[HintProvider] = None, max_workers: int = 2) -> None:
        self.provider = provider or default_provider()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="hint")

    def advise(self, session: GameSession) -> "Future[str]":
        snapshot = session.snapshot()
        if snapshot.status != GameStatus.PLAYING:
            return _resolved(GAME_OVER_HINT)
        if not snapshot.guesses:
            return _resolved(OPENING_HINT)
        return self._executor.submit(self._safe_hint, snapshot.guesses, snapshot.secret)

    def _safe_hint(self, guesses: Sequence[GuessRecord], secret: Sequence[Color]) -> str:
        try:
            return self.provider.get_hint(guesses, secret)
        except Exception:
            # the future must always resolve to a string
            logger.exception("Hint provider crashed")
            return FAILED_HINT

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)


def _resolved(text: str) -> "Future[str]":
    done: "Future[str]" = Future()
    done.set_result(text)
    return done
