"""
Game session controller.
Owns one game's state and is the only thing allowed to change it.

Invalid requests (submitting an incomplete draft, touching a finished game,
an index outside the row) are ignored instead of raising: they can only come
from UI misuse, never from the player making a legal move.
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import List, Optional, Tuple

from .config import CODE_LENGTH, DEFAULT_DIFFICULTY, MAX_TURNS, normalize_difficulty, palette_for
from .engine import compute_feedback, is_win, peg_counts
from .random_client import ColorSource, SecureColorSource
from .types import Color, Difficulty, FeedbackType, GameStatus, PegColor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessRecord:
    turn_index: int
    colors: Tuple[Color, ...]
    feedback: Tuple[FeedbackType, ...]

    @property
    def exact(self) -> int:
        return self.feedback.count(FeedbackType.EXACT)

    @property
    def partial(self) -> int:
        return self.feedback.count(FeedbackType.PARTIAL)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of a session, safe to hand to another thread."""
    secret: Tuple[Color, ...]
    guesses: Tuple[GuessRecord, ...]
    current_turn: int
    status: GameStatus
    draft: Tuple[PegColor, ...]
    difficulty: Difficulty
    selected_color: Optional[Color]

    # Derived fields come from the same copy, so they always agree with it

    @property
    def palette(self) -> List[Color]:
        return palette_for(self.difficulty)

    @property
    def remaining_turns(self) -> int:
        return MAX_TURNS - self.current_turn

    @property
    def can_submit(self) -> bool:
        return self.status == GameStatus.PLAYING and None not in self.draft

    def instruction_text(self) -> str:
        if self.status != GameStatus.PLAYING:
            return "Game over"
        empty = self.draft.count(None)
        if empty == CODE_LENGTH:
            return "Tap the colors below to fill the row"
        if empty > 0:
            return f"{empty} more color(s) to complete the row"
        return "All set! Tap Confirm"


@dataclass
class _State:
    secret: Tuple[Color, ...] = ()
    guesses: List[GuessRecord] = field(default_factory=list)
    current_turn: int = 0
    status: GameStatus = GameStatus.PLAYING
    draft: List[PegColor] = field(default_factory=lambda: [None] * CODE_LENGTH)
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    selected_color: Optional[Color] = None


class GameSession:
    def __init__(
        self,
        color_source: Optional[ColorSource] = None,
        difficulty: str = DEFAULT_DIFFICULTY,
    ) -> None:
        self._color_source = color_source or SecureColorSource()
        self._lock = RLock()
        self._state = _State()
        self.start_new_game(difficulty)

    # --- Read side: every read goes through a locked snapshot ---

    @property
    def secret(self) -> Tuple[Color, ...]:
        return self.snapshot().secret

    @property
    def guesses(self) -> Tuple[GuessRecord, ...]:
        return self.snapshot().guesses

    @property
    def current_turn(self) -> int:
        return self.snapshot().current_turn

    @property
    def status(self) -> GameStatus:
        return self.snapshot().status

    @property
    def draft(self) -> Tuple[PegColor, ...]:
        return self.snapshot().draft

    @property
    def difficulty(self) -> Difficulty:
        return self.snapshot().difficulty

    @property
    def selected_color(self) -> Optional[Color]:
        return self.snapshot().selected_color

    @property
    def palette(self) -> List[Color]:
        return self.snapshot().palette

    @property
    def remaining_turns(self) -> int:
        return self.snapshot().remaining_turns

    @property
    def can_submit(self) -> bool:
        return self.snapshot().can_submit

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            state = self._state
            return GameSnapshot(
                secret=state.secret,
                guesses=tuple(state.guesses),
                current_turn=state.current_turn,
                status=state.status,
                draft=tuple(state.draft),
                difficulty=state.difficulty,
                selected_color=state.selected_color,
            )

    def instruction_text(self) -> str:
        return self.snapshot().instruction_text()

    # --- Operations ---

    def start_new_game(self, difficulty: str = DEFAULT_DIFFICULTY) -> None:
        difficulty = normalize_difficulty(difficulty)
        palette = palette_for(difficulty)
        secret = tuple(self._color_source.draw(palette, CODE_LENGTH))

        with self._lock:
            self._state = _State(
                secret=secret,
                difficulty=difficulty,
                selected_color=palette[0],
            )
        logger.info("New %s game started", difficulty)

    def set_draft_slot(self, index: int, color: Color) -> None:
        with self._lock:
            if not self._editable(index):
                return
            self._state.draft[index] = color

    def select_color(self, color: Color) -> None:
        """Pick a color; while playing it also drops into the first empty slot."""
        with self._lock:
            self._state.selected_color = color
            if self._state.status != GameStatus.PLAYING:
                return
            draft = self._state.draft
            if None in draft:
                draft[draft.index(None)] = color

    def fill_slot(self, index: int) -> None:
        """Put the selected color into one slot (tap on a hole)."""
        with self._lock:
            color = self._state.selected_color
            if color is None:
                return
            self.set_draft_slot(index, color)

    def clear_last_filled_slot(self) -> None:
        with self._lock:
            if self._state.status != GameStatus.PLAYING:
                return
            draft = self._state.draft
            for i in range(len(draft) - 1, -1, -1):
                if draft[i] is not None:
                    draft[i] = None
                    return

    def submit_guess(self) -> Optional[GuessRecord]:
        """
        Score the draft and record the turn.
        Returns the new record, or None when the submission was ignored
        (game finished or draft incomplete).
        """
        with self._lock:
            state = self._state
            if state.status != GameStatus.PLAYING or None in state.draft:
                logger.debug("Ignored submit: status=%s draft=%s", state.status.value, state.draft)
                return None

            colors = tuple(state.draft)
            feedback = tuple(compute_feedback(state.secret, colors))
            record = GuessRecord(turn_index=state.current_turn, colors=colors, feedback=feedback)

            # History, turn counter, draft and status change together under the lock
            state.guesses.append(record)
            state.current_turn += 1
            state.draft = [None] * CODE_LENGTH

            if is_win(feedback):
                state.status = GameStatus.WON
            elif state.current_turn >= MAX_TURNS:
                state.status = GameStatus.LOST

            exact, partial, _ = peg_counts(feedback)
            logger.info(
                "Turn %d scored: %d exact, %d partial",
                record.turn_index + 1, exact, partial,
            )
            if state.status != GameStatus.PLAYING:
                logger.info("Game %s after %d guess(es)", state.status.value, state.current_turn)
            return record

    # --- Helpers ---

    def _editable(self, index: int) -> bool:
        if self._state.status != GameStatus.PLAYING:
            logger.debug("Ignored draft change: game is %s", self._state.status.value)
            return False
        if index < 0 or index >= CODE_LENGTH:
            logger.debug("Ignored draft change: index %s out of range", index)
            return False
        return True
