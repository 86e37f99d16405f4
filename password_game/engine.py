"""
Pure game logic (no HTTP, no session state).
For each guess we produce one feedback peg per slot:
- EXACT: right color in the right place (black peg)
- PARTIAL: right color in the wrong place, after exact matches are removed (white peg)
- NONE: nothing

The pegs are sorted (EXACT, then PARTIAL, then NONE) so they never tell the
player WHICH slot earned which peg, only how many of each there are.

We allow duplicates in the secret.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .types import Color, Feedback, FeedbackType

_PEG_ORDER = {
    FeedbackType.EXACT: 0,
    FeedbackType.PARTIAL: 1,
    FeedbackType.NONE: 2,
}


def compute_feedback(secret: Sequence[Color], guess: Sequence[Optional[Color]]) -> Feedback:
    """
    Example:
      secret = [RED, RED, BLUE, BLUE]
      guess  = [RED, BLUE, RED, RED]
      position 0 is exact, one RED and one BLUE are partial, the last RED has
      no secret RED left to pair with.
      Returns: [EXACT, PARTIAL, PARTIAL, NONE]

    A guess with empty slots (or the wrong length) never reaches here through
    the session controller; if it does we answer all NONE instead of raising.
    """
    n = len(secret)
    if len(guess) != n or any(color is None for color in guess):
        return [FeedbackType.NONE] * n

    feedback: Feedback = [FeedbackType.NONE] * n
    consumed = [False] * n

    # 1. Exact pass: same color, same index. Both sides are used up.
    for i in range(n):
        if guess[i] == secret[i]:
            feedback[i] = FeedbackType.EXACT
            consumed[i] = True

    # 2. Count what is left of the secret
    remaining: Dict[Color, int] = {}
    for i in range(n):
        if not consumed[i]:
            remaining[secret[i]] = remaining.get(secret[i], 0) + 1

    # 3. Partial pass, left to right. Decrementing keeps a single secret
    #    occurrence from being matched twice.
    for i in range(n):
        if consumed[i]:
            continue
        color = guess[i]
        if remaining.get(color, 0) > 0:
            feedback[i] = FeedbackType.PARTIAL
            remaining[color] -= 1

    # 4. Canonical order: drop any positional meaning
    return sorted(feedback, key=lambda peg: _PEG_ORDER[peg])


def feedback_counts(feedback: Sequence[FeedbackType]) -> Tuple[int, int]:
    """Returns a tuple: (exact, partial)"""
    exact = 0
    partial = 0
    for peg in feedback:
        if peg == FeedbackType.EXACT:
            exact += 1
        elif peg == FeedbackType.PARTIAL:
            partial += 1
    return (exact, partial)


def is_win(feedback: Sequence[FeedbackType]) -> bool:
    """
    Win = every peg is EXACT.
    An empty feedback list is never a win.
    """
    if len(feedback) == 0:
        return False
    return all(peg == FeedbackType.EXACT for peg in feedback)


def peg_counts(feedback: Sequence[FeedbackType]) -> List[int]:
    """[exact, partial, none] counts, handy for display and logs."""
    exact, partial = feedback_counts(feedback)
    return [exact, partial, len(feedback) - exact - partial]
