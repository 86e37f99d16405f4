"""
Explicit validation & Pydantic models
- Define the structure of API requests and responses.
- Colors are validated against the Color enum, so an unknown color name is a 422.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from .session import GameSession, GuessRecord
from .types import Color, FeedbackType, GameStatus


# 1. Body for placing or picking a color
class ColorRequest(BaseModel):
    color: Color = Field(..., description="One of the palette color names, e.g. 'red'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"color": "red"},
                {"color": "cyan"},  # hard palette only
            ]
        }
    }


# 2. One submitted guess with its sorted feedback pegs
class GuessOut(BaseModel):
    turn_index: int = Field(..., description="0-based turn the guess was made on")
    colors: List[Color] = Field(..., description="The guessed colors")
    feedback: List[FeedbackType] = Field(..., description="Pegs sorted EXACT, PARTIAL, NONE")
    exact: int = Field(..., description="Right color, right place")
    partial: int = Field(..., description="Right color, wrong place")

    @classmethod
    def from_record(cls, record: GuessRecord) -> "GuessOut":
        return cls(
            turn_index=record.turn_index,
            colors=list(record.colors),
            feedback=list(record.feedback),
            exact=record.exact,
            partial=record.partial,
        )


# 3. Everything the front end needs to draw the board
class GameOut(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    status: GameStatus = Field(..., description="Current state of the game")
    difficulty: Literal["normal", "hard"] = Field(..., description="Chosen difficulty level")
    current_turn: int = Field(..., description="Guesses submitted so far")
    remaining_turns: int = Field(..., description="How many guesses remain")
    draft: List[Optional[Color]] = Field(..., description="Row being built; null = empty slot")
    selected_color: Optional[Color] = Field(None, description="Color used when tapping a slot")
    palette: List[Color] = Field(..., description="Colors available in this difficulty")
    can_submit: bool = Field(..., description="Draft is full and the game is still on")
    instruction: str = Field(..., description="Short guidance for the player")
    guesses: List[GuessOut] = Field(..., description="All guesses made so far with feedback")
    secret: Optional[List[Color]] = Field(None, description="Only revealed once the game is over")

    @classmethod
    def from_session(cls, game_id: str, session: GameSession) -> "GameOut":
        snap = session.snapshot()
        finished = snap.status != GameStatus.PLAYING
        return cls(
            game_id=game_id,
            status=snap.status,
            difficulty=snap.difficulty,
            current_turn=snap.current_turn,
            remaining_turns=snap.remaining_turns,
            draft=list(snap.draft),
            selected_color=snap.selected_color,
            palette=snap.palette,
            can_submit=snap.can_submit,
            instruction=snap.instruction_text(),
            guesses=[GuessOut.from_record(g) for g in snap.guesses],
            secret=list(snap.secret) if finished else None,
        )


# 4. Result of a guess
class GuessResponse(BaseModel):
    feedback: GuessOut = Field(..., description="Feedback from the latest guess")
    game: GameOut = Field(..., description="Game state after the guess")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Game lost. No more guesses.')")


# 5. Advisory hint
class HintOut(BaseModel):
    hint: str = Field(..., description="Short advisory text; never the secret itself")


# 6. Fixed rules
class ConfigOut(BaseModel):
    code_length: int
    max_turns: int
    normal_palette: List[Color]
    hard_palette: List[Color]
