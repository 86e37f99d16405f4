'''
Password (Mastermind) API

Endpoints:
POST   /games                      -> start a game
GET    /games/{id}                 -> read state & history
POST   /games/{id}/restart         -> new secret, same game id
PUT    /games/{id}/draft/{index}   -> put a color into one slot
POST   /games/{id}/select          -> pick a color (fills the first empty slot)
DELETE /games/{id}/draft/last      -> clear the last filled slot
POST   /games/{id}/guess           -> submit the draft
GET    /games/{id}/hint            -> advisory hint

Extras:
GET    /config                     -> code length, max turns, palettes

Games live in memory only; nothing survives a restart.
'''

import asyncio
import logging

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    APP_ENV,
    CODE_LENGTH,
    COLOR_SOURCE,
    HARD_PALETTE,
    MAX_TURNS,
    NORMAL_PALETTE,
    configure_logging,
)
from .hints import HintAdvisor
from .random_client import make_color_source
from .session import GameSession
from .store import SessionStore
from .types import GameStatus

from .schemas import (
    ColorRequest,
    ConfigOut,
    GameOut,
    GuessOut,
    GuessResponse,
    HintOut,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Password API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
if APP_ENV == "local":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

_store = SessionStore(color_source=make_color_source(COLOR_SOURCE))
_advisor = HintAdvisor()


# Dependencies, so tests can swap in a deterministic store or a fake advisor
def get_store() -> SessionStore:
    return _store


def get_advisor() -> HintAdvisor:
    return _advisor


def _require_session(game_id: str, store: SessionStore) -> GameSession:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


@app.on_event("shutdown")
def _stop_advisor():
    _advisor.shutdown()

# ---------------- Routes ----------------

@app.get("/config", response_model=ConfigOut, summary="Fixed game rules")
def get_config() -> ConfigOut:
    return ConfigOut(
        code_length=CODE_LENGTH,
        max_turns=MAX_TURNS,
        normal_palette=NORMAL_PALETTE,
        hard_palette=HARD_PALETTE,
    )

@app.post("/games", response_model=GameOut, summary="Start a new game")
def start_game(
    difficulty: str = "normal",
    store: SessionStore = Depends(get_store),
) -> GameOut:
    """
    Difficulty presets:
      normal -> 6 colors
      hard   -> 8 colors
    Anything else plays as normal.
    """
    game_id, session = store.create(difficulty)
    return GameOut.from_session(game_id, session)

@app.get("/games/{game_id}", response_model=GameOut, summary="Get current game state")
def get_game(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> GameOut:
    session = _require_session(game_id, store)
    return GameOut.from_session(game_id, session)

@app.post("/games/{game_id}/restart", response_model=GameOut, summary="Start over with a new secret")
def restart_game(
    game_id: str,
    difficulty: str | None = None,
    store: SessionStore = Depends(get_store),
) -> GameOut:
    session = _require_session(game_id, store)
    # Keep the current difficulty unless a new one is asked for
    session.start_new_game(difficulty or session.difficulty)
    return GameOut.from_session(game_id, session)

@app.put("/games/{game_id}/draft/{index}", response_model=GameOut, summary="Place a color in one slot")
def set_slot(
    game_id: str,
    index: int,
    payload: ColorRequest,
    store: SessionStore = Depends(get_store),
) -> GameOut:
    # Out-of-range index or finished game: ignored, state comes back unchanged
    session = _require_session(game_id, store)
    session.set_draft_slot(index, payload.color)
    return GameOut.from_session(game_id, session)

@app.post("/games/{game_id}/select", response_model=GameOut, summary="Pick a color")
def select_color(
    game_id: str,
    payload: ColorRequest,
    store: SessionStore = Depends(get_store),
) -> GameOut:
    session = _require_session(game_id, store)
    session.select_color(payload.color)
    return GameOut.from_session(game_id, session)

@app.delete("/games/{game_id}/draft/last", response_model=GameOut, summary="Clear the last filled slot")
def clear_last_slot(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> GameOut:
    session = _require_session(game_id, store)
    session.clear_last_filled_slot()
    return GameOut.from_session(game_id, session)

@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit the draft")
def submit_guess(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> GuessResponse:
    session = _require_session(game_id, store)

    # The controller silently ignores bad submissions; tell HTTP callers why
    if not session.can_submit:
        if session.status != GameStatus.PLAYING:
            detail = f"Game {session.status.value.lower()}. No more guesses allowed."
        else:
            detail = f"Draft must have all {CODE_LENGTH} colors before submitting."
        raise HTTPException(status_code=409, detail=detail)

    record = session.submit_guess()
    if record is None:
        # lost a race with another request on the same game
        raise HTTPException(status_code=409, detail="Guess was not accepted.")

    game = GameOut.from_session(game_id, session)
    return GuessResponse(
        feedback=GuessOut.from_record(record),
        game=game,
        note=(f"Game {game.status.value.lower()}. No more guesses allowed."
              if game.status != GameStatus.PLAYING else None),
    )

@app.get("/games/{game_id}/hint", response_model=HintOut, summary="Get an advisory hint")
async def get_hint(
    game_id: str,
    store: SessionStore = Depends(get_store),
    advisor: HintAdvisor = Depends(get_advisor),
) -> HintOut:
    session = _require_session(game_id, store)
    if session.status != GameStatus.PLAYING:
        raise HTTPException(status_code=409, detail="Game finished. No hint available.")
    # Runs on the advisor's worker thread; the event loop stays free for guesses
    hint = await asyncio.wrap_future(advisor.advise(session))
    return HintOut(hint=hint)
