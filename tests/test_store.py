"""
Testing in-memory session store
"""

from password_game.session import GameSession
from password_game.store import SessionStore

from conftest import SECRET, FixedColorSource


def test_create_and_get():
    store = SessionStore(color_source=FixedColorSource(SECRET))

    game_id, session = store.create("hard")

    assert isinstance(session, GameSession)
    assert store.get(game_id) is session
    assert session.difficulty == "hard"
    assert session.secret == tuple(SECRET)
    assert len(store) == 1


def test_unknown_id_returns_none():
    store = SessionStore()

    assert store.get("nope") is None


def test_sessions_are_independent():
    store = SessionStore(color_source=FixedColorSource(SECRET))
    id_a, a = store.create()
    id_b, b = store.create()

    a.set_draft_slot(0, SECRET[0])

    assert id_a != id_b
    assert b.draft[0] is None
