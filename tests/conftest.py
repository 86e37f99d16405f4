"""
- Deterministic secrets: FixedColorSource always hands back the same code.
- Provide a store fixture and override FastAPI's get_store so routes use it.
- Provide a client fixture (TestClient(app)) that already has the overrides applied.
- The hint advisor is swapped for one backed by the offline provider, so no test touches the network.
"""
import os
import pytest

from fastapi.testclient import TestClient

# Keep dev-only behavior (CORS for local front-ends) out of the tests
os.environ.setdefault("APP_ENV", "test")

from password_game.hints import HintAdvisor, OfflineHintProvider
from password_game.main import app, get_advisor, get_store
from password_game.store import SessionStore
from password_game.types import Color

SECRET = [Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW]


class FixedColorSource:
    """Ignores randomness and always returns the same code."""

    def __init__(self, code):
        self.code = list(code)
        self.calls = []

    def draw(self, palette, length):
        self.calls.append((list(palette), length))
        return list(self.code[:length])


@pytest.fixture
def fixed_source():
    return FixedColorSource(SECRET)


@pytest.fixture
def store(fixed_source):
    return SessionStore(color_source=fixed_source)


@pytest.fixture
def advisor():
    advisor = HintAdvisor(provider=OfflineHintProvider())
    yield advisor
    advisor.shutdown()


@pytest.fixture(autouse=True)
def override_dep(store, advisor):
    """Force the app to use our test store and advisor for every request."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_advisor] = lambda: advisor
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)
