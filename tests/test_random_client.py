"""
Testing color sources
- Trick: replace requests.get so random.org is never contacted.
"""

import requests

import password_game.random_client as random_client
from password_game.config import HARD_PALETTE, NORMAL_PALETTE
from password_game.random_client import (
    RandomOrgColorSource,
    SecureColorSource,
    SeededColorSource,
    make_color_source,
)
from password_game.types import Color


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_secure_source_stays_in_palette():
    source = SecureColorSource()
    for _ in range(50):
        code = source.draw(NORMAL_PALETTE, 4)
        assert len(code) == 4
        assert set(code) <= set(NORMAL_PALETTE)


def test_seeded_source_is_repeatable():
    first = SeededColorSource(seed=42).draw(HARD_PALETTE, 4)
    second = SeededColorSource(seed=42).draw(HARD_PALETTE, 4)

    assert first == second
    assert set(first) <= set(HARD_PALETTE)


def test_random_org_maps_indices_to_palette(monkeypatch):
    captured = {}

    def fake_get(url, params, timeout):
        captured["params"] = params
        return FakeResponse("0\n3\n5\n3\n")

    monkeypatch.setattr(random_client.requests, "get", fake_get)

    code = RandomOrgColorSource().draw(NORMAL_PALETTE, 4)

    assert code == [Color.RED, Color.YELLOW, Color.ORANGE, Color.YELLOW]
    assert captured["params"]["max"] == len(NORMAL_PALETTE) - 1
    assert captured["params"]["num"] == 4


def test_random_org_falls_back_on_network_error(monkeypatch):
    def fake_get(url, params, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(random_client.requests, "get", fake_get)
    fallback = SeededColorSource(seed=1)
    expected = SeededColorSource(seed=1).draw(NORMAL_PALETTE, 4)

    code = RandomOrgColorSource(fallback=fallback).draw(NORMAL_PALETTE, 4)

    assert code == expected


def test_random_org_falls_back_on_bad_body(monkeypatch):
    responses = iter([
        FakeResponse("0\n1\n"),              # too few values
        FakeResponse("0\n1\n2\n9\n"),        # out of range
        FakeResponse("a\nb\nc\nd\n"),        # not numbers
        FakeResponse("", status_code=503),   # server error
    ])
    monkeypatch.setattr(random_client.requests, "get", lambda url, params, timeout: next(responses))

    source = RandomOrgColorSource()
    for _ in range(4):
        code = source.draw(NORMAL_PALETTE, 4)
        assert len(code) == 4
        assert set(code) <= set(NORMAL_PALETTE)


def test_make_color_source_by_name():
    assert isinstance(make_color_source("random_org"), RandomOrgColorSource)
    assert isinstance(make_color_source("local"), SecureColorSource)
    assert isinstance(make_color_source("whatever"), SecureColorSource)
