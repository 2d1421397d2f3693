"""Functional tests for per-game link-preview metadata."""

from __future__ import annotations

import pytest

from triviyay.logic.metadata import build_game_metadata, resolve_base_url


@pytest.mark.parametrize(
    "configured, expected",
    [
        ("https://triviyay.app", "https://triviyay.app"),
        ("http://localhost:3000", "http://localhost:3000"),
        ("triviyay.netlify.app", "https://triviyay.netlify.app"),
        (None, "https://your-site.netlify.app"),
        ("", "https://your-site.netlify.app"),
    ],
)
def test_resolve_base_url(configured, expected):
    assert resolve_base_url(configured) == expected


def test_metadata_shape_for_code():
    meta = build_game_metadata("12345", "https://triviyay.app").model_dump(by_alias=True)
    image = "https://triviyay.app/.netlify/functions/og?code=12345"

    assert meta == {
        "title": "Join Game 12345 - TriviYay!",
        "description": "Join trivia game 12345 on TriviYay!",
        "openGraph": {
            "title": "Join Game 12345",
            "description": "Join trivia game 12345 on TriviYay!",
            "images": [{"url": image, "width": 1200, "height": 630, "alt": "Game code: 12345"}],
        },
        "twitter": {
            "card": "summary_large_image",
            "title": "Join Game 12345",
            "description": "Join trivia game 12345 on TriviYay!",
            "images": [image],
        },
    }


def test_metadata_endpoint_uses_configured_site(client):
    resp = client.get("/api/games/54321/metadata")

    assert resp.status_code == 200
    body = resp.json()
    assert body["openGraph"]["images"][0]["url"] == "https://triviyay.example/.netlify/functions/og?code=54321"
    assert body["twitter"]["images"] == ["https://triviyay.example/.netlify/functions/og?code=54321"]


def test_code_is_placed_in_image_url_unencoded():
    meta = build_game_metadata("AB&1", "https://triviyay.app")

    assert meta.twitter.images == ["https://triviyay.app/.netlify/functions/og?code=AB&1"]
    assert meta.open_graph.images[0].alt == "Game code: AB&1"
