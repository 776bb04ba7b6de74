"""
Tests for app.py - the Flask interface.
"""

import pytest
import sys
import os
import random
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from main import SnakeGame
from services.game_session import GameSession
from services.tick_driver import TickDriver
import web


@pytest.fixture
def session():
    game = SnakeGame(rng=random.Random(7))
    s = GameSession(game=game, driver=TickDriver(Mock(), autostart=False))
    yield s
    s.shutdown()


@pytest.fixture
def client(session):
    app = create_app(session=session)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_index_renders_board(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"<canvas" in response.data
    assert b"const BOARD_SIZE = 20;" in response.data


def test_template_ships_inside_web_package(client):
    app = client.application
    web_dir = os.path.dirname(os.path.abspath(web.__file__))

    assert os.path.dirname(app.template_folder) == web_dir
    assert os.path.isfile(os.path.join(app.template_folder, "index.html"))


def test_state(client):
    data = client.get("/api/state").get_json()

    assert data["phase"] == "IDLE"
    assert data["snake"][0] == {"x": 10, "y": 10}
    assert data["food"] == {"x": 15, "y": 10}
    assert data["score"] == 0
    assert data["speed"] == 200


def test_key_enter_starts(client):
    response = client.post("/api/keys", json={"key": "Enter"})

    assert response.status_code == 200
    assert response.get_json()["phase"] == "RUNNING"


def test_unbound_key_ignored(client):
    response = client.post("/api/keys", json={"key": "Escape"})
    assert response.status_code == 200
    assert response.get_json()["phase"] == "IDLE"


def test_key_requires_json_body(client):
    response = client.post("/api/keys", data="Enter")
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_intents(client):
    client.post("/api/intents", json={"intent": "start"})
    data = client.post("/api/intents", json={"intent": "steer", "direction": "UP"}).get_json()
    assert data["pending_direction"] == "UP"

    data = client.post("/api/intents", json={"intent": "pause"}).get_json()
    assert data["phase"] == "PAUSED"

    data = client.post("/api/intents", json={"intent": "resume"}).get_json()
    assert data["phase"] == "RUNNING"


def test_reverse_steer_is_not_an_error(client):
    client.post("/api/intents", json={"intent": "start"})
    response = client.post("/api/intents", json={"intent": "steer", "direction": "LEFT"})

    assert response.status_code == 200
    assert response.get_json()["pending_direction"] == "RIGHT"


@pytest.mark.parametrize("body", [
    {},
    {"intent": "jump"},
    {"intent": "steer"},
    {"intent": "steer", "direction": "NORTH"},
    {"intent": "steer", "direction": ["UP"]},
])
def test_bad_intents(client, body):
    response = client.post("/api/intents", json=body)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_internal_error_returns_500(client, session):
    session.snapshot = Mock(side_effect=RuntimeError("boom"))
    response = client.get("/api/state")
    assert response.status_code == 500
