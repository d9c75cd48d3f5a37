import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from bowling_tracker.main import app

BASE = "/api/v0/games"


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


def _create(client, names):
    response = client.post(BASE, json={"players": names})
    assert response.status_code == 201, response.text
    return response.json()


def _roll(client, gid, value, **coords):
    response = client.post(f"{BASE}/{gid}/rolls", json={"value": value, **coords})
    assert response.status_code == 200, response.text
    return response.json()


def test_health_checks(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/api/healthz").json() == {"status": "ok"}


def test_create_game(client):
    game = _create(client, ["Ann", " Bo "])
    assert [p["name"] for p in game["players"]] == ["Ann", "Bo"]
    assert game["turn"] == {"player": 0, "frame": 0, "roll": 0}
    assert game["status"] == "in_progress"
    assert game["currentPlayer"] == "Ann"
    assert len(game["players"][0]["frames"]) == 10

    fetched = client.get(f"{BASE}/{game['id']}").json()
    assert fetched == game


@pytest.mark.parametrize(
    "names",
    [[], ["Ann", "  "], ["a", "b", "c", "d", "e", "f"]],
    ids=["empty", "blank", "too-many"],
)
def test_create_game_rejects_bad_roster(client, names):
    response = client.post(BASE, json={"players": names})
    assert response.status_code == 422
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "invalid_roster"


def test_unknown_game_is_404(client):
    response = client.get(f"{BASE}/nope")
    assert response.status_code == 404
    assert response.json()["code"] == "game_not_found"
    response = client.post(f"{BASE}/nope/rolls", json={"value": "X"})
    assert response.status_code == 404


def test_rolls_address_active_turn_by_default(client):
    gid = _create(client, ["Ann", "Bo"])["id"]
    body = _roll(client, gid, "X")
    assert body["accepted"] is True
    assert body["turn"] == {"player": 1, "frame": 0, "roll": 0}
    assert body["currentPlayer"] == "Bo"
    assert body["players"][0]["frames"][0]["rolls"] == ["X"]


def test_rejected_rolls_report_unchanged_game(client):
    gid = _create(client, ["Ann", "Bo"])["id"]
    first = _roll(client, gid, 7)
    illegal = _roll(client, gid, "6")
    assert illegal["accepted"] is False
    misaddressed = _roll(client, gid, "1", player=1, frame=0, roll=0)
    assert misaddressed["accepted"] is False
    for body in (illegal, misaddressed):
        body.pop("accepted")
    first.pop("accepted")
    assert illegal == first
    assert misaddressed == first


def test_full_game_and_winner(client):
    gid = _create(client, ["Ann", "Bo"])["id"]
    assert client.get(f"{BASE}/{gid}/winner").json()["complete"] is False

    for frame in range(9):
        _roll(client, gid, "X", player=0, frame=frame, roll=0)
        _roll(client, gid, "3", player=1, frame=frame, roll=0)
        _roll(client, gid, "4", player=1, frame=frame, roll=1)
    for value in ("X", "X", "X"):
        _roll(client, gid, value)
    for value in ("3", "4"):
        body = _roll(client, gid, value)

    assert body["status"] == "complete"
    assert body["currentPlayer"] is None
    assert [p["totalScore"] for p in body["players"]] == [300, 70]
    assert body["winners"] == ["Ann"]

    winner = client.get(f"{BASE}/{gid}/winner").json()
    assert winner == {
        "complete": True,
        "winner": "Ann",
        "totalScore": 300,
        "winners": ["Ann"],
        "tie": False,
    }
    assert _roll(client, gid, "5")["accepted"] is False


def test_delete_game(client):
    gid = _create(client, ["Ann"])["id"]
    assert client.delete(f"{BASE}/{gid}").status_code == 204
    assert client.get(f"{BASE}/{gid}").status_code == 404
    assert client.delete(f"{BASE}/{gid}").status_code == 404


def test_score_line(client):
    response = client.post(f"{BASE}/score", json={"rolls": ["5", "/", "X", 3, 4]})
    assert response.status_code == 200
    body = response.json()
    assert body["scores"][:3] == [20, 17, 7]
    assert body["total"] == 44
    assert body["frames"][0] == ["5", "/"]
    assert body["complete"] is False


def test_score_line_rejects_illegal_roll(client):
    response = client.post(f"{BASE}/score", json={"rolls": [7, 6]})
    assert response.status_code == 400
    problem = response.json()
    assert problem["code"] == "line_roll_invalid"
    assert problem["detail"].startswith("roll #2")


@pytest.mark.parametrize("value", [True, False, 7.5, [7], {"pins": 7}], ids=["true", "false", "float", "list", "object"])
def test_non_roll_json_values_are_ignored(client, value):
    gid = _create(client, ["Ann"])["id"]
    body = _roll(client, gid, value)
    assert body["accepted"] is False
    assert body["players"][0]["frames"][0]["rolls"] == []
    assert body["turn"] == {"player": 0, "frame": 0, "roll": 0}
