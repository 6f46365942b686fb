"""Tests for the HTTP service."""

import pytest
from fastapi.testclient import TestClient

from chessstats.service import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_decode(client):
    r = client.post("/decode", json={"headers": {"White": "Alice", "Result": "1-0"}, "move_list": "mC0K"})
    assert r.status_code == 200
    pgn = r.json()["pgn"]
    assert '[White "Alice"]' in pgn
    assert pgn.endswith("1. e4 e5 1-0")


def test_decode_illegal(client):
    r = client.post("/decode", json={"move_list": "mCmC"})
    assert r.status_code == 422
    assert "Illegal move" in r.json()["detail"]


def test_decode_odd_length(client):
    r = client.post("/decode", json={"move_list": "mC0"})
    assert r.status_code == 422


def test_decode_bad_header_name(client):
    r = client.post("/decode", json={"headers": {"Bad Key": "v"}, "move_list": "mC"})
    assert r.status_code == 422
    assert "Bad Key" in r.json()["detail"]


def test_decode_chesscom_result(client):
    r = client.post("/decode", json={"headers": {"result": "1/2 - 1/2"}, "move_list": "mC0K"})
    assert r.status_code == 200
    assert r.json()["pgn"].endswith("1. e4 e5 1/2-1/2")


def test_stats(client, games):
    r = client.post("/stats", json={"pgns": games})
    assert r.status_code == 200
    assert r.json() == {"games": 3, "player": "Alice", "two_bishops": 2, "percent": "66.7%"}


def test_stats_unknown_player(client, games):
    r = client.post("/stats", json={"pgns": games[:1]})
    assert r.status_code == 422
