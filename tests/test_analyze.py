"""Tests for the chessstats-analyze command line."""

import json

import pytest

from chessstats import analyze
from chessstats.chesscom import CHESSCOM_API_BASE, STANDARD_SETUP
from chessstats.errors import HeroNotInGame
from chessstats.utils import FetchResponse


@pytest.fixture
def pgn_file(tmp_path, games):
    path = tmp_path / "games.pgn"
    path.write_text("\n\n\n".join(games), encoding="utf-8")
    return path


def test_read_pgn(pgn_file, capsys):
    stats = analyze.main(["-r", str(pgn_file)])
    assert capsys.readouterr().out == (
        "3 games of Alice\n"
        "Two bishops on the board at the end in 2 (66.7%) games\n"
    )
    assert stats.two_bishops == 2


def test_short(pgn_file, capsys):
    analyze.main(["-r", str(pgn_file), "--short"])
    assert capsys.readouterr().out == "Alice: 66.7%\n"


def test_exclude_bullet(pgn_file, capsys):
    analyze.main(["-r", str(pgn_file), "--exclude-bullet", "--short"])
    assert capsys.readouterr().out == "Alice: 50%\n"


def test_explicit_player(pgn_file):
    with pytest.raises(HeroNotInGame):
        analyze.main(["-r", str(pgn_file), "--player", "Bob"])


def test_write_pgn(pgn_file, tmp_path, games):
    out = tmp_path / "out.pgn"
    analyze.main(["-r", str(pgn_file), "-w", str(out)])
    assert analyze.read_pgn_files([str(out)]) == [g.strip() for g in games]


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit, match="not found"):
        analyze.main(["-r", str(tmp_path / "missing.pgn")])


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-c", "alice", "-r", "games.pgn"],
        ["-z", "games.zip", "-c", "alice"],
        ["-r", "games.pgn", "--rated-only"],
    ],
)
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as exc_info:
        analyze.main(argv)
    assert exc_info.value.code == 2


def test_chesscom(monkeypatch, games, capsys):
    archive_url = f"{CHESSCOM_API_BASE}player/alice/games/archives"
    month_url = f"{CHESSCOM_API_BASE}player/alice/games/2024/01"
    month = {
        "games": [
            {"rules": "chess", "initial_setup": STANDARD_SETUP, "rated": True, "pgn": games[0]},
            {"rules": "chess", "initial_setup": STANDARD_SETUP, "rated": False, "pgn": games[1]},
        ]
    }
    responses = {archive_url: {"archives": [month_url]}, month_url: month}
    monkeypatch.setattr(analyze, "fetch", lambda url: FetchResponse(200, json.dumps(responses[url])))

    analyze.main(["-c", "alice", "--rated-only"])
    assert capsys.readouterr().out == (
        "1 games of Alice\n"
        "Two bishops on the board at the end in 1 (100%) games\n"
    )


def test_match_player_case(games):
    assert analyze.match_player_case(games, "ALICE") == "Alice"
    assert analyze.match_player_case(games, "zoe") == "zoe"
    assert analyze.match_player_case([], "zoe") == "zoe"
