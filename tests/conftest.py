"""Shared pytest fixtures used across the test suite."""

import pytest

from chessstats import utils


def make_pgn(white, black, movetext, result="*", time_control="600"):
    return (
        '[Event "Live Chess"]\n'
        '[Site "Chess.com"]\n'
        f'[White "{white}"]\n'
        f'[Black "{black}"]\n'
        f'[Result "{result}"]\n'
        f'[TimeControl "{time_control}"]\n'
        "\n"
        f"{movetext} {result}\n"
    )


@pytest.fixture(autouse=True)
def _quiet_log(monkeypatch):
    monkeypatch.setattr(utils, "QUIET", True)


@pytest.fixture
def games():
    """Alice plays three games; she ends with both bishops in two of them."""
    return [
        make_pgn("Alice", "Bob", "1. e4 e5 2. Nf3 Nc6", "1/2-1/2"),
        make_pgn("Alice", "Carol", "1. e4 e5 2. Bc4 Nf6 3. Bxf7+ Kxf7", "0-1"),
        make_pgn("Dave", "Alice", "1. e4 e5 2. Nf3 Nc6", "*", time_control="60+1"),
    ]
