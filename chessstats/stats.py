import re
from collections import Counter
from dataclasses import dataclass
from io import StringIO
from typing import Iterable, List, Optional, Sequence, Tuple

import chess
import chess.pgn

from .errors import CannotDetermineHero, HeroNotInGame, MalformedTimeControl, PgnLoadFailure, PlayerNamesNotFound

WHITE_RE = re.compile(r'\[White "([^"]*)"\]')
BLACK_RE = re.compile(r'\[Black "([^"]*)"\]')
HEADER_END_RE = re.compile(r"\r?\n\s*?\r?\n")
GAME_SEPARATOR_RE = re.compile(r"(?:\r?\n){3}")
TIME_CONTROL_RE = re.compile(r'TimeControl "([^"]+)"')
BASE_TIME_RE = re.compile(r"^([0-9]+)(?:/[0-9]+)?(?:\+[0-9]+)?$")

BULLET_LIMIT_S = 3 * 60


@dataclass
class GameStats:
    hero: str
    total: int = 0
    two_bishops: int = 0


def parse_players(pgn: str) -> Tuple[str, str]:
    white_m = WHITE_RE.search(pgn)
    black_m = BLACK_RE.search(pgn)
    if not white_m or not black_m:
        raise PlayerNamesNotFound(f"Could not find player names: Not a game PGN? {pgn[:1000]!r}")
    return white_m.group(1), black_m.group(1)


def guess_player(pgns: Sequence[str]) -> str:
    """
    Find the player common to all games: the first game whose White or Black
    is not one of the first game's players reveals who the other one is.
    """
    if len(pgns) < 2:
        raise CannotDetermineHero(f"Need at least two games to determine the player, got {len(pgns)}")

    candidates = parse_players(pgns[0])
    for pgn in pgns[1:]:
        white, black = parse_players(pgn)
        if white not in candidates:
            return black
        if black not in candidates:
            return white
    raise CannotDetermineHero("Could not determine player: every game has the same two players")


def load_pgn(pgn: str) -> chess.Board:
    """Load the movetext of pgn, ignoring the tag section, and return the final position."""
    m = HEADER_END_RE.search(pgn)
    core_pgn = pgn[m.start():].strip() if m else pgn.strip()

    game = chess.pgn.read_game(StringIO(core_pgn))
    if game is None or game.errors:
        raise PgnLoadFailure(f"Failed to load PGN {pgn!r}")
    return game.end().board()


def count_pieces(board: chess.Board, color: chess.Color) -> Counter:
    """Count color's pieces by lowercase kind (k q r b n p) from the FEN placement field."""
    res = Counter({kind: 0 for kind in "kqrbnp"})
    for fen_char in board.board_fen():
        if fen_char.isalpha() and fen_char.isupper() == (color == chess.WHITE):
            res[fen_char.lower()] += 1
    return res


def aggregate(pgns: Iterable[str], hero: Optional[str] = None, strict: bool = True) -> GameStats:
    """
    Count the games in which hero ends with exactly two bishops.

    hero is guessed from the games when not given. With strict=False a game
    the hero did not play in is counted as if they had Black.
    """
    pgns = list(pgns)
    if hero is None:
        hero = guess_player(pgns)

    stats = GameStats(hero)
    for pgn in pgns:
        white, black = parse_players(pgn)
        if strict and hero not in (white, black):
            raise HeroNotInGame(f"{hero} did not play {white} - {black}")

        color = chess.WHITE if white == hero else chess.BLACK
        pieces = count_pieces(load_pgn(pgn), color)
        stats.total += 1
        if pieces["b"] == 2:
            stats.two_bishops += 1
    return stats


def split_pgns(text: str) -> List[str]:
    """Split a multi-game PGN file on two blank lines, dropping games with a custom setup."""
    pgns = (pgn.strip() for pgn in GAME_SEPARATOR_RE.split(text))
    return [pgn for pgn in pgns if pgn and '[SetUp "' not in pgn]


def base_time_control(pgn: str) -> int:
    """Base clock in seconds from the TimeControl tag, e.g. 600 for "600+5"."""
    m = TIME_CONTROL_RE.search(pgn)
    if not m:
        raise MalformedTimeControl(f"No TimeControl tag in {pgn[:1000]!r}")
    tc_m = BASE_TIME_RE.match(m.group(1))
    if not tc_m:
        raise MalformedTimeControl(f"Cannot find base time control in {m.group(1)}")
    return int(tc_m.group(1))


def exclude_bullet(pgns: Iterable[str]) -> List[str]:
    return [pgn for pgn in pgns if base_time_control(pgn) >= BULLET_LIMIT_S]
