import json
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping

import chess
import chess.pgn
from tqdm import tqdm

from .errors import IllegalMove, InvalidFen, MalformedHeaders
from .tcn import decode_moves
from .utils import FetchResponse, log

CHESSCOM_API_BASE = "https://api.chess.com/pub/"
CHESSCOM_CALLBACK_BASE = "https://www.chess.com/callback/live/game/"
STANDARD_SETUP = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FetchFunc = Callable[[str], FetchResponse]


def normalize_headers(pgn_headers: Mapping[str, str]) -> Dict[str, str]:
    """chess.com sends `result: "1/2 - 1/2"`; PGN wants `Result "1/2-1/2"`."""
    headers = dict(pgn_headers)
    if "Result" not in headers:
        for k in list(headers):
            if k.lower() == "result":
                headers["Result"] = headers.pop(k)
                break
    if "Result" in headers:
        headers["Result"] = "".join(headers["Result"].split())
    return headers


def decode_pgn(pgn_headers: Mapping[str, str], move_list: str) -> str:
    """
    Replay a TCN move list and render it as PGN.

    The game starts from pgn_headers["FEN"] when present. Every header is
    copied into the PGN tag section; the Result tag (matched case-insensitively,
    spaces removed) terminates the movetext.
    """
    moves = decode_moves(move_list)

    game = chess.pgn.Game()
    fen = pgn_headers.get("FEN")
    if fen:
        try:
            game.setup(fen)
        except ValueError as e:
            raise InvalidFen(f"Invalid FEN {fen!r}: {e}") from e

    for k, v in normalize_headers(pgn_headers).items():
        try:
            game.headers[k] = v
        except ValueError as e:
            raise MalformedHeaders(f"Invalid PGN header {k!r}: {e}") from e

    board = game.board()
    node = game
    for ply, decoded in enumerate(moves, start=1):
        move = decoded.to_move()
        if not board.is_legal(move):
            raise IllegalMove(ply, decoded.uci(), board.fen())
        board.push(move)
        node = node.add_variation(move)

    return str(game)


def is_standard_game(game: Dict[str, Any], rated_only: bool = False) -> bool:
    """Standard chess from the usual starting position (and rated, if asked)."""
    if game.get("rules") != "chess":
        return False
    if game.get("initial_setup") != STANDARD_SETUP:
        return False
    if rated_only and not game.get("rated"):
        return False
    return isinstance(game.get("pgn"), str) and bool(game["pgn"].strip())


def load_chesscom(fetch_func: FetchFunc, player_name: str, rated_only: bool = False) -> List[str]:
    """Download all archived standard games of player_name and return their PGNs."""
    archive_url = f"{CHESSCOM_API_BASE}player/{player_name}/games/archives"
    archives = fetch_func(archive_url).json().get("archives", [])
    log(f"{player_name}: {len(archives)} monthly archives")

    pgns = []
    for month_url in tqdm(archives, desc=f"Downloading games of {player_name} from chess.com", leave=False):
        games = fetch_func(month_url).json().get("games", [])
        for g in games:
            if is_standard_game(g, rated_only):
                pgns.append(g["pgn"])
    return pgns


def iter_chesscom_games_from_zip(zip_path: Path) -> Iterator[Dict[str, Any]]:
    """
    Yield each game dict from Chess.com monthly export JSON files inside a zip.
    Expected file content: {"games": [ ...game objects... ]}
    """
    with zipfile.ZipFile(zip_path, "r") as zf:
        names = [n for n in zf.namelist() if n.lower().endswith((".json", ".txt"))]
        for name in names:
            text = zf.read(name).decode("utf-8", errors="replace").strip()
            if not text:
                continue

            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                log(f"{zip_path}: skipping {name}, not JSON")
                continue

            games = data.get("games") if isinstance(data, dict) else None
            if not isinstance(games, list):
                continue

            for g in games:
                if isinstance(g, dict):
                    yield g


def load_chesscom_zip(zip_path: Path, rated_only: bool = False) -> List[str]:
    return [g["pgn"] for g in iter_chesscom_games_from_zip(zip_path) if is_standard_game(g, rated_only)]
