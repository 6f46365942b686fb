import argparse
import os
import random
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional

from .chesscom import CHESSCOM_CALLBACK_BASE, decode_pgn
from .utils import FetchResponse, cached_fetch

FETCH_WORKERS = int(os.getenv("CHESSSTATS_FETCH_WORKERS", "4"))

# "<color of the hero> <chess.com game url>"
ENTRIES = [
    "b https://www.chess.com/analysis/game/live/11908460993",
    "b https://www.chess.com/analysis/game/live/29794229927",
    "w https://www.chess.com/analysis/game/live/33151211337",
    "b https://www.chess.com/analysis/game/live/34203044315",
    "w https://www.chess.com/analysis/game/live/34538415337",
    "b https://www.chess.com/analysis/game/live/24890459011",
    "w https://www.chess.com/analysis/game/live/5766516492",
]

GAME_ID_RE = re.compile(r"([0-9]+)")


def get_pgn(
    entry: str,
    hero_name: str,
    opponent_name: str,
    fetch_func: Optional[Callable[[str], FetchResponse]] = None,
) -> str:
    fetch_func = fetch_func or cached_fetch
    color, url = entry.split()
    if color not in ("w", "b"):
        raise ValueError(f"Entry color must be 'w' or 'b': {entry!r}")

    game_id_m = GAME_ID_RE.search(url)
    if not game_id_m:
        raise ValueError(f"No game id in {url!r}")

    data = fetch_func(CHESSCOM_CALLBACK_BASE + game_id_m.group(1)).json()
    game = data["game"]

    pgn_headers = {"Result": game["pgnHeaders"]["Result"]}
    if color == "w":
        pgn_headers["White"] = hero_name
        pgn_headers["Black"] = opponent_name
    else:
        pgn_headers["White"] = opponent_name
        pgn_headers["Black"] = hero_name
    pgn_headers["Event"] = url
    return decode_pgn(pgn_headers, game["moveList"])


def read_entries(path: Path) -> List[str]:
    lines = (line.strip() for line in path.read_text(encoding="utf-8").splitlines())
    return [line for line in lines if line and not line.startswith("#")]


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Write PGN for Guess the Elo")
    ap.add_argument("--opponent-name", default="Opponent")
    ap.add_argument("--hero-name", default="KDLearns Discord member")
    ap.add_argument("--entries", metavar="FILE", help="File with one '<w|b> <game url>' entry per line")
    args = ap.parse_args(argv)

    entries = read_entries(Path(args.entries)) if args.entries else ENTRIES

    with ThreadPoolExecutor(max_workers=FETCH_WORKERS) as pool:
        pgns = list(pool.map(lambda e: get_pgn(e, args.hero_name, args.opponent_name), entries))

    random.shuffle(pgns)
    print("\n\n\n".join(pgns))


if __name__ == "__main__":
    main()
