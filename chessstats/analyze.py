import argparse
from pathlib import Path
from typing import List, Optional

from .chesscom import load_chesscom, load_chesscom_zip
from .stats import aggregate, exclude_bullet, guess_player, parse_players, split_pgns
from .utils import cached_fetch, fetch, log, percent


def read_pgn_files(file_names: List[str]) -> List[str]:
    pgns = []
    for file_name in file_names:
        path = Path(file_name)
        if not path.exists():
            raise SystemExit(f"PGN file not found: {path}")
        pgns.extend(split_pgns(path.read_text(encoding="utf-8")))
    return pgns


def match_player_case(pgns: List[str], player_name: str) -> str:
    """chess.com usernames are case-insensitive, PGN tags carry the canonical spelling."""
    if pgns:
        for name in parse_players(pgns[0]):
            if name.lower() == player_name.lower():
                return name
    return player_name


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Download & analyze chess games")
    ap.add_argument("-C", "--cache", action="store_true", help="Use cache for downloads")
    ap.add_argument("-c", "--chesscom", metavar="USERNAME", help="Download games from chess.com")
    ap.add_argument("-z", "--zip", metavar="FILE", help="Read games from a chess.com export zip")
    ap.add_argument("-r", "--read-pgn", nargs="*", metavar="FILE", help="Read games from the specified PGN files")
    ap.add_argument("--player", help="Player to analyze (guessed from the games if omitted)")
    ap.add_argument("--rated-only", action="store_true", help="Only consider rated games")
    ap.add_argument("--exclude-bullet", action="store_true", help="Exclude bullet games")
    ap.add_argument("--short", action="store_true", help="Short output")
    ap.add_argument("-w", "--write-pgn", metavar="FILE", help="Write loaded PGNs to the specified file")
    return ap


def main(argv: Optional[List[str]] = None):
    ap = build_parser()
    args = ap.parse_args(argv)

    sources = [s for s in (args.chesscom, args.zip, args.read_pgn) if s is not None]
    if not sources:
        ap.error("Nowhere to load games from. Use --chesscom, --zip or --read-pgn")
    if len(sources) > 1:
        ap.error("Can only have one of -c/--chesscom -z/--zip -r/--read-pgn")
    if args.read_pgn is not None and args.rated_only:
        ap.error("--rated-only not supported with --read-pgn")

    player_name = args.player
    if args.chesscom:
        fetch_func = cached_fetch if args.cache else fetch
        pgns = load_chesscom(fetch_func, args.chesscom, args.rated_only)
        player_name = player_name or match_player_case(pgns, args.chesscom)
    elif args.zip:
        zip_path = Path(args.zip)
        if not zip_path.exists():
            raise SystemExit(f"Zip not found: {zip_path}")
        pgns = load_chesscom_zip(zip_path, args.rated_only)
    else:
        pgns = read_pgn_files(args.read_pgn)

    if player_name is None:
        player_name = guess_player(pgns)

    if args.exclude_bullet:
        before = len(pgns)
        pgns = exclude_bullet(pgns)
        log(f"excluded {before - len(pgns)} bullet games")

    if args.write_pgn:
        Path(args.write_pgn).write_text("\n\n\n".join(pgns), encoding="utf-8")

    if not args.short:
        print(f"{len(pgns)} games of {player_name}")

    stats = aggregate(pgns, player_name)

    if args.short:
        print(f"{player_name}: {percent(stats.two_bishops, stats.total)}")
    else:
        print(
            f"Two bishops on the board at the end in {stats.two_bishops}"
            f" ({percent(stats.two_bishops, stats.total)}) games"
        )
    return stats


if __name__ == "__main__":
    main()
