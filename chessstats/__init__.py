__version__ = "0.3.0"

from .chesscom import decode_pgn  # noqa: E402
from .stats import GameStats, aggregate, guess_player  # noqa: E402
from .tcn import DecodedMove, decode_move  # noqa: E402

__all__ = [
    "DecodedMove",
    "GameStats",
    "aggregate",
    "decode_move",
    "decode_pgn",
    "guess_player",
]
