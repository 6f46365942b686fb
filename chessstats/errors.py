class ChessStatsError(Exception):
    """Base class for every failure raised by chessstats."""


class DecodeError(ChessStatsError, ValueError):
    pass


class UnknownSquareGlyph(DecodeError):
    pass


class UnknownMoveGlyph(DecodeError):
    pass


class InvalidPromotionGeometry(DecodeError):
    pass


class MalformedMoveList(DecodeError):
    pass


class MalformedHeaders(DecodeError):
    pass


class InvalidFen(ChessStatsError, ValueError):
    pass


class IllegalMove(ChessStatsError, ValueError):
    def __init__(self, ply: int, uci: str, fen: str):
        super().__init__(f"Illegal move {uci} at ply {ply} in position {fen}")
        self.ply = ply
        self.uci = uci
        self.fen = fen


class PlayerNamesNotFound(ChessStatsError):
    pass


class PgnLoadFailure(ChessStatsError):
    pass


class CannotDetermineHero(ChessStatsError):
    pass


class HeroNotInGame(ChessStatsError):
    pass


class MalformedTimeControl(ChessStatsError):
    pass


class FetchError(ChessStatsError):
    def __init__(self, url: str, status: int):
        super().__init__(f"GET {url} failed with HTTP {status}")
        self.url = url
        self.status = status
