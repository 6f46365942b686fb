"""
Decoder for chess.com's terse move encoding (TCN).

Every ply is two characters: the origin square, then either the destination
square or a promotion glyph. Promotion glyphs carry the promoted piece and
whether the pawn pushes straight ahead or captures towards a higher or lower
file; the destination rank is implied by the origin rank.
"""
from typing import List, NamedTuple, Optional

import chess

from .errors import InvalidPromotionGeometry, MalformedMoveList, UnknownMoveGlyph, UnknownSquareGlyph

SQUARE_GLYPHS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!?"

# 'a' -> a1, 'b' -> b1, ..., 'i' -> a2, ..., '?' -> h8
SQUARES = dict(zip(SQUARE_GLYPHS, chess.SQUARE_NAMES))

PUSH = 0
HIGHER_FILE = 1
LOWER_FILE = -1

PIECES = {
    "~": ("Q", PUSH), "_": ("R", PUSH), "^": ("N", PUSH), "#": ("B", PUSH),
    "}": ("Q", HIGHER_FILE), "]": ("R", HIGHER_FILE), ")": ("N", HIGHER_FILE), "$": ("B", HIGHER_FILE),
    "{": ("Q", LOWER_FILE), "[": ("R", LOWER_FILE), "(": ("N", LOWER_FILE), "@": ("B", LOWER_FILE),
}

# origin rank -> back rank reached by the promoting pawn
PROMOTION_RANKS = {"7": "8", "2": "1"}


class DecodedMove(NamedTuple):
    from_square: str
    to_square: str
    promotion: Optional[str] = None

    def uci(self) -> str:
        return self.from_square + self.to_square + (self.promotion or "")

    def to_move(self) -> chess.Move:
        promotion = chess.PIECE_SYMBOLS.index(self.promotion) if self.promotion else None
        return chess.Move(
            chess.parse_square(self.from_square),
            chess.parse_square(self.to_square),
            promotion=promotion,
        )


def decode_move(pair: str) -> DecodedMove:
    """
    Decode one two-character TCN chunk.

    Raises UnknownSquareGlyph / UnknownMoveGlyph for characters outside the
    alphabet and InvalidPromotionGeometry when a promotion would leave the
    board or does not start next to a back rank.
    """
    if len(pair) != 2:
        raise MalformedMoveList(f"Expected two characters per ply, got {pair!r}")

    origin_glyph, target_glyph = pair
    from_square = SQUARES.get(origin_glyph)
    if from_square is None:
        raise UnknownSquareGlyph(f"Unknown square glyph {origin_glyph!r} in {pair!r}")

    to_square = SQUARES.get(target_glyph)
    if to_square is not None:
        return DecodedMove(from_square, to_square)

    try:
        piece, direction = PIECES[target_glyph]
    except KeyError:
        raise UnknownMoveGlyph(f"Unknown move glyph {target_glyph!r} in {pair!r}") from None

    file_index = chess.FILE_NAMES.index(from_square[0]) + direction
    if not 0 <= file_index < len(chess.FILE_NAMES):
        raise InvalidPromotionGeometry(f"Promotion {pair!r} from {from_square} leaves the board")

    rank = PROMOTION_RANKS.get(from_square[1])
    if rank is None:
        raise InvalidPromotionGeometry(f"Promotion {pair!r} cannot start on {from_square}")

    return DecodedMove(from_square, chess.FILE_NAMES[file_index] + rank, piece.lower())


def decode_moves(move_list: str) -> List[DecodedMove]:
    if not isinstance(move_list, str) or len(move_list) % 2:
        raise MalformedMoveList(f"Move list must be a string of even length, got {move_list!r}")
    return [decode_move(move_list[i:i + 2]) for i in range(0, len(move_list), 2)]
