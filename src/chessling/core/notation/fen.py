"""FEN parsing and serialization for setting up positions."""

from __future__ import annotations

from chessling.core.attacks import pawn_direction
from chessling.core.board import BACK_RANK, Board
from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.position import Position
from chessling.core.types import BOARD_SIZE, Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling letter -> (king square, rook square)
_CASTLING_SQUARES: dict[str, tuple[Square, Square]] = {
    "K": (Square(7, 4), Square(7, 7)),
    "Q": (Square(7, 4), Square(7, 0)),
    "k": (Square(0, 4), Square(0, 7)),
    "q": (Square(0, 4), Square(0, 0)),
}


def _home_row(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


def _is_home(piece: Piece, sq: Square) -> bool:
    if piece.piece_type == PieceType.PAWN:
        return sq.row == _home_row(piece.color) + pawn_direction(piece.color)
    return sq.row == _home_row(piece.color) and BACK_RANK[sq.col] == piece.piece_type


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    FEN has no move counters per piece, so ``has_moved`` is inferred: pieces
    off their home squares have moved, and a king or rook on its home square
    is unmoved only if a matching castling letter is present.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first rank in FEN is row 0)
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    placed: list[tuple[Square, Piece]] = []
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                placed.append((Square(row, col), Piece.from_char(ch)))
                col += 1
            if col > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    unmoved: set[Square] = set()
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            if ch not in _CASTLING_SQUARES or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            unmoved.update(_CASTLING_SQUARES[ch])

    board = Board()
    for sq, piece in placed:
        if piece.piece_type in (PieceType.KING, PieceType.ROOK):
            has_moved = sq not in unmoved or not _is_home(piece, sq)
        else:
            has_moved = not _is_home(piece, sq)
        board[sq] = Piece(piece.color, piece.piece_type, has_moved)

    # 4. En passant
    ep_target: Square | None = None
    ep_pawn: Square | None = None
    if ep_part != "-":
        ep_target = parse_square(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep_target.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        ep_pawn = Square(ep_target.row - pawn_direction(side), ep_target.col)

    # 5–6. Clocks (validated, not tracked)
    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if len(parts) > 5 and int(parts[5]) < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(board, side, ep_target, ep_pawn)


def _castling_field(board: Board) -> str:
    field = ""
    for letter, (king_sq, rook_sq) in _CASTLING_SQUARES.items():
        king = board[king_sq]
        rook = board[rook_sq]
        color = Color.WHITE if letter.isupper() else Color.BLACK
        if (
            king is not None
            and rook is not None
            and king == Piece(color, PieceType.KING)
            and rook == Piece(color, PieceType.ROOK)
        ):
            field += letter
    return field or "-"


def position_to_fen(
    pos: Position, halfmove_clock: int = 0, fullmove_number: int = 1
) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        empty = 0
        text = ""
        for col in range(BOARD_SIZE):
            piece = pos.board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    ep_str = (
        square_name(pos.en_passant_target) if pos.en_passant_target is not None else "-"
    )
    return (
        f"{'/'.join(rows)} {side_str} {_castling_field(pos.board)} {ep_str} "
        f"{halfmove_clock} {fullmove_number}"
    )
