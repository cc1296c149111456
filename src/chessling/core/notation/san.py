"""SAN (Standard Algebraic Notation) rendering and parsing."""

from __future__ import annotations

from chessling.core.enums import GameStatus, MoveFlag, PieceType
from chessling.core.move import Move
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation.models import SAN_PIECE_LETTERS, MoveRecord, record_to_san
from chessling.core.position import Position
from chessling.core.rules import Rules
from chessling.core.types import BOARD_SIZE, FILES, parse_square

_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in SAN_PIECE_LETTERS.items()}


def disambiguation(position: Position, move: Move) -> str:
    """Origin file and/or rank needed to tell *move* apart from its twins.

    Only pieces of the same kind and color that could *legally* reach the
    destination count, so a pinned twin never forces a qualifier. Pawns and
    kings never need one.
    """
    board = position.board
    piece = board[move.from_sq]
    if piece is None or piece.piece_type in (PieceType.PAWN, PieceType.KING):
        return ""

    gen = MoveGenerator(position)
    ambiguous = [
        sq
        for sq in board.pieces(piece.color, piece.piece_type)
        if sq != move.from_sq and gen.find_move(sq, move.to_sq) is not None
    ]
    if not ambiguous:
        return ""

    origin = move.from_sq
    same_file = any(sq.col == origin.col for sq in ambiguous)
    same_rank = any(sq.row == origin.row for sq in ambiguous)
    if not same_file:
        return origin.file_char
    if not same_rank:
        return origin.rank_char
    return origin.file_char + origin.rank_char


def build_record(position: Position, move: Move) -> MoveRecord:
    """Describe *move* from the position it is about to be played in."""
    board = position.board
    piece = board[move.from_sq]
    assert piece is not None

    captured = board[move.to_sq]
    if move.flag == MoveFlag.EN_PASSANT and position.en_passant_pawn is not None:
        captured = board[position.en_passant_pawn]

    record = MoveRecord(
        from_sq=move.from_sq,
        to_sq=move.to_sq,
        piece_type=piece.piece_type,
        color=piece.color,
        captured_type=captured.piece_type if captured is not None else None,
        is_capture=captured is not None,
        is_castle_kingside=move.flag == MoveFlag.CASTLE_KINGSIDE,
        is_castle_queenside=move.flag == MoveFlag.CASTLE_QUEENSIDE,
        is_en_passant=move.flag == MoveFlag.EN_PASSANT,
        promoted_to=move.promotion,
        disambiguation=disambiguation(position, move),
    )
    record.notation = record_to_san(record)
    return record


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    record = build_record(position, move)

    position.make_move(move)
    try:
        status = Rules.evaluate(position)
    finally:
        position.unmake_move()

    record.finalize(
        gives_check=status == GameStatus.CHECK,
        gives_checkmate=status == GameStatus.CHECKMATE,
    )
    return record.notation


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into a legal :class:`Move` for the side to move."""
    gen = MoveGenerator(position)
    legal = gen.generate_legal_moves()

    clean = san.rstrip("+#!?")

    # Castling
    if clean in ("O-O", "0-0"):
        for m in legal:
            if m.flag == MoveFlag.CASTLE_KINGSIDE:
                return m
        raise ValueError(f"Illegal move: {san}")

    if clean in ("O-O-O", "0-0-0"):
        for m in legal:
            if m.flag == MoveFlag.CASTLE_QUEENSIDE:
                return m
        raise ValueError(f"Illegal move: {san}")

    # Promotion
    promotion: PieceType | None = None
    if "=" in clean:
        promotion = _SAN_PIECE_REV.get(clean[-1])
        if promotion is None:
            raise ValueError(f"Invalid promotion piece: {san}")
        clean = clean[:-2]  # drop "=Q" etc.

    if len(clean) < 2:
        raise ValueError(f"Invalid SAN: {san!r}")

    # Destination (last two chars)
    to_sq = parse_square(clean[-2:])
    clean = clean[:-2]

    # Capture marker
    if clean.endswith("x"):
        clean = clean[:-1]

    # Piece type
    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Disambiguation
    from_col: int | None = None
    from_row: int | None = None
    for ch in clean:
        if ch in FILES:
            from_col = FILES.index(ch)
        elif ch in "12345678":
            from_row = BOARD_SIZE - int(ch)
        else:
            raise ValueError(f"Invalid SAN: {san!r}")

    # Find matching legal move
    candidates: list[Move] = []
    for m in legal:
        p = position.board[m.from_sq]
        if p is None or p.piece_type != piece_type:
            continue
        if m.to_sq != to_sq:
            continue
        if m.promotion != promotion:
            continue
        if from_col is not None and m.from_sq.col != from_col:
            continue
        if from_row is not None and m.from_sq.row != from_row:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    raise ValueError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
