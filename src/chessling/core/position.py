"""Position: complete rules state (board + turn + en passant) with make/unmake."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from chessling.core.board import Board
from chessling.core.enums import Color, MoveFlag, PieceType
from chessling.core.move import Move
from chessling.core.piece import Piece
from chessling.core.types import Square

_KINGSIDE_ROOK_COLS = (7, 5)  # from, to
_QUEENSIDE_ROOK_COLS = (0, 3)


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    move: Move
    moved_piece: Piece
    captured_piece: Piece | None
    capture_sq: Square
    rook_piece: Piece | None
    en_passant_target: Square | None
    en_passant_pawn: Square | None
    side_to_move: Color


class Position:
    """Board, side to move and en-passant state as one owned aggregate.

    Supports :meth:`make_move` / :meth:`unmake_move` via an internal history
    stack (Command pattern), and :meth:`simulate` for speculative probes that
    are always rolled back.

    En-passant state is a pair: ``en_passant_target`` is the square a
    capturing pawn lands on, ``en_passant_pawn`` the square of the pawn that
    gets removed. Both are ``None`` or both are set.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "en_passant_target",
        "en_passant_pawn",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant_target: Square | None = None,
        en_passant_pawn: Square | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant_target = en_passant_target
        self.en_passant_pawn = en_passant_pawn
        self._history: list[_PositionState] = []

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move, *, switch_turn: bool = True) -> None:
        """Apply *move*, pushing undo state onto the history stack.

        A ``PROMOTION`` move without a chosen piece leaves the pawn on the
        last rank; the caller finishes it with :meth:`promote`.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured = board[move.to_sq]
        capture_sq = move.to_sq

        # En passant: the captured pawn sits on a different square
        if move.flag == MoveFlag.EN_PASSANT and self.en_passant_pawn is not None:
            capture_sq = self.en_passant_pawn
            captured = board[capture_sq]

        rook_cols = self._rook_cols(move)
        rook = board[Square(move.from_sq.row, rook_cols[0])] if rook_cols else None

        self._history.append(
            _PositionState(
                move=move,
                moved_piece=piece,
                captured_piece=captured,
                capture_sq=capture_sq,
                rook_piece=rook,
                en_passant_target=self.en_passant_target,
                en_passant_pawn=self.en_passant_pawn,
                side_to_move=self.side_to_move,
            )
        )

        self.en_passant_target = None
        self.en_passant_pawn = None

        board[move.from_sq] = None
        if capture_sq != move.to_sq:
            board[capture_sq] = None

        placed = piece.moved()
        if move.promotion is not None:
            placed = placed.promoted(move.promotion)
        board[move.to_sq] = placed

        # Slide the rook for castling
        if rook_cols and rook is not None:
            row = move.from_sq.row
            board[Square(row, rook_cols[0])] = None
            board[Square(row, rook_cols[1])] = rook.moved()

        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant_target = Square(
                (move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col
            )
            self.en_passant_pawn = move.to_sq

        if switch_turn:
            self.side_to_move = self.side_to_move.opposite

    def unmake_move(self) -> Move:
        """Undo the last :meth:`make_move` and return the undone move."""
        state = self._history.pop()
        move = state.move
        board = self.board

        board[move.to_sq] = None
        board[state.capture_sq] = state.captured_piece
        board[move.from_sq] = state.moved_piece

        rook_cols = self._rook_cols(move)
        if rook_cols:
            row = move.from_sq.row
            board[Square(row, rook_cols[1])] = None
            board[Square(row, rook_cols[0])] = state.rook_piece

        self.en_passant_target = state.en_passant_target
        self.en_passant_pawn = state.en_passant_pawn
        self.side_to_move = state.side_to_move
        return move

    @contextmanager
    def simulate(self, move: Move) -> Iterator[Position]:
        """Play *move* for the duration of the ``with`` block, then undo it.

        The turn does not change. Restoration runs on every exit path.
        """
        self.make_move(move, switch_turn=False)
        try:
            yield self
        finally:
            self.unmake_move()

    # ── Turn bookkeeping ─────────────────────────────────────────────────

    def promote(self, sq: Square, piece_type: PieceType) -> None:
        """Replace the pawn standing on *sq* with *piece_type*."""
        piece = self.board[sq]
        assert piece is not None
        self.board[sq] = piece.promoted(piece_type)

    def pass_turn(self) -> None:
        self.side_to_move = self.side_to_move.opposite

    def commit(self) -> None:
        """Forget the undo history; committed moves cannot be taken back."""
        self._history.clear()

    # ── Utilities ────────────────────────────────────────────────────────

    @staticmethod
    def _rook_cols(move: Move) -> tuple[int, int] | None:
        if move.flag == MoveFlag.CASTLE_KINGSIDE:
            return _KINGSIDE_ROOK_COLS
        if move.flag == MoveFlag.CASTLE_QUEENSIDE:
            return _QUEENSIDE_ROOK_COLS
        return None

    def copy(self) -> Position:
        """Deep copy without history."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant_target=self.en_passant_target,
            en_passant_pawn=self.en_passant_pawn,
        )

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
