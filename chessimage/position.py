"""
Thin facade over python-chess for the position being rendered.

The renderer only ever asks "what stands on this square?", so this is all
of python-chess it needs to see. Every loader builds a fresh board and
swaps it in only once parsing has succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO
from typing import Literal

import chess
import chess.pgn

from chessimage.errors import InvalidNotation

logger = logging.getLogger(__name__)

FILES = "abcdefgh"
WHITE_PIECES = "PNBRQK"
BLACK_PIECES = "pnbrqk"

Grid = Sequence[Sequence[str]]
Notation = Literal["pgn", "fen"]


class Position:
    """Facade over a chess.Board; starts out empty."""

    def __init__(self, board: chess.Board | None = None) -> None:
        self._board = board.copy() if board is not None else chess.Board.empty()

    @property
    def board(self) -> chess.Board:
        return self._board.copy()

    @property
    def fen(self) -> str:
        return self._board.fen()

    def get(self, square: str) -> chess.Piece | None:
        """Piece on a square such as "e4", or None when empty."""
        return self._board.piece_at(chess.parse_square(square))

    def pieces(self) -> dict[str, chess.Piece]:
        """All occupied squares, keyed by square name."""
        return {
            chess.square_name(sq): piece
            for sq, piece in self._board.piece_map().items()
        }

    # ------------------------------------------------------------------ #
    # Loaders                                                              #
    # ------------------------------------------------------------------ #

    def load_notation(self, text: str, kind: Notation) -> None:
        """Load PGN or FEN text; the previous position survives a failure."""
        match kind:
            case "pgn":
                self.load_pgn(text)
            case "fen":
                self.load_fen(text)
            case _:
                raise ValueError(f"notation must be 'pgn' or 'fen', got {kind!r}")

    def load_fen(self, fen: str) -> None:
        try:
            board = chess.Board(fen)
        except (ValueError, TypeError) as exc:
            raise InvalidNotation("fen", str(exc)) from exc
        self._board = board
        logger.debug("Loaded FEN %s", board.fen())

    def load_pgn(self, pgn: str) -> None:
        """Load the final position of the game's main line."""
        try:
            game = chess.pgn.read_game(StringIO(pgn))
        except (ValueError, TypeError) as exc:
            raise InvalidNotation("pgn", str(exc)) from exc
        if game is None:
            raise InvalidNotation("pgn", "no game found")
        if game.errors:
            raise InvalidNotation("pgn", str(game.errors[0]))
        # read_game skips tokens it cannot parse, so plain prose comes back
        # as an empty game with the default tag roster.
        if game.next() is None and dict(game.headers) == dict(chess.pgn.Headers()):
            raise InvalidNotation("pgn", "no tags or moves found")
        board = game.end().board()
        self._board = board
        logger.debug("Loaded PGN (%d plies) ending at %s", board.ply(), board.fen())

    def load_grid(self, grid: Grid) -> None:
        """
        Place pieces from an 8x8 grid of single characters.

        Row 0 is rank 8 and column 0 is file a. Uppercase letters are white,
        lowercase black; anything else leaves the square empty. Extra rows
        or columns are ignored.
        """
        board = chess.Board.empty()
        for i, row in enumerate(grid[:8]):
            for j, code in enumerate(row[:8]):
                piece = piece_from_code(code)
                if piece is not None:
                    board.set_piece_at(chess.parse_square(f"{FILES[j]}{8 - i}"), piece)
        self._board = board
        logger.debug("Loaded grid with %d pieces", len(board.piece_map()))


def piece_from_code(code: str) -> chess.Piece | None:
    """Map a grid character to a piece; the literal case decides the side."""
    if not isinstance(code, str) or len(code) != 1:
        return None
    if code.lower() not in BLACK_PIECES:
        return None
    return chess.Piece(
        chess.PIECE_SYMBOLS.index(code.lower()),
        chess.WHITE if code in WHITE_PIECES else chess.BLACK,
    )
