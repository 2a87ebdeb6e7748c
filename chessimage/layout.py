"""
Board layout: where every square, label, highlight and piece goes.

Two index spaces meet here. Grid indices (i, j) drive the draw loop; i is
the draw row and j the draw column. Logical squares are file a-h and rank
1-8. square_at() maps the first onto the second for the chosen
orientation, and cell_box() maps grid indices onto pixels with draw-row 0
at the *bottom* of the canvas. Apply them in that order or the board
comes out mirrored vertically.

Nothing in this module touches pixels; plan_board() returns plain data
that the renderer turns into draw calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import chess

from chessimage.config import RenderConfig
from chessimage.position import FILES

Highlights = Mapping[str, Any]
Box = tuple[int, int, int, int]


@dataclass(frozen=True)
class Label:
    text: str
    color: str


@dataclass(frozen=True)
class CellPlan:
    i: int
    j: int
    square: str
    box: Box                 # (x0, y0, x1, y1), x1/y1 exclusive
    dark: bool
    rank_label: Label | None
    file_label: Label | None
    highlight: str | None
    piece: chess.Piece | None

    @property
    def width(self) -> int:
        return self.box[2] - self.box[0]

    @property
    def height(self) -> int:
        return self.box[3] - self.box[1]


def square_at(i: int, j: int, flipped: bool) -> tuple[str, int]:
    """Logical (file, rank) drawn at grid indices (i, j)."""
    if flipped:
        return FILES[7 - j], 8 - i
    return FILES[j], i + 1


def square_name(i: int, j: int, flipped: bool) -> str:
    file, rank = square_at(i, j, flipped)
    return f"{file}{rank}"


def cell_box(i: int, j: int, size: int) -> Box:
    """
    Pixel box of grid cell (i, j): x = j * cell, y = (7 - i) * cell.

    Edges are rounded so that cells tile the canvas exactly when size is
    not a multiple of 8.
    """
    cell = size / 8
    x0, x1 = round(j * cell), round((j + 1) * cell)
    y0, y1 = round((7 - i) * cell), round((8 - i) * cell)
    return x0, y0, x1, y1


def is_dark(i: int, j: int) -> bool:
    # Parity comes from grid indices, so flipping never recolors a square.
    return (i + j) % 2 == 0


def resolve_highlight(square: str, highlights: Highlights | None, default: str) -> str | None:
    """
    Fill color for a highlighted square, or None.

    A string value is used as the color; any other truthy value means
    "highlight with the default color".
    """
    if not highlights:
        return None
    value = highlights.get(square)
    if not value:
        return None
    if isinstance(value, str):
        return value
    return default


def rank_label(i: int, j: int, config: RenderConfig) -> Label | None:
    if not config.draw_labels or j != 0:
        return None
    _, rank = square_at(i, j, config.flipped)
    color = config.label_dark if i % 2 == 0 else config.label_light
    return Label(str(rank), color)


def file_label(i: int, j: int, config: RenderConfig) -> Label | None:
    if not config.draw_labels or i != 0:
        return None
    file, _ = square_at(i, j, config.flipped)
    color = config.label_dark if j % 2 == 0 else config.label_light
    return Label(file, color)


def plan_board(
    piece_at: Callable[[str], chess.Piece | None],
    config: RenderConfig,
    highlights: Highlights | None = None,
) -> list[CellPlan]:
    """The 64 cells in draw order (i, then j)."""
    cells: list[CellPlan] = []
    for i in range(8):
        for j in range(8):
            square = square_name(i, j, config.flipped)
            cells.append(
                CellPlan(
                    i=i,
                    j=j,
                    square=square,
                    box=cell_box(i, j, config.size),
                    dark=is_dark(i, j),
                    rank_label=rank_label(i, j, config),
                    file_label=file_label(i, j, config),
                    highlight=resolve_highlight(square, highlights, config.highlight),
                    piece=piece_at(square),
                )
            )
    return cells
