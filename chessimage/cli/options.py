"""
Command-line option parsing.

Flags given on the command line override the matching keys of config.yaml.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import chess

from chessimage.config import STYLES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessimage",
        description="Render a chess position (FEN, PGN or grid) to a PNG image.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--fen", help="FEN string of the position")
    source.add_argument("--pgn", type=Path, help="PGN file; its final position is drawn")
    source.add_argument("--grid", type=Path, help="text file with 8 rows of 8 piece characters")

    parser.add_argument("-o", "--output", type=Path, help="PNG file to write (default: config output)")
    parser.add_argument("-c", "--config", type=Path, default=Path("config.yaml"),
                        help="config file (optional; defaults apply when missing)")
    parser.add_argument("--size", type=int, help="image side length in pixels")
    parser.add_argument("--style", choices=STYLES, help="piece style")
    parser.add_argument("--assets-dir", type=Path, help="directory holding one folder per piece style")
    parser.add_argument("--flipped", action="store_true", default=None,
                        help="draw the board from black's side")
    parser.add_argument("--no-labels", dest="draw_labels", action="store_false", default=None,
                        help="omit rank and file labels")
    parser.add_argument("--highlight", action="append", default=[], metavar="SQUARE[=COLOR]",
                        help="highlight a square, optionally with its own color (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def parse_highlights(values: list[str]) -> dict[str, str | bool]:
    """
    Turn ["e4", "d5=#ff0000"] into {"e4": True, "d5": "#ff0000"}.

    Raises:
        ValueError: a square name is not on the board.
    """
    highlights: dict[str, str | bool] = {}
    for value in values:
        square, sep, color = value.partition("=")
        square = square.strip().lower()
        if square not in chess.SQUARE_NAMES:
            raise ValueError(f"not a square: {square!r}")
        highlights[square] = color.strip() if sep and color.strip() else True
    return highlights


def read_grid(path: Path) -> list[list[str]]:
    """
    Read a grid file: one line per rank from 8 down to 1, one character
    per file. "." and spaces are empty squares; short lines are padded.
    """
    lines = path.read_text(encoding="utf-8").splitlines()
    rows = [line for line in lines if line.strip()][:8]
    if len(rows) != 8:
        raise ValueError(f"{path}: expected 8 rows, found {len(rows)}")
    return [[c if c != "." else "" for c in row.ljust(8)[:8]] for row in rows]


def render_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Render options explicitly given on the command line."""
    overrides = {
        "size": args.size,
        "style": args.style,
        "assets_dir": args.assets_dir,
        "flipped": args.flipped,
        "draw_labels": args.draw_labels,
    }
    return {key: value for key, value in overrides.items() if value is not None}
