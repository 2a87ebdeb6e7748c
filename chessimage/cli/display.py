"""
Rich-based console output for the command line.

This is the ONLY place where terminal output happens.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from chessimage.config import RenderConfig
from chessimage.position import Position

console = Console(legacy_windows=False)


def show_error(label: str, exc: Exception) -> None:
    console.print(f"[red]{label}:[/] {exc}")


def show_rendered(path: Path, position: Position, config: RenderConfig, highlights: dict) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="dim")
    table.add_column()
    table.add_row("FEN", position.fen)
    table.add_row("Size", f"{config.size}px")
    table.add_row("Style", config.style)
    table.add_row("Orientation", "black at bottom" if config.flipped else "white at bottom")
    if highlights:
        table.add_row("Highlights", ", ".join(sorted(highlights)))
    console.print(table)
    console.print(f"[green]Wrote[/] [bold]{path}[/]")
