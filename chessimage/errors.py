"""
Error taxonomy for board rendering.

Every failure is fatal to the operation that raised it; nothing is retried
and no partially drawn image is ever handed back.
"""

from __future__ import annotations

from pathlib import Path


class ChessImageError(Exception):
    """Base class for all rendering errors."""


class InvalidNotation(ChessImageError):
    """PGN or FEN text the rules engine could not read."""

    def __init__(self, notation: str, message: str) -> None:
        self.notation = notation
        super().__init__(f"{notation.upper()} could not be read successfully: {message}")


class NotReady(ChessImageError):
    """A render was requested before any position was loaded."""

    def __init__(self) -> None:
        super().__init__("Load a position first")


class AssetNotFound(ChessImageError):
    """Unknown piece style, or a sprite missing from the style's directory."""

    def __init__(self, style: str, name: str | None = None, path: Path | None = None) -> None:
        self.style = style
        self.name = name
        self.path = path
        if name is None:
            message = f"Unknown piece style '{style}'"
        elif path is not None:
            message = f"Sprite '{name}' for style '{style}' not found at {path}"
        else:
            message = f"Sprite '{name}' for style '{style}' not found"
        super().__init__(message)


class ImageWriteError(ChessImageError, OSError):
    """The rendered PNG could not be written to disk."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"could not write {self.path}: {cause}")
