"""
Piece sprites, looked up by (style, color, piece type).

Each style is a directory under the assets root holding one PNG per piece,
named through SPRITE_NAMES (wP.png, wN.png, ... bK.png).

The cburnett style also ships inside python-chess as SVG. When its PNGs
are not on disk the SVG is rasterized instead, using (in order):
  1. svglib + reportlab  (pure Python)
  2. cairosvg            (faster, but needs a system Cairo)
If neither is installed, the missing sprite is an AssetNotFound like any other.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import chess
import chess.svg
from PIL import Image, ImageDraw

from chessimage.errors import AssetNotFound

logger = logging.getLogger(__name__)

# --- svglib (primary SVG rasterizer, pure Python) ---
try:
    from svglib.svglib import svg2rlg as _svg2rlg
    from reportlab.graphics import renderPM as _renderPM
    _SVGLIB_AVAILABLE = True
except ImportError:
    _svg2rlg = None  # type: ignore[assignment]
    _renderPM = None  # type: ignore[assignment]
    _SVGLIB_AVAILABLE = False

# --- cairosvg (secondary rasterizer, needs the Cairo C library) ---
try:
    import cairosvg as _cairosvg
    _CAIROSVG_AVAILABLE = True
except (ImportError, OSError):
    _cairosvg = None  # type: ignore[assignment]
    _CAIROSVG_AVAILABLE = False

BUILTIN_STYLE = "cburnett"
BUILTIN_SPRITE_SIZE = 256

SPRITE_NAMES: dict[tuple[chess.Color, chess.PieceType], str] = {
    (color, piece_type): ("w" if color == chess.WHITE else "b") + chess.piece_symbol(piece_type).upper()
    for color in chess.COLORS
    for piece_type in chess.PIECE_TYPES
}

SpriteKey = tuple[str, chess.Color, chess.PieceType]


def sprite_name(piece: chess.Piece) -> str:
    return SPRITE_NAMES[(piece.color, piece.piece_type)]


def sprite_path(assets_dir: Path, style: str, piece: chess.Piece) -> Path:
    return Path(assets_dir) / style / f"{sprite_name(piece)}.png"


def is_svg_available() -> bool:
    """True if the built-in SVG pieces can be rasterized."""
    return _SVGLIB_AVAILABLE or _CAIROSVG_AVAILABLE


class SpriteStore:
    """Loads sprites from a style directory and caches one image per piece kind."""

    def __init__(self, style: str, assets_dir: Path) -> None:
        self.style = style
        self.assets_dir = Path(assets_dir)
        self._cache: dict[SpriteKey, Image.Image] = {}
        style_dir = self.assets_dir / style
        if not style_dir.is_dir() and style != BUILTIN_STYLE:
            raise AssetNotFound(style, path=style_dir)

    def get(self, piece: chess.Piece) -> Image.Image:
        """RGBA sprite at its native size. Raises AssetNotFound."""
        key = (self.style, piece.color, piece.piece_type)
        if key not in self._cache:
            self._cache[key] = self._load(piece)
        return self._cache[key]

    def scaled(self, piece: chess.Piece, width: int, height: int) -> Image.Image:
        sprite = self.get(piece)
        if sprite.size == (width, height):
            return sprite
        return sprite.resize((width, height), Image.Resampling.LANCZOS)

    def _load(self, piece: chess.Piece) -> Image.Image:
        path = sprite_path(self.assets_dir, self.style, piece)
        if path.is_file():
            logger.debug("Loading sprite %s", path)
            try:
                with Image.open(path) as img:
                    return img.convert("RGBA")
            except OSError as exc:
                raise AssetNotFound(self.style, sprite_name(piece), path) from exc

        if self.style == BUILTIN_STYLE:
            png = rasterize_svg(chess.svg.piece(piece, size=BUILTIN_SPRITE_SIZE))
            if png is not None:
                logger.debug("Rasterized built-in %s sprite %s", self.style, sprite_name(piece))
                with Image.open(BytesIO(png)) as img:
                    return img.convert("RGBA")
            if not is_svg_available():
                logger.warning("No SVG rasterizer installed; cannot use built-in %s pieces", self.style)

        raise AssetNotFound(self.style, sprite_name(piece), path)


def rasterize_svg(svg_str: str) -> bytes | None:
    """PNG bytes for an SVG document, or None if no rasterizer is available."""
    if _SVGLIB_AVAILABLE and _svg2rlg is not None and _renderPM is not None:
        try:
            drawing = _svg2rlg(BytesIO(svg_str.encode("utf-8")))
            if drawing is not None:
                # svglib has no alpha channel; the white backdrop is keyed out below.
                return _key_out_white(_renderPM.drawToString(drawing, fmt="PNG", bg=0xFFFFFF))
        except Exception as exc:
            logger.debug("svglib could not rasterize sprite: %s", exc)

    if _CAIROSVG_AVAILABLE and _cairosvg is not None:
        try:
            return _cairosvg.svg2png(bytestring=svg_str.encode("utf-8"))
        except Exception as exc:
            logger.debug("cairosvg could not rasterize sprite: %s", exc)

    return None


def _key_out_white(png: bytes) -> bytes:
    """
    Make the pure-white background of an opaque render transparent.

    Flood-fills from the corners only, so the white inside light pieces
    stays opaque.
    """
    with Image.open(BytesIO(png)) as img:
        rgba = img.convert("RGBA")
    w, h = rgba.size
    for corner in ((0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1)):
        if rgba.getpixel(corner) == (255, 255, 255, 255):
            ImageDraw.floodfill(rgba, corner, (255, 255, 255, 0), thresh=8)
    out = BytesIO()
    rgba.save(out, format="PNG")
    return out.getvalue()
