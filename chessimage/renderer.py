"""
Board rendering to PNG.

render() is a pure function of (position, config, highlights): it plans
all 64 cells first (loading every sprite it needs), then draws onto a
fresh Pillow canvas in a fixed order per cell:

    dark-square fill → labels → highlight → piece

The canvas never escapes on failure, so callers either get a complete
PNG or an exception.

BoardRenderer keeps the old stateful API (load a position, set
highlights, generate a buffer or file) on top of render().
"""

from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from chessimage.config import RenderConfig
from chessimage.errors import ImageWriteError, NotReady
from chessimage.layout import CellPlan, Highlights, Label, plan_board
from chessimage.position import Grid, Notation, Position
from chessimage.sprites import SpriteStore

logger = logging.getLogger(__name__)

_BOLD_FONTS = ("arialbd.ttf", "Arial Bold.ttf", "DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf")

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


@lru_cache(maxsize=16)
def label_font(pixel_size: int) -> Font:
    """Bold sans-serif at the given pixel size, falling back to Pillow's own font."""
    for name in _BOLD_FONTS:
        try:
            return ImageFont.truetype(name, pixel_size)
        except OSError:
            continue
    logger.debug("No bold system font found; using Pillow's default font")
    return ImageFont.load_default(size=pixel_size)


def render(
    position: Position,
    config: RenderConfig,
    highlights: Highlights | None = None,
    sprites: SpriteStore | None = None,
) -> bytes:
    """Render a position to PNG bytes."""
    if sprites is None:
        sprites = SpriteStore(config.style, config.assets_dir)

    cells = plan_board(position.get, config, highlights)
    # Resolve every sprite and highlight color before drawing anything.
    scaled: dict[tuple, Image.Image] = {}
    for cell in cells:
        if cell.highlight is not None:
            _check_color(cell.square, cell.highlight)
        # Cells narrower than a pixel on tiny boards have nothing to draw.
        if cell.piece is not None and cell.width > 0 and cell.height > 0:
            key = (cell.piece.color, cell.piece.piece_type, cell.width, cell.height)
            if key not in scaled:
                scaled[key] = sprites.scaled(cell.piece, cell.width, cell.height)

    canvas = Image.new("RGB", (config.size, config.size), config.light)
    # RGBA drawing mode blends translucent highlight colors onto the board.
    draw = ImageDraw.Draw(canvas, "RGBA")
    font = label_font(max(1, round(config.font_size * 4 / 3)))

    for cell in cells:
        _draw_cell(canvas, draw, cell, config, font, scaled)

    out = BytesIO()
    canvas.save(out, format="PNG")
    logger.debug(
        "Rendered %dpx board (%s, flipped=%s, %d pieces)",
        config.size, config.style, config.flipped,
        sum(1 for c in cells if c.piece is not None),
    )
    return out.getvalue()


def _draw_cell(
    canvas: Image.Image,
    draw: ImageDraw.ImageDraw,
    cell: CellPlan,
    config: RenderConfig,
    font: Font,
    scaled: dict[tuple, Image.Image],
) -> None:
    x0, y0, x1, y1 = cell.box
    if cell.width <= 0 or cell.height <= 0:
        return

    if cell.dark:
        draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=config.dark)

    padding = config.text_padding
    if cell.rank_label is not None:
        ascent = _ascent(font, cell.rank_label)
        draw.text(
            (x0 + padding, y0 + ascent + padding),
            cell.rank_label.text,
            fill=cell.rank_label.color,
            font=font,
            anchor="ls",
        )
    if cell.file_label is not None:
        width = draw.textlength(cell.file_label.text, font=font)
        draw.text(
            (x1 - width - padding, y1 - padding),
            cell.file_label.text,
            fill=cell.file_label.color,
            font=font,
            anchor="ls",
        )

    if cell.highlight is not None:
        draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=cell.highlight)

    if cell.piece is not None:
        sprite = scaled[(cell.piece.color, cell.piece.piece_type, cell.width, cell.height)]
        canvas.paste(sprite, (x0, y0), sprite)


def _check_color(square: str, color: str) -> None:
    try:
        ImageColor.getrgb(color)
    except ValueError as exc:
        raise ValueError(f"highlight for {square} is not a valid color: {color!r}") from exc


def _ascent(font: Font, label: Label) -> float:
    """Height of the glyphs above the baseline."""
    _, top, _, _ = font.getbbox(label.text, anchor="ls")
    return -top


class BoardRenderer:
    """
    Stateful wrapper: load a position, optionally set highlights, render.

    Not safe for concurrent use; the position and highlights are shared
    between calls.
    """

    def __init__(self, config: RenderConfig | None = None, highlights: Highlights | None = None) -> None:
        self.config = config or RenderConfig()
        # Fails fast on a style with no sprite directory.
        self._sprites = SpriteStore(self.config.style, self.config.assets_dir)
        self._position = Position()
        self._highlights: dict = dict(highlights) if highlights else {}
        self.ready = False

    @property
    def position(self) -> Position:
        return self._position

    @property
    def highlights(self) -> dict:
        return dict(self._highlights)

    # ------------------------------------------------------------------ #
    # Loading                                                              #
    # ------------------------------------------------------------------ #

    def load_notation(self, text: str, kind: Notation) -> None:
        self._position.load_notation(text, kind)
        self.ready = True

    def load_pgn(self, pgn: str) -> None:
        self._position.load_pgn(pgn)
        self.ready = True

    def load_fen(self, fen: str) -> None:
        self._position.load_fen(fen)
        self.ready = True

    def load_array(self, grid: Grid) -> None:
        self._position.load_grid(grid)
        self.ready = True

    def set_highlighted_squares(self, highlights: Highlights | None) -> None:
        """Replace the highlight map; None or {} clears it."""
        self._highlights = dict(highlights) if highlights else {}

    # ------------------------------------------------------------------ #
    # Output                                                               #
    # ------------------------------------------------------------------ #

    def generate_buffer(self) -> bytes:
        if not self.ready:
            raise NotReady()
        return render(self._position, self.config, self._highlights, self._sprites)

    def generate_png(self, png_path: str | Path) -> Path:
        """Render and write the PNG. Returns the path written."""
        buffer = self.generate_buffer()
        path = Path(png_path)
        try:
            with path.open("wb") as f:
                f.write(buffer)
        except OSError as exc:
            raise ImageWriteError(path, exc) from exc
        logger.info("Wrote %s (%d bytes)", path, len(buffer))
        return path
