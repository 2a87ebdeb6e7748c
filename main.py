"""
chessimage command-line entry point.

Wires together:  config.yaml → CLI overrides → position loader → renderer → PNG file
"""

from __future__ import annotations

import logging
import sys
from dataclasses import asdict

from chessimage.cli.display import show_error, show_rendered
from chessimage.cli.options import build_parser, parse_highlights, read_grid, render_overrides
from chessimage.config import Config, RenderConfig, load_config
from chessimage.errors import ChessImageError
from chessimage.renderer import BoardRenderer


def _load_config(args) -> Config:
    if args.config.exists():
        return load_config(args.config)
    return Config(render=RenderConfig())


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    try:
        config = _load_config(args)
        options = asdict(config.render)
        options.update(render_overrides(args))
        render_config = RenderConfig.from_options(options)
        highlights = {**config.highlights, **parse_highlights(args.highlight)}
    except (ValueError, ChessImageError) as exc:
        show_error("Config error", exc)
        return 1

    output = args.output or config.output_path
    try:
        renderer = BoardRenderer(render_config, highlights)
        if args.fen:
            renderer.load_fen(args.fen)
        elif args.pgn:
            renderer.load_pgn(args.pgn.read_text(encoding="utf-8"))
        else:
            renderer.load_array(read_grid(args.grid))
        path = renderer.generate_png(output)
    except (OSError, ValueError, ChessImageError) as exc:
        show_error("Error", exc)
        return 1

    show_rendered(path, renderer.position, render_config, highlights)
    return 0


if __name__ == "__main__":
    sys.exit(main())
