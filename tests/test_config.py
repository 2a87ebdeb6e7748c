import tempfile
import unittest
from pathlib import Path

from chessimage.config import (
    DEFAULT_DARK,
    DEFAULT_LIGHT,
    DEFAULT_SIZE,
    RenderConfig,
    load_config,
)
from chessimage.errors import AssetNotFound


class RenderConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = RenderConfig()
        self.assertEqual(config.size, DEFAULT_SIZE)
        self.assertFalse(config.flipped)
        self.assertTrue(config.draw_labels)
        self.assertEqual(config.style, "cburnett")

    def test_label_colors_default_to_opposite_square_colors(self) -> None:
        config = RenderConfig(light="#eeeeee", dark="#111111")
        self.assertEqual(config.label_light, "#111111")
        self.assertEqual(config.label_dark, "#eeeeee")

    def test_explicit_label_colors_are_kept(self) -> None:
        config = RenderConfig(label_light="red", label_dark="blue")
        self.assertEqual((config.label_light, config.label_dark), ("red", "blue"))

    def test_font_metrics_scale_with_size(self) -> None:
        config = RenderConfig(size=400)
        self.assertEqual(config.cell_size, 50)
        self.assertEqual(config.font_size, 5)
        self.assertEqual(config.text_padding, 2.5)

    def test_unknown_style_fails_fast(self) -> None:
        with self.assertRaises(AssetNotFound):
            RenderConfig(style="pixel")

    def test_invalid_color_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RenderConfig(light="not-a-color")

    def test_invalid_size_is_rejected(self) -> None:
        for size in (0, -8, 12.5):
            with self.assertRaises(ValueError):
                RenderConfig(size=size)


class FromOptionsTests(unittest.TestCase):
    def test_missing_options_use_defaults(self) -> None:
        self.assertEqual(RenderConfig.from_options(None), RenderConfig())
        self.assertEqual(RenderConfig.from_options({"size": None, "light": ""}), RenderConfig())

    def test_flipped_only_when_literally_true(self) -> None:
        self.assertTrue(RenderConfig.from_options({"flipped": True}).flipped)
        for value in (None, False, 1, "yes"):
            self.assertFalse(RenderConfig.from_options({"flipped": value}).flipped, value)

    def test_labels_cleared_only_when_literally_false(self) -> None:
        self.assertFalse(RenderConfig.from_options({"draw_labels": False}).draw_labels)
        for value in (None, True, 0, ""):
            self.assertTrue(RenderConfig.from_options({"draw_labels": value}).draw_labels, value)

    def test_sizes_are_coerced_to_integers(self) -> None:
        self.assertEqual(RenderConfig.from_options({"size": "320"}).size, 320)
        self.assertEqual(RenderConfig.from_options({"size": 400.0}).size, 400)

    def test_non_integral_sizes_are_rejected(self) -> None:
        for size in (400.7, "400.7", "big"):
            with self.assertRaises(ValueError, msg=size):
                RenderConfig.from_options({"size": size})

    def test_label_defaults_follow_custom_square_colors(self) -> None:
        config = RenderConfig.from_options({"light": "#ffffff", "dark": "#000000"})
        self.assertEqual(config.label_light, "#000000")
        self.assertEqual(config.label_dark, "#ffffff")


class LoadConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(Path("does-not-exist.yaml"))

    def test_empty_file_gives_defaults(self) -> None:
        config = load_config(self._write(""))
        self.assertEqual(config.render.light, DEFAULT_LIGHT)
        self.assertEqual(config.render.dark, DEFAULT_DARK)
        self.assertEqual(config.highlights, {})
        self.assertEqual(config.output_path, Path("board.png"))

    def test_render_section_and_highlights(self) -> None:
        path = self._write(
            "render:\n"
            "  size: 320\n"
            "  flipped: true\n"
            "  draw_labels: false\n"
            "  assets_dir: pieces\n"
            "highlights:\n"
            "  e4: true\n"
            "  d5: '#ff000080'\n"
            "output: out.png\n"
        )
        config = load_config(path)
        self.assertEqual(config.render.size, 320)
        self.assertTrue(config.render.flipped)
        self.assertFalse(config.render.draw_labels)
        self.assertEqual(config.render.assets_dir, path.parent / "pieces")
        self.assertEqual(config.highlights, {"e4": True, "d5": "#ff000080"})
        self.assertEqual(config.output, "out.png")

    def test_bad_structure_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            load_config(self._write("render: [1, 2]\n"))
        with self.assertRaises(ValueError):
            load_config(self._write("highlights: [e4]\n"))
