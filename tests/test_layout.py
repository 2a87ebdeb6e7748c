import unittest

import chess

from chessimage.config import RenderConfig
from chessimage.layout import (
    Label,
    cell_box,
    file_label,
    is_dark,
    plan_board,
    rank_label,
    resolve_highlight,
    square_at,
    square_name,
)


class OrientationTests(unittest.TestCase):
    def test_unflipped_bottom_left_is_a1(self) -> None:
        self.assertEqual(square_at(0, 0, False), ("a", 1))
        self.assertEqual(square_at(7, 7, False), ("h", 8))
        self.assertEqual(square_at(0, 4, False), ("e", 1))

    def test_flipped_bottom_left_is_h8(self) -> None:
        self.assertEqual(square_at(0, 0, True), ("h", 8))
        self.assertEqual(square_at(7, 7, True), ("a", 1))
        self.assertEqual(square_at(7, 3, True), ("e", 1))

    def test_flip_is_a_180_degree_rotation(self) -> None:
        for i in range(8):
            for j in range(8):
                self.assertEqual(square_name(i, j, False), square_name(7 - i, 7 - j, True))

    def test_draw_row_zero_is_at_the_bottom_of_the_canvas(self) -> None:
        self.assertEqual(cell_box(0, 0, 400), (0, 350, 50, 400))
        self.assertEqual(cell_box(7, 0, 400), (0, 0, 50, 50))
        self.assertEqual(cell_box(0, 4, 400), (200, 350, 250, 400))

    def test_cells_tile_canvas_when_size_is_not_a_multiple_of_eight(self) -> None:
        size = 100
        for k in range(7):
            self.assertEqual(cell_box(0, k, size)[2], cell_box(0, k + 1, size)[0])
            self.assertEqual(cell_box(k + 1, 0, size)[3], cell_box(k, 0, size)[1])
        self.assertEqual(cell_box(0, 0, size)[0], 0)
        self.assertEqual(cell_box(0, 7, size)[2], size)
        self.assertEqual(cell_box(7, 0, size)[1], 0)
        self.assertEqual(cell_box(0, 0, size)[3], size)


class SquareColorTests(unittest.TestCase):
    def test_a1_and_h8_are_dark(self) -> None:
        self.assertTrue(is_dark(0, 0))
        self.assertTrue(is_dark(7, 7))
        self.assertFalse(is_dark(0, 1))

    def test_square_color_does_not_change_when_flipped(self) -> None:
        unflipped = {square_name(i, j, False): is_dark(i, j) for i in range(8) for j in range(8)}
        flipped = {square_name(i, j, True): is_dark(i, j) for i in range(8) for j in range(8)}
        self.assertEqual(unflipped, flipped)
        for name, dark in unflipped.items():
            sq = chess.parse_square(name)
            expected_dark = (chess.square_file(sq) + chess.square_rank(sq)) % 2 == 0
            self.assertEqual(dark, expected_dark, name)


class HighlightTests(unittest.TestCase):
    def test_empty_map_highlights_nothing(self) -> None:
        for name in chess.SQUARE_NAMES:
            self.assertIsNone(resolve_highlight(name, {}, "#123456"))
            self.assertIsNone(resolve_highlight(name, None, "#123456"))

    def test_true_uses_default_color(self) -> None:
        highlights = {"e4": True}
        self.assertEqual(resolve_highlight("e4", highlights, "#123456"), "#123456")
        self.assertIsNone(resolve_highlight("e5", highlights, "#123456"))

    def test_string_is_used_verbatim(self) -> None:
        self.assertEqual(resolve_highlight("e4", {"e4": "#ff0000"}, "#123456"), "#ff0000")

    def test_falsy_values_do_not_highlight(self) -> None:
        for value in (False, 0, "", None):
            self.assertIsNone(resolve_highlight("e4", {"e4": value}, "#123456"))

    def test_other_truthy_values_use_default(self) -> None:
        self.assertEqual(resolve_highlight("e4", {"e4": 1}, "#123456"), "#123456")


class LabelTests(unittest.TestCase):
    def test_rank_labels_only_in_first_column(self) -> None:
        config = RenderConfig(light="#ffffff", dark="#000000")
        self.assertEqual(rank_label(0, 0, config), Label("1", "#ffffff"))
        self.assertEqual(rank_label(1, 0, config), Label("2", "#000000"))
        self.assertIsNone(rank_label(0, 1, config))

    def test_file_labels_only_in_bottom_row(self) -> None:
        config = RenderConfig(light="#ffffff", dark="#000000")
        self.assertEqual(file_label(0, 0, config), Label("a", "#ffffff"))
        self.assertEqual(file_label(0, 7, config), Label("h", "#000000"))
        self.assertIsNone(file_label(1, 0, config))

    def test_labels_follow_orientation(self) -> None:
        config = RenderConfig(flipped=True)
        self.assertEqual([rank_label(i, 0, config).text for i in range(8)], list("87654321"))
        self.assertEqual([file_label(0, j, config).text for j in range(8)], list("hgfedcba"))

    def test_labels_can_be_disabled(self) -> None:
        config = RenderConfig(draw_labels=False)
        self.assertIsNone(rank_label(0, 0, config))
        self.assertIsNone(file_label(0, 0, config))


class PlanTests(unittest.TestCase):
    def test_plan_covers_every_square_once_in_draw_order(self) -> None:
        cells = plan_board(lambda sq: None, RenderConfig(size=400))
        self.assertEqual(len(cells), 64)
        self.assertEqual(sorted(c.square for c in cells), sorted(chess.SQUARE_NAMES))
        self.assertEqual([(c.i, c.j) for c in cells], [(i, j) for i in range(8) for j in range(8)])

    def test_plan_places_pieces_and_highlights(self) -> None:
        king = chess.Piece(chess.KING, chess.WHITE)
        cells = plan_board(
            lambda sq: king if sq == "e1" else None,
            RenderConfig(size=400, highlight="#00ff00"),
            {"e1": True, "d4": "#ff0000", "z9": True},
        )
        by_square = {c.square: c for c in cells}
        self.assertEqual(by_square["e1"].piece, king)
        self.assertEqual(by_square["e1"].box, (200, 350, 250, 400))
        self.assertEqual(by_square["e1"].highlight, "#00ff00")
        self.assertEqual(by_square["d4"].highlight, "#ff0000")
        self.assertEqual(sum(1 for c in cells if c.piece is not None), 1)
        self.assertEqual(sum(1 for c in cells if c.highlight is not None), 2)
