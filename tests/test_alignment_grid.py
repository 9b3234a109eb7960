from __future__ import annotations

import unittest

from phrasegrid.grid import AlignmentGrid, GridCell, MAX_SENT_LEN, OutOfRangeAccess, SentenceTooLong
from phrasegrid.util.types import Corner, PhraseSpan, RelativePos


def _all_flags(cell: GridCell) -> tuple:
    return tuple(cell.has(c) for c in Corner)


class TestGridCell(unittest.TestCase):
    def test_add_and_reset_in_place(self) -> None:
        cell = GridCell()
        span = PhraseSpan(0, 1, 0, 1)
        self.assertTrue(cell.is_empty())

        cell.add(Corner.TOP_LEFT, span)
        cell.add(Corner.TOP_LEFT, span)
        cell.mark(Corner.BOTTOM_RIGHT)

        self.assertTrue(cell.has_top_left)
        self.assertTrue(cell.has_bottom_right)
        self.assertFalse(cell.has_top_right)
        self.assertEqual(cell.top_left, [span, span])
        self.assertEqual(cell.bottom_right, [])

        slots = cell.top_left
        cell.reset()
        self.assertTrue(cell.is_empty())
        self.assertEqual(cell.spans(Corner.TOP_LEFT), [])
        # Same list object is reused after reset
        self.assertIs(cell.top_left, slots)


class TestRelativePos(unittest.TestCase):
    def test_nine_regions_partition_window(self) -> None:
        span = PhraseSpan(2, 4, 1, 3)
        expected_by_region = {}
        for f in range(8):
            for e in range(6):
                pos = AlignmentGrid.relative_pos(span, f, e)
                self.assertIsInstance(pos, RelativePos)
                expected_by_region.setdefault(pos, set()).add((f, e))

        self.assertEqual(set(expected_by_region), set(RelativePos))
        covered = set().union(*expected_by_region.values())
        self.assertEqual(len(covered), 8 * 6)
        self.assertEqual(sum(len(v) for v in expected_by_region.values()), 8 * 6)

        self.assertEqual(expected_by_region[RelativePos.I], {(f, e) for f in range(2, 5) for e in range(1, 4)})
        self.assertEqual(expected_by_region[RelativePos.NW], {(0, 0), (1, 0)})
        self.assertEqual(expected_by_region[RelativePos.N], {(2, 0), (3, 0), (4, 0)})
        self.assertEqual(expected_by_region[RelativePos.NE], {(5, 0), (6, 0), (7, 0)})
        self.assertEqual(expected_by_region[RelativePos.W], {(f, e) for f in range(2) for e in range(1, 4)})
        self.assertEqual(expected_by_region[RelativePos.E], {(f, e) for f in range(5, 8) for e in range(1, 4)})
        self.assertEqual(expected_by_region[RelativePos.SW], {(f, e) for f in range(2) for e in range(4, 6)})
        self.assertEqual(expected_by_region[RelativePos.S], {(f, e) for f in range(2, 5) for e in range(4, 6)})
        self.assertEqual(expected_by_region[RelativePos.SE], {(f, e) for f in range(5, 8) for e in range(4, 6)})

    def test_does_not_consult_grid_state(self) -> None:
        grid = AlignmentGrid(2, 2)
        span = PhraseSpan(0, 0, 0, 0)
        self.assertEqual(grid.relative_pos(span, 100, 100), RelativePos.SE)
        self.assertEqual(grid.relative_pos(span, -1, 0), RelativePos.W)


class TestAlignmentGrid(unittest.TestCase):
    def test_consistent_span_marks_four_corners(self) -> None:
        grid = AlignmentGrid()
        grid.init(3, 4)
        span = PhraseSpan(0, 1, 0, 1)
        grid.add_span(span, True)

        self.assertTrue(grid.cell_at(0, 0).has_top_left)
        self.assertEqual(grid.cell_at(0, 0).top_left, [span])
        self.assertTrue(grid.cell_at(1, 0).has_top_right)
        self.assertEqual(grid.cell_at(1, 0).top_right, [span])
        self.assertTrue(grid.cell_at(0, 1).has_bottom_left)
        self.assertTrue(grid.cell_at(1, 1).has_bottom_right)
        self.assertEqual(grid.cell_at(1, 1).bottom_right, [span])

        expected = {
            (0, 0): Corner.TOP_LEFT,
            (1, 0): Corner.TOP_RIGHT,
            (0, 1): Corner.BOTTOM_LEFT,
            (1, 1): Corner.BOTTOM_RIGHT,
        }
        for f in range(4):
            for e in range(3):
                flags = _all_flags(grid.cell_at(f, e))
                if (f, e) in expected:
                    self.assertEqual(sum(flags), 1)
                    self.assertTrue(grid.cell_at(f, e).has(expected[(f, e)]))
                else:
                    self.assertEqual(flags, (False, False, False, False))
        self.assertEqual(grid.get_spans(), [span])

    def test_inconsistent_span_listed_without_corners(self) -> None:
        grid = AlignmentGrid(3, 4)
        span = PhraseSpan(0, 1, 0, 1)
        grid.add_span(span, False)

        for f, e in [(0, 0), (1, 0), (0, 1), (1, 1)]:
            self.assertTrue(grid.cell_at(f, e).is_empty())
        self.assertEqual(grid.get_spans(), [span])

    def test_corners_only_not_listed(self) -> None:
        grid = AlignmentGrid(3, 4)
        grid.add_corners_only(0, 1, 0, 1)

        self.assertTrue(grid.cell_at(0, 0).has_top_left)
        self.assertTrue(grid.cell_at(1, 0).has_top_right)
        self.assertTrue(grid.cell_at(0, 1).has_bottom_left)
        self.assertTrue(grid.cell_at(1, 1).has_bottom_right)
        self.assertEqual(grid.cell_at(0, 0).top_left, [])
        self.assertEqual(grid.get_spans(), [])

    def test_single_cell_span_marks_all_roles_in_one_cell(self) -> None:
        grid = AlignmentGrid(2, 2)
        span = PhraseSpan(1, 1, 1, 1)
        grid.add_span(span, True)
        self.assertEqual(_all_flags(grid.cell_at(1, 1)), (True, True, True, True))

    def test_capacity_boundary(self) -> None:
        grid = AlignmentGrid()
        with self.assertRaises(SentenceTooLong):
            grid.init(MAX_SENT_LEN, 10)
        with self.assertRaises(SentenceTooLong):
            grid.init(10, MAX_SENT_LEN)
        grid.init(MAX_SENT_LEN - 1, MAX_SENT_LEN - 1)
        self.assertEqual((grid.e_size, grid.f_size), (255, 255))

    def test_sentence_too_long_leaves_grid_untouched(self) -> None:
        grid = AlignmentGrid(3, 4)
        span = PhraseSpan(0, 1, 0, 1)
        grid.add_span(span, True)
        with self.assertRaises(SentenceTooLong) as ctx:
            grid.init(300, 2)
        self.assertEqual(ctx.exception.e_size, 300)
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertEqual((grid.e_size, grid.f_size), (3, 4))
        self.assertEqual(grid.get_spans(), [span])
        self.assertTrue(grid.cell_at(0, 0).has_top_left)

    def test_negative_size_rejected(self) -> None:
        with self.assertRaises(ValueError):
            AlignmentGrid(-1, 2)

    def test_reuse_resets_working_rectangle(self) -> None:
        grid = AlignmentGrid()
        grid.init(3, 4)
        grid.add_span(PhraseSpan(0, 3, 0, 2), True)
        grid.add_span(PhraseSpan(0, 0, 0, 0), True)
        grid.add_corners_only(1, 1, 1, 1)

        grid.init(2, 2)
        self.assertEqual(grid.get_spans(), [])
        for f in range(2):
            for e in range(2):
                self.assertTrue(grid.cell_at(f, e).is_empty())
                self.assertEqual(grid.cell_at(f, e).top_left, [])

    def test_stale_cells_outside_working_rectangle_unreachable(self) -> None:
        grid = AlignmentGrid(3, 4)
        grid.add_span(PhraseSpan(0, 3, 0, 2), True)
        grid.init(2, 2)
        with self.assertRaises(OutOfRangeAccess):
            grid.cell_at(3, 2)
        with self.assertRaises(OutOfRangeAccess):
            grid.cell_at(0, 2)

    def test_insertion_order_preserved(self) -> None:
        grid = AlignmentGrid(4, 4)
        s1 = PhraseSpan(0, 0, 0, 0)
        s2 = PhraseSpan(1, 2, 1, 2)
        s3 = PhraseSpan(0, 0, 0, 0)
        grid.add_span(s1, True)
        grid.add_span(s2, False)
        grid.add_span(s3, True)
        spans = grid.get_spans()
        self.assertEqual(len(spans), 3)
        self.assertIs(spans[0], s1)
        self.assertIs(spans[1], s2)
        self.assertIs(spans[2], s3)
        # Equal bounds, distinct identities: both kept at the same corner
        self.assertEqual(len(grid.cell_at(0, 0).top_left), 2)

    def test_out_of_range_span_raises(self) -> None:
        grid = AlignmentGrid(3, 4)
        with self.assertRaises(OutOfRangeAccess):
            grid.add_span(PhraseSpan(0, 4, 0, 1), True)
        with self.assertRaises(OutOfRangeAccess):
            grid.add_corners_only(0, 1, 0, 3)
        with self.assertRaises(IndexError):
            grid.cell_at(-1, 0)
        self.assertEqual(grid.get_spans(), [])

    def test_empty_grid(self) -> None:
        grid = AlignmentGrid()
        self.assertEqual((grid.e_size, grid.f_size), (0, 0))
        self.assertEqual(grid.get_spans(), [])
        with self.assertRaises(OutOfRangeAccess):
            grid.cell_at(0, 0)


class TestPhraseSpan(unittest.TestCase):
    def test_invalid_bounds_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PhraseSpan(2, 1, 0, 0)
        with self.assertRaises(ValueError):
            PhraseSpan(0, 0, -1, 0)

    def test_identity_semantics(self) -> None:
        a = PhraseSpan(0, 1, 0, 1)
        b = PhraseSpan(0, 1, 0, 1)
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)

    def test_hull_and_lengths(self) -> None:
        hull = PhraseSpan(0, 1, 2, 3).hull(PhraseSpan(2, 2, 0, 1))
        self.assertEqual((hull.f_start, hull.f_end, hull.e_start, hull.e_end), (0, 2, 0, 3))
        self.assertEqual((hull.f_len, hull.e_len), (3, 4))


if __name__ == "__main__":
    unittest.main()
