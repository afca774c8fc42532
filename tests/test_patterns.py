"""Tests for toroidal module access and the codeword templates."""

import os
import sys
import pytest
import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dmreader.patterns import (
    CORNER_TEMPLATES,
    UTAH_OFFSETS,
    CodewordReader,
    CodewordWriter,
    Corner,
    corner_positions,
    wrap_position,
)


class TestWrapPosition:
    def test_inside_grid_untouched(self):
        assert wrap_position(3, 5, 10, 10) == (3, 5)
        assert wrap_position(0, 0, 10, 10) == (0, 0)

    def test_row_wrap_aligned_size(self):
        # 4 - ((16 + 4) % 8) == 0: no column shift
        assert wrap_position(-1, 5, 16, 16) == (15, 5)

    def test_row_wrap_only(self):
        # 4 - ((10 + 4) % 8) == -2
        assert wrap_position(-2, 3, 10, 10) == (8, 1)

    def test_column_wrap_only(self):
        assert wrap_position(2, -1, 10, 10) == (0, 9)
        assert wrap_position(1, -2, 6, 16) == (1, 14)

    def test_both_wraps_fire(self):
        assert wrap_position(-1, -1, 10, 10) == (7, 7)

    def test_row_wrap_pushes_column_negative(self):
        assert wrap_position(-1, 1, 10, 10) == (7, 9)

    def test_rectangular(self):
        # 4 - ((6 + 4) % 8) == 2
        assert wrap_position(-1, 0, 6, 16) == (5, 2)


class TestUtah:
    def test_offsets_order(self):
        assert UTAH_OFFSETS == (
            (-2, -2), (-2, -1), (-1, -2), (-1, -1), (-1, 0), (0, -2), (0, -1), (0, 0),
        )

    def test_bit_weights(self):
        anchor = (4, 4)
        for bit, (dr, dc) in enumerate(UTAH_OFFSETS):
            mapping = np.zeros((10, 10), dtype=bool)
            mapping[anchor[0] + dr, anchor[1] + dc] = True
            reader = CodewordReader.for_mapping(mapping)
            assert reader.utah(*anchor) == 1 << (7 - bit)

    def test_marks_tracker(self):
        reader = CodewordReader.for_mapping(np.zeros((10, 10), dtype=bool))
        reader.utah(4, 4)
        assert np.count_nonzero(reader.tracker) == 8
        assert reader.tracker[2:5, 2:5].sum() == 8
        assert not reader.tracker[2, 4]
        assert reader.unvisited == 92

    def test_wrapped_read(self):
        # anchor on row 0: the top two rows of the shape wrap to the bottom
        mapping = np.zeros((10, 10), dtype=bool)
        mapping[8, 2] = True  # (-2, 4) wraps to (8, 4 - 2)
        reader = CodewordReader.for_mapping(mapping)
        assert reader.utah(0, 6) == 0b10000000


class TestCorners:
    def test_table_is_closed(self):
        assert set(CORNER_TEMPLATES) == set(Corner)
        assert all(len(t) == 8 for t in CORNER_TEMPLATES.values())

    def test_corner_one_positions(self):
        assert corner_positions(Corner.ONE, 8, 8) == [
            (7, 0), (7, 1), (7, 2), (0, 6), (0, 7), (1, 7), (2, 7), (3, 7),
        ]

    def test_corner_two_positions(self):
        assert corner_positions(Corner.TWO, 14, 14) == [
            (11, 0), (12, 0), (13, 0), (0, 10), (0, 11), (0, 12), (0, 13), (1, 13),
        ]

    def test_corner_three_positions(self):
        assert corner_positions(Corner.THREE, 8, 8) == [
            (7, 0), (7, 7), (0, 5), (0, 6), (0, 7), (1, 5), (1, 6), (1, 7),
        ]

    def test_corner_four_positions(self):
        assert corner_positions(Corner.FOUR, 12, 12) == [
            (9, 0), (10, 0), (11, 0), (0, 10), (0, 11), (1, 11), (2, 11), (3, 11),
        ]

    @pytest.mark.parametrize("corner", list(Corner))
    def test_bit_weights(self, corner):
        for bit, (r, c) in enumerate(corner_positions(corner, 16, 16)):
            mapping = np.zeros((16, 16), dtype=bool)
            mapping[r, c] = True
            reader = CodewordReader.for_mapping(mapping)
            assert reader.corner(corner) == 1 << (7 - bit)


class TestReaderWriter:
    def test_writer_matches_reader(self):
        writer = CodewordWriter([0xA5, 0x3C], 10, 10)
        assert writer.utah(4, 4) == 0xA5
        assert writer.corner(Corner.ONE) == 0x3C
        reader = CodewordReader.for_mapping(writer.mapping)
        assert reader.utah(4, 4) == 0xA5
        assert reader.corner(Corner.ONE) == 0x3C
        np.testing.assert_array_equal(reader.tracker, writer.tracker)

    def test_writer_runs_out(self):
        writer = CodewordWriter([1], 10, 10)
        writer.utah(4, 4)
        with pytest.raises(ValueError):
            writer.utah(6, 6)

    def test_writer_rejects_non_byte(self):
        writer = CodewordWriter([256], 10, 10)
        with pytest.raises(ValueError):
            writer.utah(4, 4)

    def test_tracker_shape_checked(self):
        with pytest.raises(ValueError):
            CodewordReader(np.zeros((4, 4), dtype=bool), np.zeros((4, 5), dtype=bool))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
