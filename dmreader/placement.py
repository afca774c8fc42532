"""Codeword placement order within the mapping grid.

The order is fixed by ISO 16022:2006 Annex F: a diagonal zig-zag sweep of
Utah shapes that starts at row 4, column 0, interrupted by the four corner
shapes when the sweep reaches particular edge positions. The same traversal
serves both directions: driven by a CodewordReader it reads a symbol, driven
by a CodewordWriter it lays one out.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .config import TRAVERSAL_START, SymbolGeometry
from .grid import ModuleGrid
from .patterns import Corner, CodewordWriter
from .regions import insert_alignment_patterns


class CornerConflictError(RuntimeError):
    """More than one corner condition matched the same sweep position."""


# Sweep positions at which each corner shape replaces the Utah sweep
_CORNER_CONDITIONS = {
    Corner.ONE: lambda row, col, rows, cols: row == rows and col == 0,
    Corner.TWO: lambda row, col, rows, cols: (
        row == rows - 2 and col == 0 and cols % 4 != 0
    ),
    Corner.THREE: lambda row, col, rows, cols: (
        row == rows + 4 and col == 2 and cols % 8 == 0
    ),
    Corner.FOUR: lambda row, col, rows, cols: (
        row == rows - 2 and col == 0 and cols % 8 == 4
    ),
}


def _pending_corner(
    row: int, column: int, num_rows: int, num_columns: int, done: set[Corner],
    conditions=_CORNER_CONDITIONS,
) -> Optional[Corner]:
    """Return the corner shape due at (row, column), if any."""
    matches = [
        corner for corner, applies in conditions.items()
        if corner not in done and applies(row, column, num_rows, num_columns)
    ]
    # The conditions are pairwise disjoint; a second match means a bad table
    if len(matches) > 1:
        raise CornerConflictError(
            f"Corners {[c.value for c in matches]} all match at row {row}, "
            f"column {column} in a {num_columns}x{num_rows} mapping grid"
        )
    return matches[0] if matches else None


def assemble_codewords(helper, num_rows: int, num_columns: int) -> list[int]:
    """Walk the mapping grid in placement order, one codeword per step.

    Args:
        helper: Object with ``visited(row, column)``, ``utah(row, column)`` and
            ``corner(corner)``; ``utah`` and ``corner`` return the codeword.
        num_rows: Mapping grid rows.
        num_columns: Mapping grid columns.

    Returns:
        Codewords in placement order.
    """
    codewords: list[int] = []
    row, column = TRAVERSAL_START
    corners_done: set[Corner] = set()

    while True:
        corner = _pending_corner(row, column, num_rows, num_columns, corners_done)
        if corner is not None:
            codewords.append(helper.corner(corner))
            corners_done.add(corner)
            row -= 2
            column += 2
        else:
            # Sweep upward diagonally to the right
            while True:
                if row < num_rows and column >= 0 and not helper.visited(row, column):
                    codewords.append(helper.utah(row, column))
                row -= 2
                column += 2
                if not (row >= 0 and column < num_columns):
                    break
            row += 1
            column += 3

            # Sweep downward diagonally to the left
            while True:
                if row >= 0 and column < num_columns and not helper.visited(row, column):
                    codewords.append(helper.utah(row, column))
                row += 2
                column -= 2
                if not (row < num_rows and column >= 0):
                    break
            row += 3
            column += 1

        if not (row < num_rows or column < num_columns):
            break

    return codewords


def place_codewords(codewords: Sequence[int], geometry: SymbolGeometry) -> ModuleGrid:
    """Lay out codewords as a complete symbol, alignment patterns included.

    Raises:
        ValueError: If len(codewords) differs from geometry.total_codewords.
    """
    if len(codewords) != geometry.total_codewords:
        raise ValueError(
            f"Version {geometry.version_number} holds {geometry.total_codewords} "
            f"codewords, got {len(codewords)}"
        )

    num_rows, num_columns = geometry.mapping_rows, geometry.mapping_columns
    writer = CodewordWriter(codewords, num_rows, num_columns)
    assemble_codewords(writer, num_rows, num_columns)
    if writer.written != len(codewords):
        raise ValueError(
            f"Only {writer.written} of {len(codewords)} codewords fit the mapping grid"
        )

    # Leftover 2x2 in the bottom-right corner gets the fixed checker pattern
    if not writer.visited(num_rows - 1, num_columns - 1):
        writer.mapping[num_rows - 1, num_columns - 1] = True
        writer.mapping[num_rows - 2, num_columns - 2] = True

    return insert_alignment_patterns(writer.mapping, geometry)
