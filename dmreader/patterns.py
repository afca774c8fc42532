"""Module access with toroidal wrapping, and the 8-module codeword templates.

A codeword occupies eight modules of the mapping grid. Most codewords use
the "Utah" shape (ISO 16022:2006, 5.8.1 Figure 6), anchored at its last bit.
Four fixed corner shapes (Annex F, Figures F.3 to F.6) cover codewords that
the diagonal sweep would otherwise split across the grid edges.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from .config import SWEEP_PERIOD

Position = Tuple[int, int]  # (row, column)

# (row offset, column offset) from the anchor, most significant bit first
UTAH_OFFSETS: Tuple[Position, ...] = (
    (-2, -2), (-2, -1),
    (-1, -2), (-1, -1), (-1, 0),
    (0, -2), (0, -1), (0, 0),
)


class Corner(Enum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


# Absolute positions, most significant bit first. Negative coordinates count
# back from the far edge: -1 is the last row (or column).
CORNER_TEMPLATES: dict[Corner, Tuple[Position, ...]] = {
    Corner.ONE: ((-1, 0), (-1, 1), (-1, 2), (0, -2), (0, -1), (1, -1), (2, -1), (3, -1)),
    Corner.TWO: ((-3, 0), (-2, 0), (-1, 0), (0, -4), (0, -3), (0, -2), (0, -1), (1, -1)),
    Corner.THREE: ((-1, 0), (-1, -1), (0, -3), (0, -2), (0, -1), (1, -3), (1, -2), (1, -1)),
    Corner.FOUR: ((-3, 0), (-2, 0), (-1, 0), (0, -2), (0, -1), (1, -1), (2, -1), (3, -1)),
}


def wrap_position(row: int, column: int, num_rows: int, num_columns: int) -> Position:
    """Fold a position that fell off the top or left edge back into the grid.

    Crossing an edge also shifts the other coordinate by the residue of the
    grid size against the 8-module sweep period. The row and column
    corrections are independent and may both apply.
    """
    half = SWEEP_PERIOD // 2
    if row < 0:
        row += num_rows
        column += half - ((num_rows + half) % SWEEP_PERIOD)
    if column < 0:
        column += num_columns
        row += half - ((num_columns + half) % SWEEP_PERIOD)
    return row, column


def utah_positions(row: int, column: int) -> Iterator[Position]:
    """Unwrapped positions of the Utah shape anchored at (row, column)."""
    for d_row, d_col in UTAH_OFFSETS:
        yield row + d_row, column + d_col


def corner_positions(corner: Corner, num_rows: int, num_columns: int) -> list[Position]:
    """Absolute positions of a corner shape in a num_rows x num_columns grid."""
    return [
        (r if r >= 0 else num_rows + r, c if c >= 0 else num_columns + c)
        for r, c in CORNER_TEMPLATES[corner]
    ]


class CodewordReader:
    """Reads codewords out of a mapping grid, marking every module it consumes.

    Holds the mapping grid and the read tracker side by side; both are owned
    by the caller and live for a single traversal.
    """

    def __init__(self, mapping: np.ndarray, tracker: np.ndarray):
        if mapping.shape != tracker.shape:
            raise ValueError(
                f"Tracker shape {tracker.shape} differs from mapping shape {mapping.shape}"
            )
        self.mapping = mapping
        self.tracker = tracker
        self.num_rows, self.num_columns = mapping.shape

    @classmethod
    def for_mapping(cls, mapping: np.ndarray) -> "CodewordReader":
        return cls(mapping, np.zeros(mapping.shape, dtype=np.bool_))

    def visited(self, row: int, column: int) -> bool:
        return bool(self.tracker[row, column])

    def read_module(self, row: int, column: int) -> bool:
        row, column = wrap_position(row, column, self.num_rows, self.num_columns)
        self.tracker[row, column] = True
        return bool(self.mapping[row, column])

    def _read_byte(self, positions: Iterable[Position]) -> int:
        value = 0
        for row, column in positions:
            value = (value << 1) | int(self.read_module(row, column))
        return value

    def utah(self, row: int, column: int) -> int:
        """Read the Utah-shaped codeword anchored at (row, column)."""
        return self._read_byte(utah_positions(row, column))

    def corner(self, corner: Corner) -> int:
        return self._read_byte(corner_positions(corner, self.num_rows, self.num_columns))

    @property
    def unvisited(self) -> int:
        """Modules no codeword has touched so far."""
        return int(self.tracker.size - np.count_nonzero(self.tracker))


class CodewordWriter:
    """Writes codewords into a mapping grid along the same shapes the reader uses."""

    def __init__(self, codewords: Sequence[int], num_rows: int, num_columns: int):
        self.mapping = np.zeros((num_rows, num_columns), dtype=np.bool_)
        self.tracker = np.zeros((num_rows, num_columns), dtype=np.bool_)
        self.num_rows = num_rows
        self.num_columns = num_columns
        self._codewords = iter(codewords)
        self.written = 0

    def visited(self, row: int, column: int) -> bool:
        return bool(self.tracker[row, column])

    def write_module(self, row: int, column: int, value: bool) -> None:
        row, column = wrap_position(row, column, self.num_rows, self.num_columns)
        self.tracker[row, column] = True
        self.mapping[row, column] = value

    def _write_byte(self, positions: Iterable[Position]) -> int:
        try:
            value = next(self._codewords)
        except StopIteration:
            raise ValueError(
                f"Symbol has room for more than the {self.written} codewords given"
            ) from None
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Codeword {self.written} out of byte range: {value}")
        for bit, (row, column) in enumerate(positions):
            self.write_module(row, column, bool((value >> (7 - bit)) & 1))
        self.written += 1
        return value

    def utah(self, row: int, column: int) -> int:
        return self._write_byte(utah_positions(row, column))

    def corner(self, corner: Corner) -> int:
        return self._write_byte(corner_positions(corner, self.num_rows, self.num_columns))
