"""Immutable black/white module grid.

The grid is addressed by (column, row), with row 0 at the top of the symbol.
Storage is a read-only numpy bool array of shape (height, width).
"""

from __future__ import annotations

from typing import Iterable

import numpy as np


class ModuleGrid:
    """Rectified Data Matrix modules; True means a dark module."""

    __slots__ = ("_bits",)

    def __init__(self, bits: np.ndarray):
        if bits.ndim != 2:
            raise ValueError(f"Module grid must be 2-D, got shape {bits.shape}")
        bits = np.array(bits, dtype=np.bool_, copy=True)
        bits.setflags(write=False)
        self._bits = bits

    @classmethod
    def from_array(cls, array) -> "ModuleGrid":
        """Build a grid from any 2-D array-like indexed [row, column]."""
        return cls(np.asarray(array))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "ModuleGrid":
        """Build a grid from text rows where '1'/'X' are dark and '0'/'.' light."""
        parsed = [[ch in "1Xx#" for ch in row.strip()] for row in rows if row.strip()]
        if not parsed:
            raise ValueError("No rows given")
        widths = {len(r) for r in parsed}
        if len(widths) != 1:
            raise ValueError(f"Ragged rows: widths {sorted(widths)}")
        return cls(np.array(parsed, dtype=np.bool_))

    @property
    def width(self) -> int:
        return self._bits.shape[1]

    @property
    def height(self) -> int:
        return self._bits.shape[0]

    @property
    def bits(self) -> np.ndarray:
        """Read-only (height, width) view of the modules."""
        return self._bits

    def get(self, column: int, row: int) -> bool:
        return bool(self._bits[row, column])

    def to_rows(self) -> list[str]:
        return ["".join("1" if v else "0" for v in row) for row in self._bits]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleGrid):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    def __hash__(self) -> int:
        return hash((self._bits.shape, self._bits.tobytes()))

    def __repr__(self) -> str:
        return f"ModuleGrid({self.width}x{self.height})"
