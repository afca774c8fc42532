"""Data region extraction and alignment-pattern insertion.

A symbol is a tiling of data regions. Every region is framed by a one-module
alignment border: a solid L along its left and bottom edges and an
alternating clock track along its top and right edges. The mapping grid is
what remains when those borders are dropped and the regions are butted
together with no gaps.
"""

from __future__ import annotations

import numpy as np

from .config import ALIGNMENT_BORDER, SymbolGeometry
from .grid import ModuleGrid


class GeometryMismatchError(ValueError):
    """The module grid does not have the size the geometry describes."""


def _check_dimensions(geometry: SymbolGeometry, height: int, width: int, what: str) -> None:
    if height != geometry.symbol_size_rows or width != geometry.symbol_size_columns:
        raise GeometryMismatchError(
            f"Dimension of {what} ({width}x{height}) must match the symbol size "
            f"{geometry.symbol_size_columns}x{geometry.symbol_size_rows}"
        )


def _tile_origins(geometry: SymbolGeometry):
    """Yield (read_row, read_col, write_row, write_col) for every data region."""
    step_rows = geometry.data_region_size_rows + 2 * ALIGNMENT_BORDER
    step_cols = geometry.data_region_size_columns + 2 * ALIGNMENT_BORDER
    for region_row in range(geometry.num_regions_row):
        for region_col in range(geometry.num_regions_column):
            yield (
                region_row * step_rows + ALIGNMENT_BORDER,
                region_col * step_cols + ALIGNMENT_BORDER,
                region_row * geometry.data_region_size_rows,
                region_col * geometry.data_region_size_columns,
            )


def extract_data_region(grid: ModuleGrid, geometry: SymbolGeometry) -> np.ndarray:
    """Strip the alignment patterns and concatenate the data regions.

    Args:
        grid: Full symbol, alignment patterns included.
        geometry: Symbol size the grid was resolved to.

    Returns:
        (mapping_rows, mapping_columns) bool array, freshly allocated.

    Raises:
        GeometryMismatchError: If the grid size disagrees with the geometry.
    """
    _check_dimensions(geometry, grid.height, grid.width, "module grid")

    rows = geometry.data_region_size_rows
    cols = geometry.data_region_size_columns
    src = grid.bits

    mapping = np.zeros((geometry.mapping_rows, geometry.mapping_columns), dtype=np.bool_)
    for read_row, read_col, write_row, write_col in _tile_origins(geometry):
        mapping[write_row:write_row + rows, write_col:write_col + cols] = \
            src[read_row:read_row + rows, read_col:read_col + cols]
    return mapping


def insert_alignment_patterns(mapping: np.ndarray, geometry: SymbolGeometry) -> ModuleGrid:
    """Inverse of :func:`extract_data_region`: frame every region and tile them.

    Args:
        mapping: (mapping_rows, mapping_columns) bool array.
        geometry: Target symbol size.

    Returns:
        The full symbol as a ModuleGrid.
    """
    if mapping.shape != (geometry.mapping_rows, geometry.mapping_columns):
        raise GeometryMismatchError(
            f"Mapping grid shape {mapping.shape} must be "
            f"({geometry.mapping_rows}, {geometry.mapping_columns})"
        )

    rows = geometry.data_region_size_rows
    cols = geometry.data_region_size_columns
    tile_h = rows + 2 * ALIGNMENT_BORDER
    tile_w = cols + 2 * ALIGNMENT_BORDER

    # One framed empty region; tile height and width are always even
    frame = np.zeros((tile_h, tile_w), dtype=np.bool_)
    frame[:, 0] = True                  # solid left edge
    frame[-1, :] = True                 # solid bottom edge
    frame[0, 0::2] = True               # clock track along the top
    frame[1::2, -1] = True              # clock track down the right

    symbol = np.tile(frame, (geometry.num_regions_row, geometry.num_regions_column))
    for read_row, read_col, write_row, write_col in _tile_origins(geometry):
        symbol[read_row:read_row + rows, read_col:read_col + cols] = \
            mapping[write_row:write_row + rows, write_col:write_col + cols]
    return ModuleGrid(symbol)
