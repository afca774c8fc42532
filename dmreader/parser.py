"""Codeword extraction pipeline: module grid in, codeword bytes out.

lookup geometry -> strip alignment patterns -> walk the placement order.
The result is all-or-nothing: either exactly ``total_codewords`` bytes or
no bytes at all.
"""

from __future__ import annotations

from typing import Optional

from .blocks import get_data_blocks
from .config import SymbolGeometry
from .grid import ModuleGrid
from .patterns import CodewordReader
from .placement import assemble_codewords
from .profiler import ParseProfiler
from .regions import extract_data_region
from .report import (
    STATUS_COUNT_MISMATCH,
    STATUS_SUCCESS,
    STATUS_UNKNOWN_GEOMETRY,
    ParseReport,
)
from .versions import DEFAULT_CATALOG, GeometryCatalog

_NO_PROFILE = ParseProfiler(enabled=False)


def _read(
    grid: ModuleGrid,
    geometry: SymbolGeometry,
    report: ParseReport,
    profiler: ParseProfiler,
) -> None:
    with profiler.measure("region_extraction"):
        mapping = extract_data_region(grid, geometry)

    report.mapping_rows, report.mapping_columns = mapping.shape
    report.codewords_expected = geometry.total_codewords

    with profiler.measure("codeword_traversal"):
        reader = CodewordReader.for_mapping(mapping)
        codewords = assemble_codewords(reader, *mapping.shape)

    report.codewords_read = len(codewords)
    report.modules_unvisited = reader.unvisited

    if len(codewords) != geometry.total_codewords:
        report.status = STATUS_COUNT_MISMATCH
        return

    report.codewords = bytes(codewords)
    report.status = STATUS_SUCCESS


def parse_codewords(
    grid: ModuleGrid,
    catalog: GeometryCatalog = DEFAULT_CATALOG,
    profiler: Optional[ParseProfiler] = None,
    split_blocks: bool = False,
) -> ParseReport:
    """Run the full pipeline and describe every stage in a ParseReport.

    Args:
        grid: Rectified module grid, alignment patterns included.
        catalog: Geometry source; looked up by exact grid size.
        profiler: Optional stage timer.
        split_blocks: Also de-interleave the codewords into RS blocks.

    Raises:
        GeometryMismatchError: If the catalog returned a geometry that does
            not match the grid it was looked up for.
    """
    profiler = profiler or _NO_PROFILE
    report = ParseReport(grid_width=grid.width, grid_height=grid.height)

    with profiler.measure("geometry_lookup"):
        geometry = catalog.lookup(grid.width, grid.height)
    if geometry is None:
        report.status = STATUS_UNKNOWN_GEOMETRY
        return report

    report.version_number = geometry.version_number
    _read(grid, geometry, report, profiler)

    if split_blocks and report.ok and geometry.ec_blocks:
        with profiler.measure("block_split"):
            report.blocks = get_data_blocks(report.codewords, geometry)
    return report


def read_codewords_for_geometry(
    grid: ModuleGrid, geometry: SymbolGeometry,
) -> Optional[bytes]:
    """Read codewords with an already resolved geometry; None on a count mismatch."""
    report = ParseReport(grid_width=grid.width, grid_height=grid.height,
                         version_number=geometry.version_number)
    _read(grid, geometry, report, _NO_PROFILE)
    return report.codewords


def read_codewords(
    grid: ModuleGrid, catalog: GeometryCatalog = DEFAULT_CATALOG,
) -> Optional[bytes]:
    """Return the symbol's codewords in placement order, or None.

    None means the grid size is not a known symbol size, or the traversal
    produced a different number of codewords than the symbol holds.
    """
    return parse_codewords(grid, catalog).codewords
