"""ECC200 symbol-size catalog and exact-dimension lookup.

See ISO 16022:2006, 5.5.1 Table 7. Each row is
(version, rows, columns, region rows, region columns, EC codewords per block,
((block count, data codewords per block), ...)).
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .config import ECBlock, SymbolGeometry

_STANDARD_SIZES = (
    # square symbols
    (1, 10, 10, 8, 8, 5, ((1, 3),)),
    (2, 12, 12, 10, 10, 7, ((1, 5),)),
    (3, 14, 14, 12, 12, 10, ((1, 8),)),
    (4, 16, 16, 14, 14, 12, ((1, 12),)),
    (5, 18, 18, 16, 16, 14, ((1, 18),)),
    (6, 20, 20, 18, 18, 18, ((1, 22),)),
    (7, 22, 22, 20, 20, 20, ((1, 30),)),
    (8, 24, 24, 22, 22, 24, ((1, 36),)),
    (9, 26, 26, 24, 24, 28, ((1, 44),)),
    (10, 32, 32, 14, 14, 36, ((1, 62),)),
    (11, 36, 36, 16, 16, 42, ((1, 86),)),
    (12, 40, 40, 18, 18, 48, ((1, 114),)),
    (13, 44, 44, 20, 20, 56, ((1, 144),)),
    (14, 48, 48, 22, 22, 68, ((1, 174),)),
    (15, 52, 52, 24, 24, 42, ((2, 102),)),
    (16, 64, 64, 14, 14, 56, ((2, 140),)),
    (17, 72, 72, 16, 16, 36, ((4, 92),)),
    (18, 80, 80, 18, 18, 48, ((4, 114),)),
    (19, 88, 88, 20, 20, 56, ((4, 144),)),
    (20, 96, 96, 22, 22, 68, ((4, 174),)),
    (21, 104, 104, 24, 24, 56, ((6, 136),)),
    (22, 120, 120, 18, 18, 68, ((6, 175),)),
    (23, 132, 132, 20, 20, 62, ((8, 163),)),
    (24, 144, 144, 22, 22, 62, ((8, 156), (2, 155))),
    # rectangular symbols
    (25, 8, 18, 6, 16, 7, ((1, 5),)),
    (26, 8, 32, 6, 14, 11, ((1, 10),)),
    (27, 12, 26, 10, 24, 14, ((1, 16),)),
    (28, 12, 36, 10, 16, 18, ((1, 22),)),
    (29, 16, 36, 14, 16, 24, ((1, 32),)),
    (30, 16, 48, 14, 22, 28, ((1, 49),)),
)


def _build_geometry(row: tuple) -> SymbolGeometry:
    version, rows, cols, region_rows, region_cols, ec_per_block, blocks = row
    ec_blocks = tuple(ECBlock(count, data) for count, data in blocks)
    total = sum(b.count * (b.data_codewords + ec_per_block) for b in ec_blocks)
    return SymbolGeometry(
        version_number=version,
        symbol_size_rows=rows,
        symbol_size_columns=cols,
        data_region_size_rows=region_rows,
        data_region_size_columns=region_cols,
        total_codewords=total,
        ec_codewords_per_block=ec_per_block,
        ec_blocks=ec_blocks,
    )


class GeometryCatalog:
    """Immutable set of symbol geometries keyed by exact (width, height)."""

    def __init__(self, geometries: Iterable[SymbolGeometry]):
        by_size: dict[tuple[int, int], SymbolGeometry] = {}
        for geometry in geometries:
            geometry.validate()
            key = (geometry.symbol_size_columns, geometry.symbol_size_rows)
            if key in by_size:
                raise ValueError(
                    f"Duplicate symbol size {key[0]}x{key[1]} "
                    f"(versions {by_size[key].version_number} and "
                    f"{geometry.version_number})"
                )
            by_size[key] = geometry
        self._by_size = by_size

    def lookup(self, width: int, height: int) -> Optional[SymbolGeometry]:
        """Return the geometry whose symbol size is exactly width x height, or None."""
        return self._by_size.get((width, height))

    def __iter__(self) -> Iterator[SymbolGeometry]:
        return iter(self._by_size.values())

    def __len__(self) -> int:
        return len(self._by_size)


DEFAULT_CATALOG = GeometryCatalog(_build_geometry(row) for row in _STANDARD_SIZES)


def lookup_geometry(width: int, height: int) -> Optional[SymbolGeometry]:
    return DEFAULT_CATALOG.lookup(width, height)


def geometry_for_version(version_number: int) -> SymbolGeometry:
    """Return the standard geometry with the given version number (1-30)."""
    for geometry in DEFAULT_CATALOG:
        if geometry.version_number == version_number:
            return geometry
    raise ValueError(f"Unknown Data Matrix version: {version_number}")
