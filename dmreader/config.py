"""Symbol geometry records and layout constants for ECC200 Data Matrix."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

ALIGNMENT_BORDER = 1  # solid/dotted border around every data region, in modules
TRAVERSAL_START = (4, 0)  # (row, column) where the diagonal sweep begins
SWEEP_PERIOD = 8  # the Utah pattern repeats every 8 modules along a diagonal


class SymbolShape(Enum):
    SQUARE = "square"
    RECTANGLE = "rectangle"


@dataclass(frozen=True)
class ECBlock:
    """A run of identical Reed-Solomon blocks."""

    count: int
    data_codewords: int


@dataclass(frozen=True)
class SymbolGeometry:
    """Dimensions and codeword capacity of one ECC200 symbol size."""

    version_number: int
    symbol_size_rows: int
    symbol_size_columns: int
    data_region_size_rows: int
    data_region_size_columns: int
    total_codewords: int
    ec_codewords_per_block: int = 0
    ec_blocks: Tuple[ECBlock, ...] = ()

    @property
    def shape(self) -> SymbolShape:
        if self.symbol_size_rows == self.symbol_size_columns:
            return SymbolShape.SQUARE
        return SymbolShape.RECTANGLE

    @property
    def num_regions_row(self) -> int:
        """Data regions stacked vertically."""
        return self.symbol_size_rows // self.data_region_size_rows

    @property
    def num_regions_column(self) -> int:
        """Data regions side by side horizontally."""
        return self.symbol_size_columns // self.data_region_size_columns

    @property
    def mapping_rows(self) -> int:
        """Rows of the mapping grid (alignment patterns removed)."""
        return self.num_regions_row * self.data_region_size_rows

    @property
    def mapping_columns(self) -> int:
        """Columns of the mapping grid (alignment patterns removed)."""
        return self.num_regions_column * self.data_region_size_columns

    @property
    def num_blocks(self) -> int:
        return sum(b.count for b in self.ec_blocks)

    @property
    def data_codewords(self) -> int:
        """Codewords carrying data, i.e. excluding Reed-Solomon check bytes."""
        return sum(b.count * b.data_codewords for b in self.ec_blocks)

    @property
    def ec_codewords(self) -> int:
        return self.num_blocks * self.ec_codewords_per_block

    def summary(self) -> str:
        """Return a one-line description of the symbol size."""
        return (
            f"v{self.version_number} {self.symbol_size_columns}x{self.symbol_size_rows} "
            f"({self.shape.value}, {self.num_regions_column}x{self.num_regions_row} "
            f"regions of {self.data_region_size_columns}x{self.data_region_size_rows}, "
            f"{self.total_codewords} codewords)"
        )

    def validate(self) -> None:
        """Raise ValueError if the geometry is inconsistent."""
        if self.data_region_size_rows < 1 or self.data_region_size_columns < 1:
            raise ValueError("data region dimensions must be >= 1")
        if self.total_codewords < 1:
            raise ValueError("total_codewords must be >= 1")
        border = 2 * ALIGNMENT_BORDER
        if self.symbol_size_rows != self.num_regions_row * (
            self.data_region_size_rows + border
        ):
            raise ValueError(
                f"{self.symbol_size_rows} rows do not tile into data regions "
                f"of {self.data_region_size_rows} rows"
            )
        if self.symbol_size_columns != self.num_regions_column * (
            self.data_region_size_columns + border
        ):
            raise ValueError(
                f"{self.symbol_size_columns} columns do not tile into data "
                f"regions of {self.data_region_size_columns} columns"
            )
        if self.ec_blocks and (
            self.data_codewords + self.ec_codewords != self.total_codewords
        ):
            raise ValueError(
                "Reed-Solomon blocks do not add up to total_codewords: "
                f"{self.data_codewords} + {self.ec_codewords} != {self.total_codewords}"
            )
