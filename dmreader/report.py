"""Parse report generation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

STATUS_PENDING = "pending"
STATUS_SUCCESS = "success"
STATUS_UNKNOWN_GEOMETRY = "unknown_geometry"
STATUS_COUNT_MISMATCH = "count_mismatch"


@dataclass
class ParseReport:
    status: str = STATUS_PENDING

    grid_width: int = 0
    grid_height: int = 0

    version_number: Optional[int] = None
    mapping_rows: int = 0
    mapping_columns: int = 0

    codewords_expected: int = 0
    codewords_read: int = 0
    modules_unvisited: int = 0

    # Only set on success; a short or long read never exposes its bytes
    codewords: Optional[bytes] = None
    blocks: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "grid": {
                "width": self.grid_width,
                "height": self.grid_height,
            },
            "symbol": {
                "version": self.version_number,
                "mapping_rows": self.mapping_rows,
                "mapping_columns": self.mapping_columns,
            },
            "codewords": {
                "expected": self.codewords_expected,
                "read": self.codewords_read,
                "modules_unvisited": self.modules_unvisited,
                "hex": self.codewords.hex() if self.codewords is not None else None,
                "blocks": len(self.blocks),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
