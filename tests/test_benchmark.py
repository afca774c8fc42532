"""Smoke test for the benchmark script."""

import argparse
import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from benchmark import _parse_size, run_benchmark
from dmreader.versions import DEFAULT_CATALOG


class TestBenchmark:
    def test_all_sizes_read_back(self):
        results = run_benchmark(list(DEFAULT_CATALOG), runs=1, quiet=True)
        assert len(results) == 30
        assert all(r.success for r in results)

    def test_parse_size_rows_by_columns(self):
        g = _parse_size("8x18")
        assert (g.symbol_size_rows, g.symbol_size_columns) == (8, 18)

    def test_parse_size_rejects_unknown(self):
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_size("11x11")
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_size("big")

    def test_profile_output(self, capsys):
        run_benchmark([DEFAULT_CATALOG.lookup(10, 10)], runs=2, profile=True)
        out = capsys.readouterr().out
        assert "Per-stage timing" in out
        assert "codeword_traversal" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
