"""
Memory usage benchmarks for parsing.

Measures peak memory consumption of building a document tree compared
with the plain Python objects other libraries produce.
"""

import json
import tracemalloc
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import sjzon
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data

LOADERS = {
    "stdlib_json": json.loads,
    "orjson": orjson.loads,
    "ujson": ujson.loads,
    "sjzon": sjzon.loads,
    "sjzon_hashes_only": lambda data: sjzon.loads(data, keep_names=False),
}


def measure_memory_usage(func: Any, *args: Any) -> tuple[Any, int]:
    """
    Measures peak memory usage during function execution.

    Returns:
        Tuple of (function_result, peak_memory_bytes)
    """
    tracemalloc.start()
    try:
        result = func(*args)
        _, peak = tracemalloc.get_traced_memory()
        return result, peak
    finally:
        tracemalloc.stop()


class TestMemoryUsage:
    """Memory usage benchmarks for parsing."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("loader", list(LOADERS))
    def test_loader_memory(self, data_type: str, loader: str) -> None:
        """Measures memory usage for one library and data type."""
        test_data = generate_test_data(data_type)
        result, peak_memory = measure_memory_usage(LOADERS[loader], test_data)

        print(f"\n{loader} {data_type}: {peak_memory:,} bytes")
        assert result is not None

    def test_released_nodes_are_reused(self) -> None:
        """Checks that slots freed by a deletion are handed out again."""
        document = sjzon.loads(generate_test_data("large_object"))
        root = document.root
        size = document.arena.live_count
        slots = len(document.arena._slots)

        document.delete_from_object(root, "transactions")
        for _ in range(50):
            document.add_to_object(root, "entry", document.create_object())

        assert document.arena.live_count < size
        assert len(document.arena._slots) == slots

    def test_memory_comparison_summary(self) -> None:
        """Generates a memory usage comparison table."""
        results = {}

        for data_type in DATA_TYPES:
            test_data = generate_test_data(data_type)
            results[data_type] = {
                name: measure_memory_usage(loader, test_data)[1]
                for name, loader in LOADERS.items()
            }

        print("\n" + "=" * 96)
        print("MEMORY USAGE COMPARISON (bytes)")
        print("=" * 96)
        print(f"{'Data Type':<20}" + "".join(f"{n:<16}" for n in LOADERS))
        print("-" * 96)
        for data_type, measurements in results.items():
            print(
                f"{data_type:<20}"
                + "".join(f"{measurements[n]:<16,}" for n in LOADERS)
            )
        print("=" * 96)

        assert len(results) == len(DATA_TYPES)
