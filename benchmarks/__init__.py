"""
Benchmark suite for sjzon parsing and serialization performance.

Compares sjzon against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed, rendering speed and memory usage across different
data types, plus the relaxed dialect that only sjzon reads.
"""
