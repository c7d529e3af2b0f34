"""
Benchmark suite for dejsonc JSONC conversion performance.

Measures the cost of turning JSONC into Python objects through dejsonc
followed by one of several JSON parsers:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Covers conversion speed and peak memory usage across document shapes.
"""
