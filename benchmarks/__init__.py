"""
Benchmark suite for jtrunc string truncation.

Compares the single-pass byte scanner against tree-based truncation
built on:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures truncation speed and memory usage across different payloads.
"""
