"""
Determinism-friendly simulation helpers.

This package intentionally contains *small* primitives (RNG + sim time + data contracts)
that let gameplay code avoid wall-clock time and global `random`.
"""
