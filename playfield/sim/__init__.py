"""
Determinism-friendly primitives.

This package intentionally contains *small* primitives (RNG + clock) that every
world and the frame driver share, so a seeded run stays reproducible.
"""
