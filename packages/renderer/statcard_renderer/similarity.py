"""Hamming distance between perceptual hash strings."""

from __future__ import annotations


INCOMPARABLE = -1.0
# Divergence at or below this percentage is treated as visually similar.
SIMILAR_THRESHOLD = 9.0


def hamming_distance(hash_a: str, hash_b: str) -> float:
    """Percentage of differing positions, or -1 when the lengths differ.

    Higher means more different: 0 for identical hashes, 100 when every
    position differs.
    """
    if len(hash_a) != len(hash_b):
        return INCOMPARABLE
    if not hash_a:
        return 0.0
    differing = sum(1 for a, b in zip(hash_a, hash_b) if a != b)
    return differing * 100.0 / len(hash_a)


def is_similar(hash_a: str, hash_b: str, threshold: float = SIMILAR_THRESHOLD) -> bool:
    distance = hamming_distance(hash_a, hash_b)
    return 0.0 <= distance <= threshold
