"""Random numbers and small linear-algebra helpers."""

import random
from collections.abc import Sequence

_rng = random.Random()


def random_double(low: float, high: float) -> float:
    """Return a uniformly distributed float in ``[low, high)``."""
    return low + (high - low) * _rng.random()


def dot(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> list[float]:
    """Multiply ``matrix`` by ``vector``.

    An empty matrix gives an empty result. Raises ``ValueError`` when the
    column count does not match the vector length or rows differ in length.
    """
    if not matrix:
        return []
    num_cols = len(matrix[0])
    if num_cols != len(vector):
        raise ValueError(
            f"Matrix inner dimension ({num_cols}) must match vector size ({len(vector)})."
        )
    result = []
    for row_index, row in enumerate(matrix):
        if len(row) != num_cols:
            raise ValueError(f"Matrix has inconsistent column count at row {row_index}")
        result.append(sum((a * b for a, b in zip(row, vector)), 0.0))
    return result