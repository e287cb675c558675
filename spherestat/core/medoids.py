"""
Medoid selection on the unit sphere S².
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from ..models.point import SpherePoint, as_array
from ..utils.numerics import accu_sum, accu_dot, separations

logger = logging.getLogger(__name__)

# Index returned when the sample has no medoid (empty sample)
NO_MEDOID = -1


class PairwiseDistanceMatrix:
    """
    Symmetric matrix of great-circle separations with a zero diagonal.

    Only the upper triangle (n(n-1)/2 values) is stored, in row-major order.
    """

    def __init__(self, points: Sequence[SpherePoint]):
        """
        Build the matrix for a sample.

        Args:
            points: Sample of points
        """
        self.size = len(points)
        n = self.size
        xyz = as_array(points)
        self._values = np.empty(n * (n - 1) // 2)
        # Filled one row at a time so no temporary is larger than a row
        offset = 0
        for i in range(n - 1):
            count = n - i - 1
            self._values[offset:offset + count] = separations(
                np.broadcast_to(xyz[i], (count, 3)), xyz[i + 1:]
            )
            offset += count

    def __len__(self) -> int:
        return self.size

    @property
    def upper_triangle(self) -> np.ndarray:
        """Packed upper triangle, row-major, read-only."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def _offset(self, i: int, j: int) -> int:
        # Position of (i, j), i < j, in the packed upper triangle
        return i * self.size - i * (i + 1) // 2 + (j - i - 1)

    def get(self, i: int, j: int) -> float:
        """Separation between point i and point j (radians)."""
        if i == j:
            return 0.0
        if i > j:
            i, j = j, i
        return float(self._values[self._offset(i, j)])

    def row(self, k: int) -> np.ndarray:
        """All separations from point k, including the zero diagonal entry."""
        n = self.size
        others = np.arange(n)
        lo = np.minimum(others, k)
        hi = np.maximum(others, k)
        offsets = lo * n - lo * (lo + 1) // 2 + (hi - lo - 1)
        result = np.zeros(n)
        mask = others != k
        result[mask] = self._values[offsets[mask]]
        return result


def medoids(points: Sequence[SpherePoint]) -> Tuple[int, int]:
    """
    Find two medoids of a sample.

    Args:
        points: Sample of points

    Returns:
        Tuple of (i1, i2) where points[i1] minimizes the sum of distances to
        all points and points[i2] minimizes the sum of squared distances.
        Ties go to the lowest index. Both are NO_MEDOID for an empty sample.
    """
    n = len(points)
    if n == 0:
        return NO_MEDOID, NO_MEDOID

    logger.debug(f"Building pairwise distance matrix for {n} point(s)")
    distances = PairwiseDistanceMatrix(points)

    i1 = i2 = 0
    min1 = min2 = float('inf')
    for k in range(n):
        row = distances.row(k)
        sum1 = accu_sum(row)
        sum2 = accu_dot(row, row)
        if sum1 < min1:
            i1, min1 = k, sum1
        if sum2 < min2:
            i2, min2 = k, sum2

    return i1, i2
