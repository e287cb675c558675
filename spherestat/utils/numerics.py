"""
Numerical primitives for calculations on the unit sphere.
"""

import math
import time
from typing import Iterable, Sequence, Tuple

import numpy as np

# Floating-point tolerance (unit roundoff of a float64 mantissa)
EPSILON = 1.0 / (1 << 52)

Vector3 = Tuple[float, float, float]


def accu_sum(values: Iterable[float]) -> float:
    """
    Compensated (numerically stable) summation.

    Args:
        values: Iterable of floats

    Returns:
        Correctly rounded sum
    """
    return math.fsum(values)


def accu_dot(u: Sequence[float], v: Sequence[float]) -> float:
    """
    Compensated dot product of two equally sized sequences.

    Args:
        u: First sequence
        v: Second sequence

    Returns:
        Dot product computed with compensated summation
    """
    products = np.multiply(np.asarray(u, dtype=float), np.asarray(v, dtype=float))
    return math.fsum(products)


def sincosd(degrees: float) -> Tuple[float, float]:
    """
    Sine and cosine of an angle given in degrees.

    The argument is reduced to the nearest quadrant before conversion to
    radians, so multiples of 90 degrees produce exact 0 and +/-1 values.

    Args:
        degrees: Angle in degrees

    Returns:
        Tuple of (sin, cos)
    """
    r = math.fmod(degrees, 360.0)
    q = math.floor(r / 90.0 + 0.5)
    r = math.radians(r - 90.0 * q)
    s, c = math.sin(r), math.cos(r)
    q %= 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    # Drop negative zeros
    return s + 0.0, c + 0.0


def vhat3(vector: Sequence[float]) -> Vector3:
    """
    Normalize a 3D vector to unit length.

    The zero vector has no direction and maps to the canonical pole (0, 0, 1).

    Args:
        vector: Input vector

    Returns:
        Normalized vector
    """
    x, y, z = (float(v) for v in vector)
    magnitude = math.hypot(math.hypot(x, y), z)
    if magnitude == 0:
        return (0.0, 0.0, 1.0)
    return (x / magnitude, y / magnitude, z / magnitude)


def vmean3(vectors) -> np.ndarray:
    """
    Componentwise mean of 3D vectors using compensated summation.

    Args:
        vectors: Array-like of shape (n, 3)

    Returns:
        Mean vector of shape (3,)
    """
    data = np.asarray(vectors, dtype=float)
    n = len(data)
    return np.array([accu_sum(data[:, k]) / n for k in range(3)])


def vmedian3(vectors, max_iter: int = 1000, tol: float = EPSILON) -> np.ndarray:
    """
    Geometric median of 3D vectors (Weiszfeld iteration).

    Starts from the mean. When an iterate coincides with one or more data
    points the Vardi-Zhang step is used instead of the plain Weiszfeld step,
    so the iteration never divides by a zero distance.

    Args:
        vectors: Array-like of shape (n, 3)
        max_iter: Maximum number of iterations
        tol: Absolute step length at which the iteration stops

    Returns:
        Median vector of shape (3,)
    """
    data = np.asarray(vectors, dtype=float)
    y = vmean3(data)

    for _ in range(max_iter):
        d = np.linalg.norm(data - y, axis=1)
        away = d > 0
        if not away.any():
            return y

        w = 1.0 / d[away]
        t = (w[:, None] * data[away]).sum(axis=0) / w.sum()
        coincident = len(data) - int(away.sum())

        if coincident == 0:
            y_new = t
        else:
            r = np.linalg.norm((w[:, None] * (data[away] - y)).sum(axis=0))
            if r <= coincident:
                # y is the median
                return y
            gamma = coincident / r
            y_new = (1.0 - gamma) * t + gamma * y

        if np.linalg.norm(y_new - y) <= tol:
            return y_new
        y = y_new

    return y


def separations(u, v) -> np.ndarray:
    """
    Great-circle separations between paired rows of two unit-vector arrays.

    Vectorised form of SpherePoint.separation: the chord formula is used on
    the near side and its complement on the far side, which keeps full
    precision at both small and near-antipodal separations.

    Args:
        u: Array of shape (k, 3)
        v: Array of shape (k, 3)

    Returns:
        Separations in radians, shape (k,)
    """
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    dot = np.einsum('ij,ij->i', u, v)
    near = 2.0 * np.arcsin(np.minimum(np.linalg.norm(u - v, axis=1) / 2.0, 1.0))
    far = np.pi - 2.0 * np.arcsin(np.minimum(np.linalg.norm(u + v, axis=1) / 2.0, 1.0))
    result = np.where(dot > 0, near, far)
    result[dot == 0] = np.pi / 2
    return result


def resolve_seed(seed: int = 0) -> int:
    """Replace the sentinel seed 0 with one derived from current time."""
    if seed == 0:
        return time.time_ns()
    return seed


def make_generator(seed: int = 0) -> np.random.Generator:
    """
    Create a deterministic MT19937 pseudo-random generator.

    Args:
        seed: Integer seed. 0 means "derive the seed from current time"
              (non-reproducible); any other value is used verbatim, reduced
              modulo 2**64 so negative seeds are accepted.

    Returns:
        numpy Generator owning a private bit stream
    """
    return np.random.Generator(np.random.MT19937(resolve_seed(seed) % 2 ** 64))
