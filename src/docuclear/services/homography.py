"""Planar homography from four point correspondences."""

import logging
from collections.abc import Sequence

import numpy as np

from docuclear.constants import PIVOT_EPSILON
from docuclear.services.geometry import HomographyMatrix, Point
from docuclear.utils.exceptions import DegenerateTransformError

logger = logging.getLogger(__name__)


def _build_system(src: Sequence[Point], dst: Sequence[Point]) -> tuple[np.ndarray, np.ndarray]:
    """Two rows per correspondence (x, y) -> (u, v) of the 8-unknown system."""
    a = np.zeros((8, 8), dtype=np.float64)
    b = np.zeros(8, dtype=np.float64)
    for i, (p, q) in enumerate(zip(src, dst, strict=True)):
        x, y, u, v = p.x, p.y, q.x, q.y
        a[2 * i] = (x, y, 1.0, 0.0, 0.0, 0.0, -x * u, -y * u)
        b[2 * i] = u
        a[2 * i + 1] = (0.0, 0.0, 0.0, x, y, 1.0, -x * v, -y * v)
        b[2 * i + 1] = v
    return a, b


def solve_linear_system(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve ``a @ x = b`` by Gaussian elimination with partial pivoting.

    Works on copies; the inputs are left untouched.

    Raises:
        DegenerateTransformError: If a pivot is negligible relative to the
            largest coefficient, or the system holds non-finite values.
    """
    a = np.array(a, dtype=np.float64)
    b = np.array(b, dtype=np.float64)
    n = len(b)

    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        raise DegenerateTransformError(step=0, pivot=float("nan"))

    tolerance = PIVOT_EPSILON * max(1.0, float(np.max(np.abs(a))))

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(a[i:, i])))
        pivot = a[pivot_row, i]
        if abs(pivot) < tolerance:
            raise DegenerateTransformError(step=i, pivot=abs(pivot))

        if pivot_row != i:
            a[[i, pivot_row]] = a[[pivot_row, i]]
            b[[i, pivot_row]] = b[[pivot_row, i]]

        for k in range(i + 1, n):
            factor = a[k, i] / a[i, i]
            a[k, i:] -= factor * a[i, i:]
            a[k, i] = 0.0
            b[k] -= factor * b[i]

    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (b[i] - a[i, i + 1 :] @ x[i + 1 :]) / a[i, i]
    return x


def solve_homography(src: Sequence[Point], dst: Sequence[Point]) -> HomographyMatrix:
    """Compute the projective transform mapping each ``src`` point onto ``dst``.

    Args:
        src: Four source points (e.g. a Quadrilateral)
        dst: Four destination points, paired by position

    Returns:
        Scale-normalized matrix with h8 = 1

    Raises:
        DegenerateTransformError: For collinear or duplicated points.
    """
    src = list(src)
    dst = list(dst)
    if len(src) != 4 or len(dst) != 4:
        raise ValueError(f"Need 4 correspondences, got {len(src)} -> {len(dst)}")

    a, b = _build_system(src, dst)
    h = solve_linear_system(a, b)
    if not np.all(np.isfinite(h)):
        raise DegenerateTransformError(step=len(h), pivot=float("nan"))

    logger.debug(f"Homography coefficients: {np.array2string(h, precision=6)}")
    return HomographyMatrix(tuple(float(c) for c in h) + (1.0,))
