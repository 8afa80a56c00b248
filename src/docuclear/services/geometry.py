"""Points, document quadrilaterals and projective matrices."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    """A continuous image-space coordinate."""

    x: float
    y: float

    def scaled(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class Quadrilateral:
    """Four document corners in fixed clockwise order starting top-left.

    Consumers must never reorder the corners; the homography relies on the
    order to pair them with the target rectangle.
    """

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    @classmethod
    def from_points(cls, points) -> Quadrilateral:
        """Build from a sequence of four ``Point`` or ``(x, y)`` pairs in TL, TR, BR, BL order."""
        pts = [p if isinstance(p, Point) else Point(float(p[0]), float(p[1])) for p in points]
        if len(pts) != 4:
            raise ValueError(f"A quadrilateral needs exactly 4 points, got {len(pts)}")
        return cls(*pts)

    @classmethod
    def from_rect(cls, left: float, top: float, right: float, bottom: float) -> Quadrilateral:
        return cls(
            Point(left, top),
            Point(right, top),
            Point(right, bottom),
            Point(left, bottom),
        )

    def __iter__(self) -> Iterator[Point]:
        return iter((self.top_left, self.top_right, self.bottom_right, self.bottom_left))

    def __getitem__(self, index: int) -> Point:
        return tuple(self)[index]

    def __len__(self) -> int:
        return 4

    def scaled(self, factor: float) -> Quadrilateral:
        return Quadrilateral(*(p.scaled(factor) for p in self))

    def as_array(self) -> np.ndarray:
        """Return the corners as a (4, 2) float64 array."""
        return np.array([[p.x, p.y] for p in self], dtype=np.float64)

    def area(self) -> float:
        """Polygon area by the shoelace formula."""
        pts = list(self)
        total = 0.0
        for i, p in enumerate(pts):
            q = pts[(i + 1) % 4]
            total += p.x * q.y - q.x * p.y
        return abs(total) / 2.0


@dataclass(frozen=True)
class HomographyMatrix:
    """A scale-normalized 3x3 projective matrix ``[h0..h7, 1]``."""

    coefficients: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.coefficients) != 9:
            raise ValueError(f"Expected 9 coefficients, got {len(self.coefficients)}")
        if self.coefficients[8] != 1.0:
            raise ValueError("The last coefficient must be fixed to 1")
        if not all(math.isfinite(c) for c in self.coefficients):
            raise ValueError("Homography coefficients must be finite")

    @classmethod
    def identity(cls) -> HomographyMatrix:
        return cls((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0))

    def as_array(self) -> np.ndarray:
        return np.array(self.coefficients, dtype=np.float64).reshape(3, 3)

    def map_point(self, point: Point) -> Point:
        h = self.coefficients
        w = h[6] * point.x + h[7] * point.y + 1.0
        return Point(
            (h[0] * point.x + h[1] * point.y + h[2]) / w,
            (h[3] * point.x + h[4] * point.y + h[5]) / w,
        )
