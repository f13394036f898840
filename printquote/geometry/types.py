"""Value types describing the geometry recovered from a model file."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

import numpy as np

Point = Tuple[float, float, float]


class Confidence(str, Enum):
    """How structurally reliable a derived geometry is."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in millimetres."""

    min: Point
    max: Point

    @classmethod
    def empty(cls) -> "BoundingBox":
        """Box that any real point will replace on the first extend."""
        inf = math.inf
        return cls(min=(inf, inf, inf), max=(-inf, -inf, -inf))

    @classmethod
    def from_points(cls, points: np.ndarray | Iterable[Point]) -> "BoundingBox":
        """Smallest box containing every row of an ``(n, 3)`` array."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if pts.shape[0] == 0:
            return cls.empty()
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return cls(
            min=(float(lo[0]), float(lo[1]), float(lo[2])),
            max=(float(hi[0]), float(hi[1]), float(hi[2])),
        )

    @property
    def is_empty(self) -> bool:
        return any(lo > hi for lo, hi in zip(self.min, self.max))

    def extend(self, point: Point) -> "BoundingBox":
        x, y, z = point
        return BoundingBox(
            min=(min(self.min[0], x), min(self.min[1], y), min(self.min[2], z)),
            max=(max(self.max[0], x), max(self.max[1], y), max(self.max[2], z)),
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min=tuple(min(a, b) for a, b in zip(self.min, other.min)),
            max=tuple(max(a, b) for a, b in zip(self.max, other.max)),
        )

    @property
    def extents(self) -> Point:
        if self.is_empty:
            return (0.0, 0.0, 0.0)
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    @property
    def diagonal(self) -> float:
        """Length of the box diagonal (0 for an empty box)."""
        dx, dy, dz = self.extents
        return math.sqrt(dx * dx + dy * dy + dz * dz)


@dataclass(frozen=True)
class Geometry:
    """Physical properties of a mesh, produced once per estimate."""

    triangle_count: int
    bounding_box: BoundingBox
    volume_cm3: float
    surface_area_cm2: float
    confidence: Confidence
