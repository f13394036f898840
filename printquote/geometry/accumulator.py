"""Triangle accumulation: signed volume, surface area and bounds.

Volume uses the divergence theorem. Each triangle ``(p1, p2, p3)`` spans a
tetrahedron with the origin whose signed volume is
``dot(p1, cross(p2, p3)) / 6``; summed over a closed surface this gives the
enclosed volume, positive or negative depending on the winding. Only the
absolute value is reported, so the result does not depend on whether a file
winds its faces clockwise or counter-clockwise.

Totals are immutable :class:`MeshTotals` values. Folding a triangle or
merging two partial totals returns a new value, which keeps batch reduction
order-independent up to floating point reassociation.
"""

import math
from dataclasses import dataclass, field, replace

import numpy as np

from printquote.core.exceptions import MeshParseError
from printquote.geometry.types import BoundingBox, Confidence, Geometry, Point

MM3_PER_CM3 = 1000.0
MM2_PER_CM2 = 100.0


def signed_volume(p1: Point, p2: Point, p3: Point) -> float:
    """Signed volume (mm^3) of the tetrahedron ``(origin, p1, p2, p3)``."""
    cx = p2[1] * p3[2] - p2[2] * p3[1]
    cy = p2[2] * p3[0] - p2[0] * p3[2]
    cz = p2[0] * p3[1] - p2[1] * p3[0]
    return (p1[0] * cx + p1[1] * cy + p1[2] * cz) / 6.0


def triangle_area(p1: Point, p2: Point, p3: Point) -> float:
    """Unsigned area (mm^2) of a triangle."""
    ax, ay, az = p2[0] - p1[0], p2[1] - p1[1], p2[2] - p1[2]
    bx, by, bz = p3[0] - p1[0], p3[1] - p1[1], p3[2] - p1[2]
    cx = ay * bz - az * by
    cy = az * bx - ax * bz
    cz = ax * by - ay * bx
    return 0.5 * (cx * cx + cy * cy + cz * cz) ** 0.5


@dataclass(frozen=True)
class MeshTotals:
    """Running totals for a triangle soup, in millimetre units."""

    triangle_count: int = 0
    signed_volume_mm3: float = 0.0
    surface_area_mm2: float = 0.0
    bounds: BoundingBox = field(default_factory=BoundingBox.empty)

    @classmethod
    def from_triangles(cls, triangles: np.ndarray) -> "MeshTotals":
        """Fold an ``(n, 3, 3)`` array of triangles in one vectorised pass.

        Args:
            triangles: Vertex coordinates, ``triangles[i, j]`` is vertex j
                of triangle i

        Returns:
            Totals covering every triangle and every vertex in the array
        """
        tris = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3)
        if tris.shape[0] == 0:
            return cls()
        v0, v1, v2 = tris[:, 0], tris[:, 1], tris[:, 2]
        vol6 = np.einsum("ij,ij->i", v0, np.cross(v1, v2))
        area2 = np.linalg.norm(np.cross(v1 - v0, v2 - v0), axis=1)
        return cls(
            triangle_count=int(tris.shape[0]),
            signed_volume_mm3=float(vol6.sum()) / 6.0,
            surface_area_mm2=0.5 * float(area2.sum()),
            bounds=BoundingBox.from_points(tris.reshape(-1, 3)),
        )

    def add_triangle(self, p1: Point, p2: Point, p3: Point) -> "MeshTotals":
        """Fold one triangle, including its vertices in the bounds."""
        return MeshTotals(
            triangle_count=self.triangle_count + 1,
            signed_volume_mm3=self.signed_volume_mm3 + signed_volume(p1, p2, p3),
            surface_area_mm2=self.surface_area_mm2 + triangle_area(p1, p2, p3),
            bounds=self.bounds.extend(p1).extend(p2).extend(p3),
        )

    def with_bounds(self, bounds: BoundingBox) -> "MeshTotals":
        return replace(self, bounds=bounds)

    def merge(self, other: "MeshTotals") -> "MeshTotals":
        """Combine two partial totals (associative, identity ``MeshTotals()``)."""
        return MeshTotals(
            triangle_count=self.triangle_count + other.triangle_count,
            signed_volume_mm3=self.signed_volume_mm3 + other.signed_volume_mm3,
            surface_area_mm2=self.surface_area_mm2 + other.surface_area_mm2,
            bounds=self.bounds.union(other.bounds),
        )

    @property
    def volume_cm3(self) -> float:
        return abs(self.signed_volume_mm3) / MM3_PER_CM3

    @property
    def surface_area_cm2(self) -> float:
        return self.surface_area_mm2 / MM2_PER_CM2

    def to_geometry(self, confidence: Confidence, parser: str = "mesh") -> Geometry:
        """Convert totals into a :class:`Geometry`.

        Raises:
            MeshParseError: If no triangle was accumulated, or if the
                coordinates were too large to integrate in float64
        """
        if self.triangle_count == 0:
            raise MeshParseError(parser, "no triangles found")
        if not (
            math.isfinite(self.signed_volume_mm3)
            and math.isfinite(self.surface_area_mm2)
            and math.isfinite(self.bounds.diagonal)
        ):
            raise MeshParseError(parser, "non-finite volume or area")
        return Geometry(
            triangle_count=self.triangle_count,
            bounding_box=self.bounds,
            volume_cm3=self.volume_cm3,
            surface_area_cm2=self.surface_area_cm2,
            confidence=confidence,
        )
