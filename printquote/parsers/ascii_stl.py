"""ASCII STL recovery parser."""

import math
from typing import List, Optional

import numpy as np

from printquote.geometry.accumulator import MeshTotals
from printquote.geometry.types import BoundingBox, Confidence, Geometry, Point
from printquote.parsers.base import MeshParser


def parse_vertex_line(tokens: List[str]) -> Optional[Point]:
    """Read ``vertex x y z`` tokens; None if the coordinates are unusable."""
    if len(tokens) < 4:
        return None
    try:
        x, y, z = float(tokens[1]), float(tokens[2]), float(tokens[3])
    except ValueError:
        return None
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return None
    return (x, y, z)


class AsciiSTLParser(MeshParser):
    """Line-oriented parser for ASCII STL.

    ``vertex`` lines are buffered and ``endfacet`` closes a triangle from
    the first three buffered vertices. Facets with more than three vertices
    keep only the first three; facets with fewer are dropped. Every parsed
    vertex extends the bounding box, whether or not it ends up in a
    triangle.
    """

    name = "ascii_stl"
    confidence = Confidence.MEDIUM

    def _parse_impl(self, data: bytes) -> Geometry:
        text = data.decode("utf-8", errors="replace")
        seen: List[Point] = []
        triangles: List[List[Point]] = []
        current: List[Point] = []

        for line in text.splitlines():
            tokens = line.split()
            if not tokens:
                continue
            keyword = tokens[0].lower()
            if keyword == "vertex":
                point = parse_vertex_line(tokens)
                if point is not None:
                    current.append(point)
                    seen.append(point)
            elif keyword == "endfacet":
                if len(current) >= 3:
                    triangles.append(current[:3])
                current = []

        if not triangles:
            raise self.fail("no facets recognised")

        totals = MeshTotals.from_triangles(np.array(triangles, dtype=np.float64))
        totals = totals.with_bounds(BoundingBox.from_points(seen))
        return totals.to_geometry(self.confidence, parser=self.name)
