"""Wavefront OBJ parser (vertex list plus indexed faces)."""

import math
from typing import List, Optional

import numpy as np

from printquote.geometry.accumulator import MeshTotals
from printquote.geometry.types import BoundingBox, Confidence, Geometry
from printquote.parsers.base import MeshParser


def _face_index(token: str) -> Optional[int]:
    # "7", "7/2", "7//3" and "7/2/3" all reference vertex 7
    head = token.split("/", 1)[0]
    try:
        return int(head)
    except ValueError:
        return None


def _vertex(tokens: List[str]) -> Optional[List[float]]:
    if len(tokens) < 4:
        return None
    try:
        xyz = [float(tokens[1]), float(tokens[2]), float(tokens[3])]
    except ValueError:
        return None
    if not all(math.isfinite(c) for c in xyz):
        return None
    return xyz


class OBJParser(MeshParser):
    """Parser for the ``v`` and ``f`` records of Wavefront OBJ.

    Face indices are 1-based and must reference a vertex that exists;
    relative (negative) indices are treated as out of range, and a vertex
    record that is not three finite numbers fails the parse. Only the first
    three indices of a face are used. The bounding box covers every listed
    vertex.
    """

    name = "obj"
    confidence = Confidence.MEDIUM

    def _parse_impl(self, data: bytes) -> Geometry:
        text = data.decode("utf-8", errors="replace")
        vertices: List[List[float]] = []
        faces: List[List[int]] = []

        for line in text.splitlines():
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            if tokens[0] == "v":
                xyz = _vertex(tokens)
                if xyz is None:
                    # later faces index by position, so a hole would shift them
                    raise self.fail(
                        f"vertex {len(vertices) + 1} is not three finite numbers"
                    )
                vertices.append(xyz)
            elif tokens[0] == "f" and len(tokens) >= 4:
                idx = [_face_index(t) for t in tokens[1:4]]
                if None not in idx:
                    faces.append([i - 1 for i in idx])

        if not vertices or not faces:
            raise self.fail(
                f"missing vertices or faces ({len(vertices)} vertices, {len(faces)} faces)"
            )

        V = np.array(vertices, dtype=np.float64)
        F = np.array(faces, dtype=np.int64)
        bad = (F < 0) | (F >= len(V))
        if bad.any():
            face_no = int(np.argmax(bad.any(axis=1)))
            raise self.fail(
                f"face {face_no + 1} references a vertex outside 1..{len(V)}"
            )

        totals = MeshTotals.from_triangles(V[F])
        totals = totals.with_bounds(BoundingBox.from_points(V))
        return totals.to_geometry(self.confidence, parser=self.name)
